"""Game orchestration: creating sessions and resolving a player's move."""

from __future__ import annotations

import asyncio
import logging
import math
import random
import secrets
from contextlib import asynccontextmanager

from c4service.board import Board, MoveResult, Token
from c4service.config import Settings
from c4service.errors import (
    C4Error,
    ColumnFullError,
    GameOverError,
    InvalidColumnError,
    NoLegalMoveError,
    SessionLoadError,
    UnknownSessionError,
    UnknownStrategyError,
)
from c4service.geometry import HEIGHT, WIDTH
from c4service.models import (
    ErrorResponse,
    InfoResponse,
    MoveRecord,
    NewGameResponse,
    PlayResponse,
)
from c4service.store import FileSessionStore, MemorySessionStore, Session, SessionStore
from c4service.strategy import NO_MOVE, Strategy

logger = logging.getLogger(__name__)


class GameService:
    """Creates games and resolves moves against a session store.

    Store calls run in worker threads, so plays on one game can interleave
    at those awaits. `_session_lock` serializes them per game id and drops
    the lock once no request holds or waits on it.
    """

    def __init__(self, store: SessionStore, rng: random.Random | None = None):
        self.store = store
        self._rng = rng
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    def _generate_pid(self) -> str:
        while True:
            pid = secrets.token_hex(7)  # 14-char hex
            if not self.store.exists(pid):
                return pid

    @asynccontextmanager
    async def _session_lock(self, pid: str):
        lock = self._locks.setdefault(pid, asyncio.Lock())
        self._lock_users[pid] = self._lock_users.get(pid, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[pid] -= 1
            if not self._lock_users[pid]:
                del self._lock_users[pid]
                del self._locks[pid]

    def info(self) -> InfoResponse:
        return InfoResponse(width=WIDTH, height=HEIGHT, strategies=Strategy.names())

    async def new_game(self, strategy_name: str | None) -> NewGameResponse | ErrorResponse:
        if not strategy_name:
            return ErrorResponse(reason="Strategy not specified.")
        try:
            strategy = Strategy.from_name(strategy_name)
        except UnknownStrategyError:
            return ErrorResponse(reason="Unknown strategy.")

        pid = await asyncio.to_thread(self._generate_pid)
        await asyncio.to_thread(self.store.save, pid, Session(strategy=strategy, board=Board()))
        logger.info("Created game %s with %s strategy", pid, strategy)
        return NewGameResponse(pid=pid)

    async def play(self, pid: str | None, move: str | int | None) -> PlayResponse | ErrorResponse:
        if not pid:
            return ErrorResponse(reason="Pid not specified")
        if not await asyncio.to_thread(self.store.exists, pid):
            return ErrorResponse(reason="Unknown pid")
        if move is None or move == "":
            return ErrorResponse(reason="Move not specified")
        column = parse_column(move)
        if column is None:
            return ErrorResponse(reason=f"Invalid move: {move}")

        async with self._session_lock(pid):
            return await self._play_locked(pid, column)

    async def _play_locked(self, pid: str, column: int) -> PlayResponse | ErrorResponse:
        try:
            session = await asyncio.to_thread(self.store.load, pid)
        except UnknownSessionError:
            return ErrorResponse(reason="Unknown pid")
        except SessionLoadError:
            logger.exception("Could not load session %s", pid)
            return ErrorResponse(reason="Corrupt session")

        board = session.board
        try:
            result = board.apply_move(column, Token.PLAYER)
        except (InvalidColumnError, ColumnFullError) as exc:
            return ErrorResponse(reason=str(exc))
        except GameOverError:
            await self._finish(pid)
            return ErrorResponse(reason="Game is over")

        ack = MoveRecord.from_result(column, result, board)
        if result is not MoveResult.GOOD:
            logger.info("Game %s ended on player move: %s", pid, result.name)
            await self._finish(pid)
            return PlayResponse(ack_move=ack)

        try:
            reply = self._opponent_column(session, column)
        except C4Error as exc:
            logger.warning("Rejected computer move in game %s: %s", pid, exc)
            return ErrorResponse(reason="Invalid AI move")

        reply_result = board.apply_move(reply, Token.OPPONENT)
        logger.debug("Game %s after move %d/%d:\n%s", pid, column, reply, board.render())
        if reply_result is MoveResult.GOOD:
            await asyncio.to_thread(self.store.save, pid, session)
        else:
            logger.info("Game %s ended on computer move: %s", pid, reply_result.name)
            await self._finish(pid)

        return PlayResponse(
            ack_move=ack,
            move=MoveRecord.from_result(reply, reply_result, board),
        )

    def _opponent_column(self, session: Session, player_column: int) -> int:
        """Ask the session's strategy for a reply and check it is playable."""
        column = session.strategy.select_column(session.board, player_column, self._rng)
        if column == NO_MOVE:
            raise NoLegalMoveError(f"{session.strategy} strategy found no open column")
        if not 0 <= column < WIDTH:
            raise InvalidColumnError(column)
        if session.board.is_column_full(column):
            raise ColumnFullError(column)
        return column

    async def _finish(self, pid: str):
        await asyncio.to_thread(self.store.delete, pid)


def parse_column(move: str | int) -> int | None:
    """Parse a column index, returning None when it is not an in-range whole number.

    Numeric strings with a whole value ("3", " 3", "+3", "3.0", "3e0") are accepted.
    """
    if isinstance(move, bool):
        return None
    if isinstance(move, int):
        column = move
    else:
        try:
            value = float(move.strip())
        except ValueError:
            return None
        if not math.isfinite(value) or not value.is_integer():
            return None
        column = int(value)
    if not 0 <= column < WIDTH:
        return None
    return column


def build_service(settings: Settings) -> GameService:
    if settings.store == "memory":
        store: SessionStore = MemorySessionStore()
    elif settings.store == "file":
        store = FileSessionStore(settings.save_dir)
    else:
        raise ValueError(f"Unknown session store: {settings.store!r}")
    logger.info("Using %s session store", settings.store)
    return GameService(store)
