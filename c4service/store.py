"""Session persistence: one (strategy, board) pair per game id."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from c4service.board import Board
from c4service.errors import SessionLoadError, UnknownSessionError, UnknownStrategyError
from c4service.strategy import Strategy

logger = logging.getLogger(__name__)


@dataclass
class Session:
    strategy: Strategy
    board: Board = field(default_factory=Board)

    def to_dict(self) -> dict:
        return {"strategy": str(self.strategy), **self.board.to_snapshot()}

    @classmethod
    def from_dict(cls, data: dict) -> Session:
        if not isinstance(data, dict):
            raise SessionLoadError("Session record must be an object")
        try:
            strategy = Strategy.from_name(str(data["strategy"]))
            board = Board.from_snapshot(data["grid"], data.get("winningCoords"))
        except KeyError as exc:
            raise SessionLoadError(f"Missing field {exc}") from exc
        except (UnknownStrategyError, TypeError, ValueError) as exc:
            raise SessionLoadError(str(exc)) from exc
        return cls(strategy=strategy, board=board)


class SessionStore(Protocol):
    def exists(self, pid: str) -> bool: ...

    def load(self, pid: str) -> Session: ...

    def save(self, pid: str, session: Session) -> None: ...

    def delete(self, pid: str) -> None: ...


class MemorySessionStore:
    """Keeps serialized sessions in a dict. Used by tests and single-process runs."""

    def __init__(self):
        self._records: dict[str, dict] = {}

    def exists(self, pid: str) -> bool:
        return pid in self._records

    def load(self, pid: str) -> Session:
        record = self._records.get(pid)
        if record is None:
            raise UnknownSessionError(pid)
        return Session.from_dict(record)

    def save(self, pid: str, session: Session) -> None:
        self._records[pid] = session.to_dict()

    def delete(self, pid: str) -> None:
        self._records.pop(pid, None)


class FileSessionStore:
    """Stores each session as `<pid>.txt` holding a JSON record."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, pid: str) -> Path:
        # Ids are generated as hex, anything else cannot name a session
        if not (pid.isascii() and pid.isalnum()):
            raise UnknownSessionError(pid)
        return self.directory / f"{pid}.txt"

    def exists(self, pid: str) -> bool:
        try:
            return self._path(pid).is_file()
        except UnknownSessionError:
            return False

    def load(self, pid: str) -> Session:
        path = self._path(pid)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise UnknownSessionError(pid) from None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SessionLoadError(f"Session {pid} is not valid JSON") from exc
        return Session.from_dict(data)

    def save(self, pid: str, session: Session) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(pid)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(session.to_dict()), encoding="utf-8")
        tmp.replace(path)
        logger.debug("Saved session %s to %s", pid, path)

    def delete(self, pid: str) -> None:
        self._path(pid).unlink(missing_ok=True)
