"""Computer opponent strategies.

Strategies hold no state between calls. `Strategy` is a plain enum tag;
`select_column` dispatches through `_SELECTORS` to a module-level function
for each variant.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Callable

from c4service.board import Board, Token
from c4service.errors import UnknownStrategyError
from c4service.geometry import HEIGHT, WIDTH, Direction

NO_MOVE = -1

# Center-first fallback order for the smart strategy
CENTER_ORDER = [3, 2, 4, 1, 5, 0, 6]


class Strategy(Enum):
    SMART = "Smart"
    RANDOM = "Random"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def names(cls) -> list[str]:
        return [s.value for s in cls]

    @classmethod
    def from_name(cls, name: str) -> Strategy:
        """Look up a strategy by display name, ignoring case."""
        for strategy in cls:
            if strategy.value.lower() == name.strip().lower():
                return strategy
        raise UnknownStrategyError(name)

    def select_column(
        self,
        board: Board,
        last_player_column: int | None = None,
        rng: random.Random | None = None,
    ) -> int:
        """Return the column the computer plays next, or NO_MOVE.

        The board is not modified. Callers re-check the column against
        `Board.is_column_full` before applying it.
        """
        return _SELECTORS[self](board, last_player_column, rng or random)


def _completing_column(board: Board, token: Token) -> int | None:
    """Find a column where one more `token` finishes four in a row.

    Cells are visited column by column, bottom row first. From each `token`
    cell, a direction qualifies when the next two cells also hold `token` and
    the third is where a drop into that column would land.
    """
    for col in range(WIDTH):
        for row in range(HEIGHT - 1, -1, -1):
            if board.grid[row][col] is not token:
                continue
            for direction in Direction:
                if all(board.token_at(*direction.step(row, col, n)) == token for n in (1, 2)):
                    target_row, target_col = direction.step(row, col, 3)
                    if (
                        board.token_at(target_row, target_col) is Token.EMPTY
                        and board.landing_row(target_col) == target_row
                    ):
                        return target_col
    return None


def _select_smart(board: Board, last_player_column: int | None, rng) -> int:
    win = _completing_column(board, Token.OPPONENT)
    if win is not None:
        return win

    block = _completing_column(board, Token.OPPONENT.other())
    if block is not None:
        return block

    for col in CENTER_ORDER:
        if not board.is_column_full(col):
            return col
    return NO_MOVE


def _select_random(board: Board, last_player_column: int | None, rng) -> int:
    columns = board.available_columns()
    if not columns:
        return NO_MOVE
    return rng.choice(columns)


_SELECTORS: dict[Strategy, Callable[[Board, int | None, random.Random], int]] = {
    Strategy.SMART: _select_smart,
    Strategy.RANDOM: _select_random,
}
