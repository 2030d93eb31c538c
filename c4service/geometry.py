"""Board dimensions and the direction table shared by the board and strategies."""

from __future__ import annotations

from enum import Enum

WIDTH = 7
HEIGHT = 6
WIN_LENGTH = 4


class Direction(Enum):
    """The eight scan directions as (d_row, d_col). Row 0 is the top of the board."""

    LEFT = (0, -1)
    RIGHT = (0, 1)
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT_DIAGONAL_DOWN = (1, -1)
    RIGHT_DIAGONAL_DOWN = (1, 1)
    LEFT_DIAGONAL_UP = (-1, -1)
    RIGHT_DIAGONAL_UP = (-1, 1)

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_col(self) -> int:
        return self.value[1]

    def step(self, row: int, col: int, count: int = 1) -> tuple[int, int]:
        return row + self.d_row * count, col + self.d_col * count


# Undirected axes: horizontal, vertical, diagonal ↘, diagonal ↗
AXES = [
    Direction.RIGHT,
    Direction.DOWN,
    Direction.RIGHT_DIAGONAL_DOWN,
    Direction.RIGHT_DIAGONAL_UP,
]


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < HEIGHT and 0 <= col < WIDTH
