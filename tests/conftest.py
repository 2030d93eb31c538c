import pytest

from c4service.board import Board, Token
from c4service.geometry import HEIGHT, WIDTH

SYMBOLS = {".": Token.EMPTY.value, "X": Token.PLAYER.value, "O": Token.OPPONENT.value}

# A full board with no four in a row anywhere: rows alternate, pairs of columns share a token
NO_WIN_ROWS = [
    "XXOOXXO",
    "OOXXOOX",
    "XXOOXXO",
    "OOXXOOX",
    "XXOOXXO",
    "OOXXOOX",
]


def grid_from_rows(rows: list[str]) -> list[list[str]]:
    """Turn picture rows (top first, X = player, O = computer) into a stored grid.

    Missing rows at the top are filled with empty cells.
    """
    rows = ["." * WIDTH] * (HEIGHT - len(rows)) + list(rows)
    return [[SYMBOLS[ch] for ch in row] for row in rows]


@pytest.fixture
def make_board():
    def _make(rows: list[str], winning_coords: list[int] | None = None) -> Board:
        return Board.from_snapshot(grid_from_rows(rows), winning_coords)

    return _make


@pytest.fixture
def no_win_rows() -> list[str]:
    return list(NO_WIN_ROWS)


@pytest.fixture
def grid():
    return grid_from_rows
