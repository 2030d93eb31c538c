"""Board state: token drops, win detection, and draw detection."""

from __future__ import annotations

from enum import Enum

from c4service.errors import (
    ColumnFullError,
    GameOverError,
    InvalidColumnError,
    SessionLoadError,
)
from c4service.geometry import AXES, HEIGHT, WIDTH, WIN_LENGTH, Direction, in_bounds

CAPACITY = WIDTH * HEIGHT


class Token(str, Enum):
    EMPTY = "empty token"
    PLAYER = "1"
    OPPONENT = "2"

    def other(self) -> Token:
        if self is Token.PLAYER:
            return Token.OPPONENT
        if self is Token.OPPONENT:
            return Token.PLAYER
        raise ValueError("EMPTY has no opponent")


class MoveResult(Enum):
    GOOD = 1
    WIN = 2
    DRAW = 3


class BoardStatus(Enum):
    ACTIVE = "active"
    WON = "won"
    DRAWN = "drawn"


class Board:
    def __init__(self):
        self.grid: list[list[Token]] = [[Token.EMPTY] * WIDTH for _ in range(HEIGHT)]
        self.token_count: int = 0
        self.winning_cells: list[tuple[int, int]] = []
        self.status: BoardStatus = BoardStatus.ACTIVE

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def token_at(self, row: int, col: int) -> Token | None:
        """Return the token at (row, col), or None when off the board."""
        if not in_bounds(row, col):
            return None
        return self.grid[row][col]

    def is_column_full(self, column: int) -> bool:
        """True when the top cell of `column` is taken. Raises InvalidColumnError off the board."""
        _check_column(column)
        return self.grid[0][column] is not Token.EMPTY

    def landing_row(self, column: int) -> int | None:
        """Row a token dropped into `column` would settle in, or None if full."""
        _check_column(column)
        for row in range(HEIGHT - 1, -1, -1):
            if self.grid[row][column] is Token.EMPTY:
                return row
        return None

    def available_columns(self) -> list[int]:
        return [col for col in range(WIDTH) if not self.is_column_full(col)]

    @property
    def is_terminal(self) -> bool:
        return self.status is not BoardStatus.ACTIVE

    @property
    def winning_coords(self) -> list[int]:
        """Winning cells flattened to [col, row, col, row, ...]."""
        return [n for cell in self.winning_cells for n in cell]

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def apply_move(self, column: int, token: Token) -> MoveResult:
        """Drop `token` into `column` and classify the outcome.

        Every precondition is checked before the grid is touched, so a
        rejected move leaves the board unchanged. A move that fills the
        board reports DRAW even if it also completes a line.
        """
        if self.is_terminal:
            raise GameOverError(f"Game is already {self.status.value}")
        _check_column(column)
        if token is Token.EMPTY:
            raise ValueError("Cannot drop an empty token")

        row = self.landing_row(column)
        if row is None:
            raise ColumnFullError(column)

        self.grid[row][column] = token
        self.token_count += 1

        if self.token_count == CAPACITY:
            self.status = BoardStatus.DRAWN
            return MoveResult.DRAW

        cells = self._find_win(row, column, token)
        if cells:
            self.winning_cells = cells
            self.status = BoardStatus.WON
            return MoveResult.WIN

        self.winning_cells = []
        return MoveResult.GOOD

    def _find_win(self, row: int, col: int, token: Token) -> list[tuple[int, int]]:
        # Runs that start next to the placed token
        for direction in Direction:
            cells = self._run_from(row, col, token, direction)
            if cells:
                return cells

        # Runs with the placed token somewhere in the middle
        for axis in AXES:
            for offset in range(1, WIN_LENGTH - 1):
                start_row, start_col = axis.step(row, col, -offset)
                window = [axis.step(start_row, start_col, i) for i in range(WIN_LENGTH)]
                if all(self.token_at(r, c) == token for r, c in window):
                    return [(c, r) for r, c in window if (r, c) != (row, col)]
        return []

    def _run_from(
        self, row: int, col: int, token: Token, direction: Direction
    ) -> list[tuple[int, int]]:
        cells = []
        for count in range(1, WIN_LENGTH):
            r, c = direction.step(row, col, count)
            if self.token_at(r, c) != token:
                return []
            cells.append((c, r))
        return cells

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def to_snapshot(self) -> dict:
        return {
            "grid": [[cell.value for cell in row] for row in self.grid],
            "winningCoords": self.winning_coords,
        }

    @classmethod
    def from_snapshot(cls, grid: list[list[str]], winning_coords: list[int] | None = None) -> Board:
        """Rebuild a board from its stored grid, validating shape and gravity."""
        if not isinstance(grid, list) or len(grid) != HEIGHT:
            raise SessionLoadError(f"Grid must have {HEIGHT} rows")

        board = cls()
        for r, row in enumerate(grid):
            if not isinstance(row, list) or len(row) != WIDTH:
                raise SessionLoadError(f"Row {r} must have {WIDTH} cells")
            for c, value in enumerate(row):
                try:
                    board.grid[r][c] = Token(str(value))
                except ValueError:
                    raise SessionLoadError(f"Unknown token {value!r} at ({c}, {r})") from None

        for c in range(WIDTH):
            for r in range(HEIGHT - 1):
                if board.grid[r][c] is not Token.EMPTY and board.grid[r + 1][c] is Token.EMPTY:
                    raise SessionLoadError(f"Floating token at ({c}, {r})")

        board.token_count = sum(cell is not Token.EMPTY for row in board.grid for cell in row)

        coords = list(winning_coords or [])
        if len(coords) % 2:
            raise SessionLoadError("Winning coordinates must come in (col, row) pairs")
        board.winning_cells = [(int(coords[i]), int(coords[i + 1])) for i in range(0, len(coords), 2)]

        if board.winning_cells:
            board.status = BoardStatus.WON
        elif board.token_count == CAPACITY:
            board.status = BoardStatus.DRAWN
        return board

    def render(self) -> str:
        symbols = {Token.EMPTY: ".", Token.PLAYER: "X", Token.OPPONENT: "O"}
        lines = [" ".join(str(c) for c in range(WIDTH))]
        for row in self.grid:
            lines.append(" ".join(symbols[cell] for cell in row))
        return "\n".join(lines)


def _check_column(column) -> None:
    if isinstance(column, bool) or not isinstance(column, int) or not 0 <= column < WIDTH:
        raise InvalidColumnError(column)
