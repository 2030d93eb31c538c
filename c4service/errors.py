"""Errors raised by the game core and the session layer."""


class C4Error(Exception):
    """Base class for every error this package raises on purpose."""


class InvalidColumnError(C4Error):
    def __init__(self, column):
        super().__init__(f"Invalid move: {column}")
        self.column = column


class ColumnFullError(C4Error):
    def __init__(self, column: int):
        super().__init__(f"Column full: {column}")
        self.column = column


class GameOverError(C4Error):
    """A move was applied to a board that already reached a win or a draw."""


class NoLegalMoveError(C4Error):
    """A strategy could not find a column to play."""


class UnknownStrategyError(C4Error, ValueError):
    def __init__(self, name: str):
        super().__init__(f"Unknown strategy: {name!r}")
        self.name = name


class UnknownSessionError(C4Error, KeyError):
    def __init__(self, pid: str):
        super().__init__(pid)
        self.pid = pid

    def __str__(self) -> str:
        return f"Unknown pid: {self.pid}"


class SessionLoadError(C4Error):
    """A stored session exists but could not be turned back into a game."""
