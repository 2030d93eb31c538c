"""Pydantic models for the HTTP response bodies."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from c4service.board import Board, MoveResult


class InfoResponse(BaseModel):
    width: int
    height: int
    strategies: list[str]


class NewGameResponse(BaseModel):
    response: Literal[True] = True
    pid: str


class ErrorResponse(BaseModel):
    response: Literal[False] = False
    reason: str


class MoveRecord(BaseModel):
    """One applied move. Field names follow the wire format."""

    slot: int
    isWin: bool = False
    isDraw: bool = False
    row: list[int] = Field(default_factory=list)  # flat [col, row, ...] of the winning cells

    @classmethod
    def from_result(cls, slot: int, result: MoveResult, board: Board) -> MoveRecord:
        is_win = result is MoveResult.WIN
        return cls(
            slot=slot,
            isWin=is_win,
            isDraw=result is MoveResult.DRAW,
            row=board.winning_coords if is_win else [],
        )


class PlayResponse(BaseModel):
    response: Literal[True] = True
    ack_move: MoveRecord
    move: MoveRecord | None = None  # computer's reply, omitted once the game is over


def dump(model: BaseModel) -> dict:
    """Serialize a response model, leaving out unset optional members."""
    return model.model_dump(exclude_none=True)
