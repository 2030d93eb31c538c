"""HTTP endpoints. Every reply is HTTP 200; the `response` flag reports success."""

from fastapi import APIRouter, Depends, Request

from c4service.models import dump
from c4service.service import GameService

router = APIRouter()


def get_game_service(request: Request) -> GameService:
    return request.app.state.game_service


@router.get("/info")
async def info(service: GameService = Depends(get_game_service)):
    return dump(service.info())


@router.get("/new")
async def new_game(strategy: str | None = None, service: GameService = Depends(get_game_service)):
    return dump(await service.new_game(strategy))


@router.get("/play")
async def play(
    pid: str | None = None,
    move: str | None = None,
    service: GameService = Depends(get_game_service),
):
    return dump(await service.play(pid, move))
