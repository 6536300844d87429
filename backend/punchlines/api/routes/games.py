"""Game Routes - create, validate, inspect, start, and advance games.

Invariants:
    - GET /validate answers 204 (exists) / 404 (unknown) / 400 (not a digit code)
    - Game views never include player hands
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from punchlines.infrastructure.database import get_db
from punchlines.schemas.game import (
    AdvanceResponse, GameCreate, GameCreatedResponse, GameResponse,
    HostAction, RoundResponse,
)
from punchlines.services import game_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/games", tags=["games"])


@router.post(
    "", response_model=GameCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_game(
    body: GameCreate | None = None, db: AsyncSession = Depends(get_db),
):
    """Create a new game in the lobby."""
    settings = body.settings.to_settings() if body and body.settings else None
    code = await game_service.create_game(db, settings)
    return GameCreatedResponse(game_code=code)


@router.get("/validate", status_code=status.HTTP_204_NO_CONTENT)
async def validate_game(
    game_code: str = Query(..., alias="gameCode", pattern=r"^\d{1,12}$"),
    db: AsyncSession = Depends(get_db),
):
    """204 if the game exists, 404 otherwise."""
    if await game_service.validate_game_code(db, game_code):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(status_code=status.HTTP_404_NOT_FOUND)


@router.get("/{game_code}", response_model=GameResponse)
async def get_game(game_code: str, db: AsyncSession = Depends(get_db)):
    game = await game_service.get_game(db, game_code)
    return GameResponse.from_game(game)


@router.post("/{game_code}/start", response_model=RoundResponse)
async def start_game(
    game_code: str, body: HostAction, db: AsyncSession = Depends(get_db),
):
    """A player leaves the lobby; the first round starts in BEFORE."""
    rnd = await game_service.start_game(db, game_code, body.requester_id)
    return RoundResponse.from_round(rnd)


@router.post("/{game_code}/rounds/advance", response_model=AdvanceResponse)
async def advance_round(
    game_code: str, body: HostAction, db: AsyncSession = Depends(get_db),
):
    """Host moves on after a winner is picked."""
    rnd = await game_service.advance_round(db, game_code, body.requester_id)
    if rnd is None:
        return AdvanceResponse(finished=True)
    return AdvanceResponse(finished=False, round=RoundResponse.from_round(rnd))
