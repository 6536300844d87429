"""Player Routes - join a game and fetch your own hand."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from punchlines.infrastructure.database import get_db
from punchlines.schemas.game import (
    PlayerCreate, PlayerCreatedResponse, PlayerResponse,
)
from punchlines.services import player_service

router = APIRouter(prefix="/api/v1/games/{game_code}/players", tags=["players"])


@router.post(
    "", response_model=PlayerCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_player(
    game_code: str, body: PlayerCreate, db: AsyncSession = Depends(get_db),
):
    player_id = await player_service.create_player(db, game_code, body.nickname)
    return PlayerCreatedResponse(player_id=player_id)


@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(
    game_code: str, player_id: str, db: AsyncSession = Depends(get_db),
):
    player = await player_service.get_player(db, game_code, player_id)
    return PlayerResponse.from_player(player)
