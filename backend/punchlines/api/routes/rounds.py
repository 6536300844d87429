"""Round Routes - phase transitions and punchline submissions for the active round.

Invariants:
    - Every route maps to exactly one round_service operation
    - Transition failures surface as 409, submission failures as 400
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from punchlines.infrastructure.database import get_db
from punchlines.schemas.game import (
    HostAction, PunchlineSubmission, SubmissionsResponse, WinnerPick,
    WinnerResponse,
)
from punchlines.services import round_service

router = APIRouter(prefix="/api/v1/games/{game_code}/rounds", tags=["rounds"])


@router.post("/players-choose", status_code=status.HTTP_204_NO_CONTENT)
async def enter_players_choose(
    game_code: str, body: HostAction, db: AsyncSession = Depends(get_db),
):
    """Host opens the round for submissions."""
    await round_service.enter_players_choose_state(
        db, game_code, body.requester_id,
    )


@router.post("/punchlines", status_code=status.HTTP_204_NO_CONTENT)
async def choose_punchlines(
    game_code: str, body: PunchlineSubmission, db: AsyncSession = Depends(get_db),
):
    await round_service.player_choose_punchlines(
        db, game_code, body.player_id, body.punchlines,
    )


@router.post("/host-chooses", response_model=SubmissionsResponse)
async def enter_host_chooses(
    game_code: str, body: HostAction, db: AsyncSession = Depends(get_db),
):
    """Host closes submissions and receives them for judging."""
    punchlines = await round_service.enter_host_chooses_state(
        db, game_code, body.requester_id,
    )
    return SubmissionsResponse(punchlines=punchlines)


@router.post("/winner", response_model=WinnerResponse)
async def choose_winner(
    game_code: str, body: WinnerPick, db: AsyncSession = Depends(get_db),
):
    winner = await round_service.host_choose_winner(
        db, game_code, body.requester_id, body.winning_player_id,
    )
    return WinnerResponse.from_winner(winner)
