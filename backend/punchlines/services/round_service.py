"""Round Service - the punchline selection engine behind the round endpoints.

Invariants:
    - Each operation is one game transaction: load, check, mutate, save
    - Concurrent submissions from different players all land; a racing duplicate
      from the same player fails with InvalidSubmissionError
    - enter_host_chooses_state returns submissions in the order they were made
"""

from sqlalchemy.ext.asyncio import AsyncSession

from punchlines.core import round_machine
from punchlines.core.domain_types import GameCode
from punchlines.core.game_state import Winner
from punchlines.services.game_transaction import run_game_transaction


async def enter_players_choose_state(
    db: AsyncSession, game_code: str, requester_id: str,
) -> None:
    await run_game_transaction(
        db, GameCode(game_code),
        lambda game: round_machine.enter_players_choose(game, requester_id),
        operation="enter_players_choose_state",
    )


async def player_choose_punchlines(
    db: AsyncSession, game_code: str, player_id: str, chosen: list[str],
) -> None:
    chosen = list(chosen)
    await run_game_transaction(
        db, GameCode(game_code),
        lambda game: round_machine.choose_punchlines(game, player_id, chosen),
        operation="player_choose_punchlines",
    )


async def enter_host_chooses_state(
    db: AsyncSession, game_code: str, requester_id: str,
) -> list[list[str]]:
    return await run_game_transaction(
        db, GameCode(game_code),
        lambda game: round_machine.enter_host_chooses(game, requester_id),
        operation="enter_host_chooses_state",
    )


async def host_choose_winner(
    db: AsyncSession, game_code: str, requester_id: str, winning_player_id: str,
) -> Winner:
    return await run_game_transaction(
        db, GameCode(game_code),
        lambda game: round_machine.choose_winner(
            game, requester_id, winning_player_id,
        ),
        operation="host_choose_winner",
    )
