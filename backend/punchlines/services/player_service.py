"""Player Service - create, resolve, and validate players within a game.

Invariants:
    - get_player with a pre-loaded game performs zero store reads
    - validate_player_id turns GameNotFoundError / PlayerNotFoundError into False;
      infrastructure failures still propagate
"""

import random

from sqlalchemy.ext.asyncio import AsyncSession

from punchlines.config import get_settings
from punchlines.core.domain_types import GameCode, PlayerId
from punchlines.core.errors import GameNotFoundError, PlayerNotFoundError
from punchlines.core.game_state import Game, Player
from punchlines.core.player_registry import add_player, require_player
from punchlines.services.game_repository import SqlGameRepository
from punchlines.services.game_service import default_rng
from punchlines.services.game_transaction import run_game_transaction


async def create_player(
    db: AsyncSession,
    game_code: str,
    nickname: str,
    rng: random.Random | None = None,
) -> PlayerId:
    """Join a game. Returns the new player's id."""
    rng = rng or default_rng()
    hand_size = get_settings().hand_size
    player = await run_game_transaction(
        db, GameCode(game_code),
        lambda game: add_player(game, nickname, rng, hand_size),
        operation="create_player",
    )
    return player.id


async def get_player(
    db: AsyncSession,
    game_code: str,
    player_id: str,
    game: Game | None = None,
) -> Player:
    if game is None:
        game = await SqlGameRepository(db).get(GameCode(game_code))
    return require_player(game, player_id)


async def validate_player_id(
    db: AsyncSession, game_code: str, player_id: str,
) -> bool:
    try:
        await get_player(db, game_code, player_id)
    except (GameNotFoundError, PlayerNotFoundError):
        return False
    return True
