"""Game Service - game creation, lookup, and lifecycle outside a single round.

Invariants:
    - create_game never returns a code that already belongs to another game:
      it checks before insert and retries on the unique-constraint violation
    - validate_game_code is read-only
    - start_game and advance_round mutate only through run_game_transaction
"""

import logging
import random

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from punchlines.config import get_settings
from punchlines.core.card_pool import digit_short_code
from punchlines.core.domain_types import GameCode
from punchlines.core.errors import GameCodeExhaustedError
from punchlines.core.game_state import Game, GameSettings, Round, build_game
from punchlines.core import round_machine
from punchlines.services.game_repository import SqlGameRepository
from punchlines.services.game_transaction import run_game_transaction

logger = logging.getLogger(__name__)

_system_rng = random.SystemRandom()


def default_rng() -> random.Random:
    return _system_rng


async def create_game(
    db: AsyncSession,
    settings: GameSettings | None = None,
    rng: random.Random | None = None,
) -> GameCode:
    """Allocate a unique code and persist a new LOBBY game."""
    rng = rng or default_rng()
    app_settings = get_settings()
    repo = SqlGameRepository(db)

    for attempt in range(1, app_settings.game_code_max_attempts + 1):
        code = GameCode(digit_short_code(app_settings.game_code_length, rng))
        if await repo.exists(code):
            logger.info(
                f"Game code collision on {code}, regenerating",
                extra={"game_code": code, "attempt": attempt},
            )
            continue

        await repo.add(build_game(
            code, settings or GameSettings(), rng, app_settings.hand_size,
        ))
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning(
                f"Game code {code} taken concurrently, regenerating",
                extra={"game_code": code, "attempt": attempt},
            )
            continue

        logger.info(f"Created game {code}", extra={"game_code": code})
        return code

    raise GameCodeExhaustedError(app_settings.game_code_max_attempts)


async def validate_game_code(db: AsyncSession, game_code: str) -> bool:
    return await SqlGameRepository(db).exists(GameCode(game_code))


async def get_game(db: AsyncSession, game_code: str) -> Game:
    return await SqlGameRepository(db).get(GameCode(game_code))


async def start_game(
    db: AsyncSession,
    game_code: str,
    requester_id: str,
    rng: random.Random | None = None,
) -> Round:
    """Leave the lobby and push the first round."""
    rng = rng or default_rng()
    hand_size = get_settings().hand_size
    return await run_game_transaction(
        db, GameCode(game_code),
        lambda game: round_machine.start_game(game, requester_id, rng, hand_size),
        operation="start_game",
    )


async def advance_round(
    db: AsyncSession,
    game_code: str,
    requester_id: str,
    rng: random.Random | None = None,
) -> Round | None:
    """Host moves on from a finished round. None means the game is over."""
    rng = rng or default_rng()
    hand_size = get_settings().hand_size
    return await run_game_transaction(
        db, GameCode(game_code),
        lambda game: round_machine.advance_round(game, requester_id, rng, hand_size),
        operation="advance_round",
    )
