"""Game Transaction - load, validate, mutate, save one Game aggregate as a unit.

Invariants:
    - Writes to one game_code are serialized in-process by a per-game asyncio.Lock;
      different game codes never wait on each other
    - Across processes, GameRecord.version rejects a save based on a stale read
      (StaleDataError); the whole load/mutate/save is then retried from a fresh read
    - mutate() is a synchronous function of the loaded aggregate; domain errors it
      raises roll back and propagate unchanged (never retried)
    - After save_max_retries stale attempts the caller gets ConcurrencyError

Design Decisions:
    - Locks held in a WeakValueDictionary: an idle game's lock is dropped as soon
      as no coroutine references it
"""

import asyncio
import logging
import weakref
from typing import Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from punchlines.config import get_settings
from punchlines.core.domain_types import GameCode
from punchlines.core.errors import ConcurrencyError, ErrorContext, PunchlinesError
from punchlines.core.game_state import Game
from punchlines.services.game_repository import SqlGameRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

_game_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
    weakref.WeakValueDictionary()
)


def lock_for(game_code: str) -> asyncio.Lock:
    """The in-process write lock for one game."""
    lock = _game_locks.get(game_code)
    if lock is None:
        lock = asyncio.Lock()
        _game_locks[game_code] = lock
    return lock


async def run_game_transaction(
    db: AsyncSession,
    game_code: GameCode,
    mutate: Callable[[Game], T],
    *,
    operation: str,
) -> T:
    """Run mutate() against a freshly loaded game and commit the result."""
    max_attempts = get_settings().save_max_retries
    repo = SqlGameRepository(db)
    lock = lock_for(game_code)
    async with lock:
        for attempt in range(1, max_attempts + 1):
            try:
                game = await repo.get(game_code)
                result = mutate(game)
            except PunchlinesError:
                await db.rollback()
                raise

            await repo.save(game)
            try:
                await db.commit()
            except StaleDataError:
                await db.rollback()
                logger.warning(
                    f"{operation}: game {game_code} changed underneath, retrying",
                    extra={
                        "game_code": game_code, "operation": operation,
                        "attempt": attempt,
                    },
                )
                continue

            logger.info(
                f"{operation} committed",
                extra={
                    "game_code": game_code, "operation": operation,
                    "round_number": game.round_number,
                },
            )
            return result

    raise ConcurrencyError(
        f"Game {game_code} kept changing during {operation}",
        ErrorContext(game_code=game_code, reason="stale_version"),
    )
