"""Game Transaction - optimistic-version retry and per-game locking.

Invariants:
    - A stale commit is retried from a fresh read and then succeeds
    - Persistent staleness surfaces as ConcurrencyError after save_max_retries
    - Domain errors raised by mutate() are not retried
"""

import pytest
from sqlalchemy.orm.exc import StaleDataError

from punchlines.config import get_settings
from punchlines.core.errors import ConcurrencyError, InvalidRoundTransitionError
from punchlines.services.game_transaction import lock_for, run_game_transaction


@pytest.fixture
def stale_commits(monkeypatch, test_db):
    """Make the first `n` commits on test_db raise StaleDataError."""
    def _install(n):
        calls = {"count": 0}
        real_commit = test_db.commit

        async def commit():
            calls["count"] += 1
            if calls["count"] <= n:
                raise StaleDataError("row changed underneath")
            await real_commit()

        monkeypatch.setattr(test_db, "commit", commit)
        return calls
    return _install


async def test_commit_is_retried_after_stale_version(
    test_db, game_code, stale_commits, load_game,
):
    calls = stale_commits(1)
    mutations = []

    def mutate(game):
        mutations.append(game.game_code)
        game.settings.round_limit = 7

    await run_game_transaction(test_db, game_code, mutate, operation="test")

    assert calls["count"] == 2
    assert len(mutations) == 2
    assert (await load_game(game_code)).settings.round_limit == 7


async def test_persistent_staleness_raises_concurrency_error(
    test_db, game_code, stale_commits,
):
    calls = stale_commits(100)
    with pytest.raises(ConcurrencyError):
        await run_game_transaction(
            test_db, game_code, lambda game: None, operation="test",
        )
    assert calls["count"] == get_settings().save_max_retries


async def test_domain_error_is_not_retried(test_db, game_code, stale_commits):
    calls = stale_commits(0)
    attempts = []

    def mutate(game):
        attempts.append(1)
        raise InvalidRoundTransitionError("Cannot start game", "wrong_state")

    with pytest.raises(InvalidRoundTransitionError):
        await run_game_transaction(test_db, game_code, mutate, operation="test")
    assert len(attempts) == 1
    assert calls["count"] == 0


async def test_mutate_result_is_returned(test_db, game_code):
    result = await run_game_transaction(
        test_db, game_code, lambda game: game.state, operation="test",
    )
    assert result == "LOBBY"


def test_lock_is_shared_per_game_code():
    lock = lock_for("123456")
    assert lock_for("123456") is lock
    assert lock_for("654321") is not lock
