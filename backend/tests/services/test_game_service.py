"""Game Service - creation, code allocation, lookup, start, advance.

Invariants:
    - create_game returns a digit code that validate_game_code accepts
    - A colliding code is regenerated; an exhausted budget raises GameCodeExhaustedError
    - start_game needs three players and leaves the lobby with round 1 in BEFORE
    - advance_round finishes the game once round_limit rounds have been played;
      a finished game refuses further advances
    - only a player of the game may start it
"""

import pytest

from punchlines.core.domain_types import GameState, RoundState
from punchlines.core.errors import (
    GameCodeExhaustedError, GameNotFoundError, InvalidRoundTransitionError,
)
from punchlines.core.game_state import GameSettings
from punchlines.services import game_service
from punchlines.services.game_service import (
    advance_round, create_game, get_game, start_game, validate_game_code,
)
from punchlines.services.player_service import create_player


@pytest.fixture
def code_sequence(monkeypatch):
    """Make digit_short_code hand out the given codes in order."""
    def _install(*codes):
        remaining = list(codes)
        monkeypatch.setattr(
            game_service, "digit_short_code",
            lambda length, rng: remaining.pop(0),
        )
    return _install


async def _join_three(test_db, code, rng):
    return [
        await create_player(test_db, code, name, rng=rng)
        for name in ("Amy", "Bob", "Cat")
    ]


# ─── create / validate ───────────────────────────────────────────

async def test_create_game_returns_six_digit_code(game_code):
    assert len(game_code) == 6
    assert game_code.isdigit()
    assert not game_code.startswith("0")


async def test_created_game_validates(test_db, game_code):
    assert await validate_game_code(test_db, game_code)


async def test_unknown_code_does_not_validate(test_db):
    assert not await validate_game_code(test_db, "999999")


async def test_created_game_is_in_lobby(test_db, game_code):
    game = await get_game(test_db, game_code)
    assert game.state == GameState.LOBBY
    assert game.players == [] and game.rounds == []
    assert game.punchlines and game.setups


async def test_create_game_keeps_custom_settings(test_db, rng):
    code = await create_game(
        test_db, GameSettings(round_limit=3, max_players=5), rng=rng,
    )
    game = await get_game(test_db, code)
    assert game.settings.round_limit == 3
    assert game.settings.max_players == 5


async def test_create_game_regenerates_colliding_code(test_db, rng, code_sequence):
    code_sequence("111111", "111111", "222222")
    assert await create_game(test_db, rng=rng) == "111111"
    assert await create_game(test_db, rng=rng) == "222222"


async def test_create_game_gives_up_after_max_attempts(test_db, rng, code_sequence):
    code_sequence(*["333333"] * 11)
    await create_game(test_db, rng=rng)
    with pytest.raises(GameCodeExhaustedError):
        await create_game(test_db, rng=rng)


async def test_get_game_unknown_code(test_db):
    with pytest.raises(GameNotFoundError, match="Could not get game"):
        await get_game(test_db, "1")


# ─── start ───────────────────────────────────────────────────────

async def test_start_game_needs_three_players(test_db, game_code, rng):
    amy = await create_player(test_db, game_code, "Amy", rng=rng)
    await create_player(test_db, game_code, "Bob", rng=rng)
    with pytest.raises(InvalidRoundTransitionError) as exc_info:
        await start_game(test_db, game_code, amy, rng=rng)
    assert exc_info.value.reason == "not_enough_players"


async def test_start_game_pushes_first_round(test_db, game_code, rng, load_game):
    player_ids = await _join_three(test_db, game_code, rng)

    rnd = await start_game(test_db, game_code, player_ids[0], rng=rng)

    game = await load_game(game_code)
    assert rnd.host == player_ids[0]
    assert game.state == GameState.ROUND_BEFORE
    assert game.rounds[0].state == RoundState.BEFORE
    assert game.host == player_ids[0]


async def test_start_game_twice_fails(test_db, game_code, rng):
    player_ids = await _join_three(test_db, game_code, rng)
    await start_game(test_db, game_code, player_ids[0], rng=rng)
    with pytest.raises(InvalidRoundTransitionError, match="Cannot start game"):
        await start_game(test_db, game_code, player_ids[1], rng=rng)


# ─── advance ─────────────────────────────────────────────────────

def _to_after(game):
    game.rounds[-1].state = RoundState.AFTER
    game.state = GameState.ROUND_AFTER


async def test_advance_round_rotates_host(test_db, game_code, rng, edit_game):
    player_ids = await _join_three(test_db, game_code, rng)
    await start_game(test_db, game_code, player_ids[0], rng=rng)
    await edit_game(game_code, _to_after)

    rnd = await advance_round(test_db, game_code, player_ids[0], rng=rng)

    assert rnd.host == player_ids[1]
    assert rnd.state == RoundState.BEFORE
    assert rnd.number == 2


async def test_advance_round_only_by_host(test_db, game_code, rng, edit_game):
    player_ids = await _join_three(test_db, game_code, rng)
    await start_game(test_db, game_code, player_ids[0], rng=rng)
    await edit_game(game_code, _to_after)
    with pytest.raises(InvalidRoundTransitionError) as exc_info:
        await advance_round(test_db, game_code, player_ids[1], rng=rng)
    assert exc_info.value.reason == "not_host"


async def test_advance_round_before_after_fails(test_db, game_code, rng):
    player_ids = await _join_three(test_db, game_code, rng)
    await start_game(test_db, game_code, player_ids[0], rng=rng)
    with pytest.raises(InvalidRoundTransitionError, match="Cannot advance round"):
        await advance_round(test_db, game_code, player_ids[0], rng=rng)


async def test_game_finishes_after_round_limit(test_db, rng, edit_game, load_game):
    code = await create_game(test_db, GameSettings(round_limit=1), rng=rng)
    player_ids = await _join_three(test_db, code, rng)
    await start_game(test_db, code, player_ids[0], rng=rng)
    await edit_game(code, _to_after)

    assert await advance_round(test_db, code, player_ids[0], rng=rng) is None

    game = await load_game(code)
    assert game.state == GameState.FINISHED
    assert len(game.rounds) == 1


async def test_finished_game_refuses_another_advance(test_db, rng, edit_game, load_game):
    code = await create_game(test_db, GameSettings(round_limit=1), rng=rng)
    player_ids = await _join_three(test_db, code, rng)
    await start_game(test_db, code, player_ids[0], rng=rng)
    await edit_game(code, _to_after)
    await advance_round(test_db, code, player_ids[0], rng=rng)
    before = await load_game(code)

    with pytest.raises(InvalidRoundTransitionError) as exc_info:
        await advance_round(test_db, code, player_ids[0], rng=rng)

    assert exc_info.value.reason == "game_finished"
    assert await load_game(code) == before


async def test_start_game_by_stranger_fails(test_db, game_code, rng):
    await _join_three(test_db, game_code, rng)
    with pytest.raises(InvalidRoundTransitionError) as exc_info:
        await start_game(test_db, game_code, "stranger", rng=rng)
    assert exc_info.value.reason == "not_a_player"
