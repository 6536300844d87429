"""Core test fixtures - pure aggregates, no DB, seeded randomness."""

import random

import pytest

from punchlines.core.domain_types import GameCode, PlayerId, RoundState, SetupType
from punchlines.core.game_state import (
    GameSettings, Player, Round, Setup, build_game,
)

BOB_HAND = [
    "To get to the other side",
    "To avoid bad jokes",
    "To go to KFC",
    "To go to Cheeky Nando's with the lads",
]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def game(rng):
    """Fresh lobby game with the starter decks."""
    return build_game(GameCode("123456"), GameSettings(), rng)


@pytest.fixture
def bob():
    return Player(id=PlayerId("bob"), nickname="Bob", punchlines=list(BOB_HAND))


@pytest.fixture
def round_game(game, bob):
    """Game with a PICK_ONE round in PLAYERS_CHOOSE hosted by "abc123", and Bob."""
    game.players.append(bob)
    game.rounds.append(Round(
        setup=Setup("Why did the chicken cross the road?", SetupType.PICK_ONE),
        host=PlayerId("abc123"),
        state=RoundState.PLAYERS_CHOOSE,
    ))
    return game


@pytest.fixture
def add_players():
    """Append `count` empty-handed players p0..p{count-1}."""
    def _add(game, count):
        players = [
            Player(id=PlayerId(f"p{i}"), nickname=f"Player {i}")
            for i in range(count)
        ]
        game.players.extend(players)
        return players
    return _add
