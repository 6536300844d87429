"""Game State - tests for aggregate helpers and the game factory.

Tests cover:
    - build_game seeds a lobby game with both decks
    - the punchline pool covers a full table of full hands
    - active_round / round_number / find_player / is_full
"""

import random
from collections import Counter

from punchlines.core.card_pool import STARTER_PUNCHLINES, STARTER_SETUPS
from punchlines.core.domain_types import DRAW_TWO_BONUS_CARDS, GameState
from punchlines.core.game_state import GameSettings, build_game, punchline_copies


def test_build_game_starts_in_lobby(game):
    assert game.state == GameState.LOBBY
    assert game.players == [] and game.rounds == []
    assert game.host is None
    assert game.active_round is None
    assert game.round_number == 0


def test_build_game_seeds_full_decks(game):
    copies = punchline_copies(game.settings, 10)
    assert Counter(game.punchlines) == Counter(STARTER_PUNCHLINES * copies)
    assert len(game.setups) == len(STARTER_SETUPS)
    assert game.discarded_punchlines == [] and game.discarded_setups == []


def test_build_game_shuffle_depends_on_seed():
    a = build_game("1", GameSettings(), random.Random(1))
    b = build_game("1", GameSettings(), random.Random(1))
    c = build_game("1", GameSettings(), random.Random(2))
    assert a.punchlines == b.punchlines
    assert a.punchlines != c.punchlines


def test_active_round_is_last_round(round_game):
    assert round_game.active_round is round_game.rounds[-1]
    assert round_game.round_number == 1


def test_find_player(round_game):
    assert round_game.find_player("bob").nickname == "Bob"
    assert round_game.find_player("nobody") is None


def test_is_full(game, add_players):
    game.settings.max_players = 3
    add_players(game, 2)
    assert not game.is_full
    add_players(game, 1)
    assert game.is_full


def test_pool_covers_full_table_at_largest_size():
    settings = GameSettings(max_players=40)
    game = build_game("1", settings, random.Random(3), hand_size=10)
    assert len(game.punchlines) >= 40 * (10 + DRAW_TWO_BONUS_CARDS)


def test_small_table_keeps_a_single_deck():
    assert punchline_copies(GameSettings(max_players=3), 10) == 1
