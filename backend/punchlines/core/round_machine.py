"""Round State Machine - drives rounds through BEFORE -> PLAYERS_CHOOSE -> HOST_CHOOSES -> AFTER.

Invariants:
    - Each transition calls its enforce_round check first, then mutates
    - Game.state always mirrors the active round's state after a transition
    - choose_punchlines moves cards hand -> discard pile and records the submission
      in the same call, so one save persists both or neither
    - A submission entry is written once per player per round and never overwritten
    - The game finishes after round_limit rounds reach AFTER and the host advances
    - Host rotates through players in join order; a host who is not a player
      restarts rotation at the first player
"""

import random

from punchlines.core.domain_types import (
    GameState, PlayerId, RoundState, SetupType, DRAW_TWO_BONUS_CARDS,
)
from punchlines.core.enforce_round import (
    check_can_advance,
    check_can_choose_winner,
    check_can_enter_host_chooses,
    check_can_enter_players_choose,
    check_can_start_game,
    check_submission,
)
from punchlines.core.game_state import Game, Round, Winner
from punchlines.core.hand_manager import (
    deal_extra, deal_hand, discard_punchlines, draw_setup,
)


def _set_round_state(game: Game, rnd: Round, state: RoundState) -> None:
    rnd.state = state
    game.state = state.game_state


def next_host(game: Game) -> PlayerId:
    """Player who hosts the next round."""
    if not game.players:
        raise ValueError("cannot pick a host without players")
    previous = game.active_round.host if game.active_round else None
    for index, player in enumerate(game.players):
        if player.id == previous:
            return game.players[(index + 1) % len(game.players)].id
    return game.players[0].id


def start_round(game: Game, rng: random.Random, hand_size: int) -> Round:
    """Push a fresh round in BEFORE with a rotated host and a new setup."""
    host = next_host(game)
    setup = draw_setup(game, rng)
    for player in game.players:
        deal_hand(game, player, rng, hand_size)
    if setup.type == SetupType.DRAW_TWO_PICK_THREE:
        for player in game.players:
            if player.id != host:
                deal_extra(game, player, rng, DRAW_TWO_BONUS_CARDS)

    rnd = Round(setup=setup, host=host, number=len(game.rounds) + 1)
    game.rounds.append(rnd)
    game.host = host
    game.state = GameState.ROUND_BEFORE
    return rnd


def start_game(
    game: Game, requester_id: str, rng: random.Random, hand_size: int,
) -> Round:
    """LOBBY -> first round, requested by any player in the game."""
    check_can_start_game(game, requester_id)
    return start_round(game, rng, hand_size)


def enter_players_choose(game: Game, requester_id: str) -> None:
    rnd = check_can_enter_players_choose(game, requester_id)
    _set_round_state(game, rnd, RoundState.PLAYERS_CHOOSE)


def choose_punchlines(game: Game, player_id: str, chosen: list[str]) -> None:
    """Record a player's submission and discard the chosen cards."""
    rnd, player = check_submission(game, player_id, chosen)
    discard_punchlines(game, player, chosen)
    rnd.punchlines_by_player[player.id] = tuple(chosen)


def enter_host_chooses(game: Game, requester_id: str) -> list[list[str]]:
    """PLAYERS_CHOOSE -> HOST_CHOOSES. Returns submissions in submission order."""
    rnd = check_can_enter_host_chooses(game, requester_id)
    _set_round_state(game, rnd, RoundState.HOST_CHOOSES)
    return rnd.submissions


def choose_winner(game: Game, requester_id: str, winning_player_id: str) -> Winner:
    rnd = check_can_choose_winner(game, requester_id, winning_player_id)
    winner = Winner(
        winning_player_id=PlayerId(winning_player_id),
        winning_punchlines=rnd.punchlines_by_player[PlayerId(winning_player_id)],
    )
    rnd.winner = winner
    _set_round_state(game, rnd, RoundState.AFTER)
    return winner


def advance_round(
    game: Game, requester_id: str, rng: random.Random, hand_size: int,
) -> Round | None:
    """Start the next round, or finish the game. Returns the new round or None."""
    check_can_advance(game, requester_id)
    if len(game.rounds) >= game.settings.round_limit:
        game.state = GameState.FINISHED
        return None
    return start_round(game, rng, hand_size)
