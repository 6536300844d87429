"""Player Registry - creates players inside a game and resolves them by id.

Invariants:
    - Player ids are unique within a game (uuid4 hex drawn from the injected rng)
    - add_player refuses once len(players) == settings.max_players
    - add_player refuses once the game is FINISHED
    - add_player refuses when the cards left to deal could not make a hand
      able to answer every setup type
    - Players are never removed; join order is preserved and drives host rotation
"""

import random
import uuid

from punchlines.core.domain_types import (
    GameState, PlayerId, MAX_REQUIRED_PUNCHLINES,
)
from punchlines.core.errors import (
    ErrorContext, GameFullError, InvalidRoundTransitionError, PlayerNotFoundError,
)
from punchlines.core.game_state import Game, Player
from punchlines.core.hand_manager import available_punchlines, deal_hand


def new_player_id(rng: random.Random) -> PlayerId:
    return PlayerId(uuid.UUID(int=rng.getrandbits(128), version=4).hex)


def add_player(
    game: Game, nickname: str, rng: random.Random, hand_size: int,
) -> Player:
    """Append a new player with a freshly dealt hand."""
    ctx = ErrorContext(game_code=game.game_code, round_number=game.round_number)
    if game.state == GameState.FINISHED:
        raise InvalidRoundTransitionError(
            "Cannot join game", "game_finished", ctx,
        )
    if game.is_full:
        raise GameFullError(game.settings.max_players, ctx)
    if available_punchlines(game) < min(hand_size, MAX_REQUIRED_PUNCHLINES):
        raise InvalidRoundTransitionError(
            "Cannot join game", "deck_exhausted", ctx,
        )

    player_id = new_player_id(rng)
    while game.find_player(player_id) is not None:
        player_id = new_player_id(rng)

    player = Player(id=player_id, nickname=nickname)
    deal_hand(game, player, rng, hand_size)
    game.players.append(player)
    return player


def require_player(game: Game, player_id: str) -> Player:
    """Find the player or raise PlayerNotFoundError."""
    player = game.find_player(player_id)
    if player is None:
        raise PlayerNotFoundError(game.game_code, player_id)
    return player
