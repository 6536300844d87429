"""Round Enforcement - precondition checks for every round state transition.

Invariants:
    - All functions are PURE: they read the aggregate and never mutate it
    - Every check runs before any mutation; a failing check leaves the game untouched
    - Transition failures raise InvalidRoundTransitionError with the operation's
      stable message; submission failures raise InvalidSubmissionError
    - ErrorContext.reason names the precondition that failed

Design Decisions:
    - Raise instead of returning error dicts: the services layer maps domain
      errors to HTTP in one global handler
    - Checks return the entities they resolved (round, player) so callers do
      not look them up twice
"""

from punchlines.core.domain_types import GameState, RoundState, MIN_PLAYERS
from punchlines.core.errors import (
    ErrorContext, InvalidRoundTransitionError, InvalidSubmissionError,
)
from punchlines.core.game_state import Game, Player, Round
from punchlines.core.hand_manager import is_subset_of_hand

BEGIN_ROUND_MESSAGE = "Cannot begin round"
ENTER_STATE_MESSAGE = "Cannot enter state"
CHOOSE_WINNER_MESSAGE = "Cannot choose winner"
ADVANCE_ROUND_MESSAGE = "Cannot advance round"
START_GAME_MESSAGE = "Cannot start game"


def _context(game: Game, player_id: str | None = None) -> ErrorContext:
    return ErrorContext(
        game_code=game.game_code,
        player_id=player_id,
        round_number=game.round_number,
    )


def _require_host_transition(
    game: Game, requester_id: str, expected: RoundState, message: str,
) -> Round:
    """Shared shape of host-driven transitions: round exists, phase, requester."""
    ctx = _context(game, requester_id)
    rnd = game.active_round
    if rnd is None:
        raise InvalidRoundTransitionError(message, "no_round", ctx)
    if rnd.state != expected:
        raise InvalidRoundTransitionError(message, "wrong_state", ctx)
    if rnd.host != requester_id:
        raise InvalidRoundTransitionError(message, "not_host", ctx)
    return rnd


def check_can_enter_players_choose(game: Game, requester_id: str) -> Round:
    """BEFORE -> PLAYERS_CHOOSE, host only."""
    return _require_host_transition(
        game, requester_id, RoundState.BEFORE, BEGIN_ROUND_MESSAGE,
    )


def check_can_enter_host_chooses(game: Game, requester_id: str) -> Round:
    """PLAYERS_CHOOSE -> HOST_CHOOSES, host only."""
    return _require_host_transition(
        game, requester_id, RoundState.PLAYERS_CHOOSE, ENTER_STATE_MESSAGE,
    )


def check_can_choose_winner(
    game: Game, requester_id: str, winning_player_id: str,
) -> Round:
    """HOST_CHOOSES -> AFTER, host only, winner must have submitted."""
    rnd = _require_host_transition(
        game, requester_id, RoundState.HOST_CHOOSES, CHOOSE_WINNER_MESSAGE,
    )
    if not rnd.has_submitted(winning_player_id):
        raise InvalidRoundTransitionError(
            CHOOSE_WINNER_MESSAGE, "no_submission",
            _context(game, winning_player_id),
        )
    return rnd


def check_can_advance(game: Game, requester_id: str) -> Round:
    """AFTER -> next round or FINISHED, host only. FINISHED is terminal."""
    if game.state == GameState.FINISHED:
        raise InvalidRoundTransitionError(
            ADVANCE_ROUND_MESSAGE, "game_finished", _context(game, requester_id),
        )
    return _require_host_transition(
        game, requester_id, RoundState.AFTER, ADVANCE_ROUND_MESSAGE,
    )


def check_can_start_game(game: Game, requester_id: str) -> None:
    """LOBBY -> first round, needs MIN_PLAYERS players; only a player may start."""
    ctx = _context(game, requester_id)
    if game.state != GameState.LOBBY or game.rounds:
        raise InvalidRoundTransitionError(START_GAME_MESSAGE, "wrong_state", ctx)
    if len(game.players) < MIN_PLAYERS:
        raise InvalidRoundTransitionError(
            START_GAME_MESSAGE, "not_enough_players", ctx,
        )
    if game.find_player(requester_id) is None:
        raise InvalidRoundTransitionError(START_GAME_MESSAGE, "not_a_player", ctx)


def check_submission(
    game: Game, player_id: str, chosen: list[str],
) -> tuple[Round, Player]:
    """Validate a punchline submission against round, requester, and hand."""
    ctx = _context(game, player_id)
    rnd = game.active_round
    if rnd is None:
        raise InvalidSubmissionError("no_round", ctx)
    if rnd.state != RoundState.PLAYERS_CHOOSE:
        raise InvalidSubmissionError("wrong_state", ctx)
    if rnd.host == player_id:
        raise InvalidSubmissionError("host_cannot_submit", ctx)
    player = game.find_player(player_id)
    if player is None:
        raise InvalidSubmissionError("unknown_player", ctx)
    if rnd.has_submitted(player_id):
        raise InvalidSubmissionError("already_submitted", ctx)
    if len(chosen) != rnd.setup.required_punchlines:
        raise InvalidSubmissionError("wrong_count", ctx)
    if not is_subset_of_hand(player.punchlines, chosen):
        raise InvalidSubmissionError("not_in_hand", ctx)
    return rnd, player
