"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - GameCode is a string of decimal digits, PlayerId a uuid hex string
    - All valid states encoded as Enums, no raw string matching
    - SetupType.required_punchlines is the single source of truth for submission size

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON columns without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

GameCode = NewType("GameCode", str)
PlayerId = NewType("PlayerId", str)


# ─── Limits ──────────────────────────────────────────────────────

DEFAULT_ROUND_LIMIT: int = 69
DEFAULT_MAX_PLAYERS: int = 25
MIN_PLAYERS: int = 3
MAX_PLAYERS_LIMIT: int = 40
DEFAULT_HAND_SIZE: int = 10
DRAW_TWO_BONUS_CARDS: int = 2


# ─── Enums ───────────────────────────────────────────────────────

class GameState(str, Enum):
    """Coarse game lifecycle, mirrors the active round's phase."""
    LOBBY = "LOBBY"
    ROUND_BEFORE = "ROUND_BEFORE"
    ROUND_PLAYERS_CHOOSE = "ROUND_PLAYERS_CHOOSE"
    ROUND_HOST_CHOOSE = "ROUND_HOST_CHOOSE"
    ROUND_AFTER = "ROUND_AFTER"
    FINISHED = "FINISHED"


class RoundState(str, Enum):
    """Fine-grained phase of a single round."""
    BEFORE = "BEFORE"
    PLAYERS_CHOOSE = "PLAYERS_CHOOSE"
    HOST_CHOOSES = "HOST_CHOOSES"
    AFTER = "AFTER"

    @property
    def game_state(self) -> GameState:
        return _ROUND_TO_GAME_STATE[self]


_ROUND_TO_GAME_STATE: dict[RoundState, GameState] = {
    RoundState.BEFORE: GameState.ROUND_BEFORE,
    RoundState.PLAYERS_CHOOSE: GameState.ROUND_PLAYERS_CHOOSE,
    RoundState.HOST_CHOOSES: GameState.ROUND_HOST_CHOOSE,
    RoundState.AFTER: GameState.ROUND_AFTER,
}


class SetupType(str, Enum):
    """Setup variant, dictates how many punchlines a response needs."""
    PICK_ONE = "PICK_ONE"
    PICK_TWO = "PICK_TWO"
    DRAW_TWO_PICK_THREE = "DRAW_TWO_PICK_THREE"

    @property
    def required_punchlines(self) -> int:
        return _REQUIRED_PUNCHLINES[self]


_REQUIRED_PUNCHLINES: dict[SetupType, int] = {
    SetupType.PICK_ONE: 1,
    SetupType.PICK_TWO: 2,
    SetupType.DRAW_TWO_PICK_THREE: 3,
}

MAX_REQUIRED_PUNCHLINES: int = max(_REQUIRED_PUNCHLINES.values())
