"""Punchlines error types, one per way a game operation can be refused or fail.

Invariants:
    - Each subclass fixes its code, category, severity and http_status as class
      attributes; instances only add a message and an ErrorContext
    - Rule violations (4xx) mean the caller's view of the game is stale or wrong
      and are never retried; store failures (5xx) are reported, never swallowed
    - Messages are stable strings ("Could not get game", "Cannot begin round", ...)
      so clients and tests can match on them; the failed precondition goes in
      context.reason, never in the message

Design Decisions:
    - ErrorContext is a dataclass so the game/player/round being acted on
      travels with the error into logs and the response envelope
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """What the failing operation was acting on."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    game_code: str | None = None
    player_id: str | None = None
    round_number: int | None = None
    reason: str | None = None
    debug_info: dict[str, Any] | None = None


class PunchlinesError(Exception):
    """Base for every error the API turns into a JSON error envelope."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    @property
    def reason(self) -> str | None:
        return self.context.reason

    def to_response(self) -> dict:
        ctx = self.context
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": ctx.timestamp.isoformat(),
                "context": {
                    "game_code": ctx.game_code,
                    "player_id": ctx.player_id,
                    "round_number": ctx.round_number,
                    "reason": ctx.reason,
                },
            }
        }


# ─── Lookups (404) ──────────────────────────────────────────────

class GameNotFoundError(PunchlinesError):
    code = "GAME_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(self, game_code: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.game_code = game_code
        super().__init__("Could not get game", ctx)


class PlayerNotFoundError(PunchlinesError):
    """The game exists but has no player with that id."""
    code = "PLAYER_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, game_code: str, player_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.game_code = game_code
        ctx.player_id = player_id
        super().__init__("Could not get player", ctx)


# ─── Game rules (400 / 409) ─────────────────────────────────────

class InvalidRoundTransitionError(PunchlinesError):
    """Wrong phase, wrong requester, or no round to act on."""
    code = "INVALID_ROUND_TRANSITION"
    category = ErrorCategory.BUSINESS_RULE
    severity = ErrorSeverity.WARNING
    http_status = 409

    def __init__(
        self, message: str, reason: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.reason = reason
        super().__init__(message, ctx)


class InvalidSubmissionError(PunchlinesError):
    """Submission refused: wrong count, card not held, duplicate, or the host."""
    code = "INVALID_SUBMISSION"
    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.WARNING
    http_status = 400

    def __init__(self, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.reason = reason
        super().__init__("Cannot choose punchlines", ctx)


class GameFullError(PunchlinesError):
    code = "GAME_FULL"
    category = ErrorCategory.BUSINESS_RULE
    severity = ErrorSeverity.WARNING
    http_status = 409

    def __init__(self, max_players: int, context: ErrorContext | None = None):
        super().__init__(f"Game is full ({max_players} players)", context)
        self.max_players = max_players


class ConcurrencyError(PunchlinesError):
    """Other writers kept winning the version check on this game."""
    code = "CONCURRENCY_CONFLICT"
    category = ErrorCategory.CONFLICT
    http_status = 409


# ─── Infrastructure (503) ───────────────────────────────────────

class DatabaseError(PunchlinesError):
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(f"Database {operation} failed: {message}", context)
        self.operation = operation


class GameCodeExhaustedError(PunchlinesError):
    """Every generated code in the attempt budget was already taken."""
    code = "GAME_CODE_EXHAUSTED"
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, attempts: int, context: ErrorContext | None = None):
        super().__init__(
            f"Could not allocate a unique game code after {attempts} attempts",
            context,
        )
        self.attempts = attempts
