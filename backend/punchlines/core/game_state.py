"""Game State - the Game aggregate and its entities as pure dataclasses.

Invariants:
    - Game is the aggregate root: every operation loads one Game, mutates it, saves it
    - rounds is append-only; rounds[-1] is the active round while state is not LOBBY/FINISHED
    - Round.punchlines_by_player keeps insertion order (order players submitted)
    - A submission is an immutable tuple of card strings, never re-serialized
    - Player.punchlines (the hand) and Game.discarded_punchlines never share a card instance
    - The punchline pool stacks enough starter copies for max_players hands of
      hand_size plus the draw-two bonus, so equal card strings can repeat

Design Decisions:
    - Dataclasses, not ORM objects: core logic runs without a session or event loop
    - Player lookup is a linear scan over join order; games hold at most 40 players
"""

import random
from dataclasses import dataclass, field

from punchlines.core.card_pool import STARTER_PUNCHLINES, STARTER_SETUPS, shuffle
from punchlines.core.domain_types import (
    GameCode, PlayerId, GameState, RoundState, SetupType,
    DEFAULT_HAND_SIZE, DEFAULT_MAX_PLAYERS, DEFAULT_ROUND_LIMIT,
    DRAW_TWO_BONUS_CARDS,
)


@dataclass
class GameSettings:
    round_limit: int = DEFAULT_ROUND_LIMIT
    max_players: int = DEFAULT_MAX_PLAYERS


@dataclass(frozen=True)
class Setup:
    """A setup prompt and the response shape it demands."""
    text: str
    type: SetupType

    @property
    def required_punchlines(self) -> int:
        return self.type.required_punchlines


@dataclass
class Player:
    id: PlayerId
    nickname: str
    punchlines: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Winner:
    winning_player_id: PlayerId
    winning_punchlines: tuple[str, ...]


@dataclass
class Round:
    """One setup presentation, its submissions, and the host's pick.

    number is 1-based and fixed when the round starts.
    """
    setup: Setup
    host: PlayerId
    state: RoundState = RoundState.BEFORE
    punchlines_by_player: dict[PlayerId, tuple[str, ...]] = field(default_factory=dict)
    winner: Winner | None = None
    number: int = 0

    def has_submitted(self, player_id: str) -> bool:
        return player_id in self.punchlines_by_player

    @property
    def submissions(self) -> list[list[str]]:
        """Recorded submissions in the order players made them."""
        return [list(cards) for cards in self.punchlines_by_player.values()]


@dataclass
class Game:
    """Game aggregate root - one per session, keyed by game_code."""
    game_code: GameCode
    settings: GameSettings = field(default_factory=GameSettings)
    setups: list[Setup] = field(default_factory=list)
    discarded_setups: list[Setup] = field(default_factory=list)
    punchlines: list[str] = field(default_factory=list)
    discarded_punchlines: list[str] = field(default_factory=list)
    players: list[Player] = field(default_factory=list)
    host: PlayerId | None = None
    state: GameState = GameState.LOBBY
    rounds: list[Round] = field(default_factory=list)

    @property
    def active_round(self) -> Round | None:
        """Last round, or None before the first round is pushed."""
        return self.rounds[-1] if self.rounds else None

    @property
    def round_number(self) -> int:
        """1-based number of the latest round (0 in the lobby)."""
        return len(self.rounds)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.settings.max_players

    def find_player(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None


def punchline_copies(settings: GameSettings, hand_size: int) -> int:
    """Starter punchline decks needed so a full table holds full hands.

    Every player can hold hand_size cards plus the draw-two bonus at once.
    """
    needed = settings.max_players * (hand_size + DRAW_TWO_BONUS_CARDS)
    return max(1, -(-needed // len(STARTER_PUNCHLINES)))


def build_game(
    game_code: GameCode,
    settings: GameSettings,
    rng: random.Random,
    hand_size: int = DEFAULT_HAND_SIZE,
) -> Game:
    """New LOBBY game seeded with shuffled starter decks."""
    copies = punchline_copies(settings, hand_size)
    return Game(
        game_code=game_code,
        settings=settings,
        setups=[
            Setup(text=text, type=setup_type)
            for text, setup_type in shuffle(STARTER_SETUPS, rng)
        ],
        punchlines=shuffle(STARTER_PUNCHLINES * copies, rng),
    )
