"""Game Schemas - Pydantic models with field-level validation for API boundaries.

Invariants:
    - GameSettingsIn mirrors the stored limits: round_limit >= 1, max_players in [3, 40]
    - PlayerCreate.nickname: 1-30 chars, stripped, non-empty
    - Responses never expose another player's hand; only PlayerResponse carries one
"""

from pydantic import BaseModel, Field, field_validator

from punchlines.core.domain_types import (
    DEFAULT_MAX_PLAYERS, DEFAULT_ROUND_LIMIT, MAX_PLAYERS_LIMIT, MIN_PLAYERS,
)
from punchlines.core.game_state import Game, GameSettings, Player, Round, Winner


class GameSettingsIn(BaseModel):
    round_limit: int = Field(DEFAULT_ROUND_LIMIT, ge=1)
    max_players: int = Field(
        DEFAULT_MAX_PLAYERS, ge=MIN_PLAYERS, le=MAX_PLAYERS_LIMIT,
    )

    def to_settings(self) -> GameSettings:
        return GameSettings(
            round_limit=self.round_limit, max_players=self.max_players,
        )


class GameCreate(BaseModel):
    settings: GameSettingsIn | None = None


class GameCreatedResponse(BaseModel):
    game_code: str


class PlayerCreate(BaseModel):
    """Player join - validates nickname length and whitespace."""
    nickname: str = Field(min_length=1, max_length=30)

    @field_validator("nickname")
    @classmethod
    def strip_nickname(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("nickname cannot be empty or whitespace")
        return v


class PlayerCreatedResponse(BaseModel):
    player_id: str


class PlayerResponse(BaseModel):
    """A player as seen by that player: includes the hand."""
    id: str
    nickname: str
    punchlines: list[str]

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls(
            id=player.id, nickname=player.nickname,
            punchlines=list(player.punchlines),
        )


class HostAction(BaseModel):
    requester_id: str = Field(min_length=1)


class PunchlineSubmission(BaseModel):
    player_id: str = Field(min_length=1)
    punchlines: list[str] = Field(min_length=1, max_length=3)


class SubmissionsResponse(BaseModel):
    punchlines: list[list[str]]


class WinnerPick(BaseModel):
    requester_id: str = Field(min_length=1)
    winning_player_id: str = Field(min_length=1)


class WinnerResponse(BaseModel):
    winning_player_id: str
    winning_punchlines: list[str]

    @classmethod
    def from_winner(cls, winner: Winner) -> "WinnerResponse":
        return cls(
            winning_player_id=winner.winning_player_id,
            winning_punchlines=list(winner.winning_punchlines),
        )


class RoundResponse(BaseModel):
    """Public round view: who submitted, not what they submitted."""
    number: int
    setup: str
    setup_type: str
    host: str
    state: str
    submitted_player_ids: list[str]
    winner: WinnerResponse | None = None

    @classmethod
    def from_round(cls, rnd: Round) -> "RoundResponse":
        return cls(
            number=rnd.number,
            setup=rnd.setup.text,
            setup_type=rnd.setup.type.value,
            host=rnd.host,
            state=rnd.state.value,
            submitted_player_ids=list(rnd.punchlines_by_player),
            winner=WinnerResponse.from_winner(rnd.winner) if rnd.winner else None,
        )


class PlayerSummary(BaseModel):
    id: str
    nickname: str


class GameResponse(BaseModel):
    game_code: str
    state: str
    host: str | None
    round_limit: int
    max_players: int
    players: list[PlayerSummary]
    round: RoundResponse | None = None

    @classmethod
    def from_game(cls, game: Game) -> "GameResponse":
        rnd = game.active_round
        return cls(
            game_code=game.game_code,
            state=game.state.value,
            host=game.host,
            round_limit=game.settings.round_limit,
            max_players=game.settings.max_players,
            players=[PlayerSummary(id=p.id, nickname=p.nickname) for p in game.players],
            round=RoundResponse.from_round(rnd) if rnd else None,
        )


class AdvanceResponse(BaseModel):
    finished: bool
    round: RoundResponse | None = None
