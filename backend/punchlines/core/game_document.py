"""Game Document - serialization / deserialization for the Game aggregate.

Invariants:
    - game_to_document produces a JSON-safe dict (no tuples, no Enums, no dataclasses)
    - game_from_document(game_to_document(g)) == g
    - Document keys match the GameRecord column names one-to-one
    - punchlines_by_player stays a JSON object so insertion order survives a round trip
    - Missing optional keys fall back to aggregate defaults
"""

from punchlines.core.domain_types import (
    GameCode, PlayerId, GameState, RoundState, SetupType,
)
from punchlines.core.game_state import (
    Game, GameSettings, Player, Round, Setup, Winner,
)

DOCUMENT_FIELDS: tuple[str, ...] = (
    "state", "host", "settings", "setups", "discarded_setups",
    "punchlines", "discarded_punchlines", "players", "rounds",
)


# ─── Serialization ───────────────────────────────────────────────

def _setup_to_dict(setup: Setup) -> dict:
    return {"text": setup.text, "type": setup.type.value}


def _round_to_dict(rnd: Round) -> dict:
    winner = None
    if rnd.winner is not None:
        winner = {
            "winning_player_id": rnd.winner.winning_player_id,
            "winning_punchlines": list(rnd.winner.winning_punchlines),
        }
    return {
        "setup": _setup_to_dict(rnd.setup),
        "host": rnd.host,
        "state": rnd.state.value,
        "punchlines_by_player": {
            player_id: list(cards)
            for player_id, cards in rnd.punchlines_by_player.items()
        },
        "winner": winner,
        "number": rnd.number,
    }


def game_to_document(game: Game) -> dict:
    """Serialize Game to a JSON-safe dict. Pure, no IO."""
    return {
        "game_code": game.game_code,
        "state": game.state.value,
        "host": game.host,
        "settings": {
            "round_limit": game.settings.round_limit,
            "max_players": game.settings.max_players,
        },
        "setups": [_setup_to_dict(s) for s in game.setups],
        "discarded_setups": [_setup_to_dict(s) for s in game.discarded_setups],
        "punchlines": list(game.punchlines),
        "discarded_punchlines": list(game.discarded_punchlines),
        "players": [
            {"id": p.id, "nickname": p.nickname, "punchlines": list(p.punchlines)}
            for p in game.players
        ],
        "rounds": [_round_to_dict(r) for r in game.rounds],
    }


# ─── Deserialization ─────────────────────────────────────────────

def _setup_from_dict(data: dict) -> Setup:
    return Setup(text=data["text"], type=SetupType(data["type"]))


def _round_from_dict(data: dict, position: int) -> Round:
    winner_data = data.get("winner")
    winner = None
    if winner_data:
        winner = Winner(
            winning_player_id=PlayerId(winner_data["winning_player_id"]),
            winning_punchlines=tuple(winner_data["winning_punchlines"]),
        )
    return Round(
        setup=_setup_from_dict(data["setup"]),
        host=PlayerId(data["host"]),
        state=RoundState(data.get("state", RoundState.BEFORE.value)),
        punchlines_by_player={
            PlayerId(player_id): tuple(cards)
            for player_id, cards in (data.get("punchlines_by_player") or {}).items()
        },
        winner=winner,
        number=data.get("number", position),
    )


def game_from_document(data: dict) -> Game:
    """Reconstruct Game from a document dict. Pure, no IO."""
    settings_data = data.get("settings") or {}
    defaults = GameSettings()
    host = data.get("host")
    return Game(
        game_code=GameCode(data["game_code"]),
        settings=GameSettings(
            round_limit=settings_data.get("round_limit", defaults.round_limit),
            max_players=settings_data.get("max_players", defaults.max_players),
        ),
        setups=[_setup_from_dict(s) for s in data.get("setups") or []],
        discarded_setups=[
            _setup_from_dict(s) for s in data.get("discarded_setups") or []
        ],
        punchlines=list(data.get("punchlines") or []),
        discarded_punchlines=list(data.get("discarded_punchlines") or []),
        players=[
            Player(
                id=PlayerId(p["id"]),
                nickname=p["nickname"],
                punchlines=list(p.get("punchlines") or []),
            )
            for p in data.get("players") or []
        ],
        host=PlayerId(host) if host is not None else None,
        state=GameState(data.get("state") or GameState.LOBBY.value),
        rounds=[
            _round_from_dict(r, position)
            for position, r in enumerate(data.get("rounds") or [], start=1)
        ],
    )
