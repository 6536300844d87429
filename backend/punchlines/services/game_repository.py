"""Game Repository - SQLAlchemy implementation of core.repository_protocols.GameRepository.

Invariants:
    - get() always re-reads the row (populate_existing), never trusts the identity map
    - save() writes back onto the exact record get() loaded, so the UPDATE carries
      the version that was read
    - The repository never commits; the caller owns the transaction
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from punchlines.core.domain_types import GameCode
from punchlines.core.errors import GameNotFoundError
from punchlines.core.game_document import (
    DOCUMENT_FIELDS, game_from_document, game_to_document,
)
from punchlines.core.game_state import Game
from punchlines.models.game import GameRecord


def record_to_document(record: GameRecord) -> dict:
    document = {field: getattr(record, field) for field in DOCUMENT_FIELDS}
    document["game_code"] = record.game_code
    return document


def apply_document(record: GameRecord, document: dict) -> None:
    for field in DOCUMENT_FIELDS:
        setattr(record, field, document[field])


class SqlGameRepository:
    """Whole-aggregate persistence for Game, one row per game_code."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self._records: dict[str, GameRecord] = {}

    async def _load_record(self, game_code: GameCode) -> GameRecord | None:
        result = await self.db.execute(
            select(GameRecord)
            .where(GameRecord.game_code == game_code)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def exists(self, game_code: GameCode) -> bool:
        result = await self.db.execute(
            select(GameRecord.id).where(GameRecord.game_code == game_code),
        )
        return result.first() is not None

    async def get(self, game_code: GameCode) -> Game:
        record = await self._load_record(game_code)
        if record is None:
            raise GameNotFoundError(game_code)
        self._records[game_code] = record
        return game_from_document(record_to_document(record))

    async def add(self, game: Game) -> None:
        record = GameRecord(game_code=game.game_code)
        apply_document(record, game_to_document(game))
        self.db.add(record)
        self._records[game.game_code] = record

    async def save(self, game: Game) -> None:
        record = self._records.get(game.game_code)
        if record is None:
            raise RuntimeError(f"Game {game.game_code} was not loaded by this repository")
        apply_document(record, game_to_document(game))
