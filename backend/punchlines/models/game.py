"""Game ORM - persists the Game aggregate as one row keyed by game_code.

Invariants:
    - game_code is unique and never updated after insert
    - Column names match core.game_document.DOCUMENT_FIELDS one-to-one
    - version is SQLAlchemy's version_id_col: every UPDATE carries
      WHERE version = <loaded version>, so a concurrent writer raises StaleDataError
    - JSON (not JSONB) columns: object key order of punchlines_by_player is kept

Design Decisions:
    - Collections as JSON columns: the aggregate is always read and written whole
    - state/host as plain columns: filterable without JSON operators
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from punchlines.db.base import Base


class GameRecord(Base):
    """Game aggregate row."""
    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_code: Mapped[str] = mapped_column(
        String(12), nullable=False, unique=True, index=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    state: Mapped[str] = mapped_column(
        String(32), nullable=False, default="LOBBY",
    )
    host: Mapped[str | None] = mapped_column(String(64), nullable=True)
    settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    setups: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    discarded_setups: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    punchlines: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    discarded_punchlines: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    players: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    rounds: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __mapper_args__ = {"version_id_col": version}
