"""ORM Models - SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - GameRecord is the only table: the Game aggregate is stored whole

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from punchlines.models.game import GameRecord  # noqa: F401
