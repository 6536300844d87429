"""SQLAlchemy declarative base; GameRecord and alembic's env share its metadata."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
