"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGameSummary(Base):
    """One row per game that reached its end (live games are never stored)."""

    __tablename__ = "game_summaries"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    mode: Mapped[str]
    winner: Mapped[Optional[int]]
    rounds: Mapped[int]
    moves_played: Mapped[int]
    # list of PlayerSummary dicts, indexed by player id
    players: Mapped[list[dict]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
