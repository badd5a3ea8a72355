"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator
from uuid import UUID, uuid4

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.models import GameSummaryModel
from src.db.schema import Base
from src.ur.board import Board
from src.ur.square import Square

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


class MockRepository:
    """Mock the StatisticsRepository using a dictionary of summaries."""

    def __init__(self) -> None:
        self._summaries: dict[UUID, GameSummaryModel] = {}

    def add_summary(self, summary: GameSummaryModel) -> tuple[GameSummaryModel, UUID]:
        summary_id = uuid4()
        self._summaries[summary_id] = summary
        return summary, summary_id

    def get_summary(self, summary_id: UUID) -> GameSummaryModel | None:
        return self._summaries.get(summary_id)

    def list_summaries(self) -> list[GameSummaryModel]:
        return list(self._summaries.values())

    def delete_summary(self, summary_id: UUID) -> GameSummaryModel | None:
        return self._summaries.pop(summary_id, None)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._summaries.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def standard_board() -> Board:
    return Board.standard()


@pytest.fixture
def short_board() -> Board:
    """
    A tiny track to keep scenarios readable.

    player 0: p0-a (safe) -> mid-0 -> mid-1 (rosetta + fort) -> mid-2 -> p0-z (rosetta)
    player 1: p1-a (safe) -> mid-0 -> mid-1 (rosetta + fort) -> mid-2 -> p1-z (rosetta)
    """
    mid = [
        Square("mid-0"),
        Square("mid-1", is_rosetta=True, is_fort=True),
        Square("mid-2"),
    ]
    return Board.from_paths(
        {
            0: [Square("p0-a", is_safe=True), *mid, Square("p0-z", is_rosetta=True, is_safe=True)],
            1: [Square("p1-a", is_safe=True), *mid, Square("p1-z", is_rosetta=True, is_safe=True)],
        }
    )
