"""Implementation of StatisticsRepository using SQLAlchemy"""

from dataclasses import asdict
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameSummaryModel, PlayerSummary
from src.db.schema import DBGameSummary


class SQLStatisticsRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def add_summary(self, summary: GameSummaryModel) -> tuple[GameSummaryModel, UUID]:
        """Store a summary and return the stored data + newly created ID."""
        new_id = uuid4()
        summary_db = DBGameSummary(
            id=new_id,
            mode=summary.mode,
            winner=summary.winner,
            rounds=summary.rounds,
            moves_played=summary.moves_played,
            players=[asdict(player) for player in summary.players],
        )
        self.db.add(summary_db)
        self.db.commit()
        self.db.refresh(summary_db)
        return self._to_model(summary_db), new_id

    def get_summary(self, summary_id: UUID) -> GameSummaryModel | None:
        """Get summary by ID, if record exists."""
        summary_db = self._fetch_summary(summary_id)
        if summary_db:
            return self._to_model(summary_db)
        return None

    def list_summaries(self) -> list[GameSummaryModel]:
        """Every stored summary, oldest first."""
        query = select(DBGameSummary).order_by(DBGameSummary.created_at)
        return [self._to_model(row) for row in self.db.scalars(query)]

    def delete_summary(self, summary_id: UUID) -> GameSummaryModel | None:
        """Remove a summary's record."""
        summary_db = self._fetch_summary(summary_id)
        if not summary_db:
            return None
        summary_model = self._to_model(summary_db)
        self.db.delete(summary_db)
        self.db.commit()
        return summary_model

    def _fetch_summary(self, summary_id: UUID) -> DBGameSummary | None:
        query = select(DBGameSummary).where(DBGameSummary.id == summary_id)
        return self.db.scalar(query)

    def _to_model(self, summary_db: DBGameSummary) -> GameSummaryModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameSummaryModel(
            mode=summary_db.mode,
            winner=summary_db.winner,
            rounds=summary_db.rounds,
            moves_played=summary_db.moves_played,
            players=[PlayerSummary(**player) for player in summary_db.players],
        )
