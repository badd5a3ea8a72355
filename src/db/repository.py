"""Protocol repository (in-memory SQLite by default, anything else can implement it)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameSummaryModel


class StatisticsRepository(Protocol):
    """Storage of finished-game summaries"""

    def add_summary(self, summary: GameSummaryModel) -> tuple[GameSummaryModel, UUID]:
        """Store a summary and return the stored data + newly created ID."""
        ...

    def get_summary(self, summary_id: UUID) -> GameSummaryModel | None:
        """Get summary by ID, if record exists."""
        ...

    def list_summaries(self) -> list[GameSummaryModel]:
        """Every stored summary, oldest first."""
        ...

    def delete_summary(self, summary_id: UUID) -> GameSummaryModel | None:
        """Remove a summary's record."""
        ...
