"""
Boundary layer data model(s).

These objects are used to communicate with the Service.
The db layer stores them, the Service builds them from a finished Game
(Decouples the SQLAlchemy rows from the domain objects that produced the numbers)
"""

from dataclasses import dataclass, field

# Type aliases to make GameSummaryModel easier to read
PlayerName = str
RollHistogram = list[int]


@dataclass
class PlayerSummary:
    """Per-player tallies over one game."""

    name: PlayerName
    is_ai: bool
    roll_counts: RollHistogram = field(default_factory=lambda: [0, 0, 0, 0, 0])
    captures: int = 0
    bonuses: int = 0
    finished_pieces: int = 0


@dataclass
class GameSummaryModel:
    """Transport-safe record of a game that reached its end, used between Service and DB layers."""

    mode: str
    winner: int | None
    rounds: int
    moves_played: int
    players: list[PlayerSummary]
