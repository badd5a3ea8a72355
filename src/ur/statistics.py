"""Running tallies for the statistics panel: roll distribution, captures, bonus rolls, pieces waiting / home."""

from dataclasses import dataclass, field
from typing import Sequence

from src.ur.events import (
    DiceRolled,
    GameEvent,
    GameStarted,
    MoveConfirmed,
    TurnStarted,
)
from src.ur.pieces import Player

MAX_SUCCESSES = 4


@dataclass
class PlayerStats:
    counts: list[int] = field(default_factory=lambda: [0] * (MAX_SUCCESSES + 1))
    total: int = 0
    captures: int = 0
    bonuses: int = 0
    waiting: int = 0
    home: int = 0

    def percentage(self, successes: int) -> int:
        """Share of rolls with this result, rounded to a whole percent"""
        total = self.total or 1
        return round(self.counts[successes] / total * 100)


class GameStatistics:
    """Subscribe `GameStatistics.handle` to the game's EventBus. Piece counts are read from the live players."""

    def __init__(self, players: Sequence[Player]) -> None:
        self.players = players
        self.data: dict[int, PlayerStats] = {}
        self.round = 1
        self.starting_player: int | None = None
        self.moves_played = 0
        self.reset()

    def reset(self) -> None:
        self.data = {player.player_id: PlayerStats() for player in self.players}
        self.round = 1
        self.starting_player = None
        self.moves_played = 0
        self.sync_pieces()

    def handle(self, event: GameEvent) -> None:
        match event:
            case GameStarted(starting_player=starting_player):
                self.reset()
                self.starting_player = starting_player
            case TurnStarted(player_id=player_id, bonus=False):
                self._maybe_next_round(player_id)
            case DiceRolled(player_id=player_id, successes=successes):
                self.record_roll(player_id, successes)
            case MoveConfirmed(player_id=player_id) as move:
                self.moves_played += 1
                if move.captured_piece_id is not None:
                    self.record_capture(player_id)
                if move.bonus:
                    self.record_bonus(player_id)
                self.sync_pieces()

    def record_roll(self, player_id: int, successes: int) -> None:
        if player_id not in self.data:
            return
        clamped = max(0, min(MAX_SUCCESSES, successes))
        self.data[player_id].counts[clamped] += 1
        self.data[player_id].total += 1

    def record_capture(self, player_id: int) -> None:
        if player_id in self.data:
            self.data[player_id].captures += 1

    def record_bonus(self, player_id: int) -> None:
        if player_id in self.data:
            self.data[player_id].bonuses += 1

    def sync_pieces(self) -> None:
        for player in self.players:
            entry = self.data.get(player.player_id)
            if entry is None:
                continue
            entry.waiting = player.pieces_in_hand()
            entry.home = player.pieces_finished()

    def _maybe_next_round(self, player_id: int) -> None:
        """A round is over once the turn comes back to whoever started (bonus rolls do not count)."""
        if self.starting_player is None:
            self.starting_player = player_id
            return
        if player_id == self.starting_player and self._has_any_roll():
            self.round += 1

    def _has_any_roll(self) -> bool:
        return any(entry.total for entry in self.data.values())

    def render_lines(self, player_id: int) -> list[str]:
        entry = self.data[player_id]
        roll_lines = [
            f"  {successes}: {count} ({entry.percentage(successes)}%)"
            for successes, count in enumerate(entry.counts)
        ]
        return [
            "Rolls:",
            *roll_lines,
            f"Bonus rolls: {entry.bonuses}",
            f"Captures: {entry.captures}",
            f"Waiting: {entry.waiting}",
            f"Home: {entry.home}",
        ]

    def header(self, player_id: int) -> str:
        starter = " (start)" if self.starting_player == player_id else ""
        return f"Player {player_id + 1}{starter}"
