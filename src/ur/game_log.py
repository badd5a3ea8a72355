"""Turns game events into the human readable lines of the side log."""

from collections import deque
from datetime import datetime

from loguru import logger

from src.core import config
from src.ur.events import (
    DiceRolled,
    GameEvent,
    GameStarted,
    GameWon,
    MoveConfirmed,
    TurnPassed,
    TurnStarted,
)


def player_label(player_id: int) -> str:
    return f"Player {player_id + 1}"


class GameLog:
    """Bounded list of narration lines, newest last. Subscribe `GameLog.handle` to the game's EventBus."""

    def __init__(self, capacity: int = config.LOG_CAPACITY) -> None:
        self._entries: deque[str] = deque(maxlen=capacity)

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def tail(self, count: int) -> list[str]:
        if count <= 0:
            return []
        return list(self._entries)[-count:]

    def reset(self) -> None:
        self._entries.clear()

    def append(self, line: str) -> None:
        self._entries.append(line)
        logger.info(line)

    def handle(self, event: GameEvent) -> None:
        for line in self._lines_for(event):
            self.append(line)

    def _lines_for(self, event: GameEvent) -> list[str]:
        match event:
            case GameStarted():
                self.reset()
                return [
                    f"Game started at {datetime.now().strftime('%H:%M:%S')}",
                    "New game started",
                ]
            case TurnStarted(player_id=player_id, bonus=False):
                return [f"{player_label(player_id)} turn"]
            case TurnStarted(player_id=player_id, bonus=True):
                return [f"{player_label(player_id)} earned a bonus roll"]
            case DiceRolled(player_id=player_id, rolls=rolls, successes=successes):
                faces = ", ".join(str(value) for value in rolls)
                return [f"{player_label(player_id)} rolled {successes} ({faces})"]
            case TurnPassed(reason=reason):
                return [reason]
            case MoveConfirmed() as move:
                return self._move_lines(move)
            case GameWon(player_id=player_id):
                return [f"{player_label(player_id)} wins!"]
        return []

    def _move_lines(self, event: MoveConfirmed) -> list[str]:
        label = player_label(event.player_id)
        lines: list[str] = []
        if event.captured_piece_id is not None:
            lines.append(f"{label} captured piece {event.captured_piece_id + 1}")
        if event.finished:
            lines.append(f"{label} moved piece {event.piece_id + 1} off the board")
        else:
            lines.append(f"{label} moved piece {event.piece_id + 1} to {event.target_square_id}")
        return lines
