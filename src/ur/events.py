"""
Narration events published by the Game.

Fire-and-forget: the game never waits for, or depends on, a listener. A failing listener is logged and skipped.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from loguru import logger


@dataclass(frozen=True)
class GameStarted:
    starting_player: int


@dataclass(frozen=True)
class TurnStarted:
    player_id: int
    bonus: bool = False


@dataclass(frozen=True)
class DiceRolled:
    player_id: int
    rolls: tuple[int, ...]
    successes: int


@dataclass(frozen=True)
class TurnPassed:
    player_id: int
    reason: str


@dataclass(frozen=True)
class MoveConfirmed:
    player_id: int
    piece_id: int
    target_square_id: Optional[str]
    captured_piece_id: Optional[int]
    finished: bool
    bonus: bool


@dataclass(frozen=True)
class GameWon:
    player_id: int


GameEvent = Union[GameStarted, TurnStarted, DiceRolled, TurnPassed, MoveConfirmed, GameWon]
Listener = Callable[[GameEvent], None]


class EventBus:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Listener {listener!r} failed on {event!r}")
