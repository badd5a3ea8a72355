"""
Delayed actions (the auto-pass after a roll without moves).

The Game never sleeps: it asks a Scheduler to run a callback later and keeps the handle so it can cancel it.
Two implementations:
* ManualScheduler: a virtual clock that only moves when told to. Deterministic, used by tests, the simulator and AI play.
* TimerScheduler: real wall-clock delays on `threading.Timer`, for interactive hosts.
"""

import heapq
import threading
from dataclasses import dataclass, field
from itertools import count
from typing import Callable, Protocol

Callback = Callable[[], None]


class ScheduledAction(Protocol):
    def cancel(self) -> None: ...

    @property
    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callback) -> ScheduledAction: ...


# --- VIRTUAL CLOCK ---
@dataclass(order=True)
class ManualAction:
    due: float
    sequence: int
    callback: Callback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    def __init__(self) -> None:
        self.now: float = 0.0
        self._queue: list[ManualAction] = []
        self._sequence = count()

    def call_later(self, delay: float, callback: Callback) -> ManualAction:
        action = ManualAction(self.now + max(delay, 0.0), next(self._sequence), callback)
        heapq.heappush(self._queue, action)
        return action

    def pending(self) -> int:
        return sum(1 for action in self._queue if not action.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run whatever became due. Returns the number of callbacks run."""
        self.now += seconds
        return self._run_due()

    def run_pending(self) -> int:
        """Jump straight to the last scheduled action, running everything on the way."""
        ran = 0
        while self._queue:
            self.now = max(self.now, self._queue[0].due)
            ran += self._run_due()
        return ran

    def _run_due(self) -> int:
        ran = 0
        while self._queue and self._queue[0].due <= self.now:
            action = heapq.heappop(self._queue)
            if action.cancelled:
                continue
            action.callback()
            ran += 1
        return ran


# --- WALL CLOCK ---
class TimerAction:
    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True
        self._timer.cancel()


class TimerScheduler:
    """
    Runs callbacks on a timer thread.

    NOTE: the callback runs on another thread. Whoever owns the game must serialize it with its other commands
    (UrService wraps every callback in its lock).
    """

    def __init__(self, wrap: Callable[[Callback], Callback] | None = None) -> None:
        self._wrap = wrap

    def call_later(self, delay: float, callback: Callback) -> TimerAction:
        wrapped = self._wrap(callback) if self._wrap else callback
        timer = threading.Timer(delay, wrapped)
        timer.daemon = True
        action = TimerAction(timer)
        timer.start()
        return action
