from __future__ import annotations

import time
from enum import Enum
from typing import Callable, Optional

Clock = Callable[[], float]

WARNING_FRACTION = 0.5
DANGER_FRACTION = 0.8


class Urgency(Enum):
    CALM = "calm"
    WARNING = "warning"
    DANGER = "danger"


def idle_seconds(now: float, last_keystroke_at: Optional[float]) -> Optional[float]:
    if last_keystroke_at is None:
        return None
    return max(0.0, now - last_keystroke_at)


def idle_expired(now: float, last_keystroke_at: Optional[float], timeout: Optional[int]) -> bool:
    """True once the silence since the last keystroke is longer than ``timeout``."""
    idle = idle_seconds(now, last_keystroke_at)
    if idle is None or timeout is None:
        return False
    return idle > timeout


def urgency(now: float, last_keystroke_at: Optional[float], timeout: Optional[int]) -> Urgency:
    idle = idle_seconds(now, last_keystroke_at)
    if idle is None or not timeout:
        return Urgency.CALM
    if idle > DANGER_FRACTION * timeout:
        return Urgency.DANGER
    if idle > WARNING_FRACTION * timeout:
        return Urgency.WARNING
    return Urgency.CALM


class Stopwatch:
    """Accumulates running time across start/stop cycles."""

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._accumulated = 0.0
        self._started_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def stop(self) -> None:
        if self._started_at is None:
            return
        self._accumulated += self._clock() - self._started_at
        self._started_at = None

    def reset(self) -> None:
        self._accumulated = 0.0
        self._started_at = None

    def elapsed(self) -> float:
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + (self._clock() - self._started_at)
