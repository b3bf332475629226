# pidctl/core/clock.py
import time
from typing import Callable

Clock = Callable[[], float]


def monotonic() -> float:
    return time.monotonic()


class ManualClock:
    """Clock that only moves when told to, for simulated time and tests."""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError("Cannot move a monotonic clock backwards")
        self.now += seconds
        return self.now

    def set(self, seconds: float) -> float:
        if seconds < self.now:
            raise ValueError("Cannot move a monotonic clock backwards")
        self.now = float(seconds)
        return self.now
