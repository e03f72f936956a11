"""Frame timer measuring the time between ticks and pacing a loop."""

from __future__ import annotations

import math
import time
from typing import Callable


class Timer:
    """Measures delta time between ticks and sleeps out the rest of an interval."""

    def __init__(
        self,
        frequency: float = 60.0,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._interval = self._interval_for(frequency)
        self._dt = 0.0
        self._fps = 0.0
        self._last = clock()

    @staticmethod
    def _interval_for(frequency: float) -> float:
        if frequency <= 0:
            raise ValueError(f"frequency must be positive, got {frequency}")
        return 1.0 / frequency

    @property
    def interval(self) -> float:
        """Target seconds between ticks."""
        return self._interval

    @property
    def dt(self) -> float:
        """Seconds between the last two ticks."""
        return self._dt

    @property
    def fps(self) -> float:
        """Ticks per second implied by the last delta time."""
        return self._fps

    def set_frequency(self, frequency: float) -> None:
        """Change the target number of ticks per second."""
        self._interval = self._interval_for(frequency)

    def tick(self) -> None:
        """Record the time since the previous tick."""
        now = self._clock()
        self._dt = now - self._last
        self._fps = 1.0 / self._dt if self._dt else math.inf
        self._last = now

    def wait_for_interval(self) -> None:
        """Sleep for whatever whole milliseconds remain of the current interval."""
        elapsed_ms = int((self._clock() - self._last) * 1000)
        remaining_ms = int(self._interval * 1000 - elapsed_ms)
        if remaining_ms > 0:
            self._sleep(remaining_ms / 1000)