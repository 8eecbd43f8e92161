"""Bounded, time-ordered buffer of completed bars."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterator

import numpy as np

from ntbot_core.models.config import BAR_HISTORY_CAPACITY
from ntbot_core.models.market import Bar

logger = logging.getLogger(__name__)


class BarHistory:
    """FIFO window of the most recent bars, oldest first.

    Appending past ``capacity`` silently evicts the oldest bar. Bars are
    never reordered or deduplicated; a bar older than the newest one is
    dropped so that ``time`` stays non-decreasing.
    """

    def __init__(self, capacity: int = BAR_HISTORY_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._bars: deque[Bar] = deque(maxlen=capacity)

    def append(self, bar: Bar) -> bool:
        """Add a bar at the end. Returns False if it was out of order."""
        if self._bars and bar.time < self._bars[-1].time:
            logger.warning(
                "Dropping out-of-order bar at %s (latest is %s)",
                bar.time,
                self._bars[-1].time,
            )
            return False
        self._bars.append(bar)
        return True

    def reset(self) -> None:
        self._bars.clear()

    @property
    def latest(self) -> Bar | None:
        return self._bars[-1] if self._bars else None

    def closes(self) -> np.ndarray:
        """Close prices as a float64 array, oldest first."""
        return np.fromiter((b.close for b in self._bars), dtype=np.float64, count=len(self._bars))

    def __len__(self) -> int:
        return len(self._bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(self._bars)

    def __getitem__(self, index: int) -> Bar:
        """Index relative to the newest bar: ``history[-1]`` is the latest."""
        return self._bars[index]
