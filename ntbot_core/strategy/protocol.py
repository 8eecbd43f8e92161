"""Strategy protocol defining the interface all strategies must implement.

This module provides:
- StrategyKind: the closed set of built-in strategy variants
- Strategy: Runtime-checkable Protocol that strategies must satisfy
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from ntbot_core.models import Bar, StrategyOutput, Tick


class StrategyKind(str, Enum):
    """Strategy variants known to the registry."""

    MA_CROSS = "ma_cross"
    RSI = "rsi"
    BOLLINGER = "bollinger"


# Message used by every variant while the bar history is too short.
WAITING_MESSAGE = "Waiting for more data"


@runtime_checkable
class Strategy(Protocol):
    """Protocol that all trading strategies must implement.

    A strategy is an edge-triggered state machine: it fires a signal on
    the tick where a condition becomes true, never while it persists.
    Instances are not thread-safe; feed each one from a single stream in
    arrival order.
    """

    @property
    def kind(self) -> StrategyKind:
        """Variant tag used by the registry."""
        ...

    @property
    def name(self) -> str:
        """Human-readable identifier including parameters (e.g. 'ma_cross(9,21)')."""
        ...

    @property
    def history_length(self) -> int:
        """Number of completed bars currently held."""
        ...

    def process_bar(self, bar: Bar) -> None:
        """Append a completed bar to history and update the last price/time."""
        ...

    def process_tick(self, tick: Tick) -> StrategyOutput:
        """Update the last price/time and evaluate the signal.

        Does not modify bar history.
        """
        ...

    def reset(self) -> None:
        """Clear bar history and every latch."""
        ...
