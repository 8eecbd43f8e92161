"""Per-strategy state shared by every variant.

Each strategy owns exactly one state object and replaces it wholesale on
reset(). Nothing outside the strategy mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ntbot_core.models import StrategyOutput, StrategySignal


@dataclass(slots=True)
class StrategyState:
    """Last observed price and time."""

    last_price: float = 0.0
    last_time: datetime | None = None

    def observe(self, price: float, time: datetime) -> None:
        self.last_price = price
        self.last_time = time


def build_output(
    state: StrategyState,
    signal: StrategySignal,
    message: str,
    indicators: dict[str, float] | None = None,
) -> StrategyOutput:
    """Create an output referencing the state's last price and time."""
    return StrategyOutput(
        signal=signal,
        message=message,
        reference_price=state.last_price,
        time=state.last_time,
        indicators=indicators,
    )
