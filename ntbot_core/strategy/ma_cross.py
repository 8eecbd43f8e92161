"""Moving-average cross strategy.

Simple trend-following strategy:
- Fast SMA moves above Slow SMA -> BUY
- Fast SMA moves below Slow SMA -> SELL

A signal fires only on the tick where the relation changes. While the
relation holds, every tick returns NONE.

This module is pure business logic with no I/O dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from ntbot_core.indicators import sma
from ntbot_core.models import (
    BAR_HISTORY_CAPACITY,
    Bar,
    BarHistory,
    MaCrossConfig,
    StrategyOutput,
    StrategySignal,
    Tick,
)
from ntbot_core.strategy.protocol import WAITING_MESSAGE, StrategyKind
from ntbot_core.strategy.registry import register_strategy
from ntbot_core.strategy.state import StrategyState, build_output

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MaCrossState(StrategyState):
    """Relation of fast to slow MA seen on the previous evaluated tick."""

    was_above: bool = False
    was_below: bool = False


@register_strategy(StrategyKind.MA_CROSS)
class MovingAverageCrossStrategy:
    """Fast/slow simple moving average cross.

    Signal Logic:
    - BUY: fast SMA > slow SMA and it was not on the previous tick
    - SELL: fast SMA < slow SMA and it was not on the previous tick

    Needs at least ``slow_period`` bars; before that every tick is NONE.
    """

    config_model = MaCrossConfig

    def __init__(
        self,
        config: MaCrossConfig | None = None,
        history_size: int = BAR_HISTORY_CAPACITY,
    ):
        self.config = config or MaCrossConfig()
        self.fast_period = self.config.fast_period
        self.slow_period = self.config.slow_period

        self._history = BarHistory(history_size)
        self._state = MaCrossState()

    @property
    def kind(self) -> StrategyKind:
        return StrategyKind.MA_CROSS

    @property
    def name(self) -> str:
        return f"{self.kind.value}({self.fast_period},{self.slow_period})"

    @property
    def history_length(self) -> int:
        return len(self._history)

    @property
    def state(self) -> MaCrossState:
        """Copy of the current state."""
        return replace(self._state)

    def process_bar(self, bar: Bar) -> None:
        if self._history.append(bar):
            self._state.observe(bar.close, bar.time)

    def process_tick(self, tick: Tick) -> StrategyOutput:
        state = self._state
        state.observe(tick.last_price, tick.time)

        if len(self._history) < self.slow_period:
            return build_output(state, StrategySignal.NONE, WAITING_MESSAGE)

        closes = self._history.closes()
        fast_ma = sma(closes, self.fast_period)
        slow_ma = sma(closes, self.slow_period)

        is_above = fast_ma > slow_ma
        is_below = fast_ma < slow_ma
        cross_above = is_above and not state.was_above
        cross_below = is_below and not state.was_below
        state.was_above = is_above
        state.was_below = is_below

        values = (
            f"fast MA ({self.fast_period}) = {fast_ma:.2f}, "
            f"slow MA ({self.slow_period}) = {slow_ma:.2f}"
        )
        indicators = {"fast_ma": fast_ma, "slow_ma": slow_ma}

        if cross_above:
            logger.info("MA cross BUY @ %s: %s", state.last_price, values)
            return build_output(state, StrategySignal.BUY, f"Crossed above: {values}", indicators)
        if cross_below:
            logger.info("MA cross SELL @ %s: %s", state.last_price, values)
            return build_output(state, StrategySignal.SELL, f"Crossed below: {values}", indicators)

        return build_output(state, StrategySignal.NONE, f"No cross: {values}", indicators)

    def reset(self) -> None:
        self._history.reset()
        self._state = MaCrossState()
