"""Bollinger band touch strategy.

- Price touches or breaks the lower band -> BUY (once, latched)
- Price touches or breaks the upper band -> SELL (once, latched)

A latch re-arms once price moves back toward the middle band by
``hysteresis_std`` standard deviations past the band it touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from ntbot_core.indicators import bollinger
from ntbot_core.models import (
    BAR_HISTORY_CAPACITY,
    Bar,
    BarHistory,
    BollingerConfig,
    StrategyOutput,
    StrategySignal,
    Tick,
)
from ntbot_core.strategy.protocol import WAITING_MESSAGE, StrategyKind
from ntbot_core.strategy.registry import register_strategy
from ntbot_core.strategy.state import StrategyState, build_output

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BollingerState(StrategyState):
    was_below_lower: bool = False
    was_above_upper: bool = False


@register_strategy(StrategyKind.BOLLINGER)
class BollingerBandsStrategy:
    """Mean-reversion on Bollinger band touches.

    Needs at least ``period`` bars. When the bands collapse (zero variance)
    a price sitting on them touches both and the lower band wins.
    """

    config_model = BollingerConfig

    def __init__(
        self,
        config: BollingerConfig | None = None,
        history_size: int = BAR_HISTORY_CAPACITY,
    ):
        self.config = config or BollingerConfig()
        self.period = self.config.period
        self.std_dev_multiplier = self.config.std_dev_multiplier
        self.hysteresis_std = self.config.hysteresis_std

        self._history = BarHistory(history_size)
        self._state = BollingerState()

    @property
    def kind(self) -> StrategyKind:
        return StrategyKind.BOLLINGER

    @property
    def name(self) -> str:
        return f"{self.kind.value}({self.period},{self.std_dev_multiplier:g})"

    @property
    def history_length(self) -> int:
        return len(self._history)

    @property
    def state(self) -> BollingerState:
        return replace(self._state)

    def process_bar(self, bar: Bar) -> None:
        if self._history.append(bar):
            self._state.observe(bar.close, bar.time)

    def process_tick(self, tick: Tick) -> StrategyOutput:
        state = self._state
        state.observe(tick.last_price, tick.time)

        if len(self._history) < self.period:
            return build_output(state, StrategySignal.NONE, WAITING_MESSAGE)

        bands = bollinger(self._history.closes(), self.period, self.std_dev_multiplier)
        price = state.last_price
        indicators = {
            "upper": bands.upper,
            "middle": bands.middle,
            "lower": bands.lower,
            "std_dev": bands.std_dev,
        }

        is_below_lower = price <= bands.lower
        is_above_upper = price >= bands.upper

        if is_below_lower and not state.was_below_lower:
            state.was_below_lower = True
            state.was_above_upper = False
            logger.info("Bollinger BUY @ %s: lower=%.2f", price, bands.lower)
            return build_output(
                state,
                StrategySignal.BUY,
                f"Price at lower band: {price:.2f} <= {bands.lower:.2f}",
                indicators,
            )

        if is_above_upper and not state.was_above_upper:
            state.was_above_upper = True
            state.was_below_lower = False
            logger.info("Bollinger SELL @ %s: upper=%.2f", price, bands.upper)
            return build_output(
                state,
                StrategySignal.SELL,
                f"Price at upper band: {price:.2f} >= {bands.upper:.2f}",
                indicators,
            )

        margin = bands.std_dev * self.hysteresis_std
        if price > bands.lower + margin:
            state.was_below_lower = False
        if price < bands.upper - margin:
            state.was_above_upper = False

        return build_output(
            state,
            StrategySignal.NONE,
            f"Bollinger bands: upper={bands.upper:.2f}, "
            f"middle={bands.middle:.2f}, lower={bands.lower:.2f}",
            indicators,
        )

    def reset(self) -> None:
        self._history.reset()
        self._state = BollingerState()
