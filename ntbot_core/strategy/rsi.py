"""RSI overbought/oversold strategy.

- RSI rises to >= overbought -> SELL (once, latched)
- RSI falls to <= oversold -> BUY (once, latched)

Latches re-arm with hysteresis: the overbought latch clears once RSI drops
below ``overbought - hysteresis``, the oversold latch once RSI rises above
``oversold + hysteresis``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from ntbot_core.indicators import rsi
from ntbot_core.models import (
    BAR_HISTORY_CAPACITY,
    Bar,
    BarHistory,
    RsiConfig,
    StrategyOutput,
    StrategySignal,
    Tick,
)
from ntbot_core.strategy.protocol import WAITING_MESSAGE, StrategyKind
from ntbot_core.strategy.registry import register_strategy
from ntbot_core.strategy.state import StrategyState, build_output

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RsiState(StrategyState):
    was_overbought: bool = False
    was_oversold: bool = False


@register_strategy(StrategyKind.RSI)
class RsiStrategy:
    """Relative Strength Index threshold strategy.

    Needs more than ``period`` bars (``period`` deltas) before it evaluates.
    """

    config_model = RsiConfig

    def __init__(
        self,
        config: RsiConfig | None = None,
        history_size: int = BAR_HISTORY_CAPACITY,
    ):
        self.config = config or RsiConfig()
        self.period = self.config.period
        self.overbought = self.config.overbought
        self.oversold = self.config.oversold
        self.hysteresis = self.config.hysteresis

        self._history = BarHistory(history_size)
        self._state = RsiState()

    @property
    def kind(self) -> StrategyKind:
        return StrategyKind.RSI

    @property
    def name(self) -> str:
        return f"{self.kind.value}({self.period},{self.overbought:g},{self.oversold:g})"

    @property
    def history_length(self) -> int:
        return len(self._history)

    @property
    def state(self) -> RsiState:
        return replace(self._state)

    def process_bar(self, bar: Bar) -> None:
        if self._history.append(bar):
            self._state.observe(bar.close, bar.time)

    def process_tick(self, tick: Tick) -> StrategyOutput:
        state = self._state
        state.observe(tick.last_price, tick.time)

        if len(self._history) <= self.period:
            return build_output(state, StrategySignal.NONE, WAITING_MESSAGE)

        value = rsi(self._history.closes(), self.period)
        indicators = {"rsi": value}

        if value >= self.overbought and not state.was_overbought:
            state.was_overbought = True
            state.was_oversold = False
            logger.info("RSI SELL @ %s: RSI=%.2f", state.last_price, value)
            return build_output(state, StrategySignal.SELL, f"RSI overbought: {value:.2f}", indicators)

        if value <= self.oversold and not state.was_oversold:
            state.was_oversold = True
            state.was_overbought = False
            logger.info("RSI BUY @ %s: RSI=%.2f", state.last_price, value)
            return build_output(state, StrategySignal.BUY, f"RSI oversold: {value:.2f}", indicators)

        if value < self.overbought - self.hysteresis:
            state.was_overbought = False
        if value > self.oversold + self.hysteresis:
            state.was_oversold = False

        return build_output(state, StrategySignal.NONE, f"RSI: {value:.2f}", indicators)

    def reset(self) -> None:
        self._history.reset()
        self._state = RsiState()
