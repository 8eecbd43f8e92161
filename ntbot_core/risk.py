"""Risk gate deciding whether a strategy signal may become an order.

Rules, in order:
1. EXIT is always allowed.
2. Deny once the daily P&L has reached -max_daily_risk.
3. Deny adding to an existing position in the same direction.
4. Deny if stop_loss_ticks * tick_value * position_size exceeds the
   per-trade fraction of max_daily_risk.
5. Otherwise allow.

Denials are ordinary results, not exceptions. The daily P&L accumulator
is shared by every instrument trading the same account, so it is guarded
by a lock; callers reset it at their session boundary.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, ValidationError

from ntbot_core.errors import ConfigError
from ntbot_core.models import PER_TRADE_RISK_FRACTION, RiskConfig, StrategySignal

logger = logging.getLogger(__name__)


class RiskDecision(BaseModel):
    """Outcome of a risk evaluation."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: str
    risk_per_trade: float | None = None


@dataclass(slots=True)
class RiskState:
    """Mutable risk accounting, owned by a single RiskGate."""

    daily_pnl: float = 0.0


class RiskGate:
    """Stateful allow/deny policy for proposed signals.

    Usage:
        gate = RiskGate()
        gate.configure(position_size=1, stop_loss_ticks=10,
                       take_profit_ticks=20, max_daily_risk=500)
        decision = gate.evaluate(StrategySignal.BUY, tick_value=12.5,
                                 existing_position_qty=0)
    """

    def __init__(self, config: RiskConfig | None = None):
        self._config = config
        self._state = RiskState()
        self._lock = threading.Lock()

    @property
    def is_configured(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> RiskConfig:
        """Active configuration.

        Raises:
            ConfigError: If configure() has not been called.
        """
        if self._config is None:
            raise ConfigError("RiskGate is not configured")
        return self._config

    @property
    def daily_pnl(self) -> float:
        with self._lock:
            return self._state.daily_pnl

    def configure(
        self,
        position_size: int,
        stop_loss_ticks: int,
        take_profit_ticks: int,
        max_daily_risk: float,
        per_trade_risk_fraction: float = PER_TRADE_RISK_FRACTION,
    ) -> RiskConfig:
        """Validate and store the risk parameters.

        Raises:
            ConfigError: If any parameter is missing or not positive.
        """
        try:
            config = RiskConfig(
                position_size=position_size,
                stop_loss_ticks=stop_loss_ticks,
                take_profit_ticks=take_profit_ticks,
                max_daily_risk=max_daily_risk,
                per_trade_risk_fraction=per_trade_risk_fraction,
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid risk parameters: {e}") from e

        self._config = config
        logger.info(
            "Risk configured: size=%d, SL=%d ticks, TP=%d ticks, max daily risk=%.2f",
            config.position_size,
            config.stop_loss_ticks,
            config.take_profit_ticks,
            config.max_daily_risk,
        )
        return config

    def evaluate(
        self,
        signal: StrategySignal,
        tick_value: float,
        existing_position_qty: int = 0,
    ) -> RiskDecision:
        """Decide whether ``signal`` may be acted on.

        Args:
            signal: Proposed signal.
            tick_value: Currency value of one tick for one contract.
            existing_position_qty: Signed open position (long > 0, short < 0).

        Returns:
            RiskDecision with the reason for the outcome.

        Raises:
            ConfigError: If configure() has not been called or ``tick_value``
                is not a positive finite number.
        """
        config = self.config
        if not (math.isfinite(tick_value) and tick_value > 0):
            raise ConfigError(f"tick_value must be positive and finite, got {tick_value}")

        if signal == StrategySignal.EXIT:
            return RiskDecision(allowed=True, reason="exit always allowed")

        if signal == StrategySignal.NONE:
            return RiskDecision(allowed=False, reason="no signal")

        daily_pnl = self.daily_pnl
        if daily_pnl <= -config.max_daily_risk:
            return self._deny(
                f"daily loss limit reached ({daily_pnl:.2f} <= -{config.max_daily_risk:.2f})"
            )

        if (signal == StrategySignal.BUY and existing_position_qty > 0) or (
            signal == StrategySignal.SELL and existing_position_qty < 0
        ):
            return self._deny(
                f"already positioned in the same direction (qty={existing_position_qty})"
            )

        risk_per_trade = config.stop_loss_ticks * tick_value * config.position_size
        if risk_per_trade > config.per_trade_risk_cap:
            return self._deny(
                f"risk per trade {risk_per_trade:.2f} exceeds cap "
                f"{config.per_trade_risk_cap:.2f}",
                risk_per_trade,
            )

        return RiskDecision(allowed=True, reason="within limits", risk_per_trade=risk_per_trade)

    def update_daily_pnl(self, delta: float) -> float:
        """Accumulate realized P&L. Returns the new daily total."""
        with self._lock:
            self._state.daily_pnl += delta
            total = self._state.daily_pnl
        logger.debug("Daily P&L updated by %.2f -> %.2f", delta, total)
        return total

    def reset_daily_pnl(self) -> None:
        """Zero the daily P&L; call at the start of each trading session."""
        with self._lock:
            self._state.daily_pnl = 0.0
        logger.info("Daily P&L reset")

    @staticmethod
    def _deny(reason: str, risk_per_trade: float | None = None) -> RiskDecision:
        logger.debug("Risk gate denial: %s", reason)
        return RiskDecision(allowed=False, reason=reason, risk_per_trade=risk_per_trade)
