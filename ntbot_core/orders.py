"""Order intents derived from allowed signals.

Pure price arithmetic for the execution collaborator: an entry at market
with a protective stop and a profit target a fixed number of ticks away
from the reference price. Submission and routing happen elsewhere.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from ntbot_core.models import Instrument, RiskConfig, StrategyOutput, StrategySignal


class OrderAction(str, Enum):
    BUY = "buy"
    SELL = "sell"


class TradeIntent(BaseModel):
    """What the execution collaborator should submit.

    ``stop_price`` and ``target_price`` are None for exits, which close the
    whole position at market.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    signal: StrategySignal
    action: OrderAction
    quantity: int
    reference_price: float
    stop_price: float | None = None
    target_price: float | None = None

    @property
    def is_exit(self) -> bool:
        return self.signal == StrategySignal.EXIT


def build_trade_intent(
    output: StrategyOutput,
    risk_config: RiskConfig,
    instrument: Instrument,
    position_qty: int = 0,
) -> TradeIntent | None:
    """Translate an allowed strategy output into an order intent.

    Args:
        output: Strategy output whose signal was allowed by the risk gate.
        risk_config: Supplies position size and stop/target distances.
        instrument: Supplies the tick size.
        position_qty: Signed open position, used only for exits.

    Returns:
        TradeIntent, or None for NONE signals and for exits while flat.
    """
    price = output.reference_price
    stop_distance = risk_config.stop_loss_ticks * instrument.tick_size
    target_distance = risk_config.take_profit_ticks * instrument.tick_size

    if output.signal == StrategySignal.BUY:
        return TradeIntent(
            symbol=instrument.symbol,
            signal=output.signal,
            action=OrderAction.BUY,
            quantity=risk_config.position_size,
            reference_price=price,
            stop_price=price - stop_distance,
            target_price=price + target_distance,
        )

    if output.signal == StrategySignal.SELL:
        return TradeIntent(
            symbol=instrument.symbol,
            signal=output.signal,
            action=OrderAction.SELL,
            quantity=risk_config.position_size,
            reference_price=price,
            stop_price=price + stop_distance,
            target_price=price - target_distance,
        )

    if output.signal == StrategySignal.EXIT and position_qty != 0:
        return TradeIntent(
            symbol=instrument.symbol,
            signal=output.signal,
            action=OrderAction.SELL if position_qty > 0 else OrderAction.BUY,
            quantity=abs(position_qty),
            reference_price=price,
        )

    return None
