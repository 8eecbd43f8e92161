"""Strategy signal and output models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class StrategySignal(str, Enum):
    """Discrete trading signal emitted by a strategy."""

    NONE = "none"
    BUY = "buy"
    SELL = "sell"
    EXIT = "exit"


class StrategyOutput(BaseModel):
    """Result of processing one tick.

    Stop-loss and take-profit prices are not part of the output; they
    come from the risk configuration when an order intent is built.

    Attributes:
        signal: Signal fired on this tick (NONE on most ticks).
        message: Human-readable description, including indicator values.
        reference_price: Last price seen when the output was produced.
        time: Time of the observation that produced this output.
        indicators: Indicator snapshot for diagnostics only.
    """

    model_config = ConfigDict(frozen=True)

    signal: StrategySignal = StrategySignal.NONE
    message: str = ""
    reference_price: float = 0.0
    time: datetime | None = None
    indicators: dict[str, float] | None = None

    @property
    def is_actionable(self) -> bool:
        return self.signal != StrategySignal.NONE
