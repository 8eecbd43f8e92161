"""Market data models: bars, ticks and instrument specs."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Bar(BaseModel):
    """A completed OHLCV bar for one bar interval."""

    model_config = ConfigDict(frozen=True)

    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: int = 0


class Tick(BaseModel):
    """A single real-time quote update. Never stored."""

    model_config = ConfigDict(frozen=True)

    time: datetime
    last_price: float
    bid: float = 0.0
    ask: float = 0.0
    volume: int = 0


class Instrument(BaseModel):
    """Contract specification needed to price risk and brackets."""

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(min_length=1)
    tick_size: float = Field(gt=0, allow_inf_nan=False)
    point_value: float = Field(gt=0, allow_inf_nan=False)

    @property
    def tick_value(self) -> float:
        """Currency value of a one-tick move for a single contract."""
        return self.point_value * self.tick_size
