"""Strategy and risk configuration models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Bars kept per strategy; older bars are evicted FIFO.
BAR_HISTORY_CAPACITY = 200

# RSI must fall this many points below overbought (or rise above oversold)
# before the corresponding latch re-arms.
RSI_LATCH_HYSTERESIS = 5.0

# Fraction of the band's standard deviation the price must move back toward
# the middle band before a Bollinger latch re-arms.
BOLLINGER_LATCH_HYSTERESIS_STD = 0.5

# A single trade may risk at most this fraction of the daily risk budget.
PER_TRADE_RISK_FRACTION = 0.25


class MaCrossConfig(BaseModel):
    """Moving-average cross parameters."""

    model_config = ConfigDict(frozen=True)

    fast_period: int = Field(default=9, gt=0)
    slow_period: int = Field(default=21, gt=0)

    @model_validator(mode="after")
    def _validate(self):
        if self.fast_period >= self.slow_period:
            raise ValueError(
                f"fast_period ({self.fast_period}) must be below "
                f"slow_period ({self.slow_period})"
            )
        return self


class RsiConfig(BaseModel):
    """RSI threshold strategy parameters."""

    model_config = ConfigDict(frozen=True)

    period: int = Field(default=14, gt=0)
    overbought: float = Field(default=70.0, gt=0, le=100)
    oversold: float = Field(default=30.0, gt=0, le=100)
    hysteresis: float = Field(default=RSI_LATCH_HYSTERESIS, ge=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def _validate(self):
        if self.oversold >= self.overbought:
            raise ValueError(
                f"oversold ({self.oversold}) must be below overbought ({self.overbought})"
            )
        return self


class BollingerConfig(BaseModel):
    """Bollinger band touch strategy parameters."""

    model_config = ConfigDict(frozen=True)

    period: int = Field(default=20, gt=0)
    std_dev_multiplier: float = Field(default=2.0, gt=0, allow_inf_nan=False)
    hysteresis_std: float = Field(
        default=BOLLINGER_LATCH_HYSTERESIS_STD, ge=0, allow_inf_nan=False
    )


class RiskConfig(BaseModel):
    """Risk policy parameters. All four sizing fields are required."""

    model_config = ConfigDict(frozen=True)

    position_size: int = Field(gt=0)
    stop_loss_ticks: int = Field(gt=0)
    take_profit_ticks: int = Field(gt=0)
    max_daily_risk: float = Field(gt=0, allow_inf_nan=False)
    per_trade_risk_fraction: float = Field(
        default=PER_TRADE_RISK_FRACTION, gt=0, le=1
    )

    @property
    def per_trade_risk_cap(self) -> float:
        """Maximum currency risk allowed on a single entry."""
        return self.max_daily_risk * self.per_trade_risk_fraction
