"""Data models shared by strategies, the risk gate and the app layer."""

from ntbot_core.models.config import (
    BAR_HISTORY_CAPACITY,
    BOLLINGER_LATCH_HYSTERESIS_STD,
    PER_TRADE_RISK_FRACTION,
    RSI_LATCH_HYSTERESIS,
    BollingerConfig,
    MaCrossConfig,
    RiskConfig,
    RsiConfig,
)
from ntbot_core.models.history import BarHistory
from ntbot_core.models.market import Bar, Instrument, Tick
from ntbot_core.models.signal import StrategyOutput, StrategySignal

__all__ = [
    "BAR_HISTORY_CAPACITY",
    "BOLLINGER_LATCH_HYSTERESIS_STD",
    "PER_TRADE_RISK_FRACTION",
    "RSI_LATCH_HYSTERESIS",
    "Bar",
    "BarHistory",
    "BollingerConfig",
    "Instrument",
    "MaCrossConfig",
    "RiskConfig",
    "RsiConfig",
    "StrategyOutput",
    "StrategySignal",
    "Tick",
]
