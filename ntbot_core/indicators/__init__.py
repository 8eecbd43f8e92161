"""Technical indicators (pure math, no I/O)."""

from ntbot_core.indicators.indicators import (
    BollingerBands,
    bollinger,
    rsi,
    sma,
)

__all__ = [
    "BollingerBands",
    "bollinger",
    "rsi",
    "sma",
]
