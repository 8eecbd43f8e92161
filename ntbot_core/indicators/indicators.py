"""Technical indicators for signal generation.

All functions take a sequence of closes (oldest first) and evaluate the
indicator over the trailing window ending at the most recent value. They
are pure: no state, no logging. Callers must make sure enough values are
available; too short an input raises ValueError.
"""

from typing import NamedTuple, Sequence

import numpy as np


class BollingerBands(NamedTuple):
    """Bollinger envelope around the simple moving average."""

    upper: float
    middle: float
    lower: float
    std_dev: float


def _trailing_window(values: Sequence[float], length: int) -> np.ndarray:
    """Return the last ``length`` values as a float64 array."""
    if length <= 0:
        raise ValueError(f"window length must be positive, got {length}")
    arr = np.asarray(values, dtype=np.float64)
    if arr.size < length:
        raise ValueError(f"need at least {length} values, got {arr.size}")
    return arr[-length:]


def sma(closes: Sequence[float], period: int) -> float:
    """
    Calculate the Simple Moving Average of the last ``period`` closes.

    Args:
        closes: Sequence of close prices, oldest first
        period: SMA period

    Returns:
        Arithmetic mean of the trailing window
    """
    return float(np.mean(_trailing_window(closes, period)))


def rsi(closes: Sequence[float], period: int) -> float:
    """
    Calculate the Relative Strength Index over the last ``period`` deltas.

    Uses simple averages over the window (not Wilder smoothing):
    avg_gain = sum(gains) / period, avg_loss = sum(losses) / period.
    A window with no losses returns 100.

    Args:
        closes: Sequence of close prices, oldest first (needs period + 1)
        period: Number of close-to-close deltas

    Returns:
        RSI in [0, 100]
    """
    if period <= 0:
        raise ValueError(f"period must be positive, got {period}")
    deltas = np.diff(_trailing_window(closes, period + 1))

    sum_gain = float(deltas[deltas > 0].sum())
    sum_loss = float(-deltas[deltas < 0].sum())

    if sum_loss == 0:
        return 100.0

    rs = (sum_gain / period) / (sum_loss / period)
    return 100.0 - 100.0 / (1.0 + rs)


def bollinger(
    closes: Sequence[float],
    period: int,
    std_dev_multiplier: float = 2.0,
) -> BollingerBands:
    """
    Calculate Bollinger Bands over the last ``period`` closes.

    middle = SMA(period)
    std_dev = population standard deviation of the same window
    upper/lower = middle +/- std_dev_multiplier * std_dev

    Args:
        closes: Sequence of close prices, oldest first
        period: Lookback period
        std_dev_multiplier: Band width in standard deviations (k)

    Returns:
        BollingerBands(upper, middle, lower, std_dev)
    """
    if std_dev_multiplier < 0:
        raise ValueError(
            f"std_dev_multiplier must not be negative, got {std_dev_multiplier}"
        )
    window = _trailing_window(closes, period)
    middle = float(np.mean(window))
    std_dev = float(np.sqrt(np.mean((window - middle) ** 2)))
    width = std_dev_multiplier * std_dev
    return BollingerBands(
        upper=middle + width,
        middle=middle,
        lower=middle - width,
        std_dev=std_dev,
    )
