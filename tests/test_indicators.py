"""Tests for technical indicators."""

import numpy as np
import pytest

from ntbot_core.indicators import BollingerBands, bollinger, rsi, sma


class TestSMA:
    """Tests for SMA calculation."""

    def test_sma_uses_trailing_window(self):
        values = [float(i) for i in range(1, 11)]  # 1-10
        # (8 + 9 + 10) / 3
        assert sma(values, 3) == pytest.approx(9.0)

    def test_sma_full_window(self):
        assert sma([2.0, 4.0, 6.0], 3) == pytest.approx(4.0)

    def test_sma_insufficient_data(self):
        with pytest.raises(ValueError, match="need at least 5"):
            sma([1.0, 2.0], 5)

    def test_sma_rejects_non_positive_period(self):
        with pytest.raises(ValueError):
            sma([1.0, 2.0], 0)


class TestRSI:
    """Tests for RSI calculation."""

    def test_rsi_all_gains_is_100(self):
        assert rsi([10.0, 11.0, 12.0, 13.0], 3) == 100.0

    def test_rsi_flat_window_is_100(self):
        # No losses at all, including no movement
        assert rsi([10.0, 10.0, 10.0], 2) == 100.0

    def test_rsi_all_losses_is_0(self):
        assert rsi([13.0, 12.0, 11.0, 10.0], 3) == 0.0

    def test_rsi_balanced_is_50(self):
        assert rsi([10.0, 11.0, 10.0], 2) == pytest.approx(50.0)

    def test_rsi_known_value(self):
        # Deltas over last 2: +1, -0.5 -> RS = 2 -> RSI = 66.67
        assert rsi([5.0, 10.0, 11.0, 10.5], 2) == pytest.approx(100 - 100 / 3)

    def test_rsi_only_uses_last_period_deltas(self):
        # The big early drop is outside the window
        assert rsi([100.0, 10.0, 11.0, 12.0], 2) == 100.0

    def test_rsi_needs_period_plus_one_values(self):
        with pytest.raises(ValueError):
            rsi([10.0, 11.0], 2)

    def test_rsi_bounded_for_random_walks(self):
        rng = np.random.default_rng(7)
        for period in (1, 2, 5, 14, 30):
            for _ in range(20):
                closes = 100 + np.cumsum(rng.normal(0, 1, size=period + 20))
                value = rsi(closes, period)
                assert 0.0 <= value <= 100.0

    def test_rsi_is_100_whenever_no_negative_delta(self):
        rng = np.random.default_rng(11)
        for period in (1, 3, 9):
            steps = rng.uniform(0, 2, size=period + 5)
            closes = 50 + np.cumsum(steps)
            assert rsi(closes, period) == 100.0


class TestBollinger:
    """Tests for Bollinger band calculation."""

    def test_bollinger_known_values(self):
        closes = [10.0, 11.0, 10.0, 11.0, 10.0]
        bands = bollinger(closes, 5, 2.0)

        assert isinstance(bands, BollingerBands)
        assert bands.middle == pytest.approx(10.4)
        # Population standard deviation: sqrt(1.2 / 5)
        assert bands.std_dev == pytest.approx(np.sqrt(0.24))
        assert bands.upper == pytest.approx(10.4 + 2 * np.sqrt(0.24))
        assert bands.lower == pytest.approx(10.4 - 2 * np.sqrt(0.24))

    def test_bollinger_zero_variance_collapses(self):
        bands = bollinger([7.0] * 20, 20, 2.0)
        assert bands.std_dev == 0.0
        assert bands.upper == bands.middle == bands.lower == 7.0

    def test_bollinger_middle_is_sma(self):
        closes = [3.0, 8.0, 1.0, 9.0, 4.0, 6.0]
        assert bollinger(closes, 4).middle == pytest.approx(sma(closes, 4))

    def test_bands_ordered_for_random_inputs(self):
        rng = np.random.default_rng(3)
        for period in (2, 5, 20):
            for k in (0.5, 1.0, 2.0, 3.5):
                closes = rng.uniform(1, 1000, size=period + 10)
                bands = bollinger(closes, period, k)
                assert bands.lower <= bands.middle <= bands.upper

    def test_bollinger_rejects_negative_multiplier(self):
        with pytest.raises(ValueError):
            bollinger([1.0, 2.0, 3.0], 3, -1.0)

    def test_bollinger_insufficient_data(self):
        with pytest.raises(ValueError):
            bollinger([1.0, 2.0], 3)
