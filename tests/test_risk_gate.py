"""Tests for the risk gate."""

import threading

import pytest
from pydantic import ValidationError

from ntbot_core.errors import ConfigError
from ntbot_core.models import RiskConfig, StrategySignal
from ntbot_core.risk import RiskGate

BUY = StrategySignal.BUY
SELL = StrategySignal.SELL
EXIT = StrategySignal.EXIT


@pytest.fixture
def gate():
    gate = RiskGate()
    gate.configure(position_size=1, stop_loss_ticks=10, take_profit_ticks=20, max_daily_risk=100)
    return gate


class TestConfigure:
    def test_configure_stores_config(self, gate):
        assert gate.is_configured
        assert gate.config == RiskConfig(
            position_size=1, stop_loss_ticks=10, take_profit_ticks=20, max_daily_risk=100
        )
        assert gate.config.per_trade_risk_cap == pytest.approx(25.0)

    @pytest.mark.parametrize(
        "params",
        [
            (0, 10, 20, 100),
            (1, 0, 20, 100),
            (1, 10, -5, 100),
            (1, 10, 20, 0),
            (1, 10, 20, -100),
            (None, 10, 20, 100),
            (1, 10, 20, float("nan")),
        ],
    )
    def test_invalid_values_rejected(self, params):
        gate = RiskGate()
        with pytest.raises(ConfigError):
            gate.configure(*params)
        assert not gate.is_configured

    def test_failed_reconfigure_keeps_previous(self, gate):
        with pytest.raises(ConfigError):
            gate.configure(1, 10, 20, 0)
        assert gate.config.max_daily_risk == 100

    def test_evaluate_before_configure_raises(self):
        with pytest.raises(ConfigError, match="not configured"):
            RiskGate().evaluate(BUY, tick_value=1.0)

    def test_config_is_immutable(self, gate):
        with pytest.raises(ValidationError):
            gate.config.position_size = 5


class TestEvaluate:
    def test_risk_within_cap_allowed(self, gate):
        decision = gate.evaluate(BUY, tick_value=1.0, existing_position_qty=0)
        assert decision.allowed
        assert decision.risk_per_trade == pytest.approx(10.0)

    def test_risk_over_cap_denied(self):
        gate = RiskGate()
        gate.configure(position_size=1, stop_loss_ticks=30, take_profit_ticks=20, max_daily_risk=100)
        decision = gate.evaluate(BUY, tick_value=1.0)
        assert not decision.allowed
        assert decision.risk_per_trade == pytest.approx(30.0)
        assert "exceeds cap" in decision.reason

    def test_risk_exactly_at_cap_allowed(self):
        gate = RiskGate()
        gate.configure(position_size=1, stop_loss_ticks=25, take_profit_ticks=20, max_daily_risk=100)
        assert gate.evaluate(SELL, tick_value=1.0).allowed

    def test_position_size_scales_risk(self):
        gate = RiskGate()
        gate.configure(position_size=3, stop_loss_ticks=10, take_profit_ticks=20, max_daily_risk=100)
        assert not gate.evaluate(BUY, tick_value=1.0).allowed

    def test_custom_per_trade_fraction(self):
        gate = RiskGate()
        gate.configure(1, 30, 20, 100, per_trade_risk_fraction=0.5)
        assert gate.evaluate(BUY, tick_value=1.0).allowed

    def test_buy_denied_when_already_long(self, gate):
        decision = gate.evaluate(BUY, tick_value=1.0, existing_position_qty=2)
        assert not decision.allowed
        assert "same direction" in decision.reason

    def test_sell_denied_when_already_short(self, gate):
        assert not gate.evaluate(SELL, tick_value=1.0, existing_position_qty=-1).allowed

    def test_opposite_direction_allowed(self, gate):
        assert gate.evaluate(SELL, tick_value=1.0, existing_position_qty=2).allowed
        assert gate.evaluate(BUY, tick_value=1.0, existing_position_qty=-2).allowed

    def test_daily_loss_limit_blocks_entries(self, gate):
        gate.update_daily_pnl(-100)
        for signal in (BUY, SELL):
            decision = gate.evaluate(signal, tick_value=1.0)
            assert not decision.allowed
            assert "daily loss limit" in decision.reason

    def test_exit_always_allowed(self, gate):
        gate.update_daily_pnl(-500)
        assert gate.evaluate(EXIT, tick_value=1000.0, existing_position_qty=5).allowed

    def test_none_signal_not_allowed(self, gate):
        decision = gate.evaluate(StrategySignal.NONE, tick_value=1.0)
        assert not decision.allowed
        assert decision.reason == "no signal"

    @pytest.mark.parametrize("tick_value", [float("nan"), float("inf"), 0.0, -12.5])
    def test_invalid_tick_value_rejected(self, gate, tick_value):
        with pytest.raises(ConfigError, match="tick_value"):
            gate.evaluate(BUY, tick_value=tick_value)

    def test_loss_short_of_limit_still_allows(self, gate):
        gate.update_daily_pnl(-99.5)
        assert gate.evaluate(BUY, tick_value=1.0).allowed


class TestDailyPnl:
    def test_accumulates_and_resets(self, gate):
        assert gate.daily_pnl == 0.0
        assert gate.update_daily_pnl(-40) == pytest.approx(-40)
        assert gate.update_daily_pnl(15) == pytest.approx(-25)

        gate.reset_daily_pnl()
        assert gate.daily_pnl == 0.0

    def test_reset_lifts_loss_block(self, gate):
        gate.update_daily_pnl(-150)
        assert not gate.evaluate(BUY, tick_value=1.0).allowed
        gate.reset_daily_pnl()
        assert gate.evaluate(BUY, tick_value=1.0).allowed

    def test_concurrent_updates_are_serialized(self, gate):
        def worker():
            for _ in range(1000):
                gate.update_daily_pnl(1.0)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert gate.daily_pnl == pytest.approx(8000.0)
