"""Trading sessions wiring a market feed to a strategy and the risk gate.

Flow per instrument:
    bar  -> strategy.process_bar
    tick -> strategy.process_tick -> risk_gate.evaluate -> build_trade_intent
         -> executor (when auto-trade is on and the gate allows)

Position lookup and order execution are collaborators passed in as
callables; this module never tracks positions or submits orders itself.
"""

from __future__ import annotations

import logging
from typing import AsyncIterable, Callable

from pydantic import BaseModel, ConfigDict

from ntbot_core.errors import ConfigError
from ntbot_core.models import Bar, Instrument, StrategyOutput, Tick
from ntbot_core.orders import TradeIntent, build_trade_intent
from ntbot_core.risk import RiskDecision, RiskGate
from ntbot_core.strategy import Strategy

logger = logging.getLogger(__name__)

PositionLookup = Callable[[str], int]
Executor = Callable[[TradeIntent], None]


def _flat(symbol: str) -> int:
    return 0


class SessionEvent(BaseModel):
    """What happened on one tick."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    output: StrategyOutput
    decision: RiskDecision | None = None
    intent: TradeIntent | None = None


class TradingSession:
    """Runs one strategy for one instrument.

    Feed events are ignored while the session is stopped. Bars and ticks
    must arrive in order from a single producer.
    """

    def __init__(
        self,
        instrument: Instrument,
        strategy: Strategy,
        risk_gate: RiskGate,
        position_lookup: PositionLookup | None = None,
        executor: Executor | None = None,
        auto_trade: bool = True,
    ):
        self.instrument = instrument
        self.strategy = strategy
        self.risk_gate = risk_gate
        self.auto_trade = auto_trade

        self._position_lookup = position_lookup or _flat
        self._executor = executor
        self._running = False

    @property
    def symbol(self) -> str:
        return self.instrument.symbol

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self, reset: bool = False) -> None:
        """Start consuming feed events.

        Raises:
            ConfigError: If the risk gate has not been configured.
        """
        if not self.risk_gate.is_configured:
            raise ConfigError(f"Risk gate is not configured for {self.symbol}")
        if reset:
            self.strategy.reset()
        self._running = True
        logger.info(
            "Session %s started: strategy=%s, auto_trade=%s",
            self.symbol,
            self.strategy.name,
            self.auto_trade,
        )

    def stop(self) -> None:
        self._running = False
        logger.info("Session %s stopped", self.symbol)

    def on_bar(self, bar: Bar) -> None:
        if not self._running:
            return
        self.strategy.process_bar(bar)

    def on_tick(self, tick: Tick) -> SessionEvent | None:
        """Process a tick and act on any signal.

        Returns:
            SessionEvent, or None if the session is stopped.
        """
        if not self._running:
            return None

        output = self.strategy.process_tick(tick)
        if not output.is_actionable:
            return SessionEvent(symbol=self.symbol, output=output)

        if not self.auto_trade:
            logger.info(
                "%s %s (auto-trade off): %s",
                self.symbol,
                output.signal.value.upper(),
                output.message,
            )
            return SessionEvent(symbol=self.symbol, output=output)

        position_qty = self._position_lookup(self.symbol)
        decision = self.risk_gate.evaluate(
            output.signal, self.instrument.tick_value, position_qty
        )
        if not decision.allowed:
            logger.info(
                "%s %s rejected by risk gate: %s",
                self.symbol,
                output.signal.value.upper(),
                decision.reason,
            )
            return SessionEvent(symbol=self.symbol, output=output, decision=decision)

        intent = build_trade_intent(
            output, self.risk_gate.config, self.instrument, position_qty
        )
        if intent is not None:
            logger.info(
                "%s %s %d @ %.2f (stop=%s, target=%s)",
                self.symbol,
                intent.action.value.upper(),
                intent.quantity,
                intent.reference_price,
                intent.stop_price,
                intent.target_price,
            )
            if self._executor is not None:
                try:
                    self._executor(intent)
                except Exception as e:
                    logger.error("Executor failed for %s %s: %s", self.symbol, intent.action.value, e)

        return SessionEvent(
            symbol=self.symbol, output=output, decision=decision, intent=intent
        )


class TradingDesk:
    """Several instrument sessions sharing one account-wide RiskGate.

    Each instrument gets its own strategy instance; only the daily P&L in
    the risk gate is shared.
    """

    def __init__(self, risk_gate: RiskGate):
        self.risk_gate = risk_gate
        self._sessions: dict[str, TradingSession] = {}

    @property
    def symbols(self) -> list[str]:
        return list(self._sessions)

    def add_session(
        self,
        instrument: Instrument,
        strategy: Strategy,
        position_lookup: PositionLookup | None = None,
        executor: Executor | None = None,
        auto_trade: bool = True,
    ) -> TradingSession:
        """Create a session for ``instrument`` bound to the shared gate.

        Raises:
            ValueError: If the symbol already has a session.
        """
        if instrument.symbol in self._sessions:
            raise ValueError(f"Session for {instrument.symbol} already exists")
        session = TradingSession(
            instrument=instrument,
            strategy=strategy,
            risk_gate=self.risk_gate,
            position_lookup=position_lookup,
            executor=executor,
            auto_trade=auto_trade,
        )
        self._sessions[instrument.symbol] = session
        return session

    def session(self, symbol: str) -> TradingSession:
        return self._sessions[symbol]

    def start(self, reset: bool = False) -> None:
        for session in self._sessions.values():
            session.start(reset=reset)

    def stop(self) -> None:
        for session in self._sessions.values():
            session.stop()

    def on_bar(self, symbol: str, bar: Bar) -> None:
        self._sessions[symbol].on_bar(bar)

    def on_tick(self, symbol: str, tick: Tick) -> SessionEvent | None:
        return self._sessions[symbol].on_tick(tick)

    async def run(
        self, events: AsyncIterable[tuple[str, Bar | Tick]]
    ) -> list[SessionEvent]:
        """Consume ``(symbol, bar_or_tick)`` events strictly in order.

        Events for symbols without a session are logged and skipped.

        Returns:
            Session events whose output carried a signal.
        """
        fired: list[SessionEvent] = []
        async for symbol, item in events:
            session = self._sessions.get(symbol)
            if session is None:
                logger.warning("No session for %s, dropping %s", symbol, type(item).__name__)
                continue
            if isinstance(item, Bar):
                session.on_bar(item)
                continue
            event = session.on_tick(item)
            if event is not None and event.output.is_actionable:
                fired.append(event)
        return fired

    def record_realized_pnl(self, delta: float) -> float:
        """Feed realized P&L from a closed trade into the shared gate."""
        return self.risk_gate.update_daily_pnl(delta)

    def end_session_day(self) -> None:
        """Session boundary: zero the shared daily P&L."""
        self.risk_gate.reset_daily_pnl()
