"""Session wiring and replay sources."""

from ntbot_app.services.replay import bar_close_tick, iter_csv_bars, replay_events
from ntbot_app.services.session import (
    SessionEvent,
    TradingDesk,
    TradingSession,
)

__all__ = [
    "SessionEvent",
    "TradingDesk",
    "TradingSession",
    "bar_close_tick",
    "iter_csv_bars",
    "replay_events",
]
