"""Historical bar replay source.

Reads bars from CSV (``time,open,high,low,close,volume``) and turns them
into the ordered event stream a TradingDesk consumes: each bar followed by
a tick at the bar's close.
"""

from __future__ import annotations

import csv
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator, Iterable, Iterator

from pydantic import ValidationError

from ntbot_core.models import Bar, Tick

logger = logging.getLogger(__name__)


def _parse_time(value: str) -> datetime:
    """Parse epoch milliseconds or an ISO-8601 timestamp (UTC if naive)."""
    value = value.strip()
    if value.isdigit():
        return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def iter_csv_bars(path: Path | str) -> Iterator[Bar]:
    """Stream bars from a CSV file, skipping the header and bad rows."""
    with open(path, newline="") as f:
        reader = csv.reader(f)
        for line_no, row in enumerate(reader, start=1):
            if not row or row[0].strip().lower() == "time":
                continue
            try:
                # CSV format: time,open,high,low,close[,volume]
                yield Bar(
                    time=_parse_time(row[0]),
                    open=float(row[1]),
                    high=float(row[2]),
                    low=float(row[3]),
                    close=float(row[4]),
                    volume=int(float(row[5])) if len(row) > 5 and row[5] else 0,
                )
            except (IndexError, ValueError, ValidationError) as e:
                logger.warning("Skipping %s line %d: %s", path, line_no, e)


def bar_close_tick(bar: Bar) -> Tick:
    """Tick observed at a bar's close."""
    return Tick(
        time=bar.time,
        last_price=bar.close,
        bid=bar.close,
        ask=bar.close,
        volume=bar.volume,
    )


async def replay_events(
    symbol: str, bars: Iterable[Bar]
) -> AsyncIterator[tuple[str, Bar | Tick]]:
    """Yield ``(symbol, bar)`` then ``(symbol, close tick)`` for each bar."""
    for bar in bars:
        yield symbol, bar
        yield symbol, bar_close_tick(bar)
