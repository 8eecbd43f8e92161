"""CLI entry point: replay historical bars through the configured strategy.

Usage:
    python -m ntbot_app --bars data/es_5m.csv --symbol ES
    python -m ntbot_app --bars data/es_5m.csv --symbol ES --config bot.yaml --auto-trade
"""

import argparse
import asyncio
import logging
import sys
from collections import Counter

from ntbot_app.bot_config import load_bot_config
from ntbot_app.config import get_settings
from ntbot_app.services import TradingDesk, iter_csv_bars, replay_events
from ntbot_core.errors import ConfigError

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Replay bars through a strategy and the risk gate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m ntbot_app --bars es_5m.csv --symbol ES
  python -m ntbot_app --bars es_5m.csv --symbol ES --config bot.yaml --auto-trade
        """,
    )
    parser.add_argument("--bars", required=True, help="CSV file: time,open,high,low,close,volume")
    parser.add_argument("--symbol", required=True, help="Instrument symbol from the config")
    parser.add_argument(
        "--config",
        default=settings.config_path,
        help=f"Bot config YAML (default: {settings.config_path})",
    )
    parser.add_argument(
        "--auto-trade",
        action="store_true",
        default=settings.auto_trade,
        help="Evaluate signals with the risk gate and build order intents",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser.parse_args(argv)


async def replay(args: argparse.Namespace) -> Counter:
    """Run the replay and return a count of fired signals by outcome."""
    config = load_bot_config(args.config)
    instrument = config.instrument(args.symbol)

    desk = TradingDesk(config.build_risk_gate())
    desk.add_session(
        instrument,
        config.build_strategy(),
        auto_trade=args.auto_trade,
    )
    desk.start()

    events = await desk.run(replay_events(args.symbol, iter_csv_bars(args.bars)))
    desk.stop()

    summary: Counter = Counter()
    for event in events:
        output = event.output
        if event.decision is None:
            status = "signal"
        else:
            status = "allowed" if event.decision.allowed else "denied"
        summary[f"{output.signal.value}:{status}"] += 1
        reason = f" ({event.decision.reason})" if event.decision else ""
        print(
            f"{output.time}  {output.signal.value.upper():<4}  "
            f"@ {output.reference_price:.2f}  {status}{reason}  {output.message}"
        )
    return summary


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        summary = asyncio.run(replay(args))
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return 2
    except FileNotFoundError as e:
        logger.error("Bars file not found: %s", e)
        return 2

    print("\nSummary:")
    if not summary:
        print("  no signals")
    for key, count in sorted(summary.items()):
        print(f"  {key:<16} {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
