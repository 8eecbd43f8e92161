"""Bot configuration loaded from bot.yaml.

Example:

    strategy:
      kind: rsi
      params: {period: 14, overbought: 70, oversold: 30}
    risk:
      position_size: 1
      stop_loss_ticks: 10
      take_profit_ticks: 20
      max_daily_risk: 500
    instruments:
      - {symbol: ES, tick_size: 0.25, point_value: 50}

Everything is validated on load so that a bad value stops the bot before
any strategy starts.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from ntbot_app.config import get_settings
from ntbot_core.errors import ConfigError
from ntbot_core.models import Instrument, RiskConfig
from ntbot_core.risk import RiskGate
from ntbot_core.strategy import StrategyKind, create_strategy, get_strategy_class

logger = logging.getLogger(__name__)


class StrategyEntry(BaseModel):
    """Strategy selection and its parameters."""

    kind: StrategyKind = StrategyKind.MA_CROSS
    params: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_params(self):
        config_model = get_strategy_class(self.kind).config_model
        try:
            config_model(**self.params)
        except ValidationError as e:
            raise ValueError(f"invalid {self.kind.value} params: {e}") from None
        return self


class BotConfig(BaseModel):
    """Top-level bot.yaml configuration."""

    strategy: StrategyEntry = Field(default_factory=StrategyEntry)
    risk: RiskConfig
    instruments: list[Instrument] = Field(min_length=1)

    @model_validator(mode="after")
    def _validate(self):
        symbols = [i.symbol for i in self.instruments]
        duplicates = sorted({s for s in symbols if symbols.count(s) > 1})
        if duplicates:
            raise ValueError(f"duplicate instrument symbols: {duplicates}")
        return self

    def instrument(self, symbol: str) -> Instrument:
        """Look up an instrument by symbol.

        Raises:
            ConfigError: If the symbol is not configured.
        """
        for instrument in self.instruments:
            if instrument.symbol == symbol:
                return instrument
        raise ConfigError(
            f"Unknown instrument '{symbol}'. Configured: "
            f"{', '.join(i.symbol for i in self.instruments)}"
        )

    def build_strategy(self):
        """Create a fresh strategy instance (one per instrument stream)."""
        return create_strategy(self.strategy.kind, **self.strategy.params)

    def build_risk_gate(self) -> RiskGate:
        gate = RiskGate()
        gate.configure(**self.risk.model_dump())
        return gate


def load_bot_config(path: Path | str | None = None) -> BotConfig:
    """Load and validate the bot config from YAML.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path or get_settings().config_path)

    # Load .env next to the config so env-driven settings see it
    load_dotenv(config_path.parent / ".env", override=False)

    if not config_path.exists():
        raise ConfigError(f"No bot config found at {config_path}")

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path} must contain a mapping at top level")

    try:
        config = BotConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid bot config {config_path}: {e}") from e

    logger.info(
        "Loaded bot config: strategy=%s %s, %d instruments",
        config.strategy.kind.value,
        config.strategy.params,
        len(config.instruments),
    )
    return config
