"""Strategy registry for discovering and instantiating strategies.

The set of variants is closed: every registered class is tagged with a
StrategyKind, and only those kinds can be created.

Usage:
    strategy = create_strategy("rsi", period=14, overbought=70, oversold=30)
    kinds = list_strategies()
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ntbot_core.errors import ConfigError
from ntbot_core.strategy.protocol import StrategyKind

logger = logging.getLogger(__name__)

# Global registry: kind -> strategy_class
_REGISTRY: dict[StrategyKind, type] = {}


def register_strategy(kind: StrategyKind):
    """Decorator to register a strategy class under its kind.

    Raises:
        ValueError: If a strategy with the same kind is already registered.
    """

    def decorator(cls):
        if kind in _REGISTRY:
            raise ValueError(
                f"Strategy '{kind.value}' is already registered by {_REGISTRY[kind].__name__}"
            )
        _REGISTRY[kind] = cls
        logger.debug("Registered strategy: %s -> %s", kind.value, cls.__name__)
        return cls

    return decorator


def _resolve_kind(kind: StrategyKind | str) -> StrategyKind:
    try:
        return StrategyKind(kind)
    except ValueError:
        available = ", ".join(list_strategies()) or "(none)"
        raise ConfigError(
            f"Unknown strategy '{kind}'. Available: {available}"
        ) from None


def get_strategy_class(kind: StrategyKind | str) -> type:
    """Get the strategy class by kind (without instantiating).

    Raises:
        ConfigError: If the kind is unknown or not registered.
    """
    resolved = _resolve_kind(kind)
    cls = _REGISTRY.get(resolved)
    if cls is None:
        available = ", ".join(list_strategies()) or "(none)"
        raise ConfigError(
            f"Strategy '{resolved.value}' is not registered. Available: {available}"
        )
    return cls


def create_strategy(kind: StrategyKind | str, **params: Any):
    """Create a configured strategy instance.

    Args:
        kind: Strategy kind or its string value.
        **params: Fields of the strategy's config model.

    Returns:
        A fresh strategy instance with empty history.

    Raises:
        ConfigError: If the kind is unknown or a parameter is invalid.
    """
    cls = get_strategy_class(kind)
    try:
        config = cls.config_model(**params)
    except ValidationError as e:
        raise ConfigError(f"Invalid {cls.__name__} parameters: {e}") from e
    strategy = cls(config=config)
    logger.info("Created strategy %s", strategy.name)
    return strategy


def list_strategies() -> list[str]:
    """Return a sorted list of registered strategy kinds."""
    return sorted(kind.value for kind in _REGISTRY)
