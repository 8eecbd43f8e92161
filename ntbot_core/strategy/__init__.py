"""Strategy plugin system.

Public API:
- Strategy: Protocol that all strategies must implement
- StrategyKind: closed set of built-in variants
- create_strategy: Factory function to instantiate strategies by kind
- list_strategies: Discover all registered strategies
- get_strategy_class: Get strategy class by kind without instantiating

Importing this package registers all built-in strategies.
"""

from ntbot_core.strategy.protocol import Strategy, StrategyKind
from ntbot_core.strategy.registry import (
    create_strategy,
    get_strategy_class,
    list_strategies,
    register_strategy,
)
from ntbot_core.strategy.ma_cross import MaCrossState, MovingAverageCrossStrategy
from ntbot_core.strategy.rsi import RsiState, RsiStrategy
from ntbot_core.strategy.bollinger import BollingerBandsStrategy, BollingerState

__all__ = [
    "Strategy",
    "StrategyKind",
    "create_strategy",
    "get_strategy_class",
    "list_strategies",
    "register_strategy",
    "MaCrossState",
    "MovingAverageCrossStrategy",
    "RsiState",
    "RsiStrategy",
    "BollingerBandsStrategy",
    "BollingerState",
]
