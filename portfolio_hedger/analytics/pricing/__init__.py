from .option_pricer import OptionPricer, normal_cdf
from .option_strategies import (
    ExpiryStrategies,
    OptionStrategyPricer,
    OptionStrategySet,
    StrategyQuote,
    StrategyType,
    STRATEGY_LABELS,
)

__all__ = [
    "OptionPricer",
    "normal_cdf",
    "ExpiryStrategies",
    "OptionStrategyPricer",
    "OptionStrategySet",
    "StrategyQuote",
    "StrategyType",
    "STRATEGY_LABELS",
]
