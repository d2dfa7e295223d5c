"""
Position Classifier
===================

Tags each position with an asset class (cash / commodity / equity) and the
equity benchmark it tracks (NASDAQ / SP500 / ASX / OTHER).

Priority order:
    1. CASH ticker or a futures contract -> cash
    2. Ticker found in the commodity ticker table -> commodity
    3. Display name matches a commodity keyword rule -> commodity
    4. Otherwise -> equity

The hedge index is assigned to every position independently of the class.
"""

from typing import List, Optional, Sequence, Tuple
import logging

from portfolio_hedger.config.hedge_config_loader import HedgeConfig, ClassificationTables
from portfolio_hedger.core.models.positions import (
    AssetClass, HedgeIndex, RawPosition, AssetClassification, normalize_ticker
)

logger = logging.getLogger(__name__)


# Each rule is (commodity, alternatives). A rule matches when any alternative
# matches; an alternative matches when every keyword group has a hit in the
# lowercase name. First matching rule wins.
KeywordGroup = Tuple[str, ...]
NAME_KEYWORD_RULES: List[Tuple[str, List[List[KeywordGroup]]]] = [
    ("gold",     [[("gold",), ("min", "corp", "resource")]]),
    ("copper",   [[("copper", "cupric")]]),
    ("oil",      [[("petroleum",)], [("energy",), ("oil", "gas")]]),
    ("lithium",  [[("lithium", "battery mineral")]]),
    ("uranium",  [[("uranium", "nuclear")]]),
    ("iron_ore", [[("iron ore",)], [("iron",), ("min",)]]),
    ("silver",   [[("silver",), ("min", "corp")]]),
]

FOREIGN_OTHER_CURRENCIES = ("HKD", "CAD")


def match_name_keywords(name: str, rules=NAME_KEYWORD_RULES) -> Optional[str]:
    """Commodity key for the first keyword rule matching ``name``, else None."""
    lowered = (name or "").lower()
    for commodity, alternatives in rules:
        for groups in alternatives:
            if all(any(keyword in lowered for keyword in group) for group in groups):
                return commodity
    return None


class PositionClassifier:
    """
    Classify raw positions.

    Usage:
        classifier = PositionClassifier(config)
        classification = classifier.classify(position)
    """

    def __init__(self, config: HedgeConfig, name_rules=None):
        self.tables: ClassificationTables = config.classification
        self.name_rules = name_rules if name_rules is not None else NAME_KEYWORD_RULES

    def hedge_index(self, ticker: Optional[str], currency: Optional[str]) -> HedgeIndex:
        """Benchmark a position tracks, from its currency and ticker."""
        upper = normalize_ticker(ticker)
        currency = (currency or "").upper()

        if currency == "AUD" and upper in self.tables.nasdaq_correlated_asx:
            return HedgeIndex.NASDAQ
        if currency == "AUD":
            return HedgeIndex.ASX
        if currency in FOREIGN_OTHER_CURRENCIES:
            return HedgeIndex.OTHER
        if upper in self.tables.sp500_hedge_stocks:
            return HedgeIndex.SP500
        return HedgeIndex.NASDAQ

    def classify(self, position: RawPosition) -> AssetClassification:
        ticker = position.normalized_ticker
        hedge_index = self.hedge_index(position.ticker, position.currency)

        if ticker == "CASH" or position.is_futures:
            return AssetClassification(AssetClass.CASH, hedge_index)

        commodity = self.tables.commodity_for_ticker(ticker)
        if commodity is None:
            commodity = match_name_keywords(position.name, self.name_rules)

        if commodity is not None:
            return AssetClassification(AssetClass.COMMODITY, hedge_index, commodity)

        return AssetClassification(AssetClass.EQUITY, hedge_index)

    def classify_all(self, positions: Sequence[RawPosition]) -> List[AssetClassification]:
        classifications = [self.classify(p) for p in positions]
        logger.debug(f"Classified {len(classifications)} positions")
        return classifications
