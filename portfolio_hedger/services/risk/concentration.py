"""
Concentration Risk Checker

Ranks positions by portfolio weight and scores diversification.
"""

from dataclasses import dataclass, field
from typing import List, Sequence
import logging

from portfolio_hedger.core.models.positions import ClassifiedPosition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConcentrationEntry:
    """One row of the top-N concentration list"""
    ticker: str
    name: str
    weight_percent: float
    value: float


@dataclass
class ConcentrationResult:
    """Result of concentration analysis"""
    top_positions: List[ConcentrationEntry] = field(default_factory=list)
    herfindahl_index: float = 0.0
    diversification_score: float = 0.0


class ConcentrationChecker:
    """Rank positions by weight."""

    def __init__(self, top_n: int = 5):
        self.top_n = top_n

    def check_concentration(self, positions: Sequence[ClassifiedPosition]) -> ConcentrationResult:
        result = ConcentrationResult()
        if not positions:
            return result

        # sorted() is stable: equal weights keep input order
        ranked = sorted(positions, key=lambda p: p.position.portfolio_weight, reverse=True)
        result.top_positions = [
            ConcentrationEntry(
                ticker=p.position.ticker,
                name=p.position.name,
                weight_percent=p.position.portfolio_weight,
                value=p.position.market_value,
            )
            for p in ranked[:max(self.top_n, 0)]
        ]

        result.herfindahl_index = sum((p.position.portfolio_weight / 100) ** 2 for p in positions)
        result.diversification_score = max(0.0, 1 - result.herfindahl_index)
        return result
