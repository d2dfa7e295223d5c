"""
Margin Requirement Estimator

Estimate initial margin for futures hedges:
- Per hedge: |contracts| × margin per contract
- Total across a hedge set, with a per-instrument breakdown

Note: These are estimates from configured exchange margins. Actual margin
is determined by the broker.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List
import logging

logger = logging.getLogger(__name__)


@dataclass
class MarginRequirement:
    """Margin requirement for a set of hedges"""
    initial_margin: float = 0.0

    # Breakdown
    by_instrument: Dict[str, float] = field(default_factory=dict)

    notes: List[str] = field(default_factory=list)


class MarginEstimator:
    """
    Estimate futures margin.

    Usage:
        estimator = MarginEstimator()
        total = estimator.total_margin(recommendation.all_hedges)
        requirement = estimator.estimate(recommendation.all_hedges)
    """

    @staticmethod
    def hedge_margin(contracts: int, margin_per_contract: float) -> float:
        """
        Initial margin for one hedge.

        Uses |contracts|: a BUY hedge (negative contracts) posts the same
        positive margin as a SELL hedge rather than netting against it.
        """
        return abs(contracts) * margin_per_contract

    def estimate(self, hedges: Iterable) -> MarginRequirement:
        requirement = MarginRequirement()

        for hedge in hedges:
            if not getattr(hedge, 'hedgeable', False) or hedge.contracts == 0:
                continue
            margin = self.hedge_margin(hedge.contracts, hedge.margin_per_contract)
            symbol = hedge.instrument_symbol
            requirement.by_instrument[symbol] = requirement.by_instrument.get(symbol, 0.0) + margin
            requirement.initial_margin += margin

        if requirement.initial_margin == 0:
            requirement.notes.append("No futures contracts required")

        return requirement

    def total_margin(self, hedges: Iterable) -> float:
        return self.estimate(hedges).initial_margin

    def margin_utilization(self, margin: float, portfolio_value: float) -> float:
        """Margin as a fraction of portfolio value (0 for an empty portfolio)."""
        if portfolio_value <= 0:
            return 0.0
        return margin / portfolio_value
