"""
Hedging Module
==============

Usage:
    from portfolio_hedger.services.hedging import FuturesHedgeSizer, HedgeParameters

    sizer = FuturesHedgeSizer(config)
    rec = sizer.size_hedges(breakdown, beta, price_book, HedgeParameters(0.5))
    for line in rec.summary_lines():
        print(line.instrument, line.contracts)
"""

from .futures_hedge_sizer import (
    FuturesHedge,
    FuturesHedgeSizer,
    HedgeParameters,
    HedgeRecommendation,
    HedgeSummaryLine,
    HedgeTarget,
    clamp_fraction,
)
from .margin import MarginEstimator, MarginRequirement

__all__ = [
    "FuturesHedge",
    "FuturesHedgeSizer",
    "HedgeParameters",
    "HedgeRecommendation",
    "HedgeSummaryLine",
    "HedgeTarget",
    "clamp_fraction",
    "MarginEstimator",
    "MarginRequirement",
]
