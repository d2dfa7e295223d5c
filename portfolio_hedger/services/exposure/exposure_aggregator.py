"""
Exposure Aggregator
===================

Buckets classified positions by commodity, benchmark and currency in a
single pass and computes per-bucket and portfolio-wide totals.

Key principle: every non-cash, non-futures position lands in exactly one
exposure bucket (commodity, NASDAQ, S&P 500, ASX or other) and, separately,
in one currency bucket.
"""

from typing import Optional, Sequence
import logging

from portfolio_hedger.config.hedge_config_loader import HedgeConfig
from portfolio_hedger.core.models.positions import (
    AssetClass, HedgeIndex, RawPosition, ClassifiedPosition, EquityExposure
)
from portfolio_hedger.core.models.exposure import (
    CommodityBucket, CurrencyBucket, BenchmarkTotals, ExposureBreakdown
)
from portfolio_hedger.services.classification import PositionClassifier

logger = logging.getLogger(__name__)


class ExposureAggregator:
    """
    Aggregate positions into exposure buckets.

    Usage:
        aggregator = ExposureAggregator(config)
        breakdown = aggregator.aggregate(positions, portfolio_value=1_000_000)

        print(breakdown.nasdaq_totals.beta_adjusted_usd)
        print(breakdown.commodity_buckets['gold'].value_usd)
    """

    def __init__(self, config: HedgeConfig, classifier: Optional[PositionClassifier] = None):
        self.config = config
        self.classifier = classifier or PositionClassifier(config)

    def to_usd(self, value: float, currency: str) -> float:
        """Convert a home-currency value; unlisted currencies pass through."""
        return value * self.config.fx_rate(currency or "USD")

    def aggregate(self, positions: Sequence[RawPosition], portfolio_value: float = 0.0) -> ExposureBreakdown:
        """
        Run the aggregation pass.

        Args:
            positions: All raw positions (cash and futures lines are skipped)
            portfolio_value: Total portfolio value in home currency

        Returns:
            ExposureBreakdown with buckets and totals
        """
        breakdown = ExposureBreakdown(portfolio_value=portfolio_value)
        betas = self.config.betas

        for pos in positions:
            if pos.is_cash or pos.is_futures:
                continue

            classification = self.classifier.classify(pos)
            currency = pos.currency or "USD"
            value_usd = self.to_usd(pos.market_value, currency)
            classified = ClassifiedPosition(pos, classification, value_usd)
            breakdown.positions.append(classified)

            if currency not in breakdown.currency_buckets:
                breakdown.currency_buckets[currency] = CurrencyBucket(currency=currency)
            breakdown.currency_buckets[currency].add(pos)

            if pos.market_value > 0:
                breakdown.total_long_value += pos.market_value
            elif pos.market_value < 0:
                breakdown.total_short_value += abs(pos.market_value)

            if classification.asset_class == AssetClass.COMMODITY:
                commodity = classification.commodity
                if commodity not in breakdown.commodity_buckets:
                    breakdown.commodity_buckets[commodity] = CommodityBucket(commodity=commodity)
                breakdown.commodity_buckets[commodity].add(classified)

            elif classification.hedge_index == HedgeIndex.NASDAQ:
                beta = betas.nasdaq_beta(pos.normalized_ticker)
                breakdown.nasdaq.append(
                    EquityExposure(pos, classification, value_usd, beta, value_usd * beta)
                )

            elif classification.hedge_index == HedgeIndex.SP500:
                beta = betas.sp500_beta(pos.normalized_ticker)
                breakdown.sp500.append(
                    EquityExposure(pos, classification, value_usd, beta, value_usd * beta)
                )

            elif classification.hedge_index == HedgeIndex.ASX:
                breakdown.asx.append(classified)

            else:
                breakdown.other.append(classified)

        breakdown.nasdaq_totals = BenchmarkTotals.from_exposures(breakdown.nasdaq)
        breakdown.sp500_totals = BenchmarkTotals.from_exposures(breakdown.sp500)
        breakdown.asx_notional_usd = sum(p.value_usd for p in breakdown.asx)

        logger.debug(
            f"Aggregated {len(breakdown.positions)} positions: "
            f"nasdaq={len(breakdown.nasdaq)} sp500={len(breakdown.sp500)} "
            f"asx={len(breakdown.asx)} other={len(breakdown.other)} "
            f"commodities={list(breakdown.commodity_buckets)}"
        )
        return breakdown
