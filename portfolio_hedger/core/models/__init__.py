"""
Domain Models

Usage:
    from portfolio_hedger.core.models import RawPosition, AssetClass, HedgeIndex
"""

from portfolio_hedger.core.models.positions import (
    AssetClass,
    HedgeIndex,
    RawPosition,
    AssetClassification,
    ClassifiedPosition,
    EquityExposure,
    normalize_ticker,
    currency_for_ticker,
)
from portfolio_hedger.core.models.exposure import (
    CommodityBucket,
    CurrencyBucket,
    BenchmarkTotals,
    ExposureBreakdown,
)

__all__ = [
    'AssetClass',
    'HedgeIndex',
    'RawPosition',
    'AssetClassification',
    'ClassifiedPosition',
    'EquityExposure',
    'normalize_ticker',
    'currency_for_ticker',
    'CommodityBucket',
    'CurrencyBucket',
    'BenchmarkTotals',
    'ExposureBreakdown',
]
