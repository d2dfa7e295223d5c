"""
Exposure Models

Buckets and totals produced by a single aggregation pass over classified
positions.
"""

from dataclasses import dataclass, field
from typing import List, Dict

from portfolio_hedger.core.models.positions import RawPosition, ClassifiedPosition, EquityExposure


@dataclass
class CommodityBucket:
    """Aggregate exposure to one commodity"""
    commodity: str
    value: float = 0.0          # Home-currency sum
    value_usd: float = 0.0
    positions: List[ClassifiedPosition] = field(default_factory=list)

    def add(self, classified: ClassifiedPosition):
        self.value += classified.position.market_value
        self.value_usd += classified.value_usd
        self.positions.append(classified)


@dataclass
class CurrencyBucket:
    """Aggregate home-currency exposure to one currency"""
    currency: str
    value: float = 0.0
    positions: List[RawPosition] = field(default_factory=list)

    def add(self, position: RawPosition):
        self.value += position.market_value
        self.positions.append(position)


@dataclass(frozen=True)
class BenchmarkTotals:
    """Notional and beta-adjusted totals for one equity benchmark"""
    notional_usd: float = 0.0
    beta_adjusted_usd: float = 0.0

    @property
    def weighted_beta(self) -> float:
        if self.notional_usd == 0:
            return 0.0
        return self.beta_adjusted_usd / self.notional_usd

    @classmethod
    def from_exposures(cls, exposures: List[EquityExposure]) -> 'BenchmarkTotals':
        return cls(
            notional_usd=sum(e.value_usd for e in exposures),
            beta_adjusted_usd=sum(e.beta_adjusted_exposure_usd for e in exposures),
        )


@dataclass
class ExposureBreakdown:
    """
    Output of the exposure aggregator.

    ``positions`` holds every non-cash, non-futures input position in input
    order; every one of them appears in exactly one of the nasdaq, sp500,
    asx, other or commodity buckets.
    """
    portfolio_value: float = 0.0
    positions: List[ClassifiedPosition] = field(default_factory=list)

    nasdaq: List[EquityExposure] = field(default_factory=list)
    sp500: List[EquityExposure] = field(default_factory=list)
    asx: List[ClassifiedPosition] = field(default_factory=list)
    other: List[ClassifiedPosition] = field(default_factory=list)

    commodity_buckets: Dict[str, CommodityBucket] = field(default_factory=dict)
    currency_buckets: Dict[str, CurrencyBucket] = field(default_factory=dict)

    total_long_value: float = 0.0
    total_short_value: float = 0.0

    nasdaq_totals: BenchmarkTotals = field(default_factory=BenchmarkTotals)
    sp500_totals: BenchmarkTotals = field(default_factory=BenchmarkTotals)
    asx_notional_usd: float = 0.0

    @property
    def net_exposure(self) -> float:
        return self.total_long_value - self.total_short_value

    @property
    def gross_exposure(self) -> float:
        return self.total_long_value + self.total_short_value

    @property
    def other_notional_usd(self) -> float:
        return sum(p.value_usd for p in self.other)

    @property
    def commodity_value(self) -> float:
        """Home-currency value across all commodity buckets."""
        return sum(b.value for b in self.commodity_buckets.values())

    @property
    def commodity_value_usd(self) -> float:
        return sum(b.value_usd for b in self.commodity_buckets.values())

    @property
    def bucketed_value_usd(self) -> float:
        """USD exposure summed over every bucket (conservation check)."""
        return (
            self.nasdaq_totals.notional_usd
            + self.sp500_totals.notional_usd
            + self.asx_notional_usd
            + self.other_notional_usd
            + self.commodity_value_usd
        )

    @property
    def is_empty(self) -> bool:
        return not self.positions
