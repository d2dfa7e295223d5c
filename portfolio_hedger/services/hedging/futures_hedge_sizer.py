"""
Futures Hedge Sizer
===================

Converts bucketed exposure and user hedge ratios into whole-contract futures
hedges.

Key principle: hedge each bucket with its own contract.
    - NASDAQ beta-adjusted exposure -> NQ
    - S&P 500 beta-adjusted exposure -> ES
    - Commodity exposure -> the commodity's mapped future (GC, HG, CL, SI),
      or reported as non-hedgeable when no liquid contract exists
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional
import logging

from portfolio_hedger.config.hedge_config_loader import HedgeConfig, FuturesContractSpec
from portfolio_hedger.core.models.calculations import contracts_for_exposure
from portfolio_hedger.core.models.exposure import ExposureBreakdown
from portfolio_hedger.services.hedging.margin import MarginEstimator
from portfolio_hedger.services.market_data import FuturesPriceBook

logger = logging.getLogger(__name__)


class HedgeTarget(Enum):
    """What a futures hedge offsets"""
    NASDAQ = "NASDAQ"
    SP500 = "SP500"
    COMMODITY = "COMMODITY"


def clamp_fraction(value: float) -> float:
    """Clamp a hedge fraction into [0, 1]."""
    return min(max(float(value), 0.0), 1.0)


@dataclass
class HedgeParameters:
    """
    User-adjustable hedge ratios.

    Fractions are 0-1; commodities not listed hedge at 100%.
    """
    equity_hedge_fraction: float = 0.5
    commodity_hedge_fractions: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        self.equity_hedge_fraction = clamp_fraction(self.equity_hedge_fraction)
        self.commodity_hedge_fractions = {
            k: clamp_fraction(v) for k, v in self.commodity_hedge_fractions.items()
        }

    @classmethod
    def from_percentages(cls, equity_pct: float = 50.0, commodity_pcts: Optional[Dict[str, float]] = None) -> 'HedgeParameters':
        """Build from slider-style 0-100 percentages."""
        return cls(
            equity_hedge_fraction=equity_pct / 100,
            commodity_hedge_fractions={k: v / 100 for k, v in (commodity_pcts or {}).items()},
        )

    def commodity_fraction(self, commodity: str) -> float:
        return self.commodity_hedge_fractions.get(commodity, 1.0)


@dataclass(frozen=True)
class FuturesHedge:
    """
    A sized futures hedge for one bucket.

    Example:
        NASDAQ beta-adjusted exposure $1.7M at 50%: SELL 2 NQ @ 21,500
        Margin: $36,000
    """
    target: HedgeTarget
    label: str                          # What is hedged ("NASDAQ equity exposure", "Gold exposure")
    exposure_usd: float                 # Full bucket exposure (beta-adjusted for equities)
    hedgeable: bool = True

    instrument_symbol: Optional[str] = None
    instrument_name: Optional[str] = None
    hedge_fraction: float = 0.0
    price: float = 0.0
    contract_value: float = 0.0
    contracts: int = 0                  # Signed: positive = contracts to short
    margin_per_contract: float = 0.0
    commodity: Optional[str] = None

    @property
    def exposure_to_hedge(self) -> float:
        return self.exposure_usd * self.hedge_fraction

    @property
    def action(self) -> str:
        """SELL offsets a long exposure; BUY offsets a net short."""
        return "SELL" if self.contracts >= 0 else "BUY"

    @property
    def notional(self) -> float:
        return abs(self.contracts) * self.contract_value

    @property
    def margin(self) -> float:
        return MarginEstimator.hedge_margin(self.contracts, self.margin_per_contract)


@dataclass(frozen=True)
class HedgeSummaryLine:
    """One row of the hedge execution summary"""
    instrument: str
    direction: str                      # "Short" or "Long"
    contracts: int
    notional: float
    margin: float
    hedges: str


@dataclass
class HedgeRecommendation:
    """Futures hedges for every bucket plus margin and residual beta"""
    nasdaq: FuturesHedge
    sp500: FuturesHedge
    commodities: Dict[str, FuturesHedge] = field(default_factory=dict)

    equity_hedge_fraction: float = 0.0
    portfolio_beta: float = 0.0
    hedged_beta: float = 0.0
    total_margin: float = 0.0
    portfolio_value: float = 0.0

    @property
    def all_hedges(self) -> List[FuturesHedge]:
        return [self.nasdaq, self.sp500] + list(self.commodities.values())

    @property
    def active_hedges(self) -> List[FuturesHedge]:
        """Hedges with at least one contract."""
        return [h for h in self.all_hedges if h.hedgeable and h.contracts != 0]

    @property
    def non_hedgeable(self) -> List[FuturesHedge]:
        return [h for h in self.commodities.values() if not h.hedgeable]

    def summary_lines(self) -> List[HedgeSummaryLine]:
        return [
            HedgeSummaryLine(
                instrument=f"{h.instrument_symbol} {h.instrument_name or ''}".strip(),
                direction="Short" if h.contracts > 0 else "Long",
                contracts=abs(h.contracts),
                notional=h.notional,
                margin=h.margin,
                hedges=h.label,
            )
            for h in self.active_hedges
        ]

    @property
    def total_notional(self) -> float:
        return sum(h.notional for h in self.active_hedges)

    @property
    def notional_to_portfolio(self) -> float:
        """Hedge notional as a fraction of portfolio value."""
        if self.portfolio_value <= 0:
            return 0.0
        return self.total_notional / self.portfolio_value

    @property
    def margin_to_portfolio(self) -> float:
        return MarginEstimator().margin_utilization(self.total_margin, self.portfolio_value)


class FuturesHedgeSizer:
    """
    Sizes futures hedges.

    Usage:
        sizer = FuturesHedgeSizer(config)
        recommendation = sizer.size_hedges(breakdown, portfolio_beta, price_book,
                                           HedgeParameters(equity_hedge_fraction=0.5))
    """

    def __init__(self, config: HedgeConfig):
        self.config = config
        self.margin_estimator = MarginEstimator()

    def size_equity_hedge(
        self,
        target: HedgeTarget,
        beta_adjusted_exposure: float,
        hedge_fraction: float,
        price_book: FuturesPriceBook
    ) -> FuturesHedge:
        """
        Size an equity index hedge.

        Args:
            target: NASDAQ or SP500
            beta_adjusted_exposure: Bucket beta-adjusted USD exposure
            hedge_fraction: Portion to hedge (0-1)
            price_book: Live futures prices

        Returns:
            FuturesHedge (0 contracts when the contract or its price is missing)
        """
        benchmark = "nasdaq" if target == HedgeTarget.NASDAQ else "sp500"
        label = "NASDAQ equity exposure" if target == HedgeTarget.NASDAQ else "NYSE / S&P 500 exposure"
        spec = self.config.futures_spec(self.config.equity_index_futures.get(benchmark))

        if spec is None:
            logger.warning(f"No futures contract configured for {benchmark}")
            return FuturesHedge(
                target=target, label=label, exposure_usd=beta_adjusted_exposure,
                hedgeable=False, hedge_fraction=hedge_fraction,
            )

        return self._sized(target, label, beta_adjusted_exposure, hedge_fraction, spec, price_book)

    def size_commodity_hedge(
        self,
        commodity: str,
        exposure_usd: float,
        hedge_fraction: float,
        price_book: FuturesPriceBook
    ) -> FuturesHedge:
        label = f"{self.config.commodity_label(commodity)} exposure"
        meta = self.config.commodities.get(commodity)
        spec = self.config.futures_spec(meta.futures_symbol) if meta else None

        if spec is None:
            return FuturesHedge(
                target=HedgeTarget.COMMODITY, label=label, exposure_usd=exposure_usd,
                hedgeable=False, commodity=commodity,
            )

        return self._sized(
            HedgeTarget.COMMODITY, label, exposure_usd, hedge_fraction, spec, price_book,
            commodity=commodity,
        )

    def size_hedges(
        self,
        breakdown: ExposureBreakdown,
        portfolio_beta: float,
        price_book: FuturesPriceBook,
        parameters: Optional[HedgeParameters] = None
    ) -> HedgeRecommendation:
        """
        Size hedges for every bucket.

        Args:
            breakdown: Output of the exposure aggregator
            portfolio_beta: Unhedged portfolio beta
            price_book: Live futures prices with fallbacks
            parameters: Hedge ratios

        Returns:
            HedgeRecommendation
        """
        parameters = parameters or HedgeParameters()
        fraction = parameters.equity_hedge_fraction

        nasdaq = self.size_equity_hedge(
            HedgeTarget.NASDAQ, breakdown.nasdaq_totals.beta_adjusted_usd, fraction, price_book
        )
        sp500 = self.size_equity_hedge(
            HedgeTarget.SP500, breakdown.sp500_totals.beta_adjusted_usd, fraction, price_book
        )

        commodities = {
            commodity: self.size_commodity_hedge(
                commodity, bucket.value_usd, parameters.commodity_fraction(commodity), price_book
            )
            for commodity, bucket in breakdown.commodity_buckets.items()
        }

        recommendation = HedgeRecommendation(
            nasdaq=nasdaq,
            sp500=sp500,
            commodities=commodities,
            equity_hedge_fraction=fraction,
            portfolio_beta=portfolio_beta,
            hedged_beta=portfolio_beta * (1 - fraction),
            portfolio_value=breakdown.portfolio_value,
        )
        recommendation.total_margin = self.margin_estimator.total_margin(recommendation.all_hedges)

        logger.debug(
            f"Sized hedges at {fraction:.0%}: NQ={nasdaq.contracts} ES={sp500.contracts} "
            f"commodities={ {k: h.contracts for k, h in commodities.items()} } "
            f"margin={recommendation.total_margin:,.0f}"
        )
        return recommendation

    def _sized(
        self,
        target: HedgeTarget,
        label: str,
        exposure: float,
        hedge_fraction: float,
        spec: FuturesContractSpec,
        price_book: FuturesPriceBook,
        commodity: Optional[str] = None
    ) -> FuturesHedge:
        price = price_book.price(spec.symbol)
        return FuturesHedge(
            target=target,
            label=label,
            exposure_usd=exposure,
            instrument_symbol=spec.symbol,
            instrument_name=spec.name,
            hedge_fraction=hedge_fraction,
            price=price,
            contract_value=spec.contract_value(price),
            contracts=contracts_for_exposure(exposure * hedge_fraction, price, spec.multiplier),
            margin_per_contract=spec.margin_per_contract,
            commodity=commodity,
        )
