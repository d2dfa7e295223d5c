"""
Hedging Engine
==============

Single entry point for a hedging analytics run:

    positions → classify → aggregate exposure → risk metrics
              → futures hedge sizing → option strategy pricing

Pure over its inputs: no I/O, no state carried between calls. Identical
inputs give identical reports, so callers may re-run it on every change of
hedge ratio.

Usage:
    engine = HedgingEngine()
    report = engine.analyze(positions, portfolio_value=1_000_000,
                            price_book=FuturesPriceBook({"NQ": 21500}, config),
                            parameters=HedgeParameters(equity_hedge_fraction=0.5))

    if report.status == AnalysisStatus.NO_POSITIONS:
        ...
    for line in report.hedges.summary_lines():
        print(line.instrument, line.contracts)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Sequence
import logging

from portfolio_hedger.analytics.pricing.option_strategies import OptionStrategyPricer, OptionStrategySet
from portfolio_hedger.config.hedge_config_loader import HedgeConfig, get_hedge_config
from portfolio_hedger.core.models.exposure import ExposureBreakdown
from portfolio_hedger.core.models.positions import RawPosition
from portfolio_hedger.core.validation import PositionValidator, to_float
from portfolio_hedger.services.exposure import ExposureAggregator
from portfolio_hedger.services.hedging import FuturesHedgeSizer, HedgeParameters, HedgeRecommendation
from portfolio_hedger.services.holdings_adapter import HoldingsAdapter
from portfolio_hedger.services.market_data import FuturesPriceBook
from portfolio_hedger.services.risk import RiskMetrics, RiskMetricsEngine

logger = logging.getLogger(__name__)


class AnalysisStatus(Enum):
    OK = "ok"
    NO_POSITIONS = "no_positions"    # Empty position list


@dataclass(frozen=True)
class PortfolioAnalysis:
    """Portfolio-level exposure and risk figures"""
    portfolio_value: float = 0.0
    total_long_value: float = 0.0
    total_short_value: float = 0.0
    net_exposure: float = 0.0
    gross_exposure: float = 0.0

    nasdaq_notional_usd: float = 0.0
    nasdaq_beta_adjusted_usd: float = 0.0
    nasdaq_weighted_beta: float = 0.0
    sp500_notional_usd: float = 0.0
    sp500_beta_adjusted_usd: float = 0.0
    sp500_weighted_beta: float = 0.0
    asx_notional_usd: float = 0.0

    portfolio_beta: float = 0.0
    daily_volatility: float = 0.0
    var_95_1d: float = 0.0
    var_99_1d: float = 0.0
    var_95_10d: float = 0.0

    @classmethod
    def from_results(cls, breakdown: ExposureBreakdown, risk: RiskMetrics) -> 'PortfolioAnalysis':
        return cls(
            portfolio_value=breakdown.portfolio_value,
            total_long_value=breakdown.total_long_value,
            total_short_value=breakdown.total_short_value,
            net_exposure=breakdown.net_exposure,
            gross_exposure=breakdown.gross_exposure,
            nasdaq_notional_usd=breakdown.nasdaq_totals.notional_usd,
            nasdaq_beta_adjusted_usd=breakdown.nasdaq_totals.beta_adjusted_usd,
            nasdaq_weighted_beta=breakdown.nasdaq_totals.weighted_beta,
            sp500_notional_usd=breakdown.sp500_totals.notional_usd,
            sp500_beta_adjusted_usd=breakdown.sp500_totals.beta_adjusted_usd,
            sp500_weighted_beta=breakdown.sp500_totals.weighted_beta,
            asx_notional_usd=breakdown.asx_notional_usd,
            portfolio_beta=risk.portfolio_beta,
            daily_volatility=risk.daily_volatility,
            var_95_1d=risk.var_95_1d,
            var_99_1d=risk.var_99_1d,
            var_95_10d=risk.var_95_10d,
        )


@dataclass
class HedgingReport:
    """Everything one analytics run produces"""
    status: AnalysisStatus
    analysis: PortfolioAnalysis
    breakdown: ExposureBreakdown
    risk: RiskMetrics
    parameters: HedgeParameters
    hedges: Optional[HedgeRecommendation] = None      # None when there are no positions
    options: Optional[OptionStrategySet] = None

    @property
    def has_positions(self) -> bool:
        return self.status == AnalysisStatus.OK


class HedgingEngine:
    """
    Run the full hedging analytics pipeline.

    The engine holds only configuration; every call builds fresh results.
    """

    def __init__(self, config: Optional[HedgeConfig] = None):
        self.config = config or get_hedge_config()
        self.aggregator = ExposureAggregator(self.config)
        self.risk_engine = RiskMetricsEngine(self.config)
        self.hedge_sizer = FuturesHedgeSizer(self.config)
        self.option_pricer = OptionStrategyPricer(self.config)
        self.holdings_adapter = HoldingsAdapter()

    def analyze(
        self,
        positions: Optional[Sequence[RawPosition]],
        portfolio_value: Any = 0.0,
        price_book: Optional[FuturesPriceBook] = None,
        parameters: Optional[HedgeParameters] = None
    ) -> HedgingReport:
        """
        Analyse positions and size hedges.

        Args:
            positions: Raw positions; malformed fields are coerced, cash and
                futures lines are excluded from the exposure buckets
            portfolio_value: Total portfolio value in home currency
            price_book: Live futures prices (defaults to reference prices)
            parameters: Hedge ratios (defaults to 50% equity, 100% commodities)

        Returns:
            HedgingReport; status NO_POSITIONS with zeroed figures and no
            hedges when the position list is empty
        """
        portfolio_value = to_float(portfolio_value, "portfolio_value")
        price_book = price_book or FuturesPriceBook(config=self.config)
        parameters = parameters or HedgeParameters()
        positions = [PositionValidator.coerce_position(p) for p in positions or []]

        breakdown = self.aggregator.aggregate(positions, portfolio_value)
        risk = self.risk_engine.compute(breakdown)
        analysis = PortfolioAnalysis.from_results(breakdown, risk)

        if not positions:
            logger.info("Hedging analysis: no positions to analyse")
            return HedgingReport(
                status=AnalysisStatus.NO_POSITIONS,
                analysis=analysis,
                breakdown=breakdown,
                risk=risk,
                parameters=parameters,
            )

        hedges = self.hedge_sizer.size_hedges(breakdown, risk.portfolio_beta, price_book, parameters)
        options = self._price_options(breakdown, price_book)

        logger.info(
            f"Hedging analysis: {len(breakdown.positions)} positions, "
            f"beta {risk.portfolio_beta:.2f} -> {hedges.hedged_beta:.2f} "
            f"at {parameters.equity_hedge_fraction:.0%} hedge, "
            f"VaR95 ${risk.var_95_1d:,.0f}, "
            f"{len(hedges.active_hedges)} futures hedges, margin ${hedges.total_margin:,.0f}"
        )

        return HedgingReport(
            status=AnalysisStatus.OK,
            analysis=analysis,
            breakdown=breakdown,
            risk=risk,
            parameters=parameters,
            hedges=hedges,
            options=options,
        )

    def analyze_holdings(
        self,
        holdings: Optional[Iterable[Any]],
        total_value: Any = None,
        price_book: Optional[FuturesPriceBook] = None,
        parameters: Optional[HedgeParameters] = None
    ) -> HedgingReport:
        """Analyse a raw holdings snapshot (see HoldingsAdapter)."""
        records = list(holdings or [])
        if total_value is None:
            total_value = self.holdings_adapter.total_value(records)
        positions = self.holdings_adapter.adapt(records, total_value)
        return self.analyze(positions, total_value, price_book, parameters)

    def _price_options(self, breakdown: ExposureBreakdown, price_book: FuturesPriceBook) -> OptionStrategySet:
        options = self.config.options
        spot = price_book.price(options.underlying)
        contracts = self.option_pricer.contracts_needed(breakdown.nasdaq_totals.beta_adjusted_usd, spot)
        return self.option_pricer.price_strategies(
            spot=spot,
            implied_volatility=price_book.implied_volatility(),
            contracts_needed=contracts,
            volatility_is_live=price_book.is_live(options.volatility_symbol),
        )
