"""
Risk Metrics Engine

Derives the portfolio-level risk summary from an exposure breakdown:
portfolio beta, daily volatility, VaR, stress scenarios and concentration.
All figures degrade to 0 when the portfolio is empty or worthless.
"""

from dataclasses import dataclass, field
from typing import List
import logging

from portfolio_hedger.config.hedge_config_loader import HedgeConfig
from portfolio_hedger.core.models.exposure import ExposureBreakdown
from portfolio_hedger.services.risk.var_calculator import VaRCalculator, VaRSummary
from portfolio_hedger.services.risk.stress_scenarios import StressScenarioEngine, StressResult
from portfolio_hedger.services.risk.concentration import ConcentrationChecker, ConcentrationResult

logger = logging.getLogger(__name__)


@dataclass
class RiskMetrics:
    """Portfolio-level risk summary"""
    var: VaRSummary
    stress_results: List[StressResult] = field(default_factory=list)
    concentration: ConcentrationResult = field(default_factory=ConcentrationResult)

    @property
    def portfolio_beta(self) -> float:
        return self.var.portfolio_beta

    @property
    def daily_volatility(self) -> float:
        return self.var.daily_volatility

    @property
    def var_95_1d(self) -> float:
        return self.var.var_95_1d.var_amount

    @property
    def var_99_1d(self) -> float:
        return self.var.var_99_1d.var_amount

    @property
    def var_95_10d(self) -> float:
        return self.var.var_95_long.var_amount


class RiskMetricsEngine:
    """
    Compute risk metrics.

    Usage:
        engine = RiskMetricsEngine(config)
        metrics = engine.compute(breakdown)
        print(metrics.portfolio_beta, metrics.var_95_1d)
    """

    def __init__(self, config: HedgeConfig):
        self.var_calculator = VaRCalculator(config.risk)
        self.stress_engine = StressScenarioEngine(config.stress_scenarios)
        self.concentration_checker = ConcentrationChecker(config.risk.concentration_top_n)

    def compute(self, breakdown: ExposureBreakdown) -> RiskMetrics:
        beta = self.var_calculator.portfolio_beta(breakdown)
        var = self.var_calculator.calculate(breakdown.portfolio_value, beta)

        metrics = RiskMetrics(
            var=var,
            stress_results=self.stress_engine.run_all(breakdown, beta),
            concentration=self.concentration_checker.check_concentration(breakdown.positions),
        )

        logger.debug(
            f"Risk metrics: beta={beta:.3f} daily_vol={var.daily_volatility:.4%} "
            f"VaR95={metrics.var_95_1d:,.0f} VaR99={metrics.var_99_1d:,.0f}"
        )
        return metrics
