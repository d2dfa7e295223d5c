"""
Value at Risk (VaR) Calculator

Parametric VaR from portfolio beta and a fixed daily-volatility proxy:

    portfolio beta = (NASDAQ beta-adj + S&P beta-adj + ASX notional × proxy beta) / portfolio value
    daily vol      = portfolio beta × daily vol per unit beta
    VaR(c, 1d)     = portfolio value × daily vol × z(c)
    VaR(c, Nd)     = VaR(c, 1d) × sqrt(N)

VaR answers: "What's the maximum loss at X% confidence over Y days?"
"""

from dataclasses import dataclass
from typing import Dict
import logging
import math

from portfolio_hedger.config.hedge_config_loader import RiskParameters
from portfolio_hedger.core.models.exposure import ExposureBreakdown

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VaRResult:
    """
    Result of one VaR calculation

    VaR of $10,000 at 95% confidence means:
    "We are 95% confident the portfolio won't lose more than $10,000 in the given period"
    """
    var_amount: float                # Absolute VaR in dollars
    var_percent: float               # VaR as % of portfolio value
    confidence_level: float          # e.g., 0.95 for 95%
    horizon_days: int                # e.g., 1 for 1-day VaR

    def __str__(self) -> str:
        return (
            f"VaR: ${self.var_amount:,.2f} "
            f"({self.var_percent:.2f}%) at {self.confidence_level*100:.0f}% confidence, "
            f"{self.horizon_days}-day horizon"
        )


@dataclass(frozen=True)
class VaRSummary:
    """The three VaR figures reported for every portfolio"""
    portfolio_beta: float
    daily_volatility: float
    var_95_1d: VaRResult
    var_99_1d: VaRResult
    var_95_long: VaRResult           # 95% over the long horizon (10 days by default)


class VaRCalculator:
    """
    Calculate parametric Value at Risk for a portfolio

    Usage:
        calculator = VaRCalculator(config.risk)
        beta = calculator.portfolio_beta(breakdown)
        summary = calculator.calculate(breakdown.portfolio_value, beta)
    """

    def __init__(self, params: RiskParameters = None):
        self.params = params or RiskParameters()

    def portfolio_beta(self, breakdown: ExposureBreakdown) -> float:
        """Beta of the whole portfolio against the equity benchmarks."""
        if breakdown.portfolio_value <= 0:
            return 0.0
        weighted = (
            breakdown.nasdaq_totals.beta_adjusted_usd
            + breakdown.sp500_totals.beta_adjusted_usd
            + breakdown.asx_notional_usd * self.params.asx_proxy_beta
        )
        return weighted / breakdown.portfolio_value

    def daily_volatility(self, portfolio_beta: float) -> float:
        return portfolio_beta * self.params.daily_vol_per_beta

    def calculate(self, portfolio_value: float, portfolio_beta: float) -> VaRSummary:
        """
        Calculate the 95%/99% 1-day and 95% long-horizon VaR.

        Args:
            portfolio_value: Total portfolio value
            portfolio_beta: Beta from portfolio_beta()

        Returns:
            VaRSummary
        """
        daily_vol = self.daily_volatility(portfolio_beta)
        if portfolio_value <= 0:
            daily_vol_value = 0.0
        else:
            daily_vol_value = portfolio_value * daily_vol

        var_95 = daily_vol_value * self._get_z_score(0.95)
        var_99 = daily_vol_value * self._get_z_score(0.99)
        horizon = self.params.long_horizon_days
        var_95_long = var_95 * math.sqrt(horizon)

        summary = VaRSummary(
            portfolio_beta=portfolio_beta,
            daily_volatility=daily_vol,
            var_95_1d=self._result(var_95, portfolio_value, 0.95, 1),
            var_99_1d=self._result(var_99, portfolio_value, 0.99, 1),
            var_95_long=self._result(var_95_long, portfolio_value, 0.95, horizon),
        )
        logger.debug(f"Parametric {summary.var_95_1d}")
        return summary

    def _result(self, amount: float, portfolio_value: float, confidence: float, horizon: int) -> VaRResult:
        return VaRResult(
            var_amount=amount,
            var_percent=0.0 if portfolio_value <= 0 else amount / portfolio_value * 100,
            confidence_level=confidence,
            horizon_days=horizon,
        )

    def _get_z_score(self, confidence: float) -> float:
        """Get z-score for given confidence level."""
        z_scores: Dict[float, float] = {
            0.95: self.params.z_score_95,
            0.99: self.params.z_score_99,
        }
        return z_scores.get(confidence, self.params.z_score_95)
