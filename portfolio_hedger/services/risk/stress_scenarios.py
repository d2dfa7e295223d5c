"""
Stress Scenario Engine

Applies the fixed table of named shocks to a portfolio:

    impact = portfolio value × shock × exposure

where exposure is the portfolio beta for equity-index shocks, or the share
of portfolio value held in the relevant commodity / currency bucket.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging

from portfolio_hedger.config.hedge_config_loader import StressScenarioConfig
from portfolio_hedger.core.models.exposure import ExposureBreakdown

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StressResult:
    """Result of one stress scenario"""
    name: str
    move: str                 # Display label for the market move, e.g. "-10%"
    factor: float             # Fraction of portfolio value lost (signed)
    impact: float             # portfolio value × factor

    @property
    def impact_percent(self) -> float:
        return self.factor * 100


# Standard scenarios, used when no table is configured
STANDARD_SCENARIOS = [
    StressScenarioConfig("NASDAQ -5% correction", -0.05, "beta", "-5%"),
    StressScenarioConfig("NASDAQ -10% selloff", -0.10, "beta", "-10%"),
    StressScenarioConfig("NASDAQ -20% bear", -0.20, "beta", "-20%"),
    StressScenarioConfig("Gold -10%", -0.10, "commodity", "-10%", bucket="gold"),
    StressScenarioConfig("Commodities -10%", -0.10, "commodity", "-10%"),
    StressScenarioConfig("AUD/USD -5%", -0.05, "currency", "-5%", bucket="AUD"),
    StressScenarioConfig("Vol spike (VIX +15)", -0.03, "beta", "+15 pts"),
]


class StressScenarioEngine:
    """
    Run the stress table against an exposure breakdown.

    Usage:
        engine = StressScenarioEngine(config.stress_scenarios)
        results = engine.run_all(breakdown, portfolio_beta=1.2)
    """

    def __init__(self, scenarios: Optional[Sequence[StressScenarioConfig]] = None):
        self.scenarios = list(scenarios) if scenarios else list(STANDARD_SCENARIOS)

    def run_scenario(
        self,
        scenario: StressScenarioConfig,
        breakdown: ExposureBreakdown,
        portfolio_beta: float
    ) -> StressResult:
        factor = scenario.shock * self._exposure(scenario, breakdown, portfolio_beta)
        return StressResult(
            name=scenario.name,
            move=scenario.move,
            factor=factor,
            impact=breakdown.portfolio_value * factor,
        )

    def run_all(self, breakdown: ExposureBreakdown, portfolio_beta: float) -> List[StressResult]:
        results = [self.run_scenario(s, breakdown, portfolio_beta) for s in self.scenarios]
        if results:
            worst = min(results, key=lambda r: r.impact)
            logger.debug(f"Worst stress scenario: {worst.name} ({worst.impact:,.0f})")
        return results

    def _exposure(self, scenario: StressScenarioConfig, breakdown: ExposureBreakdown, portfolio_beta: float) -> float:
        if scenario.basis == "beta":
            return portfolio_beta

        # Guard the share against a zero portfolio value; impact is 0 then anyway
        denominator = breakdown.portfolio_value or 1.0

        if scenario.basis == "commodity":
            if scenario.bucket is None:
                bucket_value = breakdown.commodity_value
            else:
                bucket = breakdown.commodity_buckets.get(scenario.bucket)
                bucket_value = bucket.value if bucket else 0.0
            return bucket_value / denominator

        if scenario.basis == "currency":
            bucket = breakdown.currency_buckets.get(scenario.bucket or "")
            return (bucket.value if bucket else 0.0) / denominator

        logger.warning(f"Unknown stress basis '{scenario.basis}' for {scenario.name}")
        return 0.0
