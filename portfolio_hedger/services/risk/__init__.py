"""
Risk Module

Provides:
- Portfolio beta and parametric Value at Risk (VaR)
- Stress scenario impacts
- Concentration ranking

Usage:
    from portfolio_hedger.services.risk import RiskMetricsEngine

    metrics = RiskMetricsEngine(config).compute(breakdown)
    print(metrics.var_95_1d)
"""

from portfolio_hedger.services.risk.var_calculator import VaRCalculator, VaRResult, VaRSummary
from portfolio_hedger.services.risk.stress_scenarios import (
    StressScenarioEngine, StressResult, STANDARD_SCENARIOS
)
from portfolio_hedger.services.risk.concentration import (
    ConcentrationChecker, ConcentrationResult, ConcentrationEntry
)
from portfolio_hedger.services.risk.risk_metrics import RiskMetricsEngine, RiskMetrics

__all__ = [
    'VaRCalculator',
    'VaRResult',
    'VaRSummary',
    'StressScenarioEngine',
    'StressResult',
    'STANDARD_SCENARIOS',
    'ConcentrationChecker',
    'ConcentrationResult',
    'ConcentrationEntry',
    'RiskMetricsEngine',
    'RiskMetrics',
]
