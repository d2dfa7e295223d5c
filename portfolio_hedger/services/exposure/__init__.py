"""
Exposure Module
===============

Usage:
    from portfolio_hedger.services.exposure import ExposureAggregator

    breakdown = ExposureAggregator(config).aggregate(positions, portfolio_value)
"""

from .exposure_aggregator import ExposureAggregator

__all__ = [
    "ExposureAggregator",
]
