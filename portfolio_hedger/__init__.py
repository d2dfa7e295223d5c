"""
Portfolio Hedger - hedging analytics for an equity and commodity portfolio.

Usage:
    from portfolio_hedger.services.hedging_engine import HedgingEngine

    report = HedgingEngine().analyze_holdings(holdings)
"""

__version__ = "0.1.0"
