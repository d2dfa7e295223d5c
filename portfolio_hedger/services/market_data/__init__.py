"""
Market Data Module
==================

Usage:
    from portfolio_hedger.services.market_data import FuturesPriceBook

    book = FuturesPriceBook.from_market_items(feed_items, config)
    nq = book.price("NQ")
"""

from .futures_prices import (
    FuturesPriceBook,
    MARKET_ITEM_RULES,
    resolve_market_items,
)

__all__ = [
    "FuturesPriceBook",
    "MARKET_ITEM_RULES",
    "resolve_market_items",
]
