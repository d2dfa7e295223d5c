"""
Futures Price Book
==================

Live futures / volatility-index prices with fallback to the default prices
in the contract specs. A missing, zero or failing lookup never raises: the
reference price is substituted instead.
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union
import logging

from portfolio_hedger.config.hedge_config_loader import HedgeConfig, FuturesContractSpec
from portfolio_hedger.core.validation import to_float, to_text

logger = logging.getLogger(__name__)

PriceLookup = Union[Mapping[str, Any], Callable[[str], Any]]


# symbol -> (name keywords, name exclusions). An item also matches on its
# ticker: equal to the symbol or starting with "<symbol>1".
MARKET_ITEM_RULES: Dict[str, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    "NQ": (("nasdaq 100", "nasdaq-100"), ()),
    "ES": (("s&p 500",), ("equal",)),
    "GC": (("gold",), ("goldman",)),
    "HG": (("copper",), ()),
    "CL": (("crude", "wti"), ()),
    "SI": (("silver",), ("stream",)),
    "VIX": (("vix", "volatility"), ()),
}


def _matches_item(symbol: str, ticker: str, name: str) -> bool:
    if symbol == "VIX":
        ticker_hit = ticker.startswith("VIX")
    else:
        ticker_hit = ticker == symbol or ticker.startswith(f"{symbol}1")
    if ticker_hit:
        return True

    keywords, exclusions = MARKET_ITEM_RULES[symbol]
    return any(k in name for k in keywords) and not any(x in name for x in exclusions)


def resolve_market_items(items: Iterable[Mapping[str, Any]]) -> Dict[str, float]:
    """
    Map a market-feed list of ``{name, ticker, price}`` items onto futures
    symbols. First positive price per symbol wins.
    """
    prices: Dict[str, float] = {}
    for item in items or []:
        if not isinstance(item, Mapping):
            continue
        ticker = to_text(item.get("ticker")).upper()
        name = to_text(item.get("name")).lower()
        price = to_float(item.get("price"), "price")
        if price <= 0:
            continue

        for symbol in MARKET_ITEM_RULES:
            if symbol not in prices and _matches_item(symbol, ticker, name):
                prices[symbol] = price

    logger.debug(f"Resolved market items to {sorted(prices)}")
    return prices


class FuturesPriceBook:
    """
    Price lookup for hedge instruments.

    Usage:
        book = FuturesPriceBook({"NQ": 21450.0, "VIX": 16.2}, config)
        book.price("NQ")             # 21450.0 (live)
        book.price("ES")             # 6000.0  (fallback)
        book.implied_volatility()    # 0.162
    """

    def __init__(self, prices: Optional[PriceLookup] = None, config: Optional[HedgeConfig] = None):
        self._lookup = prices if prices is not None else {}
        config = config or HedgeConfig()
        self.specs: Dict[str, FuturesContractSpec] = config.futures
        self.volatility_symbol = config.options.volatility_symbol
        self.default_vix = config.options.default_vix

    @classmethod
    def from_market_items(cls, items: Iterable[Mapping[str, Any]], config: Optional[HedgeConfig] = None) -> 'FuturesPriceBook':
        return cls(resolve_market_items(items), config)

    def live_price(self, symbol: str) -> Optional[float]:
        """Live price if the lookup has a positive value for ``symbol``."""
        try:
            if callable(self._lookup):
                raw = self._lookup(symbol)
            else:
                raw = self._lookup.get(symbol)
        except Exception as e:
            logger.warning(f"Price lookup failed for {symbol}: {e}")
            return None

        price = to_float(raw, symbol)
        return price if price > 0 else None

    def is_live(self, symbol: str) -> bool:
        return self.live_price(symbol) is not None

    def price(self, symbol: str) -> float:
        """Live price, else the contract's default price, else 0."""
        live = self.live_price(symbol)
        if live is not None:
            return live
        spec = self.specs.get(symbol)
        if spec is None:
            return 0.0
        return spec.default_price

    def vix(self) -> float:
        live = self.live_price(self.volatility_symbol)
        return live if live is not None else self.default_vix

    def implied_volatility(self) -> float:
        """Volatility-index level as an annualised decimal (18 -> 0.18)."""
        return self.vix() / 100
