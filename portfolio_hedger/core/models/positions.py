"""
Position Domain Models

Immutable value objects describing one portfolio line and its classification.
Recomputed on every analytics run; nothing here holds state between runs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ============================================================================
# Enumerations
# ============================================================================

class AssetClass(Enum):
    """Risk bucket a position is assigned to"""
    CASH = "cash"              # Cash lines and futures contracts already held
    COMMODITY = "commodity"    # Producers tracking a commodity price
    EQUITY = "equity"          # Everything else


class HedgeIndex(Enum):
    """Benchmark an equity position is deemed to track"""
    NASDAQ = "NASDAQ"
    SP500 = "SP500"
    ASX = "ASX"
    OTHER = "OTHER"


ASX_SUFFIX = ".AX"


def normalize_ticker(ticker: Optional[str]) -> str:
    """Uppercase a ticker and strip a trailing ``.AX`` suffix."""
    upper = (ticker or "").strip().upper()
    if upper.endswith(ASX_SUFFIX):
        return upper[:-len(ASX_SUFFIX)]
    return upper


def currency_for_ticker(ticker: Optional[str]) -> str:
    """``.AX`` listings are AUD, everything else USD."""
    return "AUD" if (ticker or "").strip().upper().endswith(ASX_SUFFIX) else "USD"


# ============================================================================
# Value Objects (Immutable)
# ============================================================================

@dataclass(frozen=True)
class RawPosition:
    """
    One portfolio line, as supplied by the holdings snapshot.

    market_value is in the position's home currency; portfolio_weight is a
    percentage of total portfolio value (0-100).
    """
    ticker: str
    name: str = ""
    currency: str = "USD"
    market_value: float = 0.0
    current_price: float = 0.0
    cost_price: float = 0.0
    quantity: float = 0.0
    portfolio_weight: float = 0.0
    pnl_percent: float = 0.0
    is_futures: bool = False

    @property
    def normalized_ticker(self) -> str:
        return normalize_ticker(self.ticker)

    @property
    def is_cash(self) -> bool:
        return self.normalized_ticker == "CASH"


@dataclass(frozen=True)
class AssetClassification:
    """Classification attached to a single position"""
    asset_class: AssetClass
    hedge_index: HedgeIndex
    commodity: Optional[str] = None      # Set only when asset_class is COMMODITY

    @property
    def is_commodity(self) -> bool:
        return self.asset_class == AssetClass.COMMODITY

    @property
    def is_cash(self) -> bool:
        return self.asset_class == AssetClass.CASH


@dataclass(frozen=True)
class ClassifiedPosition:
    """A position with its classification and USD-converted value"""
    position: RawPosition
    classification: AssetClassification
    value_usd: float = 0.0

    @property
    def ticker(self) -> str:
        return self.position.normalized_ticker


@dataclass(frozen=True)
class EquityExposure:
    """
    A NASDAQ or S&P 500 bucketed equity position with its beta.

    beta_adjusted_exposure_usd = value_usd × beta
    """
    position: RawPosition
    classification: AssetClassification
    value_usd: float
    beta: float
    beta_adjusted_exposure_usd: float

    @property
    def ticker(self) -> str:
        return self.position.normalized_ticker
