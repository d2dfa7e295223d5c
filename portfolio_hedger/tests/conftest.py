"""
Test Fixtures - Shared across all unit tests.

Provides:
- The bundled hedge configuration (loaded once per session)
- Sample portfolios with hand-computed exposures
- Known constants for reproducibility
"""

import pytest
from pathlib import Path

import portfolio_hedger.config as hedge_config_package
from portfolio_hedger.config.hedge_config_loader import HedgeConfigLoader
from portfolio_hedger.core.models.positions import RawPosition, currency_for_ticker
from portfolio_hedger.services.market_data import FuturesPriceBook


# =============================================================================
# Known constants for deterministic tests
# =============================================================================

BUNDLED_CONFIG_PATH = Path(hedge_config_package.__file__).parent / 'hedge_config.yaml'

KNOWN_PORTFOLIO_VALUE = 1_000_000.0
KNOWN_NQ_PRICE = 21_500.0
KNOWN_NQ_MULTIPLIER = 20
KNOWN_NQ_MARGIN = 18_000.0
KNOWN_AUD_USD = 0.63
KNOWN_NVDA_BETA = 1.7

# Mixed portfolio, hand-computed (see mixed_positions)
MIXED_NASDAQ_NOTIONAL = 331_500.0        # NVDA 300,000 + XRO 50,000 AUD × 0.63
MIXED_NASDAQ_BETA_ADJ = 550_950.0        # 300,000 × 1.7 + 31,500 × 1.3
MIXED_SP500_NOTIONAL = 200_000.0
MIXED_SP500_BETA_ADJ = 220_000.0         # JPM beta 1.1
MIXED_ASX_NOTIONAL = 94_500.0            # CBA 150,000 AUD × 0.63
MIXED_OTHER_NOTIONAL = 50_000.0          # CAD passes through unconverted
MIXED_COMMODITY_USD = 163_000.0          # NEM 100,000 + BHP 100,000 AUD × 0.63
MIXED_PORTFOLIO_BETA = 0.851275          # (550,950 + 220,000 + 94,500 × 0.85) / 1,000,000


def make_position(ticker, value, name="", currency=None, weight=0.0, is_futures=False):
    """Build a RawPosition with the currency derived from the ticker."""
    return RawPosition(
        ticker=ticker,
        name=name,
        currency=currency or currency_for_ticker(ticker),
        market_value=value,
        current_price=100.0,
        cost_price=90.0,
        quantity=value / 100.0,
        portfolio_weight=weight,
        is_futures=is_futures,
    )


# =============================================================================
# Configuration fixtures
# =============================================================================

@pytest.fixture(scope='session')
def hedge_config():
    """The bundled hedge_config.yaml."""
    return HedgeConfigLoader().load(str(BUNDLED_CONFIG_PATH))


@pytest.fixture
def price_book(hedge_config):
    """Reference prices only (no live quotes)."""
    return FuturesPriceBook({}, hedge_config)


@pytest.fixture
def live_price_book(hedge_config):
    """Live NQ and VIX quotes, everything else on fallback."""
    return FuturesPriceBook({'NQ': KNOWN_NQ_PRICE, 'VIX': 20.0}, hedge_config)


# =============================================================================
# Portfolio fixtures
# =============================================================================

@pytest.fixture
def nvda_positions():
    """Single NASDAQ position worth the whole portfolio."""
    return [make_position('NVDA', 1_000_000.0, name='NVIDIA Corp', weight=100.0)]


@pytest.fixture
def mixed_positions():
    """
    One position per bucket plus lines the aggregator must skip.

    NVDA (NASDAQ), JPM (S&P), NEM (gold), BHP.AX (iron ore, AUD),
    CBA.AX (ASX), XRO.AX (NASDAQ-correlated ASX), SHOP.TO (CAD -> OTHER),
    CASH and a futures line.
    """
    return [
        make_position('NVDA', 300_000.0, name='NVIDIA Corp', weight=30.0),
        make_position('JPM', 200_000.0, name='JPMorgan Chase', weight=20.0),
        make_position('NEM', 100_000.0, name='Newmont Corp', weight=10.0),
        make_position('BHP.AX', 100_000.0, name='BHP Group', weight=10.0),
        make_position('CBA.AX', 150_000.0, name='Commonwealth Bank', weight=15.0),
        make_position('XRO.AX', 50_000.0, name='Xero', weight=5.0),
        make_position('SHOP.TO', 50_000.0, name='Shopify', currency='CAD', weight=5.0),
        make_position('CASH', 50_000.0, name='Cash', weight=5.0),
        make_position('NQH6', 430_000.0, name='NQ Mar 26', is_futures=True),
    ]
