"""
Tests for futures hedge sizing.

Validates:
- End-to-end NVDA scenario: $1.7M beta-adjusted at 50% -> 2 NQ
- 0% and 100% hedge boundaries
- Half-away-from-zero rounding, short exposures
- Commodity hedges and non-hedgeable commodities
- Margin totals and hedge summary lines
"""

import pytest

from portfolio_hedger.core.models.calculations import (
    contracts_for_exposure,
    round_half_away_from_zero,
)
from portfolio_hedger.core.models.exposure import ExposureBreakdown
from portfolio_hedger.services.exposure import ExposureAggregator
from portfolio_hedger.services.hedging import (
    FuturesHedgeSizer,
    HedgeParameters,
    HedgeTarget,
    MarginEstimator,
)
from portfolio_hedger.services.market_data import FuturesPriceBook
from portfolio_hedger.tests.conftest import (
    KNOWN_NQ_MARGIN,
    KNOWN_NQ_MULTIPLIER,
    KNOWN_NQ_PRICE,
    KNOWN_NVDA_BETA,
    KNOWN_PORTFOLIO_VALUE,
    make_position,
)


@pytest.fixture
def sizer(hedge_config):
    return FuturesHedgeSizer(hedge_config)


@pytest.fixture
def aggregator(hedge_config):
    return ExposureAggregator(hedge_config)


def _size(sizer, aggregator, positions, price_book, fraction=0.5, commodity_fractions=None, value=KNOWN_PORTFOLIO_VALUE):
    breakdown = aggregator.aggregate(positions, value)
    beta = KNOWN_NVDA_BETA
    params = HedgeParameters(equity_hedge_fraction=fraction, commodity_hedge_fractions=commodity_fractions or {})
    return sizer.size_hedges(breakdown, beta, price_book, params)


class TestRounding:

    @pytest.mark.parametrize('value,expected', [
        (0.0, 0), (0.49, 0), (0.5, 1), (1.5, 2), (2.5, 3),
        (-0.5, -1), (-1.5, -2), (-2.4, -2), (1.977, 2),
    ])
    def test_half_away_from_zero(self, value, expected):
        assert round_half_away_from_zero(value) == expected

    def test_non_finite(self):
        assert round_half_away_from_zero(float('nan')) == 0
        assert round_half_away_from_zero(float('inf')) == 0

    def test_contracts_guard_zero_price(self):
        assert contracts_for_exposure(1_000_000.0, 0.0, 20) == 0

    def test_contracts_exact_half(self):
        """645,000 / 430,000 = 1.5 -> 2."""
        assert contracts_for_exposure(645_000.0, KNOWN_NQ_PRICE, KNOWN_NQ_MULTIPLIER) == 2


class TestEquityHedges:

    def test_nvda_end_to_end(self, sizer, aggregator, nvda_positions, live_price_book):
        """$1M NVDA, beta 1.7, 50% hedge, NQ 21,500 x 20 -> 2 contracts."""
        rec = _size(sizer, aggregator, nvda_positions, live_price_book)
        nq = rec.nasdaq
        assert nq.exposure_usd == pytest.approx(1_700_000.0)
        assert nq.exposure_to_hedge == pytest.approx(850_000.0)
        assert nq.contract_value == pytest.approx(430_000.0)
        assert nq.contracts == 2
        assert nq.action == 'SELL'
        assert nq.margin == pytest.approx(2 * KNOWN_NQ_MARGIN)
        assert rec.total_margin == pytest.approx(2 * KNOWN_NQ_MARGIN)
        assert rec.hedged_beta == pytest.approx(0.85)

    def test_zero_hedge(self, sizer, aggregator, mixed_positions, live_price_book):
        rec = _size(sizer, aggregator, mixed_positions, live_price_book, fraction=0.0,
                    commodity_fractions={'gold': 0.0, 'iron_ore': 0.0})
        assert all(h.contracts == 0 for h in rec.all_hedges)
        assert rec.total_margin == 0.0
        assert rec.summary_lines() == []

    def test_full_hedge_exposure(self, sizer, aggregator, mixed_positions, live_price_book):
        breakdown = aggregator.aggregate(mixed_positions, KNOWN_PORTFOLIO_VALUE)
        rec = sizer.size_hedges(breakdown, 1.0, live_price_book, HedgeParameters(equity_hedge_fraction=1.0))
        assert rec.nasdaq.exposure_to_hedge == pytest.approx(breakdown.nasdaq_totals.beta_adjusted_usd)
        assert rec.sp500.exposure_to_hedge == pytest.approx(breakdown.sp500_totals.beta_adjusted_usd)
        assert rec.commodities['gold'].exposure_to_hedge == pytest.approx(100_000.0)
        assert rec.hedged_beta == 0.0

    def test_sp500_uses_es(self, sizer, aggregator, price_book):
        # JPM beta 1.1: 1,000,000 x 1.1 x 0.5 = 550,000 / (6,000 x 50) = 1.83 -> 2
        rec = _size(sizer, aggregator, [make_position('JPM', 1_000_000.0)], price_book)
        assert rec.sp500.instrument_symbol == 'ES'
        assert rec.sp500.contracts == 2
        assert rec.nasdaq.contracts == 0

    def test_short_exposure_buys(self, sizer, aggregator, live_price_book):
        # -500,000 x 1.7 x 0.5 = -425,000 / 430,000 -> -1
        rec = _size(sizer, aggregator, [make_position('NVDA', -500_000.0)], live_price_book)
        assert rec.nasdaq.contracts == -1
        assert rec.nasdaq.action == 'BUY'
        assert rec.total_margin == pytest.approx(KNOWN_NQ_MARGIN)
        assert rec.summary_lines()[0].direction == 'Long'

    def test_missing_price_zero_contracts(self, hedge_config, sizer, aggregator, nvda_positions):
        """A contract without a usable price never divides by zero."""
        book = FuturesPriceBook({}, hedge_config)
        book.specs = {}
        rec = _size(sizer, aggregator, nvda_positions, book)
        assert rec.nasdaq.price == 0.0
        assert rec.nasdaq.contracts == 0


class TestCommodityHedges:

    def test_gold_default_full_hedge(self, sizer, aggregator, price_book):
        # 600,000 / (2,900 x 100) = 2.07 -> 2
        rec = _size(sizer, aggregator, [make_position('NEM', 600_000.0)], price_book)
        gold = rec.commodities['gold']
        assert gold.target == HedgeTarget.COMMODITY
        assert gold.instrument_symbol == 'GC'
        assert gold.hedge_fraction == 1.0
        assert gold.contracts == 2
        assert rec.total_margin == pytest.approx(22_000.0)

    def test_commodity_fraction(self, sizer, aggregator, price_book):
        rec = _size(sizer, aggregator, [make_position('NEM', 600_000.0)], price_book,
                    commodity_fractions={'gold': 0.5})
        assert rec.commodities['gold'].contracts == 1

    def test_non_hedgeable(self, sizer, aggregator, price_book):
        rec = _size(sizer, aggregator, [make_position('BHP.AX', 1_000_000.0)], price_book)
        iron = rec.commodities['iron_ore']
        assert not iron.hedgeable
        assert iron.exposure_usd == pytest.approx(630_000.0)
        assert iron.contracts == 0
        assert iron.margin == 0.0
        assert rec.non_hedgeable == [iron]
        assert iron.label == 'Iron Ore exposure'


class TestRecommendation:

    def test_summary_lines(self, sizer, aggregator, live_price_book):
        positions = [make_position('NVDA', 1_000_000.0), make_position('NEM', 600_000.0)]
        rec = _size(sizer, aggregator, positions, live_price_book, value=1_600_000.0)
        lines = rec.summary_lines()
        assert [l.instrument for l in lines] == ['NQ E-mini NASDAQ 100', 'GC COMEX Gold']
        assert lines[0].direction == 'Short'
        assert lines[0].notional == pytest.approx(860_000.0)
        assert lines[1].hedges == 'Gold exposure'
        assert rec.total_notional == pytest.approx(860_000.0 + 580_000.0)
        assert rec.notional_to_portfolio == pytest.approx(1_440_000.0 / 1_600_000.0)
        assert rec.margin_to_portfolio == pytest.approx(58_000.0 / 1_600_000.0)

    def test_empty_breakdown(self, sizer, price_book):
        rec = sizer.size_hedges(ExposureBreakdown(), 0.0, price_book)
        assert rec.commodities == {}
        assert rec.total_margin == 0.0
        assert rec.notional_to_portfolio == 0.0
        assert rec.margin_to_portfolio == 0.0


class TestHedgeParameters:

    def test_clamped(self):
        params = HedgeParameters(equity_hedge_fraction=1.5, commodity_hedge_fractions={'gold': -0.2})
        assert params.equity_hedge_fraction == 1.0
        assert params.commodity_fraction('gold') == 0.0

    def test_from_percentages(self):
        params = HedgeParameters.from_percentages(75, {'copper': 40})
        assert params.equity_hedge_fraction == pytest.approx(0.75)
        assert params.commodity_fraction('copper') == pytest.approx(0.40)
        assert params.commodity_fraction('gold') == 1.0


class TestMargin:

    def test_hedge_margin_absolute(self):
        assert MarginEstimator.hedge_margin(-3, 1_000.0) == 3_000.0

    def test_breakdown_by_instrument(self, sizer, aggregator, live_price_book):
        positions = [make_position('NVDA', 1_000_000.0), make_position('NEM', 600_000.0)]
        rec = _size(sizer, aggregator, positions, live_price_book, value=1_600_000.0)
        requirement = MarginEstimator().estimate(rec.all_hedges)
        assert requirement.by_instrument == {'NQ': 36_000.0, 'GC': 22_000.0}
        assert requirement.initial_margin == rec.total_margin

    def test_no_contracts_note(self):
        requirement = MarginEstimator().estimate([])
        assert requirement.initial_margin == 0.0
        assert requirement.notes

    def test_utilization(self):
        assert MarginEstimator().margin_utilization(36_000.0, 0.0) == 0.0
        assert MarginEstimator().margin_utilization(36_000.0, 360_000.0) == pytest.approx(0.1)
