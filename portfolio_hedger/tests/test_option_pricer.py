"""
Tests for Black-Scholes pricing and option hedging strategies.

Validates:
- Normal CDF approximation accuracy and symmetry
- Textbook reference prices and put-call parity
- Degenerate inputs price to 0
- Strike selection and strategy premiums across expiries
"""

import math
import pytest

from portfolio_hedger.analytics.pricing import (
    OptionPricer,
    OptionStrategyPricer,
    StrategyType,
    normal_cdf,
)
from portfolio_hedger.tests.conftest import KNOWN_NQ_PRICE


class TestNormalCdf:

    @pytest.mark.parametrize('x,expected', [
        (0.0, 0.5),
        (1.0, 0.8413447461),
        (1.96, 0.9750021049),
        (-1.645, 0.0499849055),
        (3.0, 0.9986501020),
    ])
    def test_reference_values(self, x, expected):
        assert normal_cdf(x) == pytest.approx(expected, abs=2e-7)

    @pytest.mark.parametrize('x', [0.1, 0.5, 1.3, 2.7, 6.0])
    def test_symmetry(self, x):
        assert normal_cdf(x) + normal_cdf(-x) == pytest.approx(1.0, abs=1e-15)

    def test_tails(self):
        assert normal_cdf(40.0) == pytest.approx(1.0)
        assert normal_cdf(-40.0) == pytest.approx(0.0, abs=1e-15)


class TestBlackScholes:

    def test_textbook_call(self):
        """S=100, K=100, T=1, r=5%, vol=20% -> 10.45."""
        assert OptionPricer.call_price(100, 100, 1.0, 0.2, 0.05) == pytest.approx(10.45, abs=0.01)

    def test_textbook_put(self):
        assert OptionPricer.put_price(100, 100, 1.0, 0.2, 0.05) == pytest.approx(5.57, abs=0.01)

    @pytest.mark.parametrize('spot,strike,tte,vol,rate', [
        (100, 100, 1.0, 0.2, 0.05),
        (21500, 20425, 30 / 365, 0.18, 0.045),
        (50, 80, 0.25, 0.6, 0.01),
        (4.5, 4.2, 2.0, 0.35, 0.0),
        (6000, 6600, 90 / 365, 0.12, 0.045),
    ])
    def test_put_call_parity(self, spot, strike, tte, vol, rate):
        call = OptionPricer.call_price(spot, strike, tte, vol, rate)
        put = OptionPricer.put_price(spot, strike, tte, vol, rate)
        parity = spot - strike * math.exp(-rate * tte)
        assert call - put == pytest.approx(parity, rel=1e-9, abs=1e-9)

    @pytest.mark.parametrize('spot,strike,tte,vol', [
        (100, 100, 0.0, 0.2),
        (100, 100, -1.0, 0.2),
        (100, 100, 1.0, 0.0),
        (0, 100, 1.0, 0.2),
        (100, 0, 1.0, 0.2),
    ])
    def test_degenerate_inputs_price_zero(self, spot, strike, tte, vol):
        assert OptionPricer.price('call', spot, strike, tte, vol) == 0.0
        assert OptionPricer.price('put', spot, strike, tte, vol) == 0.0

    def test_returns_plain_float(self):
        assert type(OptionPricer.call_price(100, 100, 1.0, 0.2)) is float

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            OptionPricer.price('straddle', 100, 100, 1.0, 0.2)


@pytest.fixture
def strategy_pricer(hedge_config):
    return OptionStrategyPricer(hedge_config)


class TestStrikes:

    def test_rounded_strikes(self, strategy_pricer):
        puts, call = strategy_pricer.strikes(KNOWN_NQ_PRICE)
        assert puts == [20425, 19350, 18275]
        assert call == 23650

    def test_half_point_rounds_up(self, strategy_pricer):
        # 21,505 x 0.90 = 19,354.5
        puts, _ = strategy_pricer.strikes(21_505.0)
        assert puts[1] == 19355

    def test_contracts_needed(self, strategy_pricer):
        assert strategy_pricer.contracts_needed(1_700_000.0, KNOWN_NQ_PRICE) == 4
        assert strategy_pricer.contracts_needed(1_700_000.0, 0.0) == 0


class TestStrategies:

    def test_expiries(self, strategy_pricer):
        result = strategy_pricer.price_strategies(KNOWN_NQ_PRICE, 0.18, 2)
        assert [e.days for e in result.expiries] == [30, 90]
        assert result.expiries[0].time_to_expiry == pytest.approx(30 / 365)
        assert result.for_days(90).label == '90-day'
        assert result.for_days(45) is None

    def test_strategy_formulas(self, strategy_pricer):
        expiry = strategy_pricer.price_strategies(KNOWN_NQ_PRICE, 0.18, 2).for_days(30)
        put5, put10, put15 = expiry.put_prices

        spread = expiry.quote(StrategyType.PUT_SPREAD)
        assert spread.premium_per_point == pytest.approx(put5 - put15)
        assert spread.per_contract == pytest.approx((put5 - put15) * 20)
        assert spread.total == pytest.approx((put5 - put15) * 20 * 2)

        collar = expiry.quote(StrategyType.COLLAR)
        assert collar.per_contract == pytest.approx((put5 - expiry.call_price) * 20)

        assert expiry.quote(StrategyType.PROTECTIVE_PUT_10).per_contract == pytest.approx(put10 * 20)

    def test_premium_ordering(self, strategy_pricer):
        result = strategy_pricer.price_strategies(KNOWN_NQ_PRICE, 0.18, 1)
        short, long = result.for_days(30), result.for_days(90)
        put5, put10, put15 = short.put_prices
        assert put5 > put10 > put15 > 0
        assert long.put_prices[0] > put5
        assert 0 < short.quote(StrategyType.PUT_SPREAD).per_contract < short.quote(StrategyType.PROTECTIVE_PUT_5).per_contract

    def test_collar_is_debit_at_90_days(self, strategy_pricer):
        """
        NQ 21,500, IV 18%, 90 days, r 4.5%:
        20,425 put ~266.9, 23,650 call ~186.1 -> collar costs ~80.8 points.
        """
        expiry = strategy_pricer.price_strategies(KNOWN_NQ_PRICE, 0.18, 1).for_days(90)
        quote = expiry.quote(StrategyType.COLLAR)
        assert expiry.put_prices[0] == pytest.approx(266.9, abs=1)
        assert expiry.call_price == pytest.approx(186.1, abs=1)
        assert quote.premium_per_point == pytest.approx(expiry.put_prices[0] - expiry.call_price)
        assert quote.premium_per_point == pytest.approx(80.8, abs=2)
        assert not quote.is_credit
        assert quote.debit_credit == 'debit'
        assert quote.label == 'Collar (Buy 5% Put, Sell 10% Call)'

    def test_zero_volatility(self, strategy_pricer):
        result = strategy_pricer.price_strategies(KNOWN_NQ_PRICE, 0.0, 2)
        for expiry in result.expiries:
            assert all(q.total == 0.0 for q in expiry.quotes.values())

    def test_zero_spot(self, strategy_pricer):
        result = strategy_pricer.price_strategies(0.0, 0.18, 0)
        assert result.for_days(30).put_strikes == [0, 0, 0]
        assert all(q.per_contract == 0.0 for q in result.for_days(30).quotes.values())
