"""
Option Strategy Pricer
======================

Prices protective option strategies on the primary equity-index future
(NQ by default) as an alternative to a short futures hedge:

    - Protective put, 5% OTM
    - Protective put, 10% OTM
    - Put spread, long 5% OTM put / short 15% OTM put
    - Collar, long 5% OTM put / short 10% OTM call

Each strategy is quoted per point, per contract (× multiplier) and in total
(× contracts needed to fully hedge the NASDAQ beta-adjusted exposure), at
each configured expiry.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional
import logging

from portfolio_hedger.analytics.pricing.option_pricer import OptionPricer
from portfolio_hedger.config.hedge_config_loader import HedgeConfig, OptionsConfig
from portfolio_hedger.core.models.calculations import contracts_for_exposure, round_half_away_from_zero

logger = logging.getLogger(__name__)


class StrategyType(Enum):
    PROTECTIVE_PUT_5 = "protective_put_5"
    PROTECTIVE_PUT_10 = "protective_put_10"
    PUT_SPREAD = "put_spread"
    COLLAR = "collar"


STRATEGY_LABELS: Dict[StrategyType, str] = {
    StrategyType.PROTECTIVE_PUT_5: "Protective Puts (5% OTM)",
    StrategyType.PROTECTIVE_PUT_10: "Protective Puts (10% OTM)",
    StrategyType.PUT_SPREAD: "Put Spread (5%-15% OTM)",
    StrategyType.COLLAR: "Collar (Buy 5% Put, Sell 10% Call)",
}


@dataclass(frozen=True)
class StrategyQuote:
    """One strategy priced at one expiry"""
    strategy: StrategyType
    premium_per_point: float
    per_contract: float
    total: float

    @property
    def label(self) -> str:
        return STRATEGY_LABELS[self.strategy]

    @property
    def is_credit(self) -> bool:
        """Net premium received (only a collar can be a credit)."""
        return self.per_contract < 0

    @property
    def debit_credit(self) -> str:
        return "credit" if self.is_credit else "debit"


@dataclass
class ExpiryStrategies:
    """Strikes, leg prices and strategy quotes for one expiry"""
    days: int
    time_to_expiry: float
    put_strikes: List[int] = field(default_factory=list)    # [5%, 10%, 15%] OTM
    call_strike: int = 0
    put_prices: List[float] = field(default_factory=list)
    call_price: float = 0.0
    quotes: Dict[StrategyType, StrategyQuote] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return f"{self.days}-day"

    def quote(self, strategy: StrategyType) -> StrategyQuote:
        return self.quotes[strategy]


@dataclass
class OptionStrategySet:
    """All strategies across all expiries"""
    underlying: str
    spot: float
    implied_volatility: float
    risk_free_rate: float
    multiplier: float
    contracts_needed: int
    volatility_is_live: bool = False
    expiries: List[ExpiryStrategies] = field(default_factory=list)

    def for_days(self, days: int) -> Optional[ExpiryStrategies]:
        for expiry in self.expiries:
            if expiry.days == days:
                return expiry
        return None


class OptionStrategyPricer:
    """
    Price option hedging strategies.

    Usage:
        pricer = OptionStrategyPricer(config)
        strategies = pricer.price_strategies(spot=21500, implied_volatility=0.18,
                                             contracts_needed=2)
        collar = strategies.for_days(90).quote(StrategyType.COLLAR)
    """

    def __init__(self, config: HedgeConfig):
        self.options: OptionsConfig = config.options
        spec = config.futures_spec(self.options.underlying)
        self.multiplier = spec.multiplier if spec else 0.0

    def contracts_needed(self, beta_adjusted_exposure: float, spot: float) -> int:
        """Contracts for a full (100%) hedge of the beta-adjusted exposure."""
        return contracts_for_exposure(beta_adjusted_exposure, spot, self.multiplier)

    def strikes(self, spot: float):
        """OTM put strikes and call strike, rounded to the nearest point."""
        puts = [round_half_away_from_zero(spot * f) for f in self.options.put_strike_factors]
        call = round_half_away_from_zero(spot * self.options.call_strike_factor)
        return puts, call

    def price_expiry(self, spot: float, days: int, implied_volatility: float, contracts_needed: int) -> ExpiryStrategies:
        t = days / self.options.days_per_year
        r = self.options.risk_free_rate
        put_strikes, call_strike = self.strikes(spot)

        put_prices = [OptionPricer.put_price(spot, k, t, implied_volatility, r) for k in put_strikes]
        call_price = OptionPricer.call_price(spot, call_strike, t, implied_volatility, r)
        put5, put10, put15 = (put_prices + [0.0, 0.0, 0.0])[:3]

        premiums = {
            StrategyType.PROTECTIVE_PUT_5: put5,
            StrategyType.PROTECTIVE_PUT_10: put10,
            StrategyType.PUT_SPREAD: put5 - put15,
            StrategyType.COLLAR: put5 - call_price,
        }

        quotes = {}
        for strategy, premium in premiums.items():
            per_contract = premium * self.multiplier
            quotes[strategy] = StrategyQuote(
                strategy=strategy,
                premium_per_point=premium,
                per_contract=per_contract,
                total=per_contract * contracts_needed,
            )

        return ExpiryStrategies(
            days=days,
            time_to_expiry=t,
            put_strikes=put_strikes,
            call_strike=call_strike,
            put_prices=put_prices,
            call_price=call_price,
            quotes=quotes,
        )

    def price_strategies(
        self,
        spot: float,
        implied_volatility: float,
        contracts_needed: int,
        volatility_is_live: bool = False
    ) -> OptionStrategySet:
        """
        Price every strategy at every configured expiry.

        Args:
            spot: Underlying futures price
            implied_volatility: Annualised volatility (VIX / 100)
            contracts_needed: Contracts for a full hedge
            volatility_is_live: Whether the volatility came from a live quote

        Returns:
            OptionStrategySet (all zero premiums for degenerate inputs)
        """
        result = OptionStrategySet(
            underlying=self.options.underlying,
            spot=spot,
            implied_volatility=implied_volatility,
            risk_free_rate=self.options.risk_free_rate,
            multiplier=self.multiplier,
            contracts_needed=contracts_needed,
            volatility_is_live=volatility_is_live,
        )
        result.expiries = [
            self.price_expiry(spot, days, implied_volatility, contracts_needed)
            for days in self.options.expiry_days
        ]

        logger.debug(
            f"Priced option strategies on {result.underlying} @ {spot:,.2f}, "
            f"iv={implied_volatility:.2%}, contracts={contracts_needed}"
        )
        return result
