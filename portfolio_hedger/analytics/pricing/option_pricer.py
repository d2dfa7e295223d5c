"""
Option Pricer - Black-Scholes pricing for options

Pure function: given inputs → price (no side effects)

The cumulative normal is a closed-form rational approximation
(Abramowitz & Stegun 7.1.26, |error| < 1.5e-7), so pricing needs numpy only.
"""

import math
from typing import Literal

import numpy as np

# Abramowitz & Stegun 7.1.26 coefficients for erf
_AS_P = 0.3275911
_AS_A = (0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429)


def normal_cdf(x: float) -> float:
    """
    Standard normal cumulative distribution N(x).

    N(x) = (1 + sign(x) · erf(|x| / √2)) / 2, with erf from A&S 7.1.26.
    Symmetric by construction: N(x) + N(-x) == 1.
    """
    z = abs(x) / math.sqrt(2.0)
    t = 1.0 / (1.0 + _AS_P * z)
    poly = t * (_AS_A[0] + t * (_AS_A[1] + t * (_AS_A[2] + t * (_AS_A[3] + t * _AS_A[4]))))
    erf = 1.0 - poly * math.exp(-z * z)
    return 0.5 * (1.0 + erf) if x >= 0 else 0.5 * (1.0 - erf)


class OptionPricer:
    """Black-Scholes option pricing"""

    @staticmethod
    def price(
        option_type: Literal['call', 'put'],
        spot_price: float,
        strike: float,
        time_to_expiry: float,
        volatility: float,
        risk_free_rate: float = 0.045
    ) -> float:
        """
        Calculate option price using Black-Scholes-Merton (no dividend yield)

        Args:
            option_type: 'call' or 'put'
            spot_price: Current underlying price
            strike: Strike price
            time_to_expiry: Time to expiration (years)
            volatility: Implied volatility (annualized)
            risk_free_rate: Risk-free rate (annualized)

        Returns:
            Option price per point of the underlying. 0 for degenerate
            inputs (T <= 0, vol <= 0, spot <= 0 or strike <= 0).
        """
        if time_to_expiry <= 0 or volatility <= 0 or spot_price <= 0 or strike <= 0:
            return 0.0

        sqrt_t = np.sqrt(time_to_expiry)
        d1 = (np.log(spot_price / strike) +
              (risk_free_rate + 0.5 * volatility**2) * time_to_expiry) / (volatility * sqrt_t)
        d2 = d1 - volatility * sqrt_t

        discounted_strike = strike * np.exp(-risk_free_rate * time_to_expiry)

        if option_type == 'call':
            price = spot_price * normal_cdf(d1) - discounted_strike * normal_cdf(d2)
        elif option_type == 'put':
            price = discounted_strike * normal_cdf(-d2) - spot_price * normal_cdf(-d1)
        else:
            raise ValueError(f"Unknown option type: {option_type}")

        return float(price)

    @staticmethod
    def call_price(spot: float, strike: float, tte: float, vol: float, rate: float = 0.045) -> float:
        return OptionPricer.price('call', spot, strike, tte, vol, rate)

    @staticmethod
    def put_price(spot: float, strike: float, tte: float, vol: float, rate: float = 0.045) -> float:
        return OptionPricer.price('put', spot, strike, tte, vol, rate)
