"""
Functional Calculation Layer - Pure Functions for Hedge Sizing

Separate DATA (positions.py, exposure.py) from CALCULATIONS (this file).
Every function here is deterministic and never raises on degenerate input.
"""

import math


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer; .5 goes away from zero (2.5 -> 3, -2.5 -> -3)."""
    if value != value or math.isinf(value):
        return 0
    rounded = math.floor(abs(value) + 0.5)
    return int(rounded) if value >= 0 else -int(rounded)


def contracts_for_exposure(exposure: float, price: float, multiplier: float) -> int:
    """
    Whole futures contracts covering ``exposure``.

    contracts = round(exposure / (price × multiplier)); 0 when the contract
    value is not positive.
    """
    contract_value = price * multiplier
    if contract_value <= 0:
        return 0
    return round_half_away_from_zero(exposure / contract_value)
