"""
Data Validation - Coerce caller data into well-formed values

A malformed field never aborts an analytics run: numbers that cannot be
parsed become 0, missing text becomes an empty string.
"""

from dataclasses import replace
import logging
import math
from typing import Any, List, Tuple

from portfolio_hedger.core.models.positions import RawPosition

logger = logging.getLogger(__name__)


def to_float(value: Any, field_name: str = "value") -> float:
    """
    Coerce a number-like value to a finite float.

    None, empty strings, non-numeric strings, NaN and infinities become 0.0.
    Strings may carry thousands separators, a leading ``$`` or a trailing ``%``.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        result = float(value)
    else:
        text = str(value).strip().replace(",", "").lstrip("$").rstrip("%")
        if not text:
            return 0.0
        try:
            result = float(text)
        except ValueError:
            logger.debug(f"Coercing non-numeric {field_name}={value!r} to 0")
            return 0.0

    if math.isnan(result) or math.isinf(result):
        logger.debug(f"Coercing non-finite {field_name}={value!r} to 0")
        return 0.0
    return result


def to_text(value: Any) -> str:
    """Coerce to a stripped string; None becomes empty."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "y")
    return bool(value)


class PositionValidator:
    """Validate position data integrity"""

    @staticmethod
    def validate_position(position: RawPosition) -> Tuple[bool, List[str]]:
        """
        Validate a single position

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if not position.ticker:
            errors.append("Missing ticker")

        if position.market_value == 0:
            errors.append("Zero market value")

        if position.current_price < 0:
            errors.append("Negative current price")

        if position.quantity == 0 and position.market_value != 0:
            errors.append("Market value with zero quantity")

        return (len(errors) == 0, errors)

    @staticmethod
    def coerce_position(position: RawPosition) -> RawPosition:
        """
        Return a copy of a caller-built position with every field well-formed.

        Nulls and non-numeric strings become 0 or "", so one bad line never
        stops the rest of the portfolio from being analysed.
        """
        return replace(
            position,
            ticker=to_text(position.ticker),
            name=to_text(position.name),
            currency=to_text(position.currency).upper(),
            market_value=to_float(position.market_value, "market_value"),
            current_price=to_float(position.current_price, "current_price"),
            cost_price=to_float(position.cost_price, "cost_price"),
            quantity=to_float(position.quantity, "quantity"),
            portfolio_weight=to_float(position.portfolio_weight, "portfolio_weight"),
            pnl_percent=to_float(position.pnl_percent, "pnl_percent"),
            is_futures=to_bool(position.is_futures),
        )
