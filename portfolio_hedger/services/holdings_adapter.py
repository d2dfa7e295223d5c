"""
Holdings Adapter: convert a holdings snapshot into RawPositions.

Accepts the dashboard holdings shape (camelCase) as well as snake_case keys:

    {"ticker": "BHP.AX", "name": "BHP Group", "shares": 1000, "avgCost": 42.1,
     "currentPrice": 45.3, "value": 45300, "pnlPercent": 7.6}

Usage:
    from portfolio_hedger.services.holdings_adapter import HoldingsAdapter

    positions = HoldingsAdapter().adapt(holdings, total_value=250_000)
"""

from typing import Any, Iterable, List, Mapping, Optional, Sequence
import logging

from portfolio_hedger.core.models.positions import RawPosition, currency_for_ticker
from portfolio_hedger.core.validation import PositionValidator, to_bool, to_float, to_text

logger = logging.getLogger(__name__)


# field -> accepted keys, first present wins
FIELD_ALIASES = {
    "ticker": ("ticker", "symbol"),
    "name": ("name",),
    "shares": ("shares", "quantity"),
    "avg_cost": ("avgCost", "avg_cost", "cost_price"),
    "current_price": ("currentPrice", "current_price", "price"),
    "value": ("value", "market_value", "marketValue"),
    "pnl_percent": ("pnlPercent", "pnl_percent"),
    "currency": ("currency",),
    "is_futures": ("isFutures", "is_futures"),
}


def _field(record: Mapping[str, Any], name: str) -> Any:
    for key in FIELD_ALIASES[name]:
        if key in record and record[key] is not None:
            return record[key]
    return None


class HoldingsAdapter:
    """Build engine input positions from caller holdings records."""

    def adapt_record(self, record: Mapping[str, Any], total_value: float) -> RawPosition:
        ticker = to_text(_field(record, "ticker")).upper()
        value = to_float(_field(record, "value"), "value")
        cost = to_float(_field(record, "avg_cost"), "avgCost")
        current = to_float(_field(record, "current_price"), "currentPrice") or cost
        currency = to_text(_field(record, "currency")).upper() or currency_for_ticker(ticker)

        return RawPosition(
            ticker=ticker,
            name=to_text(_field(record, "name")) or ticker,
            currency=currency,
            market_value=value,
            current_price=current,
            cost_price=cost,
            quantity=to_float(_field(record, "shares"), "shares"),
            portfolio_weight=(value / total_value) * 100 if total_value > 0 else 0.0,
            pnl_percent=to_float(_field(record, "pnl_percent"), "pnlPercent"),
            is_futures=to_bool(_field(record, "is_futures")),
        )

    def adapt(self, holdings: Optional[Iterable[Any]], total_value: Any = None) -> List[RawPosition]:
        """
        Convert holdings into positions.

        Args:
            holdings: Iterable of mapping records
            total_value: Portfolio value for weights (defaults to the sum of values)

        Returns:
            Positions in input order; records that are not mappings are skipped
        """
        records: Sequence[Any] = list(holdings or [])
        if total_value is None:
            total = self.total_value(records)
        else:
            total = to_float(total_value, "total_value")

        positions = []
        for i, record in enumerate(records):
            if not isinstance(record, Mapping):
                logger.warning(f"Skipping holding #{i}: expected a mapping, got {type(record).__name__}")
                continue
            position = self.adapt_record(record, total)
            is_valid, errors = PositionValidator.validate_position(position)
            if not is_valid:
                logger.debug(f"Holding #{i} ({position.ticker or 'no ticker'}): {', '.join(errors)}")
            positions.append(position)

        logger.debug(f"Adapted {len(positions)}/{len(records)} holdings (total value {total:,.2f})")
        return positions

    @staticmethod
    def total_value(records: Iterable[Any]) -> float:
        """Sum of record values, ignoring malformed records."""
        return sum(
            to_float(_field(r, "value"), "value") for r in records if isinstance(r, Mapping)
        )
