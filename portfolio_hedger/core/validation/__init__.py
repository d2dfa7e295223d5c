from portfolio_hedger.core.validation.validators import (
    to_float,
    to_text,
    to_bool,
    PositionValidator,
)

__all__ = [
    'to_float',
    'to_text',
    'to_bool',
    'PositionValidator',
]
