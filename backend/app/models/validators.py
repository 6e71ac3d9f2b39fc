"""Column validators shared by the record models.

Used from ``@validates`` hooks so a bad price, quantity or item list is
rejected before it is flushed to the record store.
"""

from decimal import Decimal


def _as_decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def non_negative(key: str, value):
    """Reject prices, totals and point balances below zero."""
    if value is not None and _as_decimal(value) < 0:
        raise ValueError(f"{key} cannot be negative, got {value}")
    return value


def positive(key: str, value):
    """Reject quantities and seat counts of zero or less."""
    if value is not None and _as_decimal(value) <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


def validate_list_of_dicts(key: str, value):
    """An order's ``items`` column must hold a list of line dicts."""
    if value is None:
        return value
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list, got {type(value).__name__}")
    for index, line in enumerate(value):
        if not isinstance(line, dict):
            raise ValueError(f"{key}[{index}] must be a dict, got {type(line).__name__}")
    return value
