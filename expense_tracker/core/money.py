from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

Number = Union[int, float, Decimal]

CENT = Decimal("0.01")
TENTH = Decimal("0.1")


def to_decimal(value: Number) -> Decimal:
    # str() first so 0.1 stays 0.1 instead of its binary expansion
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def total(values: Iterable[Number]) -> Decimal:
    return sum((to_decimal(v) for v in values), Decimal("0"))


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_tenth(value: Decimal) -> Decimal:
    return value.quantize(TENTH, rounding=ROUND_HALF_UP)


def percent_of(part: Decimal, whole: Decimal) -> Optional[Decimal]:
    """``part / whole * 100``; None when ``whole`` is zero."""
    if whole == 0:
        return None
    return part / whole * 100


def format_currency(amount: Number, symbol: str = "$") -> str:
    """Format as currency string, e.g. '$1,234.56' or '-$50.00'."""
    amount = round_money(to_decimal(amount))
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percentage(value: Optional[Number], placeholder: str = "--") -> str:
    if value is None:
        return placeholder
    return f"{round_tenth(to_decimal(value))}%"
