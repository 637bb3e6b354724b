"""Helper functions for money, rental duration and rental id calculations."""

import re
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

_DIGITS = re.compile(r"[0-9]+")


def to_money(value: Union[Decimal, float, int, str]) -> Decimal:
    """
    Convert a value to a Decimal currency amount rounded to cents.

    Floats go through str() so 49.99 stays 49.99 instead of its binary
    approximation. Raises ValueError for anything that isn't a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a currency amount: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError):
        raise ValueError(f"Not a currency amount: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"Not a currency amount: {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    """Format a currency amount with exactly two decimals (no symbol)."""
    return f"{to_money(amount):.2f}"


def rental_days(start_date: date, end_date: date) -> int:
    """
    Number of billable days between two dates.

    A rental that starts and ends on the same day still bills one day.
    """
    return max(1, (end_date - start_date).days)


def calc_rental_cost(daily_rate: Decimal, start_date: date, end_date: date) -> Decimal:
    """Total cost: daily rate x billable days, rounded to cents."""
    return to_money(to_money(daily_rate) * rental_days(start_date, end_date))


def parse_id_number(record_id: str) -> int:
    """
    Numeric part of a prefixed id such as 'R042'.

    The first character is treated as the prefix. Anything that isn't a plain
    run of digits after it counts as 0.
    """
    rest = record_id[1:] if record_id else ""
    if _DIGITS.fullmatch(rest):
        return int(rest)
    return 0


def next_rental_id(existing_ids: Iterable[str], prefix: str = "R", width: int = 3) -> str:
    """Next id after the highest existing one: {R001, R002, R004} -> R005."""
    highest = max((parse_id_number(i) for i in existing_ids), default=0)
    return f"{prefix}{highest + 1:0{width}d}"
