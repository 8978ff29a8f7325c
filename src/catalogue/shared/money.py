"""Helpers for monetary amounts.

Amounts are plain floats in the shop's single currency, rounded to centavos
where a price is stored and to whole units where the shop charges a fee.
"""

import math

CENTS = 2


def parse_amount(value):
    """Parse operator or customer input into a number.

    Returns ``None`` for anything that is not a finite number (empty strings,
    free text, NaN). Booleans are rejected even though Python treats them as
    integers.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    return amount


def round_money(amount: float) -> float:
    """Round to two decimal places."""
    return round(amount, CENTS)


def ceil_money(amount: float) -> int:
    """Round up to the nearest whole currency unit."""
    return math.ceil(amount)


def format_amount(amount: float) -> str:
    """Render an amount without a trailing ``.0`` for whole values.

    >>> format_amount(86.0)
    '86'
    >>> format_amount(172.5)
    '172.50'
    """
    amount = round_money(amount)
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:.2f}"
