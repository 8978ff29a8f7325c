"""Time-bounded discounts and the price in force at a given instant.

An item is on discount when the operator enabled it, a discount price is set,
and ``now`` falls inside the optional window. Either bound may be missing:
a missing start means "since forever", a missing end means "until further
notice". Both bounds are inclusive.

Naive timestamps (as entered through the operator's ``datetime-local``
fields) are read as UTC.
"""

from datetime import UTC, datetime
from enum import Enum

from catalogue.shared.money import parse_amount, round_money


class DiscountMode(Enum):
    """How the operator expresses a discount."""

    FIXED = "fixed"  # the final price
    AMOUNT = "amount"  # pesos off the base price
    PERCENTAGE = "percentage"  # percent off the base price


def _aware(moment):
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def is_discount_active(item, now=None) -> bool:
    """Decide whether ``item``'s discount is in force at ``now``."""
    if not item.discount_active or item.discount_price is None:
        return False

    now = _aware(now or datetime.now(UTC))
    start = item.discount_start_date
    end = item.discount_end_date

    if start is not None and now < _aware(start):
        return False
    if end is not None and now > _aware(end):
        return False
    return True


def effective_price(item, now=None) -> float:
    """Return the unit price in force for ``item`` at ``now``."""
    if is_discount_active(item, now):
        return item.discount_price
    return item.base_price


def derive_discount_price(base_price, mode, value):
    """Compute the discounted price from an operator's discount input.

    Returns the final price, floored at zero and rounded to two decimals, or
    ``None`` when the input is not a number (the discount field is cleared).
    """
    amount = parse_amount(value)
    base = parse_amount(base_price)
    if amount is None or base is None:
        return None

    mode = DiscountMode(mode)
    if mode is DiscountMode.FIXED:
        price = amount
    elif mode is DiscountMode.AMOUNT:
        price = base - amount
    else:
        price = base * (1 - amount / 100)

    return round_money(max(0.0, price))
