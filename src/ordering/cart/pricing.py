"""Price composition for cart lines and cart totals.

A line's unit price is the selected variation's price (which replaces the
item price) or the item's effective price, plus each add-on's price times the
number of times it was chosen. Add-on prices are per unit of the line, so the
line quantity multiplies the whole unit price, add-ons included.
"""

from catalogue.item.discount import effective_price
from catalogue.shared.money import round_money
from ordering.cart.identity import group_add_ons


def unit_price(item, variation=None, add_ons=None, now=None) -> float:
    price = variation.price if variation is not None else effective_price(item, now)
    for add_on in group_add_ons(add_ons):
        price += add_on.price * add_on.quantity
    return round_money(price)


def line_total(line) -> float:
    return round_money(line.unit_price * line.quantity)


def cart_total(state) -> float:
    return round_money(sum(line_total(line) for line in state.lines))


def total_item_count(state):
    """Sum of line quantities (what the cart badge shows), not distinct lines."""
    return sum(line.quantity for line in state.lines)
