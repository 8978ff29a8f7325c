"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.checkout.delivery import DeliverySettings
from pytest_bdd import given, parsers


@pytest.fixture
def error():
    """Holds an exception raised by a When step."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    cart = ShoppingCart.create(session_id="sess-001")
    cart._events.clear()
    return cart


@given(parsers.cfparse('the cart has {qty:d} of "{item_id}"'), target_fixture="cart")
def cart_with_item(cart, catalogue, item_id, qty):
    cart.add_item(catalogue.get(item_id), qty)
    cart._events.clear()
    return cart


@given(
    parsers.cfparse("delivery costs {base_rate:g} for the first km and {per_km_rate:g} per km after"),
    target_fixture="delivery_settings",
)
def delivery_rates(base_rate, per_km_rate):
    return DeliverySettings(base_rate=base_rate, per_km_rate=per_km_rate)
