"""BDD tests for discounts and the price in force."""

from datetime import datetime, timedelta

from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/item_pricing.feature")


def parse_moment(text):
    return datetime.fromisoformat(text)


@given(
    parsers.cfparse('a {mode} discount of {value:g} running from "{start}" for {hours:d} hour'),
    target_fixture="item",
)
def windowed_discount(item, mode, value, start, hours):
    start = parse_moment(start)
    return item.with_discount(mode, value, start=start, end=start + timedelta(hours=hours))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the operator enters {value:g} as a "{mode}" discount'), target_fixture="item")
def set_discount(item, mode, value):
    return item.with_discount(mode, value)


@when(parsers.cfparse('the customer looks at "{moment}"'), target_fixture="now")
def look_at(moment):
    return parse_moment(moment)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the discount price is {expected:g}"))
def discount_price_is(item, expected):
    assert item.discount_price == expected


@then(parsers.cfparse("the customer pays {expected:g}"))
def customer_pays(item, now, expected):
    assert item.effective_price(now) == expected


@then("the item is on discount")
def on_discount(item, now):
    assert item.is_on_discount(now)


@then("the item is not on discount")
def not_on_discount(item, now):
    assert not item.is_on_discount(now)
