"""Shared BDD fixtures and step definitions for the Catalogue domain."""

from catalogue.item.item import CatalogItem
from pytest_bdd import given, parsers


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an item "{name}" priced at {base_price:g}'), target_fixture="item")
def priced_item(name, base_price):
    return CatalogItem(id=name.lower().replace(" ", "-"), name=name, base_price=base_price)
