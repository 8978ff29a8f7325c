"""CatalogItem with its Variation and AddOn options.

Items are owned by the operator's catalog store and are read-only here. The
only derived copy this context produces is an item carrying a new discount,
built by the operator console's discount tool.
"""

from enum import Enum

from protean.fields import Boolean, DateTime, Float, List, String, Text, ValueObject

from catalogue.domain import catalogue
from catalogue.item.discount import DiscountMode, derive_discount_price, effective_price, is_discount_active
from catalogue.shared.money import parse_amount


class AddOnCategory(Enum):
    SIZE = "size"
    FLAVOR = "flavor"
    SAUCE = "sauce"
    EXTRAS = "extras"


@catalogue.value_object
class Variation:
    """A selectable option whose price replaces the item's price."""

    id: String(required=True, sanitize=False)
    name: String(required=True, sanitize=False)
    price: Float(required=True, min_value=0.0)


@catalogue.value_object
class AddOn:
    """An optional extra charged on top of the item's price, per selection."""

    id: String(required=True, sanitize=False)
    name: String(required=True, sanitize=False)
    price: Float(min_value=0.0, default=0.0)
    category: String(choices=AddOnCategory, default=AddOnCategory.EXTRAS.value)


def _amount_or_none(value):
    amount = parse_amount(value)
    if amount is None or amount < 0:
        return None
    return amount


def _moment_or_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


@catalogue.value_object
class CatalogItem:
    """A menu item as published by the catalog store."""

    id: String(required=True, sanitize=False)
    name: String(required=True, sanitize=False)
    description: Text(sanitize=False, default="")
    base_price: Float(required=True, min_value=0.0)
    discount_price: Float(min_value=0.0)
    discount_active: Boolean(default=False)
    discount_start_date: DateTime()
    discount_end_date: DateTime()
    available: Boolean(default=True)
    variations: List(content_type=ValueObject(Variation))
    add_ons: List(content_type=ValueObject(AddOn))

    # Items sold by weight take a fractional quantity in ``measurement_unit``
    show_measurement: Boolean(default=False)
    measurement_unit: String(max_length=20, sanitize=False)
    measurement_value: Float(min_value=0.0)

    category: String(sanitize=False)
    popular: Boolean(default=False)
    image: Text(sanitize=False)

    @classmethod
    def from_record(cls, record):
        """Build an item from a catalog store record.

        Unknown keys are ignored. A discount price or measurement value that
        is not a non-negative number reads as absent, and so does a blank
        discount date.
        """
        values = {key: value for key, value in record.items() if key in cls.model_fields}
        for key in ("discount_price", "measurement_value"):
            if key in values:
                values[key] = _amount_or_none(values[key])
        for key in ("discount_start_date", "discount_end_date"):
            if key in values:
                values[key] = _moment_or_none(values[key])
        return cls(**values)

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    def variation(self, variation_id):
        return next((v for v in self.variations if v.id == variation_id), None)

    def add_on(self, add_on_id):
        return next((a for a in self.add_ons if a.id == add_on_id), None)

    def add_ons_by_category(self):
        """Group add-ons by category, keeping catalog order within each group."""
        groups = {}
        for add_on in self.add_ons:
            groups.setdefault(AddOnCategory(add_on.category), []).append(add_on)
        return groups

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def is_on_discount(self, now=None) -> bool:
        return is_discount_active(self, now)

    def effective_price(self, now=None) -> float:
        return effective_price(self, now)

    def with_discount(self, mode, value, active=True, start=None, end=None):
        """Return a copy of this item carrying an operator-entered discount.

        Non-numeric ``value`` clears the discount price.
        """
        return self.replace(
            discount_price=derive_discount_price(self.base_price, DiscountMode(mode), value),
            discount_active=active,
            discount_start_date=start,
            discount_end_date=end,
        )
