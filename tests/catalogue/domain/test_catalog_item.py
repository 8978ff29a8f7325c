"""Tests for the CatalogItem value object and its Variation/AddOn options."""

from datetime import UTC, datetime, timedelta

import pytest
from catalogue.item.discount import DiscountMode
from catalogue.item.item import AddOn, AddOnCategory, CatalogItem, Variation
from protean.exceptions import IncorrectUsageError, ValidationError

SIOMAI_RECORD = {"id": "siomai", "name": "Pork Siomai", "base_price": 100}


class TestCatalogItemConstruction:
    def test_minimal_item(self):
        item = CatalogItem(id="siomai", name="Pork Siomai", base_price=100)
        assert item.base_price == 100.0
        assert item.available
        assert item.variations == []
        assert item.add_ons == []
        assert item.discount_price is None
        assert not item.discount_active

    def test_negative_base_price_rejected(self):
        with pytest.raises(ValidationError) as exc:
            CatalogItem(id="siomai", name="Pork Siomai", base_price=-1)
        assert "base_price" in exc.value.messages

    def test_name_is_required(self):
        with pytest.raises(ValidationError) as exc:
            CatalogItem(id="siomai", base_price=100)
        assert "name" in exc.value.messages

    def test_names_are_kept_verbatim(self):
        item = CatalogItem(id="siomai", name="Siomai & Sauce <12 pcs>", base_price=100)
        assert item.name == "Siomai & Sauce <12 pcs>"

    def test_unknown_record_fields_are_ignored(self):
        item = CatalogItem.from_record(
            {"id": "siomai", "name": "Pork Siomai", "base_price": 100, "created_at": "2026-01-01"}
        )
        assert item.id == "siomai"

    def test_items_are_immutable(self):
        item = CatalogItem(id="siomai", name="Pork Siomai", base_price=100)
        with pytest.raises(IncorrectUsageError):
            item.base_price = 90

    def test_records_with_nested_options(self):
        item = CatalogItem.from_record(
            {
                "id": "beef-tapa",
                "name": "Beef Tapa",
                "base_price": 250,
                "variations": [{"id": "kilo", "name": "1 kg", "price": 480}],
                "add_ons": [{"id": "vinegar", "name": "Spiced Vinegar", "category": "sauce"}],
            }
        )
        assert item.variation("kilo").price == 480.0
        assert item.add_on("vinegar").price == 0.0
        assert item.add_on("vinegar").category == AddOnCategory.SAUCE.value


class TestInvalidNumericInput:
    @pytest.mark.parametrize("value", ["", "abc", None, -5])
    def test_invalid_discount_price_is_absent(self, value):
        item = CatalogItem.from_record(SIOMAI_RECORD | {"discount_price": value})
        assert item.discount_price is None

    def test_numeric_text_discount_price_is_parsed(self):
        item = CatalogItem.from_record(SIOMAI_RECORD | {"discount_price": "80"})
        assert item.discount_price == 80.0

    @pytest.mark.parametrize("value", ["", "half", None])
    def test_invalid_measurement_value_is_absent(self, value):
        item = CatalogItem.from_record(
            {"id": "pork-belly", "name": "Pork Belly", "base_price": 380, "measurement_value": value}
        )
        assert item.measurement_value is None

    def test_blank_discount_dates_are_absent(self):
        item = CatalogItem.from_record(
            {
                "id": "siomai",
                "name": "Pork Siomai",
                "base_price": 100,
                "discount_start_date": "",
                "discount_end_date": "  ",
            }
        )
        assert item.discount_start_date is None
        assert item.discount_end_date is None

    def test_invalid_discount_price_falls_back_to_base_price(self):
        item = CatalogItem.from_record(
            {"id": "siomai", "name": "Pork Siomai", "base_price": 100, "discount_price": "abc", "discount_active": True}
        )
        assert item.effective_price() == 100.0
        assert not item.is_on_discount()


class TestLookups:
    def test_variation_by_id(self, beef_tapa):
        assert beef_tapa.variation("kilo").name == "1 kg"
        assert beef_tapa.variation("missing") is None

    def test_add_on_by_id(self, beef_tapa):
        assert beef_tapa.add_on("egg").price == 15.0
        assert beef_tapa.add_on("missing") is None

    def test_add_ons_grouped_by_category_in_catalog_order(self, beef_tapa):
        groups = beef_tapa.add_ons_by_category()
        assert [add_on.id for add_on in groups[AddOnCategory.EXTRAS]] == ["garlic-rice", "egg"]
        assert [add_on.id for add_on in groups[AddOnCategory.SAUCE]] == ["vinegar"]
        assert AddOnCategory.SIZE not in groups

    def test_variation_price_must_not_be_negative(self):
        with pytest.raises(ValidationError):
            Variation(id="kilo", name="1 kg", price=-1)

    def test_add_on_defaults(self):
        add_on = AddOn(id="egg", name="Fried Egg")
        assert add_on.price == 0.0
        assert add_on.category == AddOnCategory.EXTRAS.value


class TestWithDiscount:
    def test_percentage_discount(self, siomai):
        discounted = siomai.with_discount(DiscountMode.PERCENTAGE, 20)
        assert discounted.discount_price == 80.0
        assert discounted.discount_active
        assert discounted.effective_price() == 80.0

    def test_original_item_unchanged(self, siomai):
        siomai.with_discount(DiscountMode.AMOUNT, 30)
        assert siomai.discount_price is None
        assert siomai.effective_price() == 100.0

    def test_invalid_value_clears_discount_price(self, siomai):
        discounted = siomai.with_discount(DiscountMode.FIXED, 65).with_discount(DiscountMode.FIXED, "abc")
        assert discounted.discount_price is None
        assert discounted.effective_price() == 100.0

    def test_window_is_carried(self, siomai):
        start = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
        discounted = siomai.with_discount("fixed", 65, start=start, end=start + timedelta(hours=1))
        assert discounted.is_on_discount(start)
        assert not discounted.is_on_discount(start + timedelta(hours=2))

    def test_inactive_discount_keeps_price_but_not_applied(self, siomai):
        discounted = siomai.with_discount(DiscountMode.FIXED, 65, active=False)
        assert discounted.discount_price == 65.0
        assert discounted.effective_price() == 100.0
