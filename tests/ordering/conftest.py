import pytest
from catalogue.item.item import AddOn, AddOnCategory, CatalogItem, Variation
from catalogue.item.repository import InMemoryCatalogue
from ordering.checkout.payment import PaymentMethod
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture
def siomai():
    """Whole-unit item on an open-ended discount."""
    return CatalogItem(
        id="siomai",
        name="Pork Siomai",
        base_price=100.0,
        discount_price=80.0,
        discount_active=True,
    )


@pytest.fixture
def beef_tapa():
    """Item with variations and add-ons."""
    return CatalogItem(
        id="beef-tapa",
        name="Beef Tapa",
        base_price=250.0,
        variations=[
            Variation(id="half-kilo", name="1/2 kg", price=250.0),
            Variation(id="kilo", name="1 kg", price=480.0),
        ],
        add_ons=[
            AddOn(id="garlic-rice", name="Garlic Rice", price=20.0),
            AddOn(id="vinegar", name="Spiced Vinegar", price=0.0, category=AddOnCategory.SAUCE.value),
            AddOn(id="egg", name="Egg", price=15.0),
        ],
    )


@pytest.fixture
def pork_belly():
    """Item sold by weight."""
    return CatalogItem(
        id="pork-belly",
        name="Pork Belly",
        base_price=380.0,
        show_measurement=True,
        measurement_unit="kg",
        measurement_value=1,
    )


@pytest.fixture
def tocino():
    return CatalogItem(id="tocino", name="Pork Tocino", base_price=180.0, available=False)


@pytest.fixture
def catalogue(siomai, beef_tapa, pork_belly, tocino):
    return InMemoryCatalogue([siomai, beef_tapa, pork_belly, tocino])


@pytest.fixture
def gcash():
    return PaymentMethod(id="gcash", name="GCash", account_number="09171234567", account_name="J. Santos")


@pytest.fixture
def cash():
    return PaymentMethod(id="cash", name="Cash")
