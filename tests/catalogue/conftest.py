import pytest
from catalogue.item.item import AddOn, AddOnCategory, CatalogItem, Variation
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def catalogue_bed():
    from catalogue.domain import catalogue

    bed = DomainFixture(catalogue)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed):
    with catalogue_bed.domain_context():
        yield


@pytest.fixture
def siomai():
    return CatalogItem(
        id="siomai",
        name="Pork Siomai",
        description="Steamed pork dumplings, 12 pcs",
        base_price=100.0,
        category="dumplings",
        popular=True,
    )


@pytest.fixture
def beef_tapa():
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
            AddOn(id="egg", name="Fried Egg", price=15.0),
        ],
    )
