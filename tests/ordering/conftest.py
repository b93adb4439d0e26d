import pytest
from ordering.catalog import reset_catalog, set_catalog
from ordering.catalog.fake_adapter import InMemoryCatalog
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

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def catalog():
    """In-memory catalogue with a few known products, active for every test."""
    fake = InMemoryCatalog()
    fake.add("1", "Linen Shirt", "50.00")
    fake.add("2", "Canvas Cap", "12.50")
    fake.add("3", "Wool Scarf", "19.99")
    set_catalog(fake)
    yield fake
    reset_catalog()


@pytest.fixture()
def shipping_address():
    return {
        "home_address": "12 Harbour Road",
        "city": "Lisbon",
        "region_or_state": "Lisboa",
        "country": "PT",
        "zip_code": "1100-001",
    }


@pytest.fixture()
def guest_info():
    return {"name": "Ana Guest", "email": "ana@example.com", "phone": "+351 900 000 000"}
