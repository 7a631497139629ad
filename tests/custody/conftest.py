import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def custody_bed():
    from custody.domain import custody

    bed = DomainFixture(custody)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session", autouse=True)
def _schema(custody_bed):
    """Create SQL tables when running against the production overlay."""
    from custody.domain import custody
    from custody.utils.db import drop_db, setup_db

    setup_db(custody)
    yield
    drop_db(custody)


@pytest.fixture(autouse=True)
def _ctx(custody_bed):
    with custody_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture()
def service(custody_bed):
    from custody.domain import custody
    from custody.service import CustodyService

    return CustodyService(custody)


@pytest.fixture()
def actors():
    return {
        "admin": "0xAdmin",
        "manufacturer": "0xManufacturer",
        "pharmacist": "0xPharmacist",
        "buyer": "0xBuyer",
        "stranger": "0xStranger",
    }


@pytest.fixture()
def onboarded(service, actors):
    """Registry seeded with an admin, then one actor per custody role."""
    service.seed_admin(actors["admin"])
    service.onboard_user(actors["admin"], actors["manufacturer"], "Manufacturer")
    service.onboard_user(actors["admin"], actors["pharmacist"], "Pharmacist")
    service.onboard_user(actors["admin"], actors["buyer"], "Buyer")
    return actors
