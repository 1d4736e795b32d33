import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the Protean config overlay before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def foodorder_bed():
    from foodorder.domain import foodorder

    bed = DomainFixture(foodorder)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(foodorder_bed):
    with foodorder_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def _reset_order_service():
    """Every test starts from a fresh order service singleton."""
    from foodorder.order_service import reset_order_service

    reset_order_service()
    yield
    reset_order_service()


@pytest.fixture
def order_service():
    from foodorder.order_service.fake_adapter import FakeOrderService

    return FakeOrderService()


@pytest.fixture
def pizza():
    from foodorder.cart.menu_item import MenuItem

    return MenuItem(item_id="m1", name="Margherita", price=12.5)


@pytest.fixture
def soda():
    from foodorder.cart.menu_item import MenuItem

    return MenuItem(item_id="m2", name="Cola", price=2.0)


@pytest.fixture
def customer():
    return {"name": "Ada Lovelace", "phone": "555-0100", "address": "12 Analytical Row"}
