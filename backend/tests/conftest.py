import pytest
import pytest_asyncio
import sys
import os
from decimal import Decimal

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import httpx
from httpx import ASGITransport

from kitchenpos.config import Settings
from kitchenpos.db.dependencies import get_storage
from kitchenpos.main import create_app
from kitchenpos.storage import InMemoryStorage, SQLAlchemyStorage
from kitchenpos.services import (
    menu_group_service,
    menu_service,
    product_service,
    table_service,
)


@pytest.fixture
def inmemory_storage():
    """Fresh in-memory storage."""
    return InMemoryStorage()


@pytest.fixture
def sqlalchemy_storage(tmp_path):
    """SQLAlchemy storage on a temporary SQLite file."""
    storage = SQLAlchemyStorage(f"sqlite:///{tmp_path / 'kitchenpos_test.db'}")
    yield storage
    storage.close()


@pytest.fixture(params=["inmemory", "sqlalchemy"])
def storage(request, tmp_path):
    """Run the test once per storage backend."""
    if request.param == "inmemory":
        yield InMemoryStorage()
        return
    storage = SQLAlchemyStorage(f"sqlite:///{tmp_path / 'kitchenpos_param.db'}")
    yield storage
    storage.close()


@pytest.fixture
def menu(storage):
    """A menu (id 1 in a fresh store) priced at the sum of its single product."""
    with storage.unit_of_work() as uow:
        group = menu_group_service.create_menu_group(uow, "Set menus")
        product = product_service.create_product(uow, "Fried chicken", Decimal("16000"))
        return menu_service.create_menu(
            uow, "Fried chicken", Decimal("16000"), group.id,
            [{"product_id": product.id, "quantity": 1}],
        )


@pytest.fixture
def second_menu(storage, menu):
    """Another menu in the same group as `menu`."""
    with storage.unit_of_work() as uow:
        product = product_service.create_product(uow, "Seasoned chicken", Decimal("17000"))
        return menu_service.create_menu(
            uow, "Seasoned chicken", Decimal("17000"), menu.menu_group_id,
            [{"product_id": product.id, "quantity": 1}],
        )


@pytest.fixture
def occupied_table(storage):
    with storage.unit_of_work() as uow:
        return table_service.create_table(uow, number_of_guests=4, empty=False)


@pytest.fixture
def empty_tables(storage):
    """Two empty, ungrouped tables."""
    with storage.unit_of_work() as uow:
        return [table_service.create_table(uow, 0, True) for _ in range(2)]


@pytest.fixture
def app_storage():
    """Storage injected into the HTTP app for API tests."""
    return InMemoryStorage()


@pytest_asyncio.fixture
async def async_client(app_storage):
    """Async HTTP client against an app whose storage is overridden."""
    app = create_app(settings=Settings(), storage=app_storage)
    app.dependency_overrides[get_storage] = lambda: app_storage
    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
