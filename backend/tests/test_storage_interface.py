"""
Tests for the Storage contract.

Every test runs against both backends and checks that:
- repositories assign ids and return what was saved
- the query methods used by the services behave the same way
- a unit of work commits on success and rolls back on error
- clear() empties the store
"""

import threading
from datetime import datetime
from decimal import Decimal

import pytest

from kitchenpos.domain import (
    MenuGroup,
    Order,
    OrderStatus,
    OrderTable,
    Product,
    TableGroup,
)
from kitchenpos.storage import InMemoryStorage, Storage, UnitOfWork


class TestRepositories:
    """Repository behaviour shared by both adapters."""

    def test_save_assigns_ids(self, storage):
        with storage.unit_of_work() as uow:
            first = uow.products.save(Product(name="Fried chicken", price=Decimal("16000")))
            second = uow.products.save(Product(name="Cola", price=Decimal("1000")))

        assert first.id is not None
        assert second.id is not None
        assert first.id != second.id

    def test_save_existing_entity_updates_it(self, storage):
        with storage.unit_of_work() as uow:
            table = uow.order_tables.save(OrderTable())
        with storage.unit_of_work() as uow:
            uow.order_tables.save(table.change_empty(False).change_number_of_guests(3))
        with storage.unit_of_work() as uow:
            saved = uow.order_tables.find_by_id(table.id)
            assert len(uow.order_tables.find_all()) == 1

        assert saved.empty is False
        assert saved.number_of_guests == 3

    def test_find_by_unknown_id_returns_none(self, storage):
        with storage.unit_of_work() as uow:
            assert uow.products.find_by_id(42) is None
            assert uow.orders.find_by_id(42) is None
            assert uow.table_groups.find_by_id(42) is None
            assert uow.menu_groups.exists_by_id(42) is False

    def test_find_all_by_id_in_skips_unknown_ids(self, storage):
        with storage.unit_of_work() as uow:
            product = uow.products.save(Product(name="Fried chicken", price=Decimal("16000")))
            found = uow.products.find_all_by_id_in([product.id, 999])
        assert [p.id for p in found] == [product.id]

    def test_count_by_id_in_counts_distinct_existing_menus(self, storage, menu):
        with storage.unit_of_work() as uow:
            assert uow.menus.count_by_id_in([menu.id]) == 1
            assert uow.menus.count_by_id_in([menu.id, menu.id]) == 1
            assert uow.menus.count_by_id_in([menu.id, 999]) == 1
            assert uow.menus.count_by_id_in([]) == 0

    def test_exists_by_order_table_id_in_and_status_in(self, storage):
        with storage.unit_of_work() as uow:
            table = uow.order_tables.save(OrderTable(number_of_guests=2, empty=False))
            uow.orders.save(Order(
                order_table_id=table.id,
                order_status=OrderStatus.MEAL,
                ordered_time=datetime(2026, 1, 1, 19, 30),
            ))

            orders = uow.orders
            assert orders.exists_by_order_table_id_in_and_status_in([table.id], [OrderStatus.MEAL])
            assert orders.exists_by_order_table_id_in_and_status_in([table.id, 999], [OrderStatus.COOKING, OrderStatus.MEAL])
            assert not orders.exists_by_order_table_id_in_and_status_in([table.id], [OrderStatus.COOKING])
            assert not orders.exists_by_order_table_id_in_and_status_in([999], [OrderStatus.MEAL])

    def test_table_group_save_stamps_members(self, storage):
        with storage.unit_of_work() as uow:
            tables = [uow.order_tables.save(OrderTable()) for _ in range(2)]
            group = uow.table_groups.save(
                TableGroup(created_date=datetime(2026, 1, 1, 18, 0), order_tables=tuple(tables))
            )

        with storage.unit_of_work() as uow:
            loaded = uow.table_groups.find_by_id(group.id)
            assert uow.table_groups.exists_by_order_table(tables[0])
            outsider = uow.order_tables.save(OrderTable())
            assert not uow.table_groups.exists_by_order_table(outsider)

        assert loaded.created_date == datetime(2026, 1, 1, 18, 0)
        assert loaded.order_table_ids == tuple(t.id for t in tables)
        assert all(t.table_group_id == group.id for t in loaded.order_tables)

    def test_remove_table_group(self, storage):
        with storage.unit_of_work() as uow:
            tables = [uow.order_tables.save(OrderTable()) for _ in range(2)]
            group = uow.table_groups.save(
                TableGroup(created_date=datetime(2026, 1, 1), order_tables=tuple(tables))
            )
        with storage.unit_of_work() as uow:
            for table in tables:
                uow.order_tables.save(table.ungroup())
            uow.table_groups.remove_by_id(group.id)
        with storage.unit_of_work() as uow:
            assert uow.table_groups.find_by_id(group.id) is None
            assert not uow.table_groups.exists_by_order_table(tables[0])
            assert len(uow.order_tables.find_all()) == 2


class TestUnitOfWork:
    """Commit and rollback."""

    def test_is_a_storage(self, storage):
        assert isinstance(storage, Storage)
        assert storage.name in ("inmemory", "sqlalchemy")

    def test_yields_unit_of_work(self, storage):
        with storage.unit_of_work() as uow:
            assert isinstance(uow, UnitOfWork)

    def test_commit_on_success(self, storage):
        with storage.unit_of_work() as uow:
            uow.menu_groups.save(MenuGroup(name="Set menus"))
        with storage.unit_of_work() as uow:
            assert [g.name for g in uow.menu_groups.find_all()] == ["Set menus"]

    def test_rollback_on_error(self, storage):
        with storage.unit_of_work() as uow:
            uow.menu_groups.save(MenuGroup(name="Kept"))

        with pytest.raises(RuntimeError):
            with storage.unit_of_work() as uow:
                uow.menu_groups.save(MenuGroup(name="Dropped"))
                uow.order_tables.save(OrderTable())
                raise RuntimeError("boom")

        with storage.unit_of_work() as uow:
            assert [g.name for g in uow.menu_groups.find_all()] == ["Kept"]
            assert uow.order_tables.find_all() == []

    def test_rollback_restores_updated_rows(self, storage):
        with storage.unit_of_work() as uow:
            table = uow.order_tables.save(OrderTable(number_of_guests=2, empty=False))

        with pytest.raises(RuntimeError):
            with storage.unit_of_work() as uow:
                uow.order_tables.save(table.change_number_of_guests(8))
                raise RuntimeError("boom")

        with storage.unit_of_work() as uow:
            assert uow.order_tables.find_by_id(table.id).number_of_guests == 2

    def test_clear_removes_everything(self, storage, menu, occupied_table):
        storage.clear()
        with storage.unit_of_work() as uow:
            assert uow.menus.find_all() == []
            assert uow.products.find_all() == []
            assert uow.menu_groups.find_all() == []
            assert uow.order_tables.find_all() == []


class TestInMemoryConcurrency:
    """Units of work on the in-memory store are serialized."""

    def test_concurrent_units_of_work(self):
        storage = InMemoryStorage()
        errors = []

        def worker():
            try:
                for _ in range(20):
                    with storage.unit_of_work() as uow:
                        uow.order_tables.save(OrderTable())
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        with storage.unit_of_work() as uow:
            tables = uow.order_tables.find_all()
        assert len(tables) == 100
        assert len({t.id for t in tables}) == 100
