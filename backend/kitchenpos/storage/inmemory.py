"""
In-memory storage implementation for kitchenpos.

Keeps each entity in a dict keyed by id. A unit of work holds the store
lock for its whole duration and restores a snapshot of the dictionaries
if the block raises.
"""

import itertools
import threading
from contextlib import contextmanager
from dataclasses import replace as _with
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .base import (
    MenuGroupRepository,
    MenuProductRepository,
    MenuRepository,
    OrderLineItemRepository,
    OrderRepository,
    OrderTableRepository,
    ProductRepository,
    Storage,
    TableGroupRepository,
    UnitOfWork,
)
from kitchenpos.domain import (
    Menu,
    MenuGroup,
    MenuProduct,
    Order,
    OrderLineItem,
    OrderStatus,
    OrderTable,
    Product,
    TableGroup,
)


class _Table:
    """One entity table: rows by id plus an id sequence."""

    def __init__(self):
        self.rows: Dict[int, Any] = {}
        self._next_id = itertools.count(1)

    def insert(self, entity, key: str = "id"):
        new_id = next(self._next_id)
        entity = _with(entity, **{key: new_id})
        self.rows[new_id] = entity
        return entity

    def put(self, entity, key: str = "id"):
        self.rows[getattr(entity, key)] = entity
        return entity

    def snapshot(self) -> Dict[int, Any]:
        # entities are frozen, a shallow copy is enough
        return dict(self.rows)

    def restore(self, rows: Dict[int, Any]) -> None:
        self.rows = rows
        self._next_id = itertools.count(max(rows, default=0) + 1)


class InMemoryProductRepository(ProductRepository):
    def __init__(self, table: _Table):
        self._table = table

    def save(self, product: Product) -> Product:
        if product.id is None:
            return self._table.insert(product)
        return self._table.put(product)

    def find_by_id(self, product_id: int) -> Optional[Product]:
        return self._table.rows.get(product_id)

    def find_all(self) -> List[Product]:
        return list(self._table.rows.values())

    def find_all_by_id_in(self, product_ids: Iterable[int]) -> List[Product]:
        ids = set(product_ids)
        return [p for p in self._table.rows.values() if p.id in ids]


class InMemoryMenuGroupRepository(MenuGroupRepository):
    def __init__(self, table: _Table):
        self._table = table

    def save(self, menu_group: MenuGroup) -> MenuGroup:
        if menu_group.id is None:
            return self._table.insert(menu_group)
        return self._table.put(menu_group)

    def find_by_id(self, menu_group_id: int) -> Optional[MenuGroup]:
        return self._table.rows.get(menu_group_id)

    def find_all(self) -> List[MenuGroup]:
        return list(self._table.rows.values())

    def exists_by_id(self, menu_group_id: int) -> bool:
        return menu_group_id in self._table.rows


class InMemoryMenuRepository(MenuRepository):
    def __init__(self, table: _Table):
        self._table = table

    def save(self, menu: Menu) -> Menu:
        # Menu products live in their own table
        menu = _with(menu, menu_products=())
        if menu.id is None:
            return self._table.insert(menu)
        return self._table.put(menu)

    def find_by_id(self, menu_id: int) -> Optional[Menu]:
        return self._table.rows.get(menu_id)

    def find_all(self) -> List[Menu]:
        return list(self._table.rows.values())

    def count_by_id_in(self, menu_ids: Iterable[int]) -> int:
        return sum(1 for menu_id in set(menu_ids) if menu_id in self._table.rows)


class InMemoryMenuProductRepository(MenuProductRepository):
    def __init__(self, table: _Table):
        self._table = table

    def save(self, menu_product: MenuProduct) -> MenuProduct:
        if menu_product.seq is None:
            return self._table.insert(menu_product, key="seq")
        return self._table.put(menu_product, key="seq")

    def find_all_by_menu_id(self, menu_id: int) -> List[MenuProduct]:
        return [mp for mp in self._table.rows.values() if mp.menu_id == menu_id]


class InMemoryOrderRepository(OrderRepository):
    def __init__(self, table: _Table):
        self._table = table

    def save(self, order: Order) -> Order:
        order = _with(order, order_line_items=())
        if order.id is None:
            return self._table.insert(order)
        return self._table.put(order)

    def find_by_id(self, order_id: int) -> Optional[Order]:
        return self._table.rows.get(order_id)

    def find_all(self) -> List[Order]:
        return list(self._table.rows.values())

    def exists_by_order_table_id_in_and_status_in(
        self, order_table_ids: Iterable[int], statuses: Iterable[OrderStatus]
    ) -> bool:
        table_ids = set(order_table_ids)
        wanted = set(statuses)
        return any(
            o.order_table_id in table_ids and o.order_status in wanted
            for o in self._table.rows.values()
        )


class InMemoryOrderLineItemRepository(OrderLineItemRepository):
    def __init__(self, table: _Table):
        self._table = table

    def save(self, order_line_item: OrderLineItem) -> OrderLineItem:
        if order_line_item.seq is None:
            return self._table.insert(order_line_item, key="seq")
        return self._table.put(order_line_item, key="seq")

    def find_all_by_order_id(self, order_id: int) -> List[OrderLineItem]:
        return [li for li in self._table.rows.values() if li.order_id == order_id]


class InMemoryOrderTableRepository(OrderTableRepository):
    def __init__(self, table: _Table):
        self._table = table

    def save(self, order_table: OrderTable) -> OrderTable:
        if order_table.id is None:
            return self._table.insert(order_table)
        return self._table.put(order_table)

    def find_by_id(self, order_table_id: int) -> Optional[OrderTable]:
        return self._table.rows.get(order_table_id)

    def find_all(self) -> List[OrderTable]:
        return list(self._table.rows.values())

    def find_all_by_id_in(self, order_table_ids: Iterable[int]) -> List[OrderTable]:
        ids = set(order_table_ids)
        return [t for t in self._table.rows.values() if t.id in ids]


class InMemoryTableGroupRepository(TableGroupRepository):
    """Groups store only their row; membership lives on the order tables."""

    def __init__(self, table: _Table, order_tables: _Table):
        self._table = table
        self._order_tables = order_tables

    def save(self, table_group: TableGroup) -> TableGroup:
        row = _with(table_group, order_tables=())
        if row.id is None:
            row = self._table.insert(row)
        else:
            row = self._table.put(row)

        members = []
        for order_table in table_group.order_tables:
            member = _with(order_table, table_group_id=row.id)
            self._order_tables.put(member)
            members.append(member)
        return row.with_order_tables(members)

    def find_by_id(self, table_group_id: int) -> Optional[TableGroup]:
        row = self._table.rows.get(table_group_id)
        if row is None:
            return None
        members = [
            t for t in self._order_tables.rows.values()
            if t.table_group_id == table_group_id
        ]
        return row.with_order_tables(members)

    def exists_by_order_table(self, order_table: OrderTable) -> bool:
        stored = self._order_tables.rows.get(order_table.id)
        return (
            stored is not None
            and stored.table_group_id is not None
            and stored.table_group_id in self._table.rows
        )

    def remove_by_id(self, table_group_id: int) -> None:
        self._table.rows.pop(table_group_id, None)


class InMemoryStorage(Storage):
    """In-memory storage using dictionaries."""

    name = "inmemory"

    def __init__(self):
        """Initialize with empty storage."""
        self._lock = threading.RLock()
        self._reset()

    def _reset(self) -> None:
        self._tables: Dict[str, _Table] = {
            "products": _Table(),
            "menu_groups": _Table(),
            "menus": _Table(),
            "menu_products": _Table(),
            "orders": _Table(),
            "order_line_items": _Table(),
            "order_tables": _Table(),
            "table_groups": _Table(),
        }

    def _build_unit_of_work(self) -> UnitOfWork:
        t = self._tables
        return UnitOfWork(
            products=InMemoryProductRepository(t["products"]),
            menu_groups=InMemoryMenuGroupRepository(t["menu_groups"]),
            menus=InMemoryMenuRepository(t["menus"]),
            menu_products=InMemoryMenuProductRepository(t["menu_products"]),
            orders=InMemoryOrderRepository(t["orders"]),
            order_line_items=InMemoryOrderLineItemRepository(t["order_line_items"]),
            order_tables=InMemoryOrderTableRepository(t["order_tables"]),
            table_groups=InMemoryTableGroupRepository(t["table_groups"], t["order_tables"]),
        )

    @contextmanager
    def unit_of_work(self) -> Iterator[UnitOfWork]:
        with self._lock:
            snapshot = {name: table.snapshot() for name, table in self._tables.items()}
            try:
                yield self._build_unit_of_work()
            except BaseException:
                for name, state in snapshot.items():
                    self._tables[name].restore(state)
                raise

    def clear(self) -> None:
        """Clear all state."""
        with self._lock:
            self._reset()
