"""
Domain entities for kitchenpos.

Plain immutable records. State changes go through explicit transition
methods that return a new value; persistence is handled by the storage
adapters, which assign ids on insert.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from kitchenpos.domain.errors import InvalidArgumentError


class OrderStatus(str, Enum):
    """Order lifecycle: COOKING <-> MEAL -> COMPLETION (terminal)."""

    COOKING = "COOKING"
    MEAL = "MEAL"
    COMPLETION = "COMPLETION"

    @classmethod
    def parse(cls, value) -> "OrderStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise InvalidArgumentError(f"Unknown order status: {value}")

    @property
    def is_terminal(self) -> bool:
        return self is OrderStatus.COMPLETION


OPEN_ORDER_STATUSES = (OrderStatus.COOKING, OrderStatus.MEAL)


@dataclass(frozen=True)
class Product:
    name: str
    price: Decimal
    id: Optional[int] = None


@dataclass(frozen=True)
class MenuGroup:
    name: str
    id: Optional[int] = None


@dataclass(frozen=True)
class MenuProduct:
    product_id: int
    quantity: int
    menu_id: Optional[int] = None
    seq: Optional[int] = None

    def attach_to(self, menu_id: int) -> "MenuProduct":
        return replace(self, menu_id=menu_id)


@dataclass(frozen=True)
class Menu:
    name: str
    price: Decimal
    menu_group_id: int
    menu_products: Tuple[MenuProduct, ...] = field(default_factory=tuple)
    id: Optional[int] = None

    def with_menu_products(self, menu_products) -> "Menu":
        return replace(self, menu_products=tuple(menu_products))


@dataclass(frozen=True)
class OrderTable:
    """A physical table. `empty` means no guests are seated."""

    number_of_guests: int = 0
    empty: bool = True
    table_group_id: Optional[int] = None
    id: Optional[int] = None

    @property
    def is_grouped(self) -> bool:
        return self.table_group_id is not None

    def change_empty(self, empty: bool) -> "OrderTable":
        return replace(self, empty=empty)

    def change_number_of_guests(self, number_of_guests: int) -> "OrderTable":
        if self.empty:
            raise InvalidArgumentError("Cannot change the number of guests of an empty table")
        return replace(self, number_of_guests=number_of_guests)

    def ungroup(self) -> "OrderTable":
        return replace(self, table_group_id=None)


@dataclass(frozen=True)
class OrderLineItem:
    menu_id: int
    quantity: int
    order_id: Optional[int] = None
    seq: Optional[int] = None

    def attach_to(self, order_id: int) -> "OrderLineItem":
        return replace(self, order_id=order_id)


@dataclass(frozen=True)
class Order:
    order_table_id: int
    order_status: OrderStatus
    ordered_time: datetime
    order_line_items: Tuple[OrderLineItem, ...] = field(default_factory=tuple)
    id: Optional[int] = None

    @property
    def is_completed(self) -> bool:
        return self.order_status.is_terminal

    def with_status(self, order_status: OrderStatus) -> "Order":
        """Return a copy in the given status. COMPLETION is terminal."""
        if self.is_completed:
            raise InvalidArgumentError("Order is already completed")
        return replace(self, order_status=order_status)

    def with_line_items(self, order_line_items) -> "Order":
        return replace(self, order_line_items=tuple(order_line_items))


@dataclass(frozen=True)
class TableGroup:
    created_date: datetime
    order_tables: Tuple[OrderTable, ...] = field(default_factory=tuple)
    id: Optional[int] = None

    @property
    def order_table_ids(self) -> Tuple[int, ...]:
        return tuple(table.id for table in self.order_tables)

    def with_order_tables(self, order_tables) -> "TableGroup":
        return replace(self, order_tables=tuple(order_tables))
