"""
Abstract storage interfaces for kitchenpos.

Defines one repository contract per entity, the UnitOfWork bundle that
exposes them inside a single transaction, and the Storage factory that
opens units of work. Implementations can be in-memory, database-backed,
or other backends.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

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


class ProductRepository(ABC):
    """Persistence contract for products."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Insert (no id) or update a product. Returns it with its id."""
        ...

    @abstractmethod
    def find_by_id(self, product_id: int) -> Optional[Product]:
        ...

    @abstractmethod
    def find_all(self) -> List[Product]:
        ...

    @abstractmethod
    def find_all_by_id_in(self, product_ids: Iterable[int]) -> List[Product]:
        """Return the existing products among the given ids, each once."""
        ...


class MenuGroupRepository(ABC):
    """Persistence contract for menu groups."""

    @abstractmethod
    def save(self, menu_group: MenuGroup) -> MenuGroup:
        ...

    @abstractmethod
    def find_by_id(self, menu_group_id: int) -> Optional[MenuGroup]:
        ...

    @abstractmethod
    def find_all(self) -> List[MenuGroup]:
        ...

    @abstractmethod
    def exists_by_id(self, menu_group_id: int) -> bool:
        ...


class MenuRepository(ABC):
    """Persistence contract for menus. Menu products are stored separately."""

    @abstractmethod
    def save(self, menu: Menu) -> Menu:
        ...

    @abstractmethod
    def find_by_id(self, menu_id: int) -> Optional[Menu]:
        ...

    @abstractmethod
    def find_all(self) -> List[Menu]:
        ...

    @abstractmethod
    def count_by_id_in(self, menu_ids: Iterable[int]) -> int:
        """Count existing menus among the given ids (each menu counted once)."""
        ...


class MenuProductRepository(ABC):
    """Persistence contract for the products that compose a menu."""

    @abstractmethod
    def save(self, menu_product: MenuProduct) -> MenuProduct:
        ...

    @abstractmethod
    def find_all_by_menu_id(self, menu_id: int) -> List[MenuProduct]:
        ...


class OrderRepository(ABC):
    """Persistence contract for orders. Line items are stored separately."""

    @abstractmethod
    def save(self, order: Order) -> Order:
        ...

    @abstractmethod
    def find_by_id(self, order_id: int) -> Optional[Order]:
        ...

    @abstractmethod
    def find_all(self) -> List[Order]:
        ...

    @abstractmethod
    def exists_by_order_table_id_in_and_status_in(
        self, order_table_ids: Iterable[int], statuses: Iterable[OrderStatus]
    ) -> bool:
        """True if any order on one of the tables is in one of the statuses."""
        ...


class OrderLineItemRepository(ABC):
    """Persistence contract for order line items."""

    @abstractmethod
    def save(self, order_line_item: OrderLineItem) -> OrderLineItem:
        ...

    @abstractmethod
    def find_all_by_order_id(self, order_id: int) -> List[OrderLineItem]:
        ...


class OrderTableRepository(ABC):
    """Persistence contract for order tables."""

    @abstractmethod
    def save(self, order_table: OrderTable) -> OrderTable:
        ...

    @abstractmethod
    def find_by_id(self, order_table_id: int) -> Optional[OrderTable]:
        ...

    @abstractmethod
    def find_all(self) -> List[OrderTable]:
        ...

    @abstractmethod
    def find_all_by_id_in(self, order_table_ids: Iterable[int]) -> List[OrderTable]:
        """Return the existing tables among the given ids, each once."""
        ...


class TableGroupRepository(ABC):
    """Persistence contract for table groups and their membership."""

    @abstractmethod
    def save(self, table_group: TableGroup) -> TableGroup:
        """
        Insert or update a table group.

        Also stamps the group id on every member table, so the returned
        group carries tables whose table_group_id is set.
        """
        ...

    @abstractmethod
    def find_by_id(self, table_group_id: int) -> Optional[TableGroup]:
        ...

    @abstractmethod
    def exists_by_order_table(self, order_table: OrderTable) -> bool:
        """True if the table is a member of any table group."""
        ...

    @abstractmethod
    def remove_by_id(self, table_group_id: int) -> None:
        """Delete the group row. Member tables must already be detached."""
        ...


class UnitOfWork:
    """Repositories bound to one transaction."""

    def __init__(
        self,
        products: ProductRepository,
        menu_groups: MenuGroupRepository,
        menus: MenuRepository,
        menu_products: MenuProductRepository,
        orders: OrderRepository,
        order_line_items: OrderLineItemRepository,
        order_tables: OrderTableRepository,
        table_groups: TableGroupRepository,
    ):
        self.products = products
        self.menu_groups = menu_groups
        self.menus = menus
        self.menu_products = menu_products
        self.orders = orders
        self.order_line_items = order_line_items
        self.order_tables = order_tables
        self.table_groups = table_groups


class Storage(ABC):
    """Abstract base class for storage implementations."""

    name = "abstract"

    @abstractmethod
    @contextmanager
    def unit_of_work(self) -> Iterator[UnitOfWork]:
        """
        Open a transaction and yield its repositories.

        Commits when the block exits normally, rolls back when it raises,
        and always releases the underlying resources.
        """
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove all stored state."""
        ...

    def close(self) -> None:
        """Release backend resources. No-op by default."""
