"""Domain model for kitchenpos."""

from .entities import (
    OPEN_ORDER_STATUSES,
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
from .errors import InvalidArgumentError, KitchenPosError, NotFoundError

__all__ = [
    "OPEN_ORDER_STATUSES",
    "Menu",
    "MenuGroup",
    "MenuProduct",
    "Order",
    "OrderLineItem",
    "OrderStatus",
    "OrderTable",
    "Product",
    "TableGroup",
    "InvalidArgumentError",
    "KitchenPosError",
    "NotFoundError",
]
