"""
Order lifecycle operations.

Orders start in COOKING on a non-empty table. COOKING and MEAL may be
swapped freely; COMPLETION is terminal. Line items are stored on their own
and re-attached to the order by id whenever an order is returned.
"""

import logging
from typing import Any, Iterable, List

from kitchenpos.domain import (
    InvalidArgumentError,
    NotFoundError,
    Order,
    OrderLineItem,
    OrderStatus,
)
from kitchenpos.storage import UnitOfWork
from kitchenpos.utils.time_utils import now_local_naive

logger = logging.getLogger(__name__)


def _as_line_items(line_items: Iterable[Any]) -> List[OrderLineItem]:
    """Accept OrderLineItem values or {"menu_id", "quantity"} dicts."""
    result = []
    for entry in line_items or []:
        if isinstance(entry, OrderLineItem):
            result.append(entry)
        else:
            result.append(OrderLineItem(menu_id=entry["menu_id"], quantity=entry["quantity"]))
    return result


def _validate_line_items(uow: UnitOfWork, line_items: List[OrderLineItem]) -> None:
    if not line_items:
        raise InvalidArgumentError("Order line items are empty")

    for item in line_items:
        if not isinstance(item.quantity, int) or item.quantity < 1:
            raise InvalidArgumentError("Order line item quantity must be a positive integer")

    # every line item needs its own existing menu
    menu_ids = [item.menu_id for item in line_items]
    if len(line_items) != uow.menus.count_by_id_in(menu_ids):
        logger.warning("Rejected order with menus %s", menu_ids)
        raise InvalidArgumentError("Duplicated menu in order line items")


def _with_line_items(uow: UnitOfWork, order: Order) -> Order:
    return order.with_line_items(uow.order_line_items.find_all_by_order_id(order.id))


def create_order(uow: UnitOfWork, order_table_id: int, line_items: Iterable[Any]) -> Order:
    """
    Place an order for a table.

    Raises:
        InvalidArgumentError: empty or duplicated line items, unknown menu,
            unknown table, or empty table
    """
    items = _as_line_items(line_items)
    _validate_line_items(uow, items)

    order_table = uow.order_tables.find_by_id(order_table_id)
    if order_table is None:
        raise InvalidArgumentError(f"Order table {order_table_id} does not exist")
    if order_table.empty:
        raise InvalidArgumentError(f"Order table {order_table_id} is empty")

    order = Order(
        order_table_id=order_table_id,
        order_status=OrderStatus.COOKING,
        ordered_time=now_local_naive(),
    )
    saved_order = uow.orders.save(order)
    saved_items = [uow.order_line_items.save(item.attach_to(saved_order.id)) for item in items]

    logger.info(
        "Created order %s on table %s with %d line items",
        saved_order.id, order_table_id, len(saved_items),
    )
    return saved_order.with_line_items(saved_items)


def list_orders(uow: UnitOfWork) -> List[Order]:
    return [_with_line_items(uow, order) for order in uow.orders.find_all()]


def change_order_status(uow: UnitOfWork, order_id: int, order_status) -> Order:
    """
    Overwrite the status of an order that is not yet completed.

    Raises:
        NotFoundError: unknown order id
        InvalidArgumentError: unknown status, or the order is already completed
    """
    saved_order = uow.orders.find_by_id(order_id)
    if saved_order is None:
        raise NotFoundError(f"Order {order_id} does not exist")

    if saved_order.is_completed:
        logger.warning("Rejected status change of completed order %s", order_id)
        raise InvalidArgumentError(f"Order {order_id} is already completed")

    new_status = OrderStatus.parse(order_status)
    changed = saved_order.with_status(new_status)
    uow.orders.save(changed)
    logger.info("Order %s status %s -> %s", order_id, saved_order.order_status.value, new_status.value)
    return _with_line_items(uow, changed)
