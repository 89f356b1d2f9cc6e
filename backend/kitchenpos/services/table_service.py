"""Order table creation, listing and seating changes."""

import logging
from typing import List

from kitchenpos.domain import (
    OPEN_ORDER_STATUSES,
    InvalidArgumentError,
    NotFoundError,
    OrderTable,
)
from kitchenpos.storage import UnitOfWork

logger = logging.getLogger(__name__)


def _validate_number_of_guests(number_of_guests: int) -> None:
    if not isinstance(number_of_guests, int) or number_of_guests < 0:
        raise InvalidArgumentError("Number of guests must be a non-negative integer")


def _get_table(uow: UnitOfWork, order_table_id: int) -> OrderTable:
    order_table = uow.order_tables.find_by_id(order_table_id)
    if order_table is None:
        raise NotFoundError(f"Order table {order_table_id} does not exist")
    return order_table


def create_table(uow: UnitOfWork, number_of_guests: int = 0, empty: bool = True) -> OrderTable:
    _validate_number_of_guests(number_of_guests)
    saved = uow.order_tables.save(OrderTable(number_of_guests=number_of_guests, empty=bool(empty)))
    logger.info("Created order table %s (guests=%s, empty=%s)", saved.id, saved.number_of_guests, saved.empty)
    return saved


def list_tables(uow: UnitOfWork) -> List[OrderTable]:
    return uow.order_tables.find_all()


def change_empty(uow: UnitOfWork, order_table_id: int, empty: bool) -> OrderTable:
    """
    Mark a table empty or occupied.

    Raises:
        NotFoundError: unknown table
        InvalidArgumentError: the table is grouped or has an open order
    """
    order_table = _get_table(uow, order_table_id)

    if order_table.is_grouped:
        raise InvalidArgumentError(f"Order table {order_table_id} belongs to a table group")

    if uow.orders.exists_by_order_table_id_in_and_status_in([order_table_id], OPEN_ORDER_STATUSES):
        logger.warning("Rejected change of table %s: open orders remain", order_table_id)
        raise InvalidArgumentError(f"Order table {order_table_id} has orders that are not completed")

    saved = uow.order_tables.save(order_table.change_empty(bool(empty)))
    logger.info("Order table %s empty=%s", order_table_id, saved.empty)
    return saved


def change_number_of_guests(uow: UnitOfWork, order_table_id: int, number_of_guests: int) -> OrderTable:
    """
    Raises:
        InvalidArgumentError: negative count, or the table is empty
        NotFoundError: unknown table
    """
    _validate_number_of_guests(number_of_guests)
    order_table = _get_table(uow, order_table_id)
    saved = uow.order_tables.save(order_table.change_number_of_guests(number_of_guests))
    logger.info("Order table %s now seats %s guests", order_table_id, saved.number_of_guests)
    return saved
