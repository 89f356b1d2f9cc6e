"""
Table grouping.

A table group joins two or more empty, ungrouped tables so they are served
and settled together. A group can be dissolved only once none of its
tables has a COOKING or MEAL order.
"""

import logging
from typing import Iterable, List

from kitchenpos.domain import (
    OPEN_ORDER_STATUSES,
    InvalidArgumentError,
    NotFoundError,
    OrderTable,
    TableGroup,
)
from kitchenpos.storage import UnitOfWork
from kitchenpos.utils.time_utils import now_local_naive

logger = logging.getLogger(__name__)

MIN_GROUP_SIZE = 2


def _validate_requested_ids(order_table_ids: List[int]) -> None:
    if len(order_table_ids) < MIN_GROUP_SIZE:
        raise InvalidArgumentError(f"At least {MIN_GROUP_SIZE} order tables are required")
    if len(set(order_table_ids)) != len(order_table_ids):
        raise InvalidArgumentError("Duplicated order tables in table group")


def _validate_groupable(uow: UnitOfWork, order_tables: List[OrderTable]) -> None:
    if any(not table.empty for table in order_tables):
        raise InvalidArgumentError("Table group contains an order table that is not empty")
    if any(uow.table_groups.exists_by_order_table(table) for table in order_tables):
        raise InvalidArgumentError("Order table is already in a table group")


def create_table_group(uow: UnitOfWork, order_table_ids: Iterable[int]) -> TableGroup:
    """
    Group the given tables.

    Raises:
        InvalidArgumentError: fewer than two ids, duplicated or unknown ids,
            a non-empty table, or a table that is already grouped
    """
    requested = list(order_table_ids or [])
    _validate_requested_ids(requested)

    saved_tables = uow.order_tables.find_all_by_id_in(requested)
    if len(saved_tables) != len(requested):
        found = {table.id for table in saved_tables}
        missing = [table_id for table_id in requested if table_id not in found]
        raise InvalidArgumentError(f"Unknown order tables: {missing}")

    _validate_groupable(uow, saved_tables)

    table_group = TableGroup(
        created_date=now_local_naive(),
        order_tables=tuple(table.change_empty(False) for table in saved_tables),
    )
    saved = uow.table_groups.save(table_group)
    logger.info("Created table group %s with tables %s", saved.id, list(saved.order_table_ids))
    return saved


def ungroup(uow: UnitOfWork, table_group_id: int) -> None:
    """
    Dissolve a table group. Member tables are kept, detached from the group.

    Raises:
        NotFoundError: unknown table group
        InvalidArgumentError: a member table has a COOKING or MEAL order
    """
    table_group = uow.table_groups.find_by_id(table_group_id)
    if table_group is None:
        raise NotFoundError(f"Table group {table_group_id} does not exist")

    if uow.orders.exists_by_order_table_id_in_and_status_in(
        table_group.order_table_ids, OPEN_ORDER_STATUSES
    ):
        logger.warning("Rejected ungroup of table group %s: open orders remain", table_group_id)
        raise InvalidArgumentError("Table group has incomplete order tables")

    for order_table in table_group.order_tables:
        uow.order_tables.save(order_table.ungroup())
    uow.table_groups.remove_by_id(table_group_id)
    logger.info("Ungrouped table group %s", table_group_id)
