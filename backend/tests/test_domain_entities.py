"""Tests for the immutable domain entities and their transitions."""

from datetime import datetime
from decimal import Decimal

import pytest

from kitchenpos.domain import (
    InvalidArgumentError,
    Order,
    OrderLineItem,
    OrderStatus,
    OrderTable,
    TableGroup,
)


def _order(status=OrderStatus.COOKING):
    return Order(order_table_id=1, order_status=status, ordered_time=datetime(2026, 1, 1, 12, 0), id=7)


class TestOrderStatus:
    """Parsing and terminal state."""

    def test_parse_accepts_enum_and_strings(self):
        assert OrderStatus.parse(OrderStatus.MEAL) is OrderStatus.MEAL
        assert OrderStatus.parse("MEAL") is OrderStatus.MEAL
        assert OrderStatus.parse("completion") is OrderStatus.COMPLETION

    def test_parse_rejects_unknown_status(self):
        with pytest.raises(InvalidArgumentError):
            OrderStatus.parse("EATING")

    def test_only_completion_is_terminal(self):
        assert OrderStatus.COMPLETION.is_terminal
        assert not OrderStatus.COOKING.is_terminal
        assert not OrderStatus.MEAL.is_terminal


class TestOrderTransitions:
    """Order.with_status follows COOKING <-> MEAL -> COMPLETION."""

    @pytest.mark.parametrize("start, target", [
        (OrderStatus.COOKING, OrderStatus.MEAL),
        (OrderStatus.MEAL, OrderStatus.COOKING),
        (OrderStatus.COOKING, OrderStatus.COMPLETION),
        (OrderStatus.MEAL, OrderStatus.COMPLETION),
    ])
    def test_open_orders_change_freely(self, start, target):
        order = _order(start)
        changed = order.with_status(target)
        assert changed.order_status is target
        # original value untouched
        assert order.order_status is start

    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_completed_order_is_terminal(self, target):
        with pytest.raises(InvalidArgumentError):
            _order(OrderStatus.COMPLETION).with_status(target)

    def test_entities_are_frozen(self):
        order = _order()
        with pytest.raises(Exception):
            order.order_status = OrderStatus.MEAL

    def test_with_line_items_keeps_order_fields(self):
        items = [OrderLineItem(menu_id=1, quantity=2, order_id=7, seq=1)]
        order = _order().with_line_items(items)
        assert order.order_line_items == tuple(items)
        assert order.id == 7


class TestOrderTable:
    """Seating transitions."""

    def test_change_number_of_guests_on_occupied_table(self):
        table = OrderTable(number_of_guests=2, empty=False, id=1)
        assert table.change_number_of_guests(5).number_of_guests == 5

    def test_change_number_of_guests_on_empty_table_fails(self):
        with pytest.raises(InvalidArgumentError):
            OrderTable(number_of_guests=0, empty=True, id=1).change_number_of_guests(3)

    def test_ungroup_clears_group_only(self):
        table = OrderTable(number_of_guests=3, empty=False, table_group_id=9, id=1)
        ungrouped = table.ungroup()
        assert ungrouped.table_group_id is None
        assert not ungrouped.is_grouped
        assert ungrouped.empty is False
        assert ungrouped.number_of_guests == 3

    def test_table_group_order_table_ids(self):
        group = TableGroup(
            created_date=datetime(2026, 1, 1),
            order_tables=(OrderTable(id=3), OrderTable(id=5)),
        )
        assert group.order_table_ids == (3, 5)
