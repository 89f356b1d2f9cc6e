"""
Request and response models for the kitchenpos HTTP API.

JSON keys are camelCase; the models accept either the alias or the field
name. The as_*_response functions assemble responses from domain entities.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from kitchenpos.domain import Menu, MenuGroup, MenuProduct, Order, OrderLineItem, OrderTable, Product, TableGroup


class ApiModel(BaseModel):
    """Base model: camelCase aliases, population by field name allowed."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ---------- Requests ----------

class ProductRequest(ApiModel):
    name: str
    price: Optional[Decimal] = None


class MenuGroupRequest(ApiModel):
    name: str


class MenuProductRequest(ApiModel):
    product_id: int = Field(alias="productId")
    quantity: int


class MenuRequest(ApiModel):
    name: str
    price: Optional[Decimal] = None
    menu_group_id: int = Field(alias="menuGroupId")
    menu_products: List[MenuProductRequest] = Field(default_factory=list, alias="menuProducts")


class OrderLineItemRequest(ApiModel):
    menu_id: int = Field(alias="menuId")
    quantity: int


class OrderRequest(ApiModel):
    order_table_id: int = Field(alias="orderTableId")
    order_line_items: List[OrderLineItemRequest] = Field(default_factory=list, alias="orderLineItems")


class ChangeOrderStatusRequest(ApiModel):
    order_status: str = Field(alias="orderStatus")


class OrderTableRequest(ApiModel):
    number_of_guests: int = Field(default=0, alias="numberOfGuests")
    empty: bool = True


class ChangeEmptyRequest(ApiModel):
    empty: bool


class ChangeNumberOfGuestsRequest(ApiModel):
    number_of_guests: int = Field(alias="numberOfGuests")


class OrderTableIdRequest(ApiModel):
    id: int


class TableGroupRequest(ApiModel):
    order_tables: List[OrderTableIdRequest] = Field(default_factory=list, alias="orderTables")


# ---------- Responses ----------

class ProductResponse(ApiModel):
    id: int
    name: str
    price: Decimal


class MenuGroupResponse(ApiModel):
    id: int
    name: str


class MenuProductResponse(ApiModel):
    seq: int
    product_id: int = Field(alias="productId")
    quantity: int


class MenuResponse(ApiModel):
    id: int
    name: str
    price: Decimal
    menu_group_id: int = Field(alias="menuGroupId")
    menu_products: List[MenuProductResponse] = Field(alias="menuProducts")


class OrderLineItemResponse(ApiModel):
    seq: int
    menu_id: int = Field(alias="menuId")
    quantity: int


class OrderResponse(ApiModel):
    id: int
    order_table_id: int = Field(alias="orderTableId")
    order_status: str = Field(alias="orderStatus")
    ordered_time: datetime = Field(alias="orderedTime")
    order_line_items: List[OrderLineItemResponse] = Field(alias="orderLineItems")


class OrderTableResponse(ApiModel):
    id: int
    table_group_id: Optional[int] = Field(default=None, alias="tableGroupId")
    number_of_guests: int = Field(alias="numberOfGuests")
    empty: bool


class TableGroupResponse(ApiModel):
    id: int
    created_date: datetime = Field(alias="createdDate")
    order_tables: List[OrderTableResponse] = Field(alias="orderTables")


# ---------- Assembly ----------

def as_product_response(product: Product) -> ProductResponse:
    return ProductResponse(id=product.id, name=product.name, price=product.price)


def as_menu_group_response(menu_group: MenuGroup) -> MenuGroupResponse:
    return MenuGroupResponse(id=menu_group.id, name=menu_group.name)


def _as_menu_product_response(menu_product: MenuProduct) -> MenuProductResponse:
    return MenuProductResponse(
        seq=menu_product.seq,
        product_id=menu_product.product_id,
        quantity=menu_product.quantity,
    )


def as_menu_response(menu: Menu) -> MenuResponse:
    return MenuResponse(
        id=menu.id,
        name=menu.name,
        price=menu.price,
        menu_group_id=menu.menu_group_id,
        menu_products=[_as_menu_product_response(mp) for mp in menu.menu_products],
    )


def _as_order_line_item_response(item: OrderLineItem) -> OrderLineItemResponse:
    return OrderLineItemResponse(seq=item.seq, menu_id=item.menu_id, quantity=item.quantity)


def as_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        order_table_id=order.order_table_id,
        order_status=order.order_status.value,
        ordered_time=order.ordered_time,
        order_line_items=[_as_order_line_item_response(i) for i in order.order_line_items],
    )


def as_order_table_response(order_table: OrderTable) -> OrderTableResponse:
    return OrderTableResponse(
        id=order_table.id,
        table_group_id=order_table.table_group_id,
        number_of_guests=order_table.number_of_guests,
        empty=order_table.empty,
    )


def as_table_group_response(table_group: TableGroup) -> TableGroupResponse:
    return TableGroupResponse(
        id=table_group.id,
        created_date=table_group.created_date,
        order_tables=[as_order_table_response(t) for t in table_group.order_tables],
    )
