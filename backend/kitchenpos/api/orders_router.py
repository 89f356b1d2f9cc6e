"""Order API router."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from kitchenpos.api.schemas import (
    ChangeOrderStatusRequest,
    OrderRequest,
    OrderResponse,
    as_order_response,
)
from kitchenpos.db.dependencies import get_storage
from kitchenpos.domain import InvalidArgumentError, NotFoundError
from kitchenpos.services import order_service
from kitchenpos.storage import Storage


router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=OrderResponse, status_code=201, summary="Place an order")
async def create_order(
    request: OrderRequest,
    storage: Storage = Depends(get_storage)
) -> OrderResponse:
    """
    Place an order on an occupied table.

    - **orderTableId**: Table taking the order (must not be empty)
    - **orderLineItems**: Non-empty list of {"menuId", "quantity"}, one per menu
    - **Returns**: Order in COOKING status with its line items
    """
    line_items = [
        {"menu_id": item.menu_id, "quantity": item.quantity}
        for item in request.order_line_items
    ]
    try:
        with storage.unit_of_work() as uow:
            order = order_service.create_order(uow, request.order_table_id, line_items)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return as_order_response(order)


@router.get("", response_model=List[OrderResponse], summary="List orders")
async def list_orders(storage: Storage = Depends(get_storage)) -> List[OrderResponse]:
    with storage.unit_of_work() as uow:
        orders = order_service.list_orders(uow)
    return [as_order_response(o) for o in orders]


@router.put("/{order_id}/order-status", response_model=OrderResponse, summary="Change order status")
async def change_order_status(
    order_id: int,
    request: ChangeOrderStatusRequest,
    storage: Storage = Depends(get_storage)
) -> OrderResponse:
    """
    Change the status of an order (COOKING, MEAL, COMPLETION).

    Completed orders cannot change status.
    """
    try:
        with storage.unit_of_work() as uow:
            order = order_service.change_order_status(uow, order_id, request.order_status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return as_order_response(order)
