"""Order table API router."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from kitchenpos.api.schemas import (
    ChangeEmptyRequest,
    ChangeNumberOfGuestsRequest,
    OrderTableRequest,
    OrderTableResponse,
    as_order_table_response,
)
from kitchenpos.db.dependencies import get_storage
from kitchenpos.domain import InvalidArgumentError, NotFoundError
from kitchenpos.services import table_service
from kitchenpos.storage import Storage


router = APIRouter(prefix="/api/tables", tags=["tables"])


@router.post("", response_model=OrderTableResponse, status_code=201, summary="Create order table")
async def create_table(
    request: OrderTableRequest,
    storage: Storage = Depends(get_storage)
) -> OrderTableResponse:
    try:
        with storage.unit_of_work() as uow:
            order_table = table_service.create_table(uow, request.number_of_guests, request.empty)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return as_order_table_response(order_table)


@router.get("", response_model=List[OrderTableResponse], summary="List order tables")
async def list_tables(storage: Storage = Depends(get_storage)) -> List[OrderTableResponse]:
    with storage.unit_of_work() as uow:
        order_tables = table_service.list_tables(uow)
    return [as_order_table_response(t) for t in order_tables]


@router.put("/{order_table_id}/empty", response_model=OrderTableResponse, summary="Mark table empty or occupied")
async def change_empty(
    order_table_id: int,
    request: ChangeEmptyRequest,
    storage: Storage = Depends(get_storage)
) -> OrderTableResponse:
    """
    Change whether a table is empty.

    Rejected for grouped tables and tables with COOKING or MEAL orders.
    """
    try:
        with storage.unit_of_work() as uow:
            order_table = table_service.change_empty(uow, order_table_id, request.empty)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return as_order_table_response(order_table)


@router.put(
    "/{order_table_id}/number-of-guests",
    response_model=OrderTableResponse,
    summary="Change number of guests",
)
async def change_number_of_guests(
    order_table_id: int,
    request: ChangeNumberOfGuestsRequest,
    storage: Storage = Depends(get_storage)
) -> OrderTableResponse:
    try:
        with storage.unit_of_work() as uow:
            order_table = table_service.change_number_of_guests(
                uow, order_table_id, request.number_of_guests
            )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return as_order_table_response(order_table)
