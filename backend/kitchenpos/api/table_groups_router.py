"""Table group API router."""

from fastapi import APIRouter, Depends, HTTPException, Response

from kitchenpos.api.schemas import TableGroupRequest, TableGroupResponse, as_table_group_response
from kitchenpos.db.dependencies import get_storage
from kitchenpos.domain import InvalidArgumentError, NotFoundError
from kitchenpos.services import table_group_service
from kitchenpos.storage import Storage


router = APIRouter(prefix="/api/table-groups", tags=["table-groups"])


@router.post("", response_model=TableGroupResponse, status_code=201, summary="Group order tables")
async def create_table_group(
    request: TableGroupRequest,
    storage: Storage = Depends(get_storage)
) -> TableGroupResponse:
    """
    Group two or more empty, ungrouped tables.

    - **orderTables**: List of {"id"} of the tables to group
    - **Returns**: Created group with its member tables
    """
    order_table_ids = [t.id for t in request.order_tables]
    try:
        with storage.unit_of_work() as uow:
            table_group = table_group_service.create_table_group(uow, order_table_ids)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return as_table_group_response(table_group)


@router.delete("/{table_group_id}", status_code=204, summary="Ungroup order tables")
async def ungroup(
    table_group_id: int,
    storage: Storage = Depends(get_storage)
) -> Response:
    """
    Dissolve a table group once every member table's orders are completed.
    """
    try:
        with storage.unit_of_work() as uow:
            table_group_service.ungroup(uow, table_group_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return Response(status_code=204)
