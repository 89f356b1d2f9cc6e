"""Menu group API router."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from kitchenpos.api.schemas import MenuGroupRequest, MenuGroupResponse, as_menu_group_response
from kitchenpos.db.dependencies import get_storage
from kitchenpos.domain import InvalidArgumentError
from kitchenpos.services import menu_group_service
from kitchenpos.storage import Storage


router = APIRouter(prefix="/api/menu-groups", tags=["menu-groups"])


@router.post("", response_model=MenuGroupResponse, status_code=201, summary="Create menu group")
async def create_menu_group(
    request: MenuGroupRequest,
    storage: Storage = Depends(get_storage)
) -> MenuGroupResponse:
    try:
        with storage.unit_of_work() as uow:
            menu_group = menu_group_service.create_menu_group(uow, request.name)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return as_menu_group_response(menu_group)


@router.get("", response_model=List[MenuGroupResponse], summary="List menu groups")
async def list_menu_groups(storage: Storage = Depends(get_storage)) -> List[MenuGroupResponse]:
    with storage.unit_of_work() as uow:
        menu_groups = menu_group_service.list_menu_groups(uow)
    return [as_menu_group_response(g) for g in menu_groups]
