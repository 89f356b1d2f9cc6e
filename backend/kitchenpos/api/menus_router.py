"""Menu API router."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from kitchenpos.api.schemas import MenuRequest, MenuResponse, as_menu_response
from kitchenpos.db.dependencies import get_storage
from kitchenpos.domain import InvalidArgumentError
from kitchenpos.services import menu_service
from kitchenpos.storage import Storage


router = APIRouter(prefix="/api/menus", tags=["menus"])


@router.post("", response_model=MenuResponse, status_code=201, summary="Create menu")
async def create_menu(
    request: MenuRequest,
    storage: Storage = Depends(get_storage)
) -> MenuResponse:
    """
    Create a menu from existing products.

    - **name**: Menu name
    - **price**: Menu price, at most the sum of its products
    - **menuGroupId**: Existing menu group
    - **menuProducts**: List of {"productId", "quantity"}
    - **Returns**: Created menu with its menu products
    """
    menu_products = [
        {"product_id": mp.product_id, "quantity": mp.quantity}
        for mp in request.menu_products
    ]
    try:
        with storage.unit_of_work() as uow:
            menu = menu_service.create_menu(
                uow, request.name, request.price, request.menu_group_id, menu_products
            )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return as_menu_response(menu)


@router.get("", response_model=List[MenuResponse], summary="List menus")
async def list_menus(storage: Storage = Depends(get_storage)) -> List[MenuResponse]:
    with storage.unit_of_work() as uow:
        menus = menu_service.list_menus(uow)
    return [as_menu_response(m) for m in menus]
