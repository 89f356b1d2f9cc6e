"""Product API router."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from kitchenpos.api.schemas import ProductRequest, ProductResponse, as_product_response
from kitchenpos.db.dependencies import get_storage
from kitchenpos.domain import InvalidArgumentError
from kitchenpos.services import product_service
from kitchenpos.storage import Storage


router = APIRouter(prefix="/api/products", tags=["products"])


@router.post("", response_model=ProductResponse, status_code=201, summary="Create product")
async def create_product(
    request: ProductRequest,
    storage: Storage = Depends(get_storage)
) -> ProductResponse:
    """
    Create a product.

    - **name**: Product name
    - **price**: Unit price, must not be negative
    - **Returns**: Created product
    """
    try:
        with storage.unit_of_work() as uow:
            product = product_service.create_product(uow, request.name, request.price)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return as_product_response(product)


@router.get("", response_model=List[ProductResponse], summary="List products")
async def list_products(storage: Storage = Depends(get_storage)) -> List[ProductResponse]:
    with storage.unit_of_work() as uow:
        products = product_service.list_products(uow)
    return [as_product_response(p) for p in products]
