"""Product creation and listing."""

import logging
from decimal import Decimal, InvalidOperation
from typing import List

from kitchenpos.domain import InvalidArgumentError, Product
from kitchenpos.storage import UnitOfWork

logger = logging.getLogger(__name__)

# matches the Numeric(19, 2) price columns
PRICE_SCALE = 2


def to_price(value) -> Decimal:
    """
    Parse a price into a non-negative Decimal.

    Raises:
        InvalidArgumentError: if the value is missing, not a number, negative
            or more precise than the stored scale (cents)
    """
    if value is None:
        raise InvalidArgumentError("Price is required")
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidArgumentError(f"Price is not a number: {value}")
    if not price.is_finite() or price < 0:
        raise InvalidArgumentError("Price must not be negative")
    if price.as_tuple().exponent < -PRICE_SCALE:
        raise InvalidArgumentError(f"Price must have at most {PRICE_SCALE} decimal places: {value}")
    return price


def create_product(uow: UnitOfWork, name: str, price) -> Product:
    if name is None or not str(name).strip():
        raise InvalidArgumentError("Product name is required")
    product = Product(name=name, price=to_price(price))
    saved = uow.products.save(product)
    logger.info("Created product %s (%s) priced %s", saved.id, saved.name, saved.price)
    return saved


def list_products(uow: UnitOfWork) -> List[Product]:
    return uow.products.find_all()
