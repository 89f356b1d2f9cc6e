"""
Menu creation and listing.

A menu belongs to an existing menu group and is composed of existing
products. Its price may not exceed the summed price of its products.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from kitchenpos.domain import InvalidArgumentError, Menu, MenuProduct
from kitchenpos.services.product_service import to_price
from kitchenpos.storage import UnitOfWork

logger = logging.getLogger(__name__)


def _as_menu_products(menu_products: Iterable[Any]) -> List[MenuProduct]:
    """Accept MenuProduct values or {"product_id", "quantity"} dicts."""
    result = []
    for entry in menu_products or []:
        if isinstance(entry, MenuProduct):
            result.append(entry)
        else:
            result.append(MenuProduct(product_id=entry["product_id"], quantity=entry["quantity"]))
    return result


def _validate_quantities(menu_products: List[MenuProduct]) -> None:
    for menu_product in menu_products:
        if not isinstance(menu_product.quantity, int) or menu_product.quantity < 1:
            raise InvalidArgumentError("Menu product quantity must be a positive integer")


def _products_total(uow: UnitOfWork, menu_products: List[MenuProduct]) -> Decimal:
    product_ids = {mp.product_id for mp in menu_products}
    products: Dict[int, Any] = {p.id: p for p in uow.products.find_all_by_id_in(product_ids)}

    missing = product_ids - set(products)
    if missing:
        raise InvalidArgumentError(f"Unknown products: {sorted(missing)}")

    return sum(
        (products[mp.product_id].price * mp.quantity for mp in menu_products),
        Decimal("0"),
    )


def create_menu(
    uow: UnitOfWork,
    name: str,
    price,
    menu_group_id: int,
    menu_products: Iterable[Any],
) -> Menu:
    """
    Create a menu and its menu products.

    Raises:
        InvalidArgumentError: negative/missing price, unknown menu group or
            product, non-positive quantity, or price above the products' sum
    """
    price = to_price(price)

    if not uow.menu_groups.exists_by_id(menu_group_id):
        raise InvalidArgumentError(f"Menu group {menu_group_id} does not exist")

    items = _as_menu_products(menu_products)
    _validate_quantities(items)

    total = _products_total(uow, items)
    if price > total:
        raise InvalidArgumentError(
            f"Menu price {price} exceeds the sum of its products ({total})"
        )

    saved_menu = uow.menus.save(Menu(name=name, price=price, menu_group_id=menu_group_id))
    saved_products = [uow.menu_products.save(mp.attach_to(saved_menu.id)) for mp in items]

    logger.info("Created menu %s (%s) with %d products", saved_menu.id, saved_menu.name, len(saved_products))
    return saved_menu.with_menu_products(saved_products)


def list_menus(uow: UnitOfWork) -> List[Menu]:
    return [
        menu.with_menu_products(uow.menu_products.find_all_by_menu_id(menu.id))
        for menu in uow.menus.find_all()
    ]
