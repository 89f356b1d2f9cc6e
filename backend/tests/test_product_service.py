"""Tests for product and menu group services on both storage backends."""

from decimal import Decimal

import pytest

from kitchenpos.domain import InvalidArgumentError
from kitchenpos.services import menu_group_service, product_service


class TestCreateProduct:
    """create_product price validation."""

    def test_create_product(self, storage):
        with storage.unit_of_work() as uow:
            product = product_service.create_product(uow, "Fried chicken", Decimal("16000"))

        assert product.id is not None
        assert product.name == "Fried chicken"
        assert product.price == Decimal("16000")

    def test_zero_price_is_allowed(self, storage):
        with storage.unit_of_work() as uow:
            product = product_service.create_product(uow, "Pickles", 0)
        assert product.price == Decimal("0")

    @pytest.mark.parametrize("price", [None, -1, Decimal("-0.01"), "abc"])
    def test_invalid_price_is_rejected(self, storage, price):
        with pytest.raises(InvalidArgumentError):
            with storage.unit_of_work() as uow:
                product_service.create_product(uow, "Fried chicken", price)

        with storage.unit_of_work() as uow:
            assert product_service.list_products(uow) == []

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_name_is_rejected(self, storage, name):
        with pytest.raises(InvalidArgumentError, match="name is required"):
            with storage.unit_of_work() as uow:
                product_service.create_product(uow, name, 1000)

        with storage.unit_of_work() as uow:
            assert product_service.list_products(uow) == []

    def test_names_need_not_be_unique(self, storage):
        with storage.unit_of_work() as uow:
            product_service.create_product(uow, "Fried chicken", 16000)
            product_service.create_product(uow, "Fried chicken", 15000)

        with storage.unit_of_work() as uow:
            products = product_service.list_products(uow)
        assert [p.name for p in products] == ["Fried chicken", "Fried chicken"]


class TestListProducts:

    def test_list_returns_products_in_insertion_order(self, storage):
        with storage.unit_of_work() as uow:
            for name, price in [("Jajangmyeon", 4500), ("Jjamppong", 5000), ("Tangsuyuk", 10000)]:
                product_service.create_product(uow, name, price)

        with storage.unit_of_work() as uow:
            products = product_service.list_products(uow)

        assert [p.name for p in products] == ["Jajangmyeon", "Jjamppong", "Tangsuyuk"]
        assert products[2].price == Decimal("10000")


class TestMenuGroups:

    def test_create_and_list_menu_groups(self, storage):
        with storage.unit_of_work() as uow:
            created = menu_group_service.create_menu_group(uow, "Set menus")

        with storage.unit_of_work() as uow:
            groups = menu_group_service.list_menu_groups(uow)

        assert created.id is not None
        assert [(g.id, g.name) for g in groups] == [(created.id, "Set menus")]

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_name_is_rejected(self, storage, name):
        with pytest.raises(InvalidArgumentError):
            with storage.unit_of_work() as uow:
                menu_group_service.create_menu_group(uow, name)


class TestPricePrecision:
    """Prices are kept to cents on every backend."""

    @pytest.mark.parametrize("price", [Decimal("1.005"), "0.001", 12.345])
    def test_more_than_two_decimal_places_is_rejected(self, storage, price):
        with pytest.raises(InvalidArgumentError, match="decimal places"):
            with storage.unit_of_work() as uow:
                product_service.create_product(uow, "Side", price)

        with storage.unit_of_work() as uow:
            assert product_service.list_products(uow) == []

    @pytest.mark.parametrize("price", [Decimal("1.5"), Decimal("1.05"), "16000.00", 2.25])
    def test_created_price_matches_stored_price(self, storage, price):
        with storage.unit_of_work() as uow:
            created = product_service.create_product(uow, "Side", price)

        with storage.unit_of_work() as uow:
            listed = product_service.list_products(uow)

        assert listed[0].price == created.price
        assert created.price == Decimal(str(price))
