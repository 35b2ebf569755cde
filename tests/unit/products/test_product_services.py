"""Unit tests for ProductService."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.core.exceptions import InvalidRequest
from modules.products.dtos import UpdateProductDTO
from modules.products.exceptions import InvalidProductUpdate, ProductNotFound
from modules.products.models import ProductStatus
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return ProductService(repository=ProductDjangoRepository())


class TestUpdateProduct:
    def test_updates_supplied_fields_only(self, service, make_product):
        product = make_product(name="Lamp", price="5.00", stock=3)

        updated = service.update_product(str(product.id), UpdateProductDTO(price=Decimal("7.25")))

        assert updated.price == Decimal("7.25")
        assert updated.name == "Lamp"
        assert updated.stock == 3

    def test_stock_zero_forces_sold(self, service, make_product):
        product = make_product(stock=3)

        updated = service.update_product(str(product.id), UpdateProductDTO(stock=0))

        assert updated.status == ProductStatus.SOLD

    def test_restock_moves_sold_back_to_in_stock(self, service, make_product):
        product = make_product(stock=0)

        updated = service.update_product(str(product.id), UpdateProductDTO(stock=8))

        assert updated.status == ProductStatus.IN_STOCK

    def test_sold_with_stock_left_is_rejected(self, service, make_product):
        product = make_product(stock=3)

        with pytest.raises(InvalidProductUpdate):
            service.update_product(
                str(product.id), UpdateProductDTO(status=ProductStatus.SOLD)
            )

    def test_sold_with_stock_zero_is_accepted(self, service, make_product):
        product = make_product(stock=3)

        updated = service.update_product(
            str(product.id), UpdateProductDTO(stock=0, status=ProductStatus.SOLD)
        )

        assert updated.status == ProductStatus.SOLD

    def test_reserved_can_be_set_with_stock(self, service, make_product):
        product = make_product(stock=3)

        updated = service.update_product(
            str(product.id), UpdateProductDTO(status=ProductStatus.RESERVED)
        )

        assert updated.status == ProductStatus.RESERVED

    def test_unknown_product(self, service):
        with pytest.raises(ProductNotFound):
            service.update_product(str(uuid4()), UpdateProductDTO(stock=1))


class TestSearchProducts:
    def test_returns_in_stock_matches_only(self, service, make_product):
        make_product(name="Blue Chair", stock=2)
        make_product(name="Red Chair", stock=0)
        make_product(name="Desk", stock=2)

        names = [p.name for p in service.search_products("chair")]

        assert names == ["Blue Chair"]

    @pytest.mark.parametrize("term", [None, "", "   "])
    def test_requires_term(self, service, term):
        with pytest.raises(InvalidRequest):
            service.search_products(term)
