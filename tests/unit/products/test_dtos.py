"""Unit tests for Product DTOs.

Covers:
- CreateProductDTO / UpdateProductDTO: price, stock and name validation.
- GetProductsDTO: defaults, page bounds, price range ordering, id parsing.
- UpdateProductStockDTO: empty batch rejected.
- PaginationMeta: total page computation.
- UpsertProductOutputDTO: user id echoed back.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import (
    CreateProductDTO,
    GetProductsDTO,
    PaginationMeta,
    UpdateProductStockDTO,
    UpsertProductOutputDTO,
)

pytestmark = pytest.mark.unit


def _create_kwargs(**overrides):
    data = {
        "user_id": 1,
        "shop_id": uuid.uuid4(),
        "category_id": uuid.uuid4(),
        "name": "Widget",
        "price": Decimal("19.99"),
    }
    data.update(overrides)
    return data


class TestCreateProductDTO:
    def test_optional_fields_default(self):
        dto = CreateProductDTO(**_create_kwargs())
        assert dto.description == ""
        assert dto.image_url == ""
        assert dto.stock == 0

    def test_name_is_stripped(self):
        dto = CreateProductDTO(**_create_kwargs(name="  Widget  "))
        assert dto.name == "Widget"

    @pytest.mark.parametrize("price", [Decimal("0"), Decimal("-1.00")])
    def test_non_positive_price_rejected(self, price):
        with pytest.raises(ValidationError, match="greater than 0"):
            CreateProductDTO(**_create_kwargs(price=price))

    @pytest.mark.parametrize("price", [Decimal("0.001"), Decimal("1.005")])
    def test_price_finer_than_cents_rejected(self, price):
        with pytest.raises(ValidationError, match="decimal place"):
            CreateProductDTO(**_create_kwargs(price=price))

    def test_price_above_column_precision_rejected(self):
        with pytest.raises(ValidationError, match="digits"):
            CreateProductDTO(**_create_kwargs(price=Decimal("12345678901.00")))

    def test_name_longer_than_column_rejected(self):
        with pytest.raises(ValidationError, match="at most 255 characters"):
            CreateProductDTO(**_create_kwargs(name="x" * 256))

    def test_image_url_longer_than_column_rejected(self):
        with pytest.raises(ValidationError, match="at most 2048 characters"):
            CreateProductDTO(**_create_kwargs(image_url="https://x.io/" + "a" * 2040))

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            CreateProductDTO(**_create_kwargs(stock=-1))

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Name must not be empty"):
            CreateProductDTO(**_create_kwargs(name="   "))

    def test_frozen(self):
        dto = CreateProductDTO(**_create_kwargs())
        with pytest.raises(ValidationError):
            dto.name = "Other"


class TestGetProductsDTO:
    def test_defaults(self, settings):
        settings.CATALOG_DEFAULT_PAGE_SIZE = 25
        dto = GetProductsDTO()
        assert dto.page == 1
        assert dto.limit == 25
        assert dto.product_ids == []
        assert dto.is_available is False

    def test_offset(self):
        assert GetProductsDTO(page=3, limit=20).offset == 40

    @pytest.mark.parametrize("field", ["page", "limit"])
    def test_page_and_limit_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            GetProductsDTO(**{field: 0})

    def test_price_min_above_max_rejected(self):
        with pytest.raises(ValidationError, match="price_min"):
            GetProductsDTO(price_min=Decimal("10"), price_max=Decimal("5"))

    def test_equal_price_bounds_allowed(self):
        dto = GetProductsDTO(price_min=Decimal("5"), price_max=Decimal("5"))
        assert dto.price_min == dto.price_max

    def test_comma_separated_ids_are_split(self):
        a, b = uuid.uuid4(), uuid.uuid4()
        dto = GetProductsDTO(product_ids=f"{a}, {b},")
        assert dto.product_ids == [a, b]

    def test_blank_name_is_dropped(self):
        assert GetProductsDTO(name="  ").name is None


class TestUpdateProductStockDTO:
    def test_empty_batch_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductStockDTO(items=[])

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductStockDTO(items=[{"product_id": uuid.uuid4(), "stock": -3}])


class TestPaginationMeta:
    @pytest.mark.parametrize(
        ("total", "limit", "pages"),
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 7, 4)],
    )
    def test_total_page_is_ceiling(self, total, limit, pages):
        meta = PaginationMeta(page=1, limit=limit, total_data=total)
        assert meta.total_page == pages

    def test_total_page_is_serialized(self):
        meta = PaginationMeta(page=2, limit=5, total_data=12)
        assert meta.model_dump() == {
            "page": 2,
            "limit": 5,
            "total_data": 12,
            "total_page": 3,
        }


class TestUpsertProductOutputDTO:
    def test_from_entity_echoes_user_id(self, make_product, owner):
        product = make_product()
        dto = UpsertProductOutputDTO.from_entity(product, user_id=owner.id)
        assert dto.user_id == owner.id
        assert dto.id == product.id
        assert dto.shop_id == product.shop_id
        assert dto.price == Decimal("19.99")
