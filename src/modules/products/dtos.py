"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the typed requests callers hand to ``ProductService`` and the
responses it returns.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO`` / ``UpdateProductDTO`` / ``DeleteProductDTO``:
  mutations carrying the acting ``user_id``.
- ``GetProductsDTO``: listing filters plus ``page`` / ``limit``.
- ``UpdateProductStockDTO``: batch of ``StockItemDTO``.
- ``ProductOutputDTO``, ``UpsertProductOutputDTO``, ``ProductListDTO``:
  responses.
"""

from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from django.conf import settings
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

if TYPE_CHECKING:
    from modules.products.models import Product


def _default_page_size() -> int:
    return settings.CATALOG_DEFAULT_PAGE_SIZE


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class _ProductPayload(BaseModel):
    """Fields shared by create and update requests."""

    model_config = ConfigDict(frozen=True)

    category_id: UUID
    name: str = Field(max_length=255)
    description: str = ""
    image_url: str = Field(default="", max_length=2048)
    price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    stock: int = 0

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock cannot be negative.")
        return v


class CreateProductDTO(_ProductPayload):
    user_id: int
    shop_id: UUID


class UpdateProductDTO(_ProductPayload):
    """Full replacement of the mutable product fields."""

    user_id: int
    product_id: UUID


class DeleteProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    product_id: UUID


class GetProductsDTO(BaseModel):
    """Listing filters.  Every filter is optional; absent ones add no predicate."""

    model_config = ConfigDict(frozen=True)

    product_ids: List[UUID] = Field(default_factory=list)
    shop_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    name: Optional[str] = None
    price_min: Optional[Decimal] = None
    price_max: Optional[Decimal] = None
    is_available: bool = False
    page: int = Field(default=1, ge=1)
    limit: int = Field(default_factory=_default_page_size, ge=1)

    @field_validator("product_ids", mode="before")
    @classmethod
    def split_comma_separated_ids(cls, v):
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("name")
    @classmethod
    def blank_name_means_no_filter(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def price_range_must_be_ordered(self) -> GetProductsDTO:
        if (
            self.price_min is not None
            and self.price_max is not None
            and self.price_min > self.price_max
        ):
            raise ValueError("price_min must be less than or equal to price_max.")
        return self

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class StockItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    stock: int

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock cannot be negative.")
        return v


class UpdateProductStockDTO(BaseModel):
    """Ordered batch of stock overwrites.  Duplicates apply in order."""

    model_config = ConfigDict(frozen=True)

    items: List[StockItemDTO] = Field(min_length=1)


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for a persisted product row."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    shop_id: UUID
    category_id: UUID
    name: str
    description: str
    image_url: str
    price: Decimal
    stock: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            shop_id=product.shop_id,
            category_id=product.category_id,
            name=product.name,
            description=product.description,
            image_url=product.image_url,
            price=product.price,
            stock=product.stock,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class UpsertProductOutputDTO(ProductOutputDTO):
    """Product row with the acting user echoed back."""

    user_id: int

    @classmethod
    def from_entity(cls, product: Product, user_id: int) -> UpsertProductOutputDTO:
        base = ProductOutputDTO.from_entity(product)
        return cls(**base.model_dump(), user_id=user_id)


class PaginationMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int
    limit: int
    total_data: int

    @computed_field
    @property
    def total_page(self) -> int:
        return math.ceil(self.total_data / self.limit)


class ProductListDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: List[ProductOutputDTO]
    meta: PaginationMeta
