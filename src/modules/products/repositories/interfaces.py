"""Product repository interface.

The Service Layer depends exclusively on this contract (DIP).  Methods
never raise domain errors: ownership checks answer ``False``, updates that
match nothing answer ``None``, listings may be empty.  Only database
failures propagate, as ``django.db.DatabaseError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Tuple
from uuid import UUID

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        GetProductsDTO,
        StockItemDTO,
        UpdateProductDTO,
    )
    from modules.products.models import Product


class IProductRepository(ABC):
    """Repository contract for the Product aggregate."""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @abstractmethod
    def list(self, dto: GetProductsDTO) -> Tuple[List[Product], int]:
        """Return one page of live products and the total match count."""

    @abstractmethod
    def is_shop_owner(self, user_id: int, shop_id: UUID) -> bool:
        """``True`` iff a live shop ``shop_id`` is owned by ``user_id``."""

    @abstractmethod
    def is_product_owner(self, user_id: int, product_id: UUID) -> bool:
        """``True`` iff the product's live shop is owned by ``user_id``.

        The product itself may be soft-deleted.
        """

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @abstractmethod
    def create(self, dto: CreateProductDTO) -> Product:
        """Insert a product and return the persisted row."""

    @abstractmethod
    def update(self, dto: UpdateProductDTO) -> Optional[Product]:
        """Overwrite a live product; ``None`` when no live row matched."""

    @abstractmethod
    def soft_delete(self, product_id: UUID) -> None:
        """Mark a product deleted.  A missing id is a silent no-op."""

    @abstractmethod
    def update_stock(self, items: List[StockItemDTO]) -> None:
        """Apply every stock overwrite in one transaction, all or nothing."""
