"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: ownership checks return
``False`` and a missed update returns ``None`` instead of raising; the
Service Layer decides how to translate absence into a domain error.

Only ``update_stock`` spans several statements; it runs inside a single
``transaction.atomic()`` block so any failure leaves every row untouched.
"""

from __future__ import annotations

from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from django.db import DatabaseError, transaction
from django.utils import timezone

from modules.products.dtos import (
    CreateProductDTO,
    GetProductsDTO,
    StockItemDTO,
    UpdateProductDTO,
)
from modules.products.models import Product
from modules.products.queries import TOTAL_ANNOTATION, build_product_page_query
from modules.products.repositories.interfaces import IProductRepository
from modules.shops.models import Shop

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self, dto: GetProductsDTO) -> Tuple[List[Product], int]:
        rows = list(build_product_page_query(dto))
        total = getattr(rows[0], TOTAL_ANNOTATION) if rows else 0
        return rows, total

    def is_shop_owner(self, user_id: int, shop_id: UUID) -> bool:
        return Shop.objects.alive().filter(id=shop_id, user_id=user_id).exists()

    def is_product_owner(self, user_id: int, product_id: UUID) -> bool:
        return Product.objects.filter(
            id=product_id,
            shop__user_id=user_id,
            shop__deleted_at__isnull=True,
        ).exists()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, dto: CreateProductDTO) -> Product:
        product = Product.objects.create(
            shop_id=dto.shop_id,
            category_id=dto.category_id,
            name=dto.name,
            description=dto.description,
            image_url=dto.image_url,
            price=dto.price,
            stock=dto.stock,
        )
        product.refresh_from_db()
        logger.info(
            "product.saved",
            product_id=str(product.id),
            shop_id=str(product.shop_id),
        )
        return product

    @transaction.atomic
    def update(self, dto: UpdateProductDTO) -> Optional[Product]:
        """Overwrite the mutable fields of a live product.

        Returns ``None`` when the id is unknown or the product is soft-deleted.
        """
        matched = (
            Product.objects.alive()
            .filter(id=dto.product_id)
            .update(
                category_id=dto.category_id,
                name=dto.name,
                description=dto.description,
                image_url=dto.image_url,
                price=dto.price,
                stock=dto.stock,
                updated_at=timezone.now(),
            )
        )
        if not matched:
            return None
        return Product.objects.get(id=dto.product_id)

    def soft_delete(self, product_id: UUID) -> None:
        count, _ = Product.objects.filter(id=product_id).delete()
        logger.info(
            "product.soft_deleted",
            product_id=str(product_id),
            affected=count,
        )

    def update_stock(self, items: List[StockItemDTO]) -> None:
        """Overwrite stock for each item, in order, inside one transaction.

        Items whose product is unknown or soft-deleted match zero rows and
        do not fail the batch.  Any database error rolls everything back
        and is re-raised.
        """
        log = logger.bind(item_count=len(items))
        affected = 0
        try:
            with transaction.atomic():
                now = timezone.now()
                for item in items:
                    affected += (
                        Product.objects.alive()
                        .filter(id=item.product_id)
                        .update(stock=item.stock, updated_at=now)
                    )
        except DatabaseError:
            log.exception("product.stock_update_failed")
            raise
        log.info("product.stock_updated", affected=affected)
