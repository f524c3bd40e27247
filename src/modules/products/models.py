"""Product catalog models.

Business rules implemented:
- Price must be greater than zero (check constraint).
- Stock cannot be negative (check constraint).
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel); a
  soft-deleted product is invisible to listing, update and delete.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel, SoftDeleteModel


class ProductCategory(BaseModel):
    name = models.CharField(max_length=255)

    class Meta:
        db_table = "product_categories"
        ordering = ["name"]
        verbose_name_plural = "product categories"

    def __str__(self) -> str:
        return self.name


class Product(SoftDeleteModel):
    """Product aggregate root, owned through its shop."""

    shop = models.ForeignKey(
        "shops.Shop",
        on_delete=models.PROTECT,
        related_name="products",
    )
    category = models.ForeignKey(
        ProductCategory,
        on_delete=models.PROTECT,
        related_name="products",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    image_url = models.CharField(max_length=2048, blank=True, default="")
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    stock = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["-created_at", "-id"], name="products_created_idx"),
            models.Index(fields=["shop"], name="products_shop_idx"),
            models.Index(fields=["category"], name="products_category_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    @property
    def is_available(self) -> bool:
        return self.stock > 0

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
