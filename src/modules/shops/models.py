"""Shop model: the unit of product ownership.

Every shop has exactly one owning user; a shop's products are owned by that
user transitively.  Soft-deleted shops grant no ownership.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import SoftDeleteModel


class Shop(SoftDeleteModel):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="shops",
    )
    name = models.CharField(max_length=255)

    class Meta:
        db_table = "shops"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "id"], name="shops_user_id_idx"),
        ]

    def __str__(self) -> str:
        return self.name
