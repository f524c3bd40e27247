"""Filtered, paginated product listing query.

Each present filter contributes one ``Q`` predicate; the ORM binds every
value (including each id of the ``IN`` list) as a query parameter.  The
page is fetched together with ``COUNT(*) OVER ()`` so rows and the
pre-pagination total arrive in a single round trip.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from django.db.models import Count, Q, QuerySet, Window

from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import GetProductsDTO

TOTAL_ANNOTATION = "total_data"


def build_predicates(dto: GetProductsDTO) -> List[Q]:
    """Return the AND-combined predicates for every filter present on ``dto``."""
    predicates: List[Q] = []

    if dto.product_ids:
        predicates.append(Q(id__in=dto.product_ids))
    if dto.shop_id is not None:
        predicates.append(Q(shop_id=dto.shop_id))
    if dto.category_id is not None:
        predicates.append(Q(category_id=dto.category_id))
    if dto.name:
        predicates.append(Q(name__icontains=dto.name))
    if dto.price_min is not None:
        predicates.append(Q(price__gte=dto.price_min))
    if dto.price_max is not None:
        predicates.append(Q(price__lte=dto.price_max))
    if dto.is_available:
        predicates.append(Q(stock__gt=0))

    return predicates


def build_product_page_query(dto: GetProductsDTO) -> QuerySet[Product]:
    """Live products matching ``dto``, newest first, sliced to the requested page.

    Every row carries a ``total_data`` annotation with the match count
    before ``LIMIT``/``OFFSET`` are applied.
    """
    return (
        Product.objects.alive()
        .filter(*build_predicates(dto))
        .annotate(**{TOTAL_ANNOTATION: Window(expression=Count("id"))})
        .order_by("-created_at", "-id")[dto.offset : dto.offset + dto.limit]
    )
