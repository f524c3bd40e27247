"""Product service layer (Use Cases).

Orchestrates the catalog use-cases, delegating persistence to the injected
``IProductRepository``.

Rules enforced here:
- Creating a product requires owning the target shop.
- Updating or deleting a product requires owning the product's shop.
- An update that matches no live product is a ``ProductNotFound``.
- An empty listing page is a ``ProductNotFound``.
- Batch stock updates carry no ownership gate; they are meant for
  trusted internal callers.

The ownership check and the mutation are separate statements without a
shared transaction, so ownership may change between the two.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modules.products.dtos import (
    PaginationMeta,
    ProductListDTO,
    ProductOutputDTO,
    UpsertProductOutputDTO,
)
from modules.products.exceptions import ProductForbidden, ProductNotFound

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        DeleteProductDTO,
        GetProductsDTO,
        UpdateProductDTO,
        UpdateProductStockDTO,
    )
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> UpsertProductOutputDTO:
        """Create a product in a shop owned by ``dto.user_id``.

        Raises:
            ProductForbidden: the user does not own the shop.
        """
        log = logger.bind(user_id=dto.user_id, shop_id=str(dto.shop_id))

        if not self._repo.is_shop_owner(dto.user_id, dto.shop_id):
            log.warning("product.forbidden", reason="not_shop_owner")
            raise ProductForbidden("User is not shop owner")

        product = self._repo.create(dto)
        log.info("product.created", product_id=str(product.id))
        return UpsertProductOutputDTO.from_entity(product, user_id=dto.user_id)

    def update_product(self, dto: UpdateProductDTO) -> UpsertProductOutputDTO:
        """Replace the mutable fields of a product owned by ``dto.user_id``.

        Raises:
            ProductForbidden: the user does not own the product's shop.
            ProductNotFound: the product does not exist or is soft-deleted.
        """
        log = logger.bind(user_id=dto.user_id, product_id=str(dto.product_id))

        if not self._repo.is_product_owner(dto.user_id, dto.product_id):
            log.warning("product.forbidden", reason="not_product_owner")
            raise ProductForbidden("User is not product owner")

        product = self._repo.update(dto)
        if product is None:
            log.warning("product.not_found")
            raise ProductNotFound("Product not found")

        log.info("product.updated")
        return UpsertProductOutputDTO.from_entity(product, user_id=dto.user_id)

    def delete_product(self, dto: DeleteProductDTO) -> None:
        """Soft-delete a product owned by ``dto.user_id``.

        Deleting an already-deleted product succeeds silently.

        Raises:
            ProductForbidden: the user does not own the product's shop.
        """
        log = logger.bind(user_id=dto.user_id, product_id=str(dto.product_id))

        if not self._repo.is_product_owner(dto.user_id, dto.product_id):
            log.warning("product.forbidden", reason="not_product_owner")
            raise ProductForbidden("User is not product owner")

        self._repo.soft_delete(dto.product_id)
        log.info("product.deleted")

    def update_product_stock(self, dto: UpdateProductStockDTO) -> None:
        """Overwrite stock counts for a batch of products atomically."""
        self._repo.update_stock(dto.items)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_products(self, dto: GetProductsDTO) -> ProductListDTO:
        """Return one page of live products with pagination metadata.

        Raises:
            ProductNotFound: the page holds no products.
        """
        products, total = self._repo.list(dto)

        # TODO: return an empty page instead once API clients stop relying on 404.
        if not products:
            logger.warning("product.list_empty", page=dto.page, limit=dto.limit)
            raise ProductNotFound("Products not found")

        return ProductListDTO(
            items=[ProductOutputDTO.from_entity(p) for p in products],
            meta=PaginationMeta(page=dto.page, limit=dto.limit, total_data=total),
        )
