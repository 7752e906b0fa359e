"""Product service layer (Use Cases).

The single place that decides whether a product is acceptable.  Every
create and update validates the full payload here, before any store call,
no matter what the caller checked already; persistence is delegated to the
injected ``IProductRepository``.

Business rules enforced here:
- Field rules (see ``modules.products.validation``), all violations
  reported together.
- Product ids are unique, on create and when an update re-keys a product.
- Search matches any of the six fields, case-insensitively, keeping id
  order (see ``modules.products.search``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction

from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductNotFound,
    ProductValidationFailed,
)
from modules.products.models import Product
from modules.products.search import filter_products
from modules.products.validation import validate_product

if TYPE_CHECKING:
    from modules.products.dtos import ProductInputDTO
    from modules.products.repositories.interfaces import IProductRepository
    from modules.products.validation import ProductData

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validated(data: ProductData, **context) -> ProductInputDTO:
        try:
            return validate_product(data)
        except ProductValidationFailed as exc:
            logger.info(
                "product.validation_failed",
                fields=sorted(exc.errors),
                **context,
            )
            raise

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, data: ProductData) -> Product:
        """Validate and store a new product.

        Raises:
            ProductValidationFailed: if any field breaks a rule.
            ProductAlreadyExists: if the id is already taken.
        """
        dto = self._validated(data, operation="create")
        log = logger.bind(product_id=dto.id)

        try:
            product = self._repo.insert(Product(**dto.model_dump()))
        except ProductAlreadyExists:
            log.warning("product.duplicate_id")
            raise

        log.info("product.created")
        return product

    @transaction.atomic
    def update_product(self, id: int, data: ProductData) -> Product:
        """Overwrite every field of product ``id`` with ``data``.

        ``data["id"]`` may differ from ``id``; the product is then re-keyed
        as long as the new id is free.

        Raises:
            ProductValidationFailed: if any field breaks a rule.
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if re-keying onto another product's id.
        """
        dto = self._validated(data, operation="update", product_id=id)
        log = logger.bind(product_id=id)

        if self._repo.get_by_id(id) is None:
            raise ProductNotFound(f"Product {id} not found.")

        if dto.id != id and self._repo.exists(dto.id):
            log.warning("product.duplicate_id", new_id=dto.id)
            raise ProductAlreadyExists()

        product = self._repo.replace(id, Product(**dto.model_dump()))

        if product.id != id:
            log.info("product.rekeyed", new_id=product.id)
        log.info("product.updated")
        return product

    @transaction.atomic
    def delete_product(self, id: int) -> None:
        """Remove product ``id``.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if self._repo.get_by_id(id) is None:
            raise ProductNotFound(f"Product {id} not found.")
        self._repo.delete(id)
        logger.info("product.deleted", product_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_products(self, search: Optional[str] = "") -> List[Product]:
        """All products in id order, narrowed by ``search`` when not blank."""
        products = filter_products(self._repo.list(), search)
        logger.info("product.listed", search=search or "", count=len(products))
        return products

    def get_product(self, id: int) -> Product:
        """Retrieve a single product by id.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if product is None:
            raise ProductNotFound(f"Product {id} not found.")
        return product
