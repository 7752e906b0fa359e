"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.

Id uniqueness is enforced twice: an explicit ``exists`` check gives the
common case a clean answer, and the primary key constraint catches the
concurrent case at commit time.  The losing writer's ``IntegrityError`` is
reported as ``ProductAlreadyExists``; every other database failure becomes
``ProductStoreError``.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

import structlog

from django.db import DatabaseError, IntegrityError, transaction

from modules.products.constants import PRODUCT_FIELDS
from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductNotFound,
    ProductStoreError,
)
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


@contextmanager
def _store_errors(operation: str, **context: Any) -> Iterator[None]:
    try:
        yield
    except DatabaseError as exc:
        logger.error("product.store_failed", operation=operation, error=str(exc), **context)
        raise ProductStoreError(f"Product store failed during {operation}.") from exc


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent, non-integer or out-of-range IDs.
        """
        try:
            with _store_errors("get", product_id=id):
                return Product.objects.filter(pk=id).first()
        except (TypeError, ValueError, OverflowError):
            return None

    def list(self) -> List[Product]:
        with _store_errors("list"):
            return list(Product.objects.order_by("id"))

    def exists(self, id: int) -> bool:
        try:
            with _store_errors("exists", product_id=id):
                return Product.objects.filter(pk=id).exists()
        except (TypeError, ValueError, OverflowError):
            return False

    @transaction.atomic
    def insert(self, product: Product) -> Product:
        """Persist a new product, refusing ids that are already stored."""
        with _store_errors("insert", product_id=product.id):
            if self.exists(product.id):
                raise ProductAlreadyExists()
            try:
                with transaction.atomic():
                    product.save(force_insert=True)
            except IntegrityError as exc:
                if not self.exists(product.id):
                    raise
                logger.warning("product.insert_race_lost", product_id=product.id)
                raise ProductAlreadyExists() from exc

        logger.info("product.inserted", product_id=product.id)
        return product

    @transaction.atomic
    def replace(self, id: int, product: Product) -> Product:
        """Overwrite the stored product, including its id when re-keying.

        The row is locked for the rest of the transaction so a concurrent
        replace or delete of the same id waits for this one.
        """
        rekey = product.id != id
        values = {field: getattr(product, field) for field in PRODUCT_FIELDS}

        with _store_errors("replace", product_id=id):
            current = Product.objects.select_for_update().filter(pk=id).first()
            if current is None:
                raise ProductNotFound(f"Product {id} not found.")
            if rekey and self.exists(product.id):
                raise ProductAlreadyExists()
            try:
                with transaction.atomic():
                    Product.objects.filter(pk=id).update(**values)
            except IntegrityError as exc:
                if not (rekey and self.exists(product.id)):
                    raise
                logger.warning("product.rekey_race_lost", product_id=id, new_id=product.id)
                raise ProductAlreadyExists() from exc
            stored = Product.objects.get(pk=product.id)

        logger.info("product.replaced", product_id=id, new_id=stored.id)
        return stored

    @transaction.atomic
    def delete(self, id: int) -> None:
        with _store_errors("delete", product_id=id):
            deleted, _ = Product.objects.filter(pk=id).delete()
        if not deleted:
            raise ProductNotFound(f"Product {id} not found.")
        logger.info("product.deleted", product_id=id)
