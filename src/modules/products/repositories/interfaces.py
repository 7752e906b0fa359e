"""Product repository interface (the Catalog Store contract).

Extends ``IRepository[Product, int]`` with the two mutations that must keep
product ids unique: ``insert`` and ``replace``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product", int]):
    """Repository contract for the Product entity.

    Mutations are durable once they return.  Storage faults surface as
    ``ProductStoreError``, never as a domain exception.
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional["Product"]:
        """Retrieve a product by id, or ``None``."""

    @abstractmethod
    def list(self) -> List["Product"]:
        """All products, ascending by id."""

    @abstractmethod
    def exists(self, id: int) -> bool:
        """Whether a product is stored under ``id``."""

    @abstractmethod
    def insert(self, product: "Product") -> "Product":
        """Persist a new product.

        Raises:
            ProductAlreadyExists: if ``product.id`` is already stored,
                including when a concurrent insert of the same id wins.
        """

    @abstractmethod
    def replace(self, id: int, product: "Product") -> "Product":
        """Overwrite every field of the product stored under ``id``.

        ``product.id`` may differ from ``id`` (re-keying).

        Raises:
            ProductNotFound: if nothing is stored under ``id``.
            ProductAlreadyExists: if re-keying onto an id owned by another
                product.
        """

    @abstractmethod
    def delete(self, id: int) -> None:
        """Remove the product stored under ``id``.

        Raises:
            ProductNotFound: if nothing is stored under ``id``.
        """
