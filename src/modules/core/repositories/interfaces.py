"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T, K]``, the base abstract class that domain-specific
repository interfaces extend.  Service-layer code depends on this
abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")
K = TypeVar("K")


class IRepository(ABC, Generic[T, K]):
    """Base generic repository contract.

    ``T`` is the entity managed by the repository, ``K`` the type of its
    key.  Look-ups return ``None`` for missing keys; deciding whether that is
    an error belongs to the caller.
    """

    @abstractmethod
    def get_by_id(self, id: K) -> Optional[T]:
        """Retrieve an entity by its key."""

    @abstractmethod
    def list(self) -> List[T]:
        """List every entity in key order."""

    @abstractmethod
    def exists(self, id: K) -> bool:
        """Whether an entity with this key is stored."""

    @abstractmethod
    def delete(self, id: K) -> None:
        """Remove an entity by key."""
