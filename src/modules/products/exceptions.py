"""Product domain exceptions.

Raised by the Service Layer (and the repository underneath it) when a
business rule is violated.  The API layer (Views) catches these and
translates them into HTTP responses; the HTTP client turns those responses
back into the same exceptions, so UI code handles one taxonomy whichever
gateway it talks to.
"""

from __future__ import annotations

from typing import Dict, Mapping

from modules.core.exceptions import InfrastructureError

DUPLICATE_ID_MESSAGE = "Product ID must be unique."


class ProductDomainError(Exception):
    """Recoverable, caller-facing product failure."""


class ProductValidationFailed(ProductDomainError):
    """One or more product fields broke a rule.

    ``errors`` maps every offending field to its message; validation never
    stops at the first violation.
    """

    def __init__(self, errors: Mapping[str, str]) -> None:
        self.errors: Dict[str, str] = dict(errors)
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in self.errors.items()))


class ProductAlreadyExists(ProductDomainError):
    """The product id is already taken by another record."""

    def __init__(self, message: str = DUPLICATE_ID_MESSAGE) -> None:
        super().__init__(message)


class ProductNotFound(ProductDomainError):
    """No product is stored under the requested id."""


class ProductStoreError(InfrastructureError):
    """The product store failed for reasons unrelated to the data sent."""
