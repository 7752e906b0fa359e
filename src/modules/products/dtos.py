"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (views, the HTTP client)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``ProductInputDTO``: full product payload for create and update (PUT
  replaces every field, so both use the same shape).
- ``ProductOutputDTO``: product as returned to callers.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from modules.products.constants import (
    BRAND_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    INTEGER_MAX,
    NAME_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
)

if TYPE_CHECKING:
    from modules.products.models import Product

_WHOLE_NUMBER_MESSAGES = {
    "id": "Product ID must be a positive integer.",
    "stock": "Stock must be a whole number.",
}


def _require_text(value: str, label: str, max_length: int) -> str:
    if not value:
        raise ValueError(f"{label} is required.")
    if len(value) > max_length:
        raise ValueError(f"{label} must be at most {max_length} characters.")
    return value


# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class ProductInputDTO(BaseModel):
    """Immutable DTO for product create/update requests.

    Validates:
    - ``id`` is a positive integer no larger than ``INTEGER_MAX``.
    - ``name``, ``brand`` and ``description`` are non-empty once trimmed and
      within their maximum lengths.
    - ``price`` is greater than zero.
    - ``stock`` is between zero and ``INTEGER_MAX``.

    Booleans are refused for ``id`` and ``stock`` rather than read as 1/0.

    Surrounding whitespace is stripped from every text field.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: int
    name: str
    brand: str
    price: Decimal = Field(max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES)
    description: str
    stock: int

    @field_validator("id", "stock", mode="before")
    @classmethod
    def reject_booleans(cls, v: Any, info: ValidationInfo) -> Any:
        # JSON true/false would otherwise coerce to 1/0.
        if isinstance(v, bool):
            raise ValueError(_WHOLE_NUMBER_MESSAGES[info.field_name])
        return v

    @field_validator("id")
    @classmethod
    def id_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Product ID must be a positive integer.")
        if v > INTEGER_MAX:
            raise ValueError(f"Product ID must be at most {INTEGER_MAX}.")
        return v

    @field_validator("name")
    @classmethod
    def name_must_be_present(cls, v: str) -> str:
        return _require_text(v, "Name", NAME_MAX_LENGTH)

    @field_validator("brand")
    @classmethod
    def brand_must_be_present(cls, v: str) -> str:
        return _require_text(v, "Brand", BRAND_MAX_LENGTH)

    @field_validator("description")
    @classmethod
    def description_must_be_present(cls, v: str) -> str:
        return _require_text(v, "Description", DESCRIPTION_MAX_LENGTH)

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock cannot be negative.")
        if v > INTEGER_MAX:
            raise ValueError(f"Stock must be at most {INTEGER_MAX}.")
        return v


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for products handed back to callers."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    brand: str
    price: Decimal
    description: str
    stock: int

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            brand=product.brand,
            price=product.price,
            description=product.description,
            stock=product.stock,
        )
