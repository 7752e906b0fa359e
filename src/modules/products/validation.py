"""Product field validation.

One entry point for "is this product acceptable", used by the service
before every store call and by the client-side editor for its pre-check.
Every violated field is reported together, keyed by field name.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Union

from pydantic import ValidationError as PydanticValidationError

from modules.products.constants import FIELD_LABELS, PRICE_DECIMAL_PLACES
from modules.products.dtos import ProductInputDTO
from modules.products.exceptions import ProductValidationFailed

ProductData = Union[Mapping[str, Any], ProductInputDTO]

NON_FIELD_ERRORS = "non_field_errors"

_TYPE_MESSAGES = {
    "id": "Product ID must be a positive integer.",
    "name": "Name must be text.",
    "brand": "Brand must be text.",
    "description": "Description must be text.",
    "price": "Price must be a number.",
    "stock": "Stock must be a whole number.",
}


def _message_for(field: str, error: Dict[str, Any]) -> str:
    kind = error["type"]
    if kind == "missing" or error.get("input", "") is None:
        return f"{FIELD_LABELS.get(field, field)} is required."
    if kind == "value_error":
        return str(error["ctx"]["error"])
    if kind == "decimal_max_places":
        return f"Price must have at most {PRICE_DECIMAL_PLACES} decimal places."
    if kind in ("decimal_max_digits", "decimal_whole_digits"):
        return "Price is too large."
    return _TYPE_MESSAGES.get(field, error["msg"])


def _as_mapping(data: ProductData) -> Mapping[str, Any]:
    # Already-built DTOs are dumped and checked again: a DTO made with
    # ``model_construct`` skips validation entirely.
    if isinstance(data, ProductInputDTO):
        return data.model_dump()
    if isinstance(data, Mapping):
        return data
    raise ProductValidationFailed({NON_FIELD_ERRORS: "Product data must be an object."})


def validate_product(data: ProductData) -> ProductInputDTO:
    """Validate ``data`` and return the cleaned DTO.

    Raises:
        ProductValidationFailed: with one message per offending field.
    """
    try:
        return ProductInputDTO.model_validate(dict(_as_mapping(data)))
    except PydanticValidationError as exc:
        errors: Dict[str, str] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else NON_FIELD_ERRORS
            errors.setdefault(field, _message_for(field, error))
        raise ProductValidationFailed(errors) from exc


def collect_errors(data: ProductData) -> Dict[str, str]:
    """Same rules as ``validate_product``, returned instead of raised."""
    try:
        validate_product(data)
    except ProductValidationFailed as exc:
        return exc.errors
    return {}
