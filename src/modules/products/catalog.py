"""Client-side product catalogue: cached list, search and edit dialog.

``ProductCatalog`` is the one cache a UI session owns.  It holds the full
product list as last loaded from a gateway (``ProductService`` in-process
or ``ProductApiClient`` over HTTP) and derives the filtered view locally,
so typing in the search box never costs a round trip.  After every
successful mutation the whole list is loaded again; the cache is never
patched in place.

``ProductEditor`` is the add/edit dialog.  Its pre-check runs the same
field rules as the server plus a local id-uniqueness check in add mode, to
give immediate feedback.  The server validates again regardless.

Outcomes are reported as ``Notification`` values.  Domain errors keep the
dialog open with the entered values intact; infrastructure errors
propagate to the caller.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

import structlog

from modules.products.constants import PRODUCT_FIELDS
from modules.products.exceptions import (
    DUPLICATE_ID_MESSAGE,
    ProductDomainError,
    ProductNotFound,
    ProductValidationFailed,
)
from modules.products.search import Searchable, filter_products
from modules.products.validation import ProductData, collect_errors

logger = structlog.get_logger(__name__)


class ProductGateway(Protocol):
    """The five product operations, local or remote."""

    def get_products(self, search: Optional[str] = "") -> Sequence[Searchable]: ...

    def get_product(self, id: int) -> Searchable: ...

    def create_product(self, data: ProductData) -> Searchable: ...

    def update_product(self, id: int, data: ProductData) -> Searchable: ...

    def delete_product(self, id: int) -> None: ...


class Severity(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """Transient, dismissible message shown to the user."""

    message: str
    severity: Severity

    @classmethod
    def success(cls, message: str) -> Notification:
        return cls(message, Severity.SUCCESS)

    @classmethod
    def error(cls, message: str) -> Notification:
        return cls(message, Severity.ERROR)


def _describe(exc: ProductDomainError) -> str:
    if isinstance(exc, ProductValidationFailed):
        return " ".join(exc.errors.values())
    return str(exc)


# ---------------------------------------------------------------------------
# Catalogue cache
# ---------------------------------------------------------------------------


class ProductCatalog:
    """Read-through cache of every product, reloaded after each write."""

    def __init__(self, gateway: ProductGateway) -> None:
        self._gateway = gateway
        self._products: Tuple[Searchable, ...] = ()
        self._pending_delete: Optional[int] = None
        self.search_term = ""

    @property
    def products(self) -> Tuple[Searchable, ...]:
        return self._products

    def load(self) -> Tuple[Searchable, ...]:
        """Replace the cache with the gateway's full, unfiltered list."""
        self._products = tuple(self._gateway.get_products(""))
        logger.info("catalog.loaded", count=len(self._products))
        return self._products

    def visible(self, term: Optional[str] = None) -> List[Searchable]:
        """Cached products matching ``term`` (default: ``search_term``)."""
        return filter_products(self._products, self.search_term if term is None else term)

    def find(self, id: int) -> Optional[Searchable]:
        return next((p for p in self._products if p.id == id), None)

    def is_id_taken(self, id: int) -> bool:
        return self.find(id) is not None

    # ------------------------------------------------------------------
    # Writes (always followed by a full reload)
    # ------------------------------------------------------------------

    def create(self, data: ProductData) -> Searchable:
        product = self._gateway.create_product(data)
        self.load()
        return product

    def update(self, id: int, data: ProductData) -> Searchable:
        try:
            product = self._gateway.update_product(id, data)
        except ProductNotFound:
            # The row is gone; drop it from the cache before reporting.
            self.load()
            raise
        self.load()
        return product

    # ------------------------------------------------------------------
    # Delete confirmation
    # ------------------------------------------------------------------

    @property
    def pending_delete(self) -> Optional[Searchable]:
        if self._pending_delete is None:
            return None
        return self.find(self._pending_delete)

    def request_delete(self, id: int) -> None:
        self._pending_delete = id

    def cancel_delete(self) -> None:
        self._pending_delete = None

    def confirm_delete(self) -> Optional[Notification]:
        """Delete the product awaiting confirmation, if any."""
        if self._pending_delete is None:
            return None
        id, self._pending_delete = self._pending_delete, None
        try:
            self._gateway.delete_product(id)
        except ProductNotFound as exc:
            # Someone else removed it; show the list as it is now.
            self.load()
            return Notification.error(_describe(exc))
        self.load()
        return Notification.success("Product deleted")


# ---------------------------------------------------------------------------
# Add / edit dialog
# ---------------------------------------------------------------------------


class EditorMode(str, enum.Enum):
    ADD = "add"
    EDIT = "edit"


EMPTY_FORM: Dict[str, Any] = {
    "id": 0,
    "name": "",
    "brand": "",
    "price": 0,
    "description": "",
    "stock": 0,
}


class ProductEditor:
    """State machine behind the add/edit product dialog.

    ``open_add`` / ``open_edit`` open it, ``submit`` or ``close`` end it.
    In edit mode the id field is read-only; the product keeps the id it was
    opened with.
    """

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog
        self.mode = EditorMode.ADD
        self.is_open = False
        self._form: Dict[str, Any] = dict(EMPTY_FORM)
        self._editing_id: Optional[int] = None

    @property
    def form(self) -> Dict[str, Any]:
        return dict(self._form)

    def open_add(self) -> None:
        self.mode = EditorMode.ADD
        self._form = dict(EMPTY_FORM)
        self._editing_id = None
        self.is_open = True

    def open_edit(self, product: Searchable) -> None:
        self.mode = EditorMode.EDIT
        self._form = {field: getattr(product, field) for field in PRODUCT_FIELDS}
        self._editing_id = product.id
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def set_field(self, field: str, value: Any) -> None:
        if field not in PRODUCT_FIELDS:
            raise ValueError(f"Unknown product field: {field!r}.")
        if field == "id" and self.mode is EditorMode.EDIT:
            raise ValueError("Product ID cannot be changed while editing.")
        self._form[field] = value

    def precheck(self) -> Dict[str, str]:
        """Field errors the server would report, plus local id clashes."""
        errors = collect_errors(self._form)
        if self.mode is EditorMode.ADD and "id" not in errors:
            try:
                candidate = int(self._form["id"])
            except (TypeError, ValueError):
                candidate = None
            if candidate is not None and self._catalog.is_id_taken(candidate):
                errors["id"] = DUPLICATE_ID_MESSAGE
        return errors

    def submit(self) -> Notification:
        """Pre-check, then create or update through the catalogue.

        On success the dialog closes; on a domain error it stays open with
        the form untouched.
        """
        if not self.is_open:
            raise RuntimeError("The product editor is not open.")

        errors = self.precheck()
        if errors:
            logger.info("editor.precheck_failed", mode=self.mode.value, fields=sorted(errors))
            return Notification.error(" ".join(errors.values()))

        try:
            if self.mode is EditorMode.ADD:
                self._catalog.create(self._form)
                message = "Product added successfully"
            else:
                self._catalog.update(self._editing_id, self._form)
                message = "Product updated successfully"
        except ProductDomainError as exc:
            logger.info("editor.rejected", mode=self.mode.value, error=type(exc).__name__)
            return Notification.error(_describe(exc))

        self.close()
        return Notification.success(message)
