"""HTTP client for the product API.

``ProductApiClient`` offers the same five operations as ``ProductService``
so UI code can drive either one.  HTTP error responses are turned back
into the product domain exceptions; transport failures and 5xx answers
raise ``CatalogClientError``.  The client does not validate payloads: the
server's verdict is the only one that counts.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict, List, Optional

import requests
import structlog
from django.conf import settings
from pydantic import ValidationError

from modules.core.exceptions import InfrastructureError
from modules.products.dtos import ProductInputDTO, ProductOutputDTO
from modules.products.exceptions import (
    DUPLICATE_ID_MESSAGE,
    ProductAlreadyExists,
    ProductNotFound,
    ProductValidationFailed,
)
from modules.products.validation import NON_FIELD_ERRORS, ProductData

logger = structlog.get_logger(__name__)


class CatalogClientError(InfrastructureError):
    """The product API could not be reached or answered unexpectedly."""


def _payload(data: ProductData) -> Any:
    if isinstance(data, ProductInputDTO):
        return data.model_dump(mode="json")
    if isinstance(data, Mapping):
        return {k: str(v) if isinstance(v, Decimal) else v for k, v in data.items()}
    return data


class ProductApiClient:
    """requests-based gateway to ``/products``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = (base_url or settings.PRODUCT_API_BASE_URL).rstrip("/")
        self._timeout = settings.PRODUCT_API_TIMEOUT if timeout is None else timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self._base_url}/products{path}"
        request_id = str(uuid.uuid4())
        log = logger.bind(method=method, url=url, request_id=request_id)
        try:
            response = self._session.request(
                method,
                url,
                timeout=self._timeout,
                headers={"X-Request-ID": request_id},
                **kwargs,
            )
        except requests.RequestException as exc:
            log.error("product_api.unreachable", error=str(exc))
            raise CatalogClientError(f"{method} {url} failed: {exc}") from exc

        log.info("product_api.response", status_code=response.status_code)
        if response.status_code >= 500:
            raise CatalogClientError(
                f"{method} {url} returned HTTP {response.status_code}."
            )
        return response

    @staticmethod
    def _body(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _parse(response: requests.Response, many: bool = False) -> Any:
        """Decode a success body into output DTOs."""
        try:
            body = response.json()
            if many:
                return [ProductOutputDTO.model_validate(item) for item in body]
            return ProductOutputDTO.model_validate(body)
        except (ValueError, TypeError, ValidationError) as exc:
            logger.error("product_api.unreadable_body", status_code=response.status_code)
            raise CatalogClientError("The product API returned an unreadable body.") from exc

    def _check(self, response: requests.Response, id: Optional[int] = None) -> None:
        """Raise the domain exception an error response stands for."""
        if response.status_code == 404:
            raise ProductNotFound(f"Product {id} not found.")
        if response.status_code == 400:
            body = self._body(response)
            if isinstance(body, dict) and isinstance(body.get("errors"), dict):
                raise ProductValidationFailed(body["errors"])
            detail = body.get("detail", body) if isinstance(body, dict) else body
            if detail == DUPLICATE_ID_MESSAGE:
                raise ProductAlreadyExists(detail)
            raise ProductValidationFailed({NON_FIELD_ERRORS: str(detail)})
        if not response.ok:
            raise CatalogClientError(
                f"Unexpected HTTP {response.status_code} from the product API."
            )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get_products(self, search: Optional[str] = "") -> List[ProductOutputDTO]:
        params: Dict[str, str] = {"search": search} if search else {}
        response = self._request("GET", "", params=params)
        self._check(response)
        return self._parse(response, many=True)

    def get_product(self, id: int) -> ProductOutputDTO:
        response = self._request("GET", f"/{id}")
        self._check(response, id)
        return self._parse(response)

    def create_product(self, data: ProductData) -> ProductOutputDTO:
        response = self._request("POST", "", json=_payload(data))
        self._check(response)
        return self._parse(response)

    def update_product(self, id: int, data: ProductData) -> ProductOutputDTO:
        response = self._request("PUT", f"/{id}", json=_payload(data))
        self._check(response, id)
        return self._parse(response)

    def delete_product(self, id: int) -> None:
        response = self._request("DELETE", f"/{id}")
        self._check(response, id)
