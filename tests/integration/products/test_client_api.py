"""ProductApiClient against the real product views.

A ``requests`` transport adapter hands every request to Django's test
client, so the client's URLs, verbs and body handling go through the
router, middleware and views unchanged.
"""

from __future__ import annotations

from decimal import Decimal
from urllib.parse import urlsplit

import pytest
import requests
from django.test import Client
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from modules.products.catalog import ProductCatalog, ProductEditor, Severity
from modules.products.client import ProductApiClient
from modules.products.exceptions import (
    DUPLICATE_ID_MESSAGE,
    ProductAlreadyExists,
    ProductNotFound,
    ProductValidationFailed,
)
from modules.products.models import Product

pytestmark = pytest.mark.integration


class DjangoClientAdapter(BaseAdapter):
    """Serve ``requests`` calls from the Django test client."""

    def __init__(self) -> None:
        super().__init__()
        self.client = Client()

    def send(self, request, **kwargs):
        url = urlsplit(request.url)
        path = f"{url.path}?{url.query}" if url.query else url.path
        answer = self.client.generic(
            request.method,
            path,
            data=request.body or b"",
            content_type=request.headers.get("Content-Type", "application/json"),
            headers={"X-Request-ID": request.headers.get("X-Request-ID", "")},
        )

        response = requests.Response()
        response.status_code = answer.status_code
        response._content = answer.content
        response.headers = CaseInsensitiveDict(answer.headers)
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self) -> None:
        pass


@pytest.fixture()
def http_client():
    session = requests.Session()
    session.mount("http://testserver/", DjangoClientAdapter())
    client = ProductApiClient(session=session)
    yield client
    client.close()


# ===========================================================================
# Operations
# ===========================================================================


class TestClientOperations:
    def test_round_trip(self, http_client, make_payload):
        created = http_client.create_product(make_payload(id=10, price=Decimal("89.90")))
        assert created.id == 10
        assert Product.objects.filter(pk=10).exists()

        assert http_client.get_product(10).brand == "KeyCo"
        assert [p.id for p in http_client.get_products("keyco")] == [10]

        updated = http_client.update_product(10, make_payload(id=10, stock=3))
        assert updated.stock == 3
        assert Product.objects.get(pk=10).stock == 3

        http_client.delete_product(10)
        with pytest.raises(ProductNotFound):
            http_client.get_product(10)

    def test_list_without_search(self, http_client, seeded_products):
        assert [p.id for p in http_client.get_products()] == [1, 2]

    def test_duplicate_id(self, http_client, seeded_products, make_payload):
        with pytest.raises(ProductAlreadyExists, match=DUPLICATE_ID_MESSAGE):
            http_client.create_product(make_payload(id=1))
        assert Product.objects.count() == 2

    def test_field_errors(self, http_client, make_payload):
        with pytest.raises(ProductValidationFailed) as exc_info:
            http_client.create_product(make_payload(price=0, stock=-1))
        assert set(exc_info.value.errors) == {"price", "stock"}

    def test_update_missing_product(self, http_client, make_payload):
        with pytest.raises(ProductNotFound):
            http_client.update_product(999, make_payload(id=999))

    def test_delete_missing_product(self, http_client):
        with pytest.raises(ProductNotFound):
            http_client.delete_product(999)


# ===========================================================================
# Catalogue and editor over HTTP
# ===========================================================================


class TestCatalogOverHttp:
    def test_add_then_delete(self, http_client, seeded_products):
        catalog = ProductCatalog(http_client)
        catalog.load()
        editor = ProductEditor(catalog)

        editor.open_add()
        for field, value in {
            "id": 3,
            "name": "Monitor",
            "brand": "Viewy",
            "price": "199.99",
            "description": "27 inch",
            "stock": 4,
        }.items():
            editor.set_field(field, value)
        note = editor.submit()

        assert note.severity is Severity.SUCCESS
        assert [p.id for p in catalog.products] == [1, 2, 3]

        catalog.request_delete(3)
        assert catalog.confirm_delete().severity is Severity.SUCCESS
        assert not Product.objects.filter(pk=3).exists()
