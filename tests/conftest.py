from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


def _product_payload(**overrides):
    payload = {
        "id": 10,
        "name": "Mechanical Keyboard",
        "brand": "KeyCo",
        "price": "89.90",
        "description": "Tenkeyless keyboard with brown switches",
        "stock": 12,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_payload():
    """Builder for a valid create/update body; override any field."""
    return _product_payload


@pytest.fixture()
def seeded_products():
    """The two sample records the seed command installs."""
    return [
        Product.objects.create(
            id=1,
            name='Laptop 15"',
            brand="TechPro",
            price=Decimal("1299"),
            description="Powerful laptop",
            stock=5,
        ),
        Product.objects.create(
            id=2,
            name="Wireless Mouse",
            brand="LogiX",
            price=Decimal("39"),
            description="Ergonomic wireless mouse",
            stock=40,
        ),
    ]
