from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.accounts.models import UserRole
from modules.products.models import Product

User = get_user_model()


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


@pytest.fixture()
def customer():
    return User.objects.create_user(
        username="customer",
        email="customer@example.com",
        password="testpass123",
        name="Test Customer",
        role=UserRole.USER,
    )


@pytest.fixture()
def admin_user():
    return User.objects.create_user(
        username="admin",
        email="admin@example.com",
        password="testpass123",
        name="Test Admin",
        role=UserRole.ADMIN,
    )


@pytest.fixture()
def customer_client(customer):
    client = APIClient()
    client.force_authenticate(user=customer)
    return client


@pytest.fixture()
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture()
def make_product():
    """Factory for catalog rows; defaults match a visible, stocked product."""

    def _make(**overrides):
        fields = {
            "name": "Widget",
            "purchase_price": Decimal("6.00"),
            "sale_price": Decimal("10.00"),
            "stock": 5,
            "is_visible": True,
        }
        fields.update(overrides)
        return Product.objects.create(**fields)

    return _make
