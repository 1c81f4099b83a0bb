"""Integration tests for the admin dashboard endpoints.

Fixture sales (catalog: Gain buys at 6.00 / sells at 10.00, Lossy buys at
8.00 / sells at 5.00):
- one PROCEEDED order: 2 x Gain + 1 x Lossy = 25.00, profit 8.00, loss 3.00
- one PLACED order and one cancelled order, which are not sales
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.utils import timezone

from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.services import OrderService

pytestmark = pytest.mark.integration

SUMMARY_URL = "/api/v1/dashboard/summary/"
CHARTS_URL = "/api/v1/dashboard/charts/"


@pytest.fixture()
def sales(customer, make_product):
    service = OrderService()
    gain = make_product(
        name="Gain",
        purchase_price=Decimal("6.00"),
        sale_price=Decimal("10.00"),
        stock=10,
    )
    lossy = make_product(
        name="Lossy",
        purchase_price=Decimal("8.00"),
        sale_price=Decimal("5.00"),
        stock=10,
    )

    def place(*lines):
        return service.create_order(
            CreateOrderDTO(
                user_id=customer.id,
                items=[
                    CreateOrderItemDTO(product_id=str(product.id), quantity=qty)
                    for product, qty in lines
                ],
            )
        )

    sold = place((gain, 2), (lossy, 1))
    service.proceed_order(sold.id)
    place((gain, 1))
    cancelled = place((gain, 3))
    service.proceed_order(cancelled.id)
    service.cancel_order(cancelled.id)
    return sold


class TestSummary:
    def test_summary(self, admin_client, sales):
        response = admin_client.get(SUMMARY_URL)

        assert response.status_code == 200
        assert response.json() == {
            "total_orders": 3,
            "total_revenue": "25.00",
            "total_profit": "8.00",
            "total_loss": "3.00",
        }

    def test_empty_store(self, admin_client):
        assert admin_client.get(SUMMARY_URL).json() == {
            "total_orders": 0,
            "total_revenue": "0.00",
            "total_profit": "0.00",
            "total_loss": "0.00",
        }

    def test_later_price_changes_keep_the_sale_price(
        self, admin_client, sales, make_product
    ):
        from modules.products.models import Product

        Product.objects.filter(name="Gain").update(sale_price=Decimal("99.00"))

        data = admin_client.get(SUMMARY_URL).json()

        assert data["total_revenue"] == "25.00"
        assert data["total_profit"] == "8.00"

    def test_customer_is_forbidden(self, customer_client):
        assert customer_client.get(SUMMARY_URL).status_code == 403

    def test_requires_authentication(self, api_client):
        assert api_client.get(SUMMARY_URL).status_code == 401


class TestCharts:
    def test_default_window(self, admin_client, sales):
        response = admin_client.get(CHARTS_URL)

        assert response.status_code == 200
        data = response.json()
        assert data["days"] == 30
        assert len(data["orders_per_day"]) == 30
        assert len(data["revenue_per_day"]) == 30
        assert len(data["profit_per_day"]) == 30

        today = timezone.localdate().isoformat()
        assert data["orders_per_day"][-1] == {"date": today, "count": 3}
        assert data["revenue_per_day"][-1] == {"date": today, "revenue": "25.00"}
        assert data["profit_per_day"][-1] == {"date": today, "profit": "5.00"}

    def test_days_without_orders_are_zero(self, admin_client, sales):
        data = admin_client.get(CHARTS_URL, {"days": 7}).json()

        assert data["orders_per_day"][0]["count"] == 0
        assert data["revenue_per_day"][0]["revenue"] == "0.00"
        assert [point["date"] for point in data["orders_per_day"]] == sorted(
            point["date"] for point in data["orders_per_day"]
        )

    @pytest.mark.parametrize("days", ["0", "-3", "abc", "366"])
    def test_rejects_bad_window(self, admin_client, days):
        response = admin_client.get(CHARTS_URL, {"days": days})

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_customer_is_forbidden(self, customer_client):
        assert customer_client.get(CHARTS_URL).status_code == 403
