"""Stock concurrency integration test.

Proves that the conditional stock decrement in ``OrderService.proceed_order``
never oversells when several PLACED orders for the same product are
proceeded at once.

Scenario:
- Product "Gamer PC" with **stock = 5**.
- 10 PLACED orders for 1 unit each, proceeded from 10 threads.
- Exactly 5 succeed, 5 raise ``InsufficientStock``.
- Final stock is 0 (never negative).

Uses ``TransactionTestCase`` so each thread sees committed data.  SQLite
serialises writers with a database-wide lock instead of row locks, so the
test only runs against a server database (``DATABASE_URL``).
"""

from __future__ import annotations

import logging
import unittest
from concurrent.futures import ThreadPoolExecutor, as_completed
from decimal import Decimal

import django
from django.contrib.auth import get_user_model
from django.db import connection
from django.test import TransactionTestCase

from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import InsufficientStock
from modules.orders.models import Order
from modules.orders.services import OrderService
from modules.products.models import Product

logger = logging.getLogger(__name__)

INITIAL_STOCK = 5
NUM_WORKERS = 10


@unittest.skipIf(
    connection.vendor == "sqlite", "SQLite cannot run concurrent writers"
)
class TestProceedConcurrency(TransactionTestCase):
    """Concurrent proceeds against one product never drive stock below 0."""

    def setUp(self):
        self.user = get_user_model().objects.create_user(
            username="concurrency",
            email="concurrency@example.com",
            password="testpass123",
        )
        self.product = Product.objects.create(
            name="Gamer PC",
            purchase_price=Decimal("1999.99"),
            sale_price=Decimal("2999.99"),
            stock=INITIAL_STOCK,
        )
        service = OrderService()
        self.order_ids = [
            service.create_order(
                CreateOrderDTO(
                    user_id=self.user.id,
                    items=[
                        CreateOrderItemDTO(product_id=str(self.product.id), quantity=1)
                    ],
                )
            ).id
            for _ in range(NUM_WORKERS)
        ]

    def _proceed_in_thread(self, order_id) -> str:
        """Returns 'success' or 'insufficient'.  Each thread opens its own
        DB connection."""
        try:
            OrderService().proceed_order(order_id)
            return "success"
        except InsufficientStock:
            logger.warning("Order %s: InsufficientStock (expected)", order_id)
            return "insufficient"
        finally:
            django.db.connections.close_all()

    def test_concurrent_proceeds_exhaust_stock(self):
        results = []

        with ThreadPoolExecutor(max_workers=NUM_WORKERS) as pool:
            futures = [
                pool.submit(self._proceed_in_thread, order_id)
                for order_id in self.order_ids
            ]
            for future in as_completed(futures):
                results.append(future.result())

        self.assertEqual(results.count("success"), INITIAL_STOCK)
        self.assertEqual(results.count("insufficient"), NUM_WORKERS - INITIAL_STOCK)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 0)
        self.assertEqual(
            Order.objects.filter(status=OrderStatus.PROCEEDED).count(),
            INITIAL_STOCK,
        )
