"""Unit tests for OrderService.create_order.

Covers:
- Totals: sum of price x quantity, rounded to cents.
- Price snapshot: later catalog price changes never touch order items.
- Placement never decrements stock.
- Validation order: first failing item wins, nothing is persisted.
- The "New Order Placed" notification.
- A failing write rolls back everything written before it.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

import pytest

from modules.accounts.exceptions import UserNotFound
from modules.core.exceptions import ConflictError, NotFoundError, ValidationError
from modules.notifications.models import Notification
from modules.notifications.repositories.django_repository import (
    NotificationDjangoRepository,
)
from modules.orders.constants import NOTIFICATION_ORDER_PLACED, OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import (
    InsufficientStock,
    InvalidOrderItem,
    ProductNotFound,
    ProductUnavailable,
)
from modules.orders.models import Order, OrderItem
from modules.orders.services import OrderService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return OrderService()


@pytest.fixture()
def product(make_product):
    return make_product(name="Keyboard", sale_price=Decimal("10.00"), stock=5)


def _dto(user, *items):
    return CreateOrderDTO(
        user_id=user.id,
        items=[CreateOrderItemDTO(product_id=pid, quantity=qty) for pid, qty in items],
    )


class TestCreateOrderSuccess:
    def test_places_order_without_touching_stock(self, service, customer, product):
        order = service.create_order(_dto(customer, (str(product.id), 3)))

        assert order.status == OrderStatus.PLACED
        assert order.total_amount == Decimal("30.00")
        product.refresh_from_db()
        assert product.stock == 5

    def test_total_equals_sum_of_line_totals(self, service, customer, make_product):
        a = make_product(name="A", sale_price=Decimal("19.99"), stock=10)
        b = make_product(name="B", sale_price=Decimal("0.35"), stock=10)

        order = service.create_order(_dto(customer, (str(a.id), 3), (str(b.id), 7)))

        lines = sum(item.price * item.quantity for item in order.items.all())
        assert order.total_amount == lines == Decimal("62.42")

    def test_items_snapshot_sale_price(self, service, customer, product):
        order = service.create_order(_dto(customer, (str(product.id), 2)))

        product.sale_price = Decimal("99.00")
        product.save()

        item = OrderItem.objects.get(order=order)
        assert item.price == Decimal("10.00")
        order.refresh_from_db()
        assert order.total_amount == Decimal("20.00")

    def test_returns_hydrated_order(self, service, customer, product):
        order = service.create_order(_dto(customer, (str(product.id), 1)))

        assert order.user == customer
        items = list(order.items.all())
        assert len(items) == 1
        assert items[0].product.name == "Keyboard"

    def test_emits_placed_notification(self, service, customer, product):
        order = service.create_order(_dto(customer, (str(product.id), 3)))

        notification = Notification.objects.get()
        assert notification.title == NOTIFICATION_ORDER_PLACED
        assert notification.message == (
            f"Order #{str(order.id)[:8]} has been placed with total amount of $30.00"
        )
        assert notification.is_read is False

    def test_accepts_integral_float_quantity(self, service, customer, product):
        order = service.create_order(_dto(customer, (str(product.id), 2.0)))
        assert order.items.get().quantity == 2

    def test_same_product_twice_is_two_lines(self, service, customer, product):
        order = service.create_order(
            _dto(customer, (str(product.id), 1), (str(product.id), 2))
        )
        assert order.items.count() == 2
        assert order.total_amount == Decimal("30.00")


class TestCreateOrderValidation:
    def test_insufficient_stock_persists_nothing(self, service, customer, product):
        with pytest.raises(InsufficientStock, match="Keyboard"):
            service.create_order(_dto(customer, (str(product.id), 10)))

        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0
        assert Notification.objects.count() == 0

    def test_unknown_product_persists_nothing(self, service, customer, product):
        missing = str(uuid4())
        with pytest.raises(ProductNotFound) as exc_info:
            service.create_order(_dto(customer, (str(product.id), 1), (missing, 1)))

        assert missing in exc_info.value.message
        assert "refresh the product list" in exc_info.value.message
        assert isinstance(exc_info.value, NotFoundError)
        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0

    def test_malformed_product_id_is_not_found(self, service, customer):
        with pytest.raises(ProductNotFound):
            service.create_order(_dto(customer, ("not-a-uuid", 1)))

    def test_numeric_product_id_is_not_found(self, service, customer):
        with pytest.raises(ProductNotFound, match='ID "5"'):
            service.create_order(_dto(customer, (5, 1)))

    def test_soft_deleted_product_is_not_found(self, service, customer, product):
        product.delete()
        with pytest.raises(ProductNotFound):
            service.create_order(_dto(customer, (str(product.id), 1)))

    def test_hidden_product_is_unavailable(self, service, customer, make_product):
        hidden = make_product(name="Secret", is_visible=False)
        with pytest.raises(ProductUnavailable, match="not available for purchase"):
            service.create_order(_dto(customer, (str(hidden.id), 1)))

    @pytest.mark.parametrize(
        "item",
        [
            CreateOrderItemDTO(quantity=1),
            CreateOrderItemDTO(product_id="ignored"),
            CreateOrderItemDTO(product_id="", quantity=1),
        ],
        ids=["no-product", "no-quantity", "blank-product"],
    )
    def test_missing_fields(self, service, customer, item):
        dto = CreateOrderDTO(user_id=customer.id, items=[item])
        with pytest.raises(InvalidOrderItem, match="product_id and quantity are required"):
            service.create_order(dto)

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True, "2"])
    def test_bad_quantity_names_the_product(self, service, customer, product, quantity):
        with pytest.raises(InvalidOrderItem) as exc_info:
            service.create_order(_dto(customer, (str(product.id), quantity)))
        assert str(product.id) in exc_info.value.message
        assert isinstance(exc_info.value, ValidationError)

    def test_empty_items(self, service, customer):
        with pytest.raises(InvalidOrderItem):
            service.create_order(CreateOrderDTO(user_id=customer.id, items=[]))

    def test_first_violation_wins(self, service, customer, make_product):
        hidden = make_product(name="Hidden", is_visible=False)
        # item 1 is hidden (conflict), item 2 has a bad quantity (validation)
        with pytest.raises(ProductUnavailable):
            service.create_order(
                _dto(customer, (str(hidden.id), 1), (str(uuid4()), 0))
            )

    def test_first_violation_wins_over_a_non_text_id(
        self, service, customer, make_product
    ):
        hidden = make_product(name="Hidden", is_visible=False)
        with pytest.raises(ProductUnavailable):
            service.create_order(_dto(customer, (str(hidden.id), 1), ({"id": 1}, 1)))

    def test_conflicts_are_state_errors(self, service, customer, product):
        with pytest.raises(ConflictError) as exc_info:
            service.create_order(_dto(customer, (str(product.id), 6)))
        assert exc_info.value.severity.value == "state"

    def test_unknown_user(self, service, product):
        dto = CreateOrderDTO(
            user_id=uuid4(),
            items=[CreateOrderItemDTO(product_id=str(product.id), quantity=1)],
        )
        with pytest.raises(UserNotFound):
            service.create_order(dto)


class TestCreateOrderAtomicity:
    def test_notification_failure_rolls_back_the_order(
        self, service, customer, product
    ):
        with patch.object(
            NotificationDjangoRepository, "append", side_effect=RuntimeError("disk full")
        ):
            with pytest.raises(RuntimeError, match="disk full"):
                service.create_order(_dto(customer, (str(product.id), 2)))

        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0
        assert Notification.objects.count() == 0
