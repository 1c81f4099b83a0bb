"""Order service layer (Use Cases).

Orchestrates order placement and the PROCEED / CANCEL transitions.  Every
command runs inside exactly one unit of work: all reads that decide the
outcome and all writes (order, items, stock, notification) share one
transaction, and the first error rolls everything back.

Business rules enforced:
- Line items are validated in request order and the first violation wins.
- Placing an order snapshots prices but never touches stock.
- Proceeding decrements stock with a conditional update per product.
- Cancelling a PROCEEDED order gives the stock back through the
  configured ``RestockPolicy``; cancelling is not idempotent.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

import structlog

from modules.accounts.exceptions import UserNotFound
from modules.core.pagination import paginate, validate_page
from modules.orders.constants import (
    CENTS,
    NOTIFICATION_ORDER_CANCELLED,
    NOTIFICATION_ORDER_PLACED,
    NOTIFICATION_ORDER_PROCEEDED,
    OrderStatus,
)
from modules.orders.exceptions import (
    InsufficientStock,
    InvalidOrderItem,
    InvalidOrderStatus,
    OrderAlreadyCancelled,
    OrderNotFound,
    ProductNotFound,
    ProductUnavailable,
)
from modules.orders.policies import get_restock_policy
from modules.orders.unit_of_work import DjangoUnitOfWork

if TYPE_CHECKING:
    from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
    from modules.orders.models import Order, OrderItem
    from modules.orders.policies import RestockPolicy
    from modules.orders.unit_of_work import AbstractUnitOfWork

logger = structlog.get_logger(__name__)


def _whole_quantity(item: CreateOrderItemDTO) -> int:
    quantity = item.quantity
    is_number = isinstance(quantity, (int, float)) and not isinstance(quantity, bool)
    if is_number and isinstance(quantity, float) and not quantity.is_integer():
        is_number = False
    if not is_number or quantity < 1:
        raise InvalidOrderItem(
            f"Invalid quantity for product {item.product_id}: "
            "must be a positive whole number."
        )
    return int(quantity)


def _by_product(item: OrderItem) -> str:
    return str(item.product_id)


class OrderService:
    """Application service for Order use-cases.

    Receives a unit-of-work factory via constructor injection (DIP); each
    command opens its own unit of work from it.
    """

    def __init__(
        self,
        uow_factory: Callable[[], AbstractUnitOfWork] = DjangoUnitOfWork,
        restock_policy: Optional[RestockPolicy] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._restock_policy = restock_policy or get_restock_policy()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Validate the requested lines and persist a PLACED order.

        Raises:
            UserNotFound: the requesting user does not exist.
            InvalidOrderItem: empty order, missing field or bad quantity.
            ProductNotFound: a product does not exist (or was removed).
            ProductUnavailable: a product is hidden from the storefront.
            InsufficientStock: a product has less stock than requested.
        """
        log = logger.bind(user_id=str(dto.user_id), item_count=len(dto.items))
        log.info("order.creation_started")

        with self._uow_factory() as uow:
            user = uow.users.get_by_id(str(dto.user_id))
            if not user:
                raise UserNotFound(f"User {dto.user_id} not found.")
            if not dto.items:
                raise InvalidOrderItem("An order must contain at least one item.")

            total = Decimal("0.00")
            lines: List[Dict[str, Any]] = []
            for item in dto.items:
                if item.product_id in (None, "") or item.quantity is None:
                    raise InvalidOrderItem(
                        "Invalid order item: product_id and quantity are required."
                    )
                quantity = _whole_quantity(item)

                product_id = str(item.product_id)
                product = uow.products.get_by_id(product_id)
                if not product:
                    raise ProductNotFound(
                        f'Product with ID "{product_id}" not found. This product '
                        "may have been removed or the ID is incorrect. Please refresh "
                        "the product list and try again."
                    )
                if not product.is_visible:
                    raise ProductUnavailable(
                        f'Product "{product.name}" is not available for purchase.'
                    )
                if product.stock < quantity:
                    raise InsufficientStock(
                        f"Insufficient stock for product {product.name}."
                    )

                lines.append(
                    {
                        "product_id": product.id,
                        "quantity": quantity,
                        "price": product.sale_price,
                    }
                )
                total += product.sale_price * quantity

            total = total.quantize(CENTS, rounding=ROUND_HALF_UP)
            order = uow.orders.create(user.id, total, lines)
            uow.notifications.append(
                NOTIFICATION_ORDER_PLACED,
                f"Order #{order.short_id} has been placed with total amount "
                f"of ${total:.2f}",
            )
            log.info("order.created", order_id=str(order.id), total=str(total))
            return uow.orders.get_by_id(str(order.id)) or order

    def proceed_order(self, order_id: Any) -> Order:
        """PLACED -> PROCEEDED, taking each item's quantity out of stock.

        Items are processed in product-id order so concurrent proceeds lock
        product rows in the same sequence.

        Raises:
            OrderNotFound: order does not exist.
            InvalidOrderStatus: order is not PLACED.
            ProductNotFound: a product was removed since placement.
            InsufficientStock: a product no longer has enough stock.
        """
        with self._uow_factory() as uow:
            order = uow.orders.get_for_update(str(order_id))
            if not order:
                raise OrderNotFound(f"Order {order_id} not found.")

            log = logger.bind(order_id=str(order.id), current_status=order.status)
            if not order.can_transition_to(OrderStatus.PROCEEDED):
                log.warning("order.invalid_transition", new_status=OrderStatus.PROCEEDED)
                raise InvalidOrderStatus("Only PLACED orders can be proceeded.")

            for item in sorted(order.items.all(), key=_by_product):
                product = uow.products.get_by_id(str(item.product_id))
                if not product:
                    raise ProductNotFound(f"Product {item.product_id} not found.")
                if not uow.products.decrement_stock(str(product.id), item.quantity):
                    raise InsufficientStock(
                        f"Insufficient stock for product {product.name}."
                    )
                log.info(
                    "order.stock_decremented",
                    product_id=str(product.id),
                    quantity=item.quantity,
                )

            order.status = OrderStatus.PROCEEDED
            uow.orders.save(order)
            uow.notifications.append(
                NOTIFICATION_ORDER_PROCEEDED,
                f"Order #{order.short_id} has been proceeded",
            )
            log.info("order.proceeded")
            return uow.orders.get_by_id(str(order.id)) or order

    def cancel_order(self, order_id: Any) -> Order:
        """PLACED | PROCEEDED -> CANCELLED.

        Stock is only given back when the order had been PROCEEDED, since
        placing an order never took any.

        Raises:
            OrderNotFound: order does not exist.
            OrderAlreadyCancelled: order is already CANCELLED.
            ProductNotFound: a product is gone and the restock policy is strict.
        """
        with self._uow_factory() as uow:
            order = uow.orders.get_for_update(str(order_id))
            if not order:
                raise OrderNotFound(f"Order {order_id} not found.")

            previous_status = order.status
            log = logger.bind(order_id=str(order.id), current_status=previous_status)
            if not order.can_transition_to(OrderStatus.CANCELLED):
                log.warning("order.cancel_not_allowed")
                raise OrderAlreadyCancelled("Order is already cancelled.")

            if previous_status == OrderStatus.PROCEEDED:
                for item in sorted(order.items.all(), key=_by_product):
                    if uow.products.increment_stock(str(item.product_id), item.quantity):
                        log.info(
                            "order.stock_restored",
                            product_id=str(item.product_id),
                            quantity=item.quantity,
                        )
                    else:
                        self._restock_policy.on_missing_product(order, item)

            order.status = OrderStatus.CANCELLED
            uow.orders.save(order)
            uow.notifications.append(
                NOTIFICATION_ORDER_CANCELLED,
                f"Order #{order.short_id} has been cancelled",
            )
            log.info("order.cancelled", restock_policy=self._restock_policy.name)
            return uow.orders.get_by_id(str(order.id)) or order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_orders(
        self,
        page: int = 1,
        limit: int = 10,
        status: Optional[OrderStatus] = None,
    ) -> Tuple[List[Order], int]:
        """Orders newest first, one page at a time, with the total count.

        Read-only: runs outside a transaction.

        Raises:
            ValidationError: page < 1 or limit < 1.
        """
        page, limit = validate_page(page, limit)
        uow = self._uow_factory()
        return paginate(uow.orders.list(status=status), page, limit)

    def get_order(self, order_id: Any) -> Order:
        """Raises ``OrderNotFound`` when the order does not exist."""
        order = self._uow_factory().orders.get_by_id(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order
