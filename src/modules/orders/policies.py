"""Restock policies applied when a PROCEEDED order is cancelled.

Cancelling gives each item's quantity back to its product.  When a product
has been removed from the catalog in the meantime there is nothing to give
the stock back to; what happens then is decided here, not in
``OrderService``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Optional, Type

import structlog
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem

logger = structlog.get_logger(__name__)


class RestockPolicy(ABC):
    name: str

    @abstractmethod
    def on_missing_product(self, order: Order, item: OrderItem) -> None:
        """Called when ``item.product`` no longer exists during a restock."""


class BestEffortRestockPolicy(RestockPolicy):
    """Skip the item and keep cancelling."""

    name = "best_effort"

    def on_missing_product(self, order: Order, item: OrderItem) -> None:
        logger.warning(
            "order.restock_skipped",
            order_id=str(order.id),
            product_id=str(item.product_id),
            quantity=item.quantity,
        )


class StrictRestockPolicy(RestockPolicy):
    """Abort the cancellation (and roll it back) instead of losing stock."""

    name = "strict"

    def on_missing_product(self, order: Order, item: OrderItem) -> None:
        raise ProductNotFound(
            f"Cannot restock product {item.product_id} for order "
            f"{order.short_id}: product no longer exists."
        )


RESTOCK_POLICIES: Dict[str, Type[RestockPolicy]] = {
    BestEffortRestockPolicy.name: BestEffortRestockPolicy,
    StrictRestockPolicy.name: StrictRestockPolicy,
}


def get_restock_policy(name: Optional[str] = None) -> RestockPolicy:
    """Instantiate the policy called *name* (default: ``ORDERS_RESTOCK_POLICY``)."""
    name = name or settings.ORDERS_RESTOCK_POLICY
    try:
        return RESTOCK_POLICIES[name]()
    except KeyError as exc:
        raise ImproperlyConfigured(
            f"Unknown restock policy {name!r}; choose from {sorted(RESTOCK_POLICIES)}."
        ) from exc
