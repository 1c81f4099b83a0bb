"""Order domain exceptions.

Raised by ``OrderService`` when a request or a state precondition is
violated.  Each one derives from the shared taxonomy in
``modules.core.exceptions`` so the API layer can map it without knowing
the concrete class.
"""

from __future__ import annotations

from modules.core.exceptions import ConflictError, NotFoundError, ValidationError
from modules.products.exceptions import ProductNotFound

__all__ = [
    "InsufficientStock",
    "InvalidOrderItem",
    "InvalidOrderStatus",
    "OrderAlreadyCancelled",
    "OrderNotFound",
    "ProductNotFound",
    "ProductUnavailable",
    "UnknownOrderStatus",
]


class OrderNotFound(NotFoundError):
    """The requested order does not exist."""

    code = "order_not_found"


class InvalidOrderItem(ValidationError):
    """A line item is missing its product/quantity or has a bad quantity."""

    code = "invalid_order_item"


class UnknownOrderStatus(ValidationError):
    """A status string received at the boundary names no status."""

    code = "unknown_order_status"


class ProductUnavailable(ConflictError):
    """The product exists but is hidden from the storefront."""

    code = "product_unavailable"


class InsufficientStock(ConflictError):
    """Not enough stock to place or proceed the order."""

    code = "insufficient_stock"


class InvalidOrderStatus(ConflictError):
    """The order's current status does not allow the transition."""

    code = "invalid_order_status"


class OrderAlreadyCancelled(InvalidOrderStatus):
    """Cancelling is not idempotent: a cancelled order cannot be cancelled."""

    code = "order_already_cancelled"
