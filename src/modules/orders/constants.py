"""Order domain constants.

Status choices, the transition table of the order state machine and the
notification texts emitted by each transition.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PLACED = "PLACED", "Placed"
    PROCEEDED = "PROCEEDED", "Proceeded"
    CANCELLED = "CANCELLED", "Cancelled"

    @classmethod
    def parse(cls, value: object) -> OrderStatus:
        """Turn boundary input into an ``OrderStatus`` (case-insensitive).

        Raises:
            UnknownOrderStatus: *value* names no status.
        """
        from modules.orders.exceptions import UnknownOrderStatus

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            allowed = ", ".join(cls.values)
            raise UnknownOrderStatus(
                f"Unknown order status {value!r}; expected one of {allowed}."
            ) from exc


VALID_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PLACED: frozenset({OrderStatus.PROCEEDED, OrderStatus.CANCELLED}),
    OrderStatus.PROCEEDED: frozenset({OrderStatus.CANCELLED}),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL_STATES: frozenset[OrderStatus] = frozenset({OrderStatus.CANCELLED})

CENTS = Decimal("0.01")

SHORT_ID_LENGTH = 8

NOTIFICATION_ORDER_PLACED = "New Order Placed"
NOTIFICATION_ORDER_PROCEEDED = "Order Proceeded"
NOTIFICATION_ORDER_CANCELLED = "Order Cancelled"
