"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  The
repository never opens transactions of its own: the caller's unit of
work owns the boundary, and every query runs against ``self.using``.

Status transitions lock the order row with ``select_for_update()`` so two
concurrent proceed/cancel calls on one order are serialised.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import models

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def _hydrated(self) -> models.QuerySet:
        return (
            Order.objects.using(self.using)
            .select_related("user")
            .prefetch_related("items__product")
        )

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    def create(
        self,
        user_id: UUID,
        total_amount: Decimal,
        items: List[Dict[str, Any]],
    ) -> Order:
        order = Order(
            user_id=user_id,
            status=OrderStatus.PLACED,
            total_amount=total_amount,
        )
        order.save(using=self.using)

        for item_data in items:
            OrderItem(
                order=order,
                product_id=item_data["product_id"],
                quantity=item_data["quantity"],
                price=item_data["price"],
            ).save(using=self.using)

        log = logger.bind(order_id=str(order.id), item_count=len(items))
        log.info("order.persisted")
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Uses ``select_related`` for the user FK (single JOIN) and
        ``prefetch_related`` for items -> product (one batched query).

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._hydrated().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        # no joins: PostgreSQL refuses FOR UPDATE on the nullable side of one
        try:
            return (
                Order.objects.using(self.using)
                .select_for_update()
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def list(self, status: Optional[OrderStatus] = None) -> "models.QuerySet[Order]":
        queryset = self._hydrated().order_by("-created_at")
        if status is not None:
            queryset = queryset.filter(status=status)
        return queryset

    # ------------------------------------------------------------------
    # Save (IRepository contract)
    # ------------------------------------------------------------------

    def save(self, entity: Order) -> Order:
        entity.save(using=self.using)
        logger.info("order.saved", order_id=str(entity.id), status=entity.status)
        return entity
