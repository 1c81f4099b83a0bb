"""Order repository interface.

Extends ``IRepository[Order]`` with the methods the order workflow needs:
atomic creation of the aggregate (Order + items), a locking look-up for
status transitions and a status-filtered listing.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.constants import OrderStatus
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def create(
        self,
        user_id: UUID,
        total_amount: Decimal,
        items: List[Dict[str, Any]],
    ) -> Order:
        """Persist a PLACED order and its items.

        ``items`` is a list of dicts with ``product_id``, ``quantity`` and
        ``price`` keys, stored in the given order.
        """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its user and items -> product prefetched."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def list(self, status: Optional[OrderStatus] = None) -> "models.QuerySet[Order]":
        """Orders newest first, optionally restricted to one status."""
