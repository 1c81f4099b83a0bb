"""Product repository interface.

Besides the generic contract, exposes the two stock mutations the order
workflow relies on.  Both are single-statement updates so that the stock
check and the write cannot be interleaved by a concurrent transaction.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list(self, visible_only: bool = False) -> "models.QuerySet[Product]":
        """Alive products, newest first."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Soft-delete a product; ``False`` when it does not exist."""

    @abstractmethod
    def decrement_stock(self, id: str, quantity: int) -> bool:
        """Subtract *quantity* only if at least that much is in stock.

        Returns ``False`` (and writes nothing) when stock is insufficient or
        the product no longer exists.
        """

    @abstractmethod
    def increment_stock(self, id: str, quantity: int) -> bool:
        """Add *quantity* back; ``False`` when the product no longer exists."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional["Product"]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE)."""
