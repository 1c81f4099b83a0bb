"""Django ORM implementation of the Product repository.

Lookups follow the Null Object pattern: missing or malformed IDs yield
``None`` and the Service Layer decides which domain error to raise.
Soft-deleted products are invisible to every lookup here.
"""

from __future__ import annotations

from typing import Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F
from django.utils import timezone

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def _alive(self) -> models.QuerySet:
        return Product.objects.using(self.using).alive()

    def get_by_id(self, id: str) -> Optional[Product]:
        try:
            return self._alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Product]:
        try:
            return self._alive().select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, visible_only: bool = False) -> "models.QuerySet[Product]":
        queryset = self._alive().order_by("-created_at")
        if visible_only:
            queryset = queryset.filter(is_visible=True)
        return queryset

    def save(self, entity: Product) -> Product:
        entity.save(using=self.using)
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    def delete(self, id: str) -> bool:
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete(using=self.using)
        logger.info("product.soft_deleted", product_id=str(id))
        return True

    def decrement_stock(self, id: str, quantity: int) -> bool:
        updated = (
            self._alive()
            .filter(id=id, stock__gte=quantity)
            .update(stock=F("stock") - quantity, updated_at=timezone.now())
        )
        return updated == 1

    def increment_stock(self, id: str, quantity: int) -> bool:
        updated = (
            self._alive()
            .filter(id=id)
            .update(stock=F("stock") + quantity, updated_at=timezone.now())
        )
        return updated == 1
