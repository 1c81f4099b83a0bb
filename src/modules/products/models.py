"""Product model: pricing, stock and catalog visibility.

Rules implemented here:
- ``margin`` is always ``sale_price - purchase_price`` (recomputed on save).
- ``stock`` is never negative (column type plus a CHECK constraint).
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel).

Purchasability (``is_visible``) is enforced by the order workflow.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import SoftDeleteModel

logger = structlog.get_logger(__name__)


class Product(SoftDeleteModel):
    """Catalog entry.

    Only the order workflow touches ``stock`` outside of admin updates, and it
    does so with conditional ``UPDATE`` statements rather than ``save()``.
    """

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    purchase_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    sale_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    margin = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        editable=False,
    )
    stock = models.PositiveIntegerField(default=0)
    is_visible = models.BooleanField(default=True)
    images = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "products"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_visible"], name="products_visible_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": "Stock cannot be negative."})

    def recompute_margin(self) -> None:
        self.margin = Decimal(self.sale_price) - Decimal(self.purchase_price)

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        self.recompute_margin()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and (
            {"sale_price", "purchase_price"} & set(update_fields)
        ):
            kwargs["update_fields"] = list(set(update_fields) | {"margin"})
        super().save(*args, **kwargs)
        if is_new:
            logger.info("product_created", product_id=str(self.id), name=self.name)

    def __str__(self) -> str:
        return self.name
