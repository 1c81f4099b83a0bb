"""Django ORM implementation of the sales reporting repository.

A line's profit is ``(price - purchase_price) * quantity``: the sale price
snapshotted on the order item against the product's current purchase
price.  Soft-deleted products still take part, order history keeps them.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Tuple

from django.db import models
from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import TruncDate

from modules.dashboard.repositories.interfaces import ISalesRepository
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem

ZERO = Decimal("0.00")


def _line_profit() -> ExpressionWrapper:
    return ExpressionWrapper(
        (F("price") - F("product__purchase_price")) * F("quantity"),
        output_field=DecimalField(max_digits=14, decimal_places=2),
    )


class SalesDjangoRepository(ISalesRepository):
    def _orders(self) -> "models.QuerySet[Order]":
        return Order.objects.using(self.using)

    def _proceeded_orders(self) -> "models.QuerySet[Order]":
        return self._orders().filter(status=OrderStatus.PROCEEDED)

    def _sold_items(self) -> "models.QuerySet[OrderItem]":
        return OrderItem.objects.using(self.using).filter(
            order__status=OrderStatus.PROCEEDED
        )

    def order_count(self) -> int:
        return self._orders().count()

    def revenue(self) -> Decimal:
        total = self._proceeded_orders().aggregate(total=Sum("total_amount"))["total"]
        return Decimal(total or ZERO)

    def profit_and_loss(self) -> Tuple[Decimal, Decimal]:
        lines = self._sold_items().annotate(line_profit=_line_profit())
        profit = lines.filter(line_profit__gt=0).aggregate(total=Sum("line_profit"))
        loss = lines.filter(line_profit__lt=0).aggregate(total=Sum("line_profit"))
        return Decimal(profit["total"] or ZERO), -Decimal(loss["total"] or ZERO)

    def orders_per_day(self, since: datetime) -> Dict[date, int]:
        rows = (
            self._orders()
            .filter(created_at__gte=since)
            .annotate(day=TruncDate("created_at"))
            .values("day")
            .annotate(count=Count("id"))
            .order_by("day")
        )
        return {row["day"]: row["count"] for row in rows}

    def revenue_per_day(self, since: datetime) -> Dict[date, Decimal]:
        rows = (
            self._proceeded_orders()
            .filter(created_at__gte=since)
            .annotate(day=TruncDate("created_at"))
            .values("day")
            .annotate(revenue=Sum("total_amount"))
            .order_by("day")
        )
        return {row["day"]: Decimal(row["revenue"]) for row in rows}

    def profit_per_day(self, since: datetime) -> Dict[date, Decimal]:
        rows = (
            self._sold_items()
            .filter(order__created_at__gte=since)
            .annotate(day=TruncDate("order__created_at"))
            .values("day")
            .annotate(profit=Sum(_line_profit()))
            .order_by("day")
        )
        return {row["day"]: Decimal(row["profit"]) for row in rows}
