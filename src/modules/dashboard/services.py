"""Admin dashboard: sales summary and per-day chart series."""

from __future__ import annotations

from datetime import datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Dict, List

import structlog
from django.conf import settings
from django.utils import timezone

from modules.core.exceptions import ValidationError
from modules.orders.constants import CENTS

if TYPE_CHECKING:
    from modules.dashboard.repositories.interfaces import ISalesRepository

logger = structlog.get_logger(__name__)


def _money(value: Decimal) -> str:
    return str(Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP))


def _validate_days(days: Any) -> int:
    try:
        days = int(days)
    except (TypeError, ValueError) as exc:
        raise ValidationError("days must be an integer.") from exc
    if not 1 <= days <= settings.DASHBOARD_MAX_DAYS:
        raise ValidationError(
            f"days must be between 1 and {settings.DASHBOARD_MAX_DAYS}."
        )
    return days


class DashboardService:
    def __init__(self, repository: ISalesRepository) -> None:
        self._repo = repository

    def summary(self) -> Dict[str, Any]:
        profit, loss = self._repo.profit_and_loss()
        result = {
            "total_orders": self._repo.order_count(),
            "total_revenue": _money(self._repo.revenue()),
            "total_profit": _money(profit),
            "total_loss": _money(loss),
        }
        logger.info("dashboard.summary", **result)
        return result

    def charts(self, days: Any = None) -> Dict[str, Any]:
        """Per-day series over the last *days* days, today included.

        Days without orders are reported with zeros so every series has
        exactly *days* points.

        Raises:
            ValidationError: *days* is not an integer in range.
        """
        days = _validate_days(settings.DASHBOARD_DEFAULT_DAYS if days is None else days)
        first_day = timezone.localdate() - timedelta(days=days - 1)
        since = timezone.make_aware(datetime.combine(first_day, time.min))

        orders = self._repo.orders_per_day(since)
        revenue = self._repo.revenue_per_day(since)
        profit = self._repo.profit_per_day(since)

        calendar = [first_day + timedelta(days=offset) for offset in range(days)]
        orders_per_day: List[Dict[str, Any]] = []
        revenue_per_day: List[Dict[str, Any]] = []
        profit_per_day: List[Dict[str, Any]] = []
        for day in calendar:
            label = day.isoformat()
            orders_per_day.append({"date": label, "count": orders.get(day, 0)})
            revenue_per_day.append(
                {"date": label, "revenue": _money(revenue.get(day, Decimal("0")))}
            )
            profit_per_day.append(
                {"date": label, "profit": _money(profit.get(day, Decimal("0")))}
            )

        logger.info("dashboard.charts", days=days, since=first_day.isoformat())
        return {
            "days": days,
            "orders_per_day": orders_per_day,
            "revenue_per_day": revenue_per_day,
            "profit_per_day": profit_per_day,
        }
