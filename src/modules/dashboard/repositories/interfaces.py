"""Sales reporting repository interface.

Read-only aggregates over orders.  Revenue and profit only count
PROCEEDED orders; placed and cancelled orders never turned into sales.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Tuple

from django.db import DEFAULT_DB_ALIAS


class ISalesRepository(ABC):
    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    @property
    def using(self) -> str:
        return self._using

    @abstractmethod
    def order_count(self) -> int:
        """Every order ever placed, whatever its status."""

    @abstractmethod
    def revenue(self) -> Decimal:
        """Sum of the totals of PROCEEDED orders."""

    @abstractmethod
    def profit_and_loss(self) -> Tuple[Decimal, Decimal]:
        """Gains of profitable lines and losses of lines sold below cost.

        Both are returned as non-negative amounts.
        """

    @abstractmethod
    def orders_per_day(self, since: datetime) -> Dict[date, int]:
        """Orders placed per day from *since* on."""

    @abstractmethod
    def revenue_per_day(self, since: datetime) -> Dict[date, Decimal]:
        """Revenue of PROCEEDED orders per placement day from *since* on."""

    @abstractmethod
    def profit_per_day(self, since: datetime) -> Dict[date, Decimal]:
        """Net line profit of PROCEEDED orders per placement day."""
