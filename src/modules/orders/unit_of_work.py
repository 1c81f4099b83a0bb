"""Unit of work for the order workflow.

A unit of work is the explicit transactional handle every ``OrderService``
command runs in.  Entering it opens ``transaction.atomic`` on one database
alias and exposes the repositories bound to that alias; leaving it commits,
or rolls back everything when an exception escapes the ``with`` block.

Usage::

    with DjangoUnitOfWork() as uow:
        order = uow.orders.get_for_update(order_id)
        uow.products.decrement_stock(product_id, 2)
        uow.notifications.append("Order Proceeded", "...")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from django.db import DEFAULT_DB_ALIAS, transaction

from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.accounts.repositories.interfaces import IUserRepository
from modules.notifications.repositories.django_repository import (
    NotificationDjangoRepository,
)
from modules.notifications.repositories.interfaces import INotificationRepository
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.repositories.interfaces import IOrderRepository
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository


class AbstractUnitOfWork(ABC):
    orders: IOrderRepository
    products: IProductRepository
    notifications: INotificationRepository
    users: IUserRepository

    def __enter__(self) -> AbstractUnitOfWork:
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        return self._end(exc_type, exc, tb)

    @abstractmethod
    def _begin(self) -> None:
        """Open the transaction."""

    @abstractmethod
    def _end(self, exc_type, exc, tb) -> Optional[bool]:
        """Commit, or roll back when *exc* is set."""


class DjangoUnitOfWork(AbstractUnitOfWork):
    """``transaction.atomic`` on ``using`` plus the Django repositories."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self.using = using
        self.orders = OrderDjangoRepository(using=using)
        self.products = ProductDjangoRepository(using=using)
        self.notifications = NotificationDjangoRepository(using=using)
        self.users = UserDjangoRepository(using=using)
        self._atomic: Optional[transaction.Atomic] = None

    def _begin(self) -> None:
        self._atomic = transaction.atomic(using=self.using)
        self._atomic.__enter__()

    def _end(self, exc_type, exc, tb) -> Optional[bool]:
        atomic, self._atomic = self._atomic, None
        return atomic.__exit__(exc_type, exc, tb)
