"""Notification repository interface (the notification sink)."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.notifications.models import Notification


class INotificationRepository(IRepository["Notification"]):
    @abstractmethod
    def append(self, title: str, message: str) -> Notification:
        """Record a new unread notification."""

    @abstractmethod
    def list(self, is_read: Optional[bool] = None) -> "models.QuerySet[Notification]":
        """Notifications newest first, optionally filtered by read state."""
