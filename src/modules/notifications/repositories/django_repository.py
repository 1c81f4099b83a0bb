"""Django ORM implementation of the Notification repository."""

from __future__ import annotations

from typing import Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models

from modules.notifications.models import Notification
from modules.notifications.repositories.interfaces import INotificationRepository

logger = structlog.get_logger(__name__)


class NotificationDjangoRepository(INotificationRepository):
    def get_by_id(self, id: str) -> Optional[Notification]:
        try:
            return Notification.objects.using(self.using).filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, is_read: Optional[bool] = None) -> "models.QuerySet[Notification]":
        queryset = Notification.objects.using(self.using).order_by("-created_at")
        if is_read is not None:
            queryset = queryset.filter(is_read=is_read)
        return queryset

    def save(self, entity: Notification) -> Notification:
        entity.save(using=self.using)
        return entity

    def append(self, title: str, message: str) -> Notification:
        notification = Notification(title=title, message=message, is_read=False)
        self.save(notification)
        logger.info(
            "notification.appended",
            notification_id=str(notification.id),
            title=title,
        )
        return notification
