"""Notification domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class NotificationNotFound(NotFoundError):
    """The requested notification does not exist."""

    code = "notification_not_found"
