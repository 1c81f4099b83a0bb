"""Notification read surface.

The order workflow writes notifications through the repository directly
(inside its own transaction); this service only serves reads and the
mark-as-read toggle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

import structlog
from django.db import transaction

from modules.core.pagination import paginate, validate_page
from modules.notifications.exceptions import NotificationNotFound

if TYPE_CHECKING:
    from modules.notifications.models import Notification
    from modules.notifications.repositories.interfaces import INotificationRepository

logger = structlog.get_logger(__name__)


class NotificationService:
    def __init__(self, repository: INotificationRepository) -> None:
        self._repo = repository

    def list_notifications(
        self, page: int = 1, limit: int = 10, is_read: Optional[bool] = None
    ) -> Tuple[List[Notification], int]:
        page, limit = validate_page(page, limit)
        return paginate(self._repo.list(is_read=is_read), page, limit)

    @transaction.atomic
    def mark_as_read(self, id: str) -> Notification:
        """Flip ``is_read`` to true.  Marking twice is harmless.

        Raises:
            NotificationNotFound: no notification has this id.
        """
        notification = self._repo.get_by_id(id)
        if not notification:
            raise NotificationNotFound(f"Notification {id} not found.")
        if not notification.is_read:
            notification.is_read = True
            self._repo.save(notification)
            logger.info("notification.marked_read", notification_id=str(id))
        return notification
