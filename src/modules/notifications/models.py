"""Notification model: append-only log of workflow events.

Rows are created only as a side effect of order workflow transitions, inside
the same transaction as the transition itself.  The only mutation ever
applied afterwards is flipping ``is_read``.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Notification(BaseModel):
    title = models.CharField(max_length=255)
    message = models.TextField()
    is_read = models.BooleanField(default=False)

    class Meta:
        db_table = "notifications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_read", "-created_at"], name="notif_read_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({'read' if self.is_read else 'unread'})"
