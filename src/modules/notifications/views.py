"""Notification API views."""

from __future__ import annotations

from django.conf import settings
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import DomainError, ValidationError
from modules.core.pagination import pagination_payload, validate_page
from modules.core.responses import error_response
from modules.notifications.models import Notification
from modules.notifications.repositories.django_repository import (
    NotificationDjangoRepository,
)
from modules.notifications.serializers import NotificationSerializer
from modules.notifications.services import NotificationService

_BOOL_PARAMS = {"true": True, "false": False}


class NotificationViewSet(GenericViewSet):
    queryset = Notification.objects.all()
    permission_classes = [IsAuthenticated]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = NotificationService(repository=NotificationDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/v1/notifications/?page=&limit=&is_read="""
        raw_is_read = request.query_params.get("is_read")
        try:
            if raw_is_read is not None and raw_is_read.lower() not in _BOOL_PARAMS:
                raise ValidationError("is_read must be 'true' or 'false'.")
            is_read = _BOOL_PARAMS.get(raw_is_read.lower()) if raw_is_read else None
            page, limit = validate_page(
                request.query_params.get("page", 1),
                request.query_params.get("limit", settings.DEFAULT_PAGE_SIZE),
            )
            notifications, total = self._service.list_notifications(
                page, limit, is_read=is_read
            )
        except DomainError as exc:
            return error_response(exc)

        return Response(
            {
                "notifications": NotificationSerializer(notifications, many=True).data,
                "pagination": pagination_payload(total, page, limit),
            }
        )

    @action(detail=True, methods=["patch"], url_path="read")
    def read(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/notifications/{pk}/read/"""
        try:
            notification = self._service.mark_as_read(str(pk))
        except DomainError as exc:
            return error_response(exc)
        return Response({"id": str(notification.id), "is_read": notification.is_read})
