"""Dashboard API views (admin only)."""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.accounts.permissions import IsAdminRole
from modules.core.exceptions import DomainError
from modules.core.responses import error_response
from modules.dashboard.repositories.django_repository import SalesDjangoRepository
from modules.dashboard.services import DashboardService


class DashboardViewSet(GenericViewSet):
    permission_classes = [IsAdminRole]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = DashboardService(repository=SalesDjangoRepository())

    @action(detail=False, methods=["get"])
    def summary(self, request: Request) -> Response:
        """GET /api/v1/dashboard/summary/"""
        return Response(self._service.summary())

    @action(detail=False, methods=["get"])
    def charts(self, request: Request) -> Response:
        """GET /api/v1/dashboard/charts/?days=30"""
        try:
            data = self._service.charts(request.query_params.get("days"))
        except DomainError as exc:
            return error_response(exc)
        return Response(data)
