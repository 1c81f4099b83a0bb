"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into HTTP status codes by
``error_response``; the view never swallows generic exceptions.
"""

from __future__ import annotations

from django.conf import settings
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.accounts.permissions import IsAdminRole
from modules.core.exceptions import DomainError
from modules.core.pagination import pagination_payload, validate_page
from modules.core.responses import error_response
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO
from modules.orders.exceptions import InvalidOrderItem
from modules.orders.models import Order
from modules.orders.serializers import CreateOrderSerializer, OrderSerializer
from modules.orders.services import OrderService


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Any authenticated user may place an order for themselves; listing,
    detail and the status transitions are reserved to admins.

    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/unit-of-work layer.
    """

    queryset = Order.objects.all()

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService()

    def get_permissions(self):
        if self.action == "create":
            return [IsAuthenticated()]
        return [IsAdminRole()]

    def get_throttles(self) -> list[BaseThrottle]:
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/ with ``{"items": [{"product_id", "quantity"}]}``."""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        try:
            dto = CreateOrderDTO(
                user_id=request.user.id,
                items=create_serializer.validated_data["items"],
            )
        except PydanticValidationError as exc:
            return error_response(InvalidOrderItem(f"Invalid order payload: {exc}"))

        try:
            order = self._service.create_order(dto)
        except DomainError as exc:
            return error_response(exc)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?page=&limit=&status="""
        raw_status = request.query_params.get("status")
        try:
            order_status = OrderStatus.parse(raw_status) if raw_status else None
            page, limit = validate_page(
                request.query_params.get("page", 1),
                request.query_params.get("limit", settings.DEFAULT_PAGE_SIZE),
            )
            orders, total = self._service.list_orders(page, limit, status=order_status)
        except DomainError as exc:
            return error_response(exc)

        return Response(
            {
                "orders": OrderSerializer(orders, many=True).data,
                "pagination": pagination_payload(total, page, limit),
            }
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk)
        except DomainError as exc:
            return error_response(exc)
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"])
    def proceed(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/proceed/"""
        try:
            order = self._service.proceed_order(pk)
        except DomainError as exc:
            return error_response(exc)
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["patch"])
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/cancel/"""
        try:
            order = self._service.cancel_order(pk)
        except DomainError as exc:
            return error_response(exc)
        return Response(OrderSerializer(order).data)
