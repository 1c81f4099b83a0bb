"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.
Catalog reads are public but only admins see hidden products; every
write requires the ADMIN role.
"""

from __future__ import annotations

from django.conf import settings
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.accounts.permissions import IsAdminRole
from modules.core.exceptions import DomainError
from modules.core.pagination import pagination_payload, validate_page
from modules.core.responses import error_response
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer, PublicProductSerializer
from modules.products.services import ProductService


def _is_admin(request: Request) -> bool:
    return bool(request.user and getattr(request.user, "is_admin", False))


class ProductViewSet(GenericViewSet):
    """ViewSet for catalog reads and admin operations.

    Does **not** extend ``ModelViewSet``: all ORM access goes through the
    service/repository layer.
    """

    queryset = Product.objects.all()

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [AllowAny()]
        return [IsAdminRole()]

    def _serializer_for(self, request: Request):
        return ProductSerializer if _is_admin(request) else PublicProductSerializer

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/?page=&limit=&search="""
        try:
            page, limit = validate_page(
                request.query_params.get("page", 1),
                request.query_params.get("limit", settings.DEFAULT_PAGE_SIZE),
            )
            products, total = self._service.list_products(
                page,
                limit,
                filters=request.query_params,
                visible_only=not _is_admin(request),
            )
        except DomainError as exc:
            return error_response(exc)

        serializer = self._serializer_for(request)(products, many=True)
        return Response(
            {
                "products": serializer.data,
                "pagination": pagination_payload(total, page, limit),
            }
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(
                str(pk), visible_only=not _is_admin(request)
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(self._serializer_for(request)(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        try:
            dto = CreateProductDTO(**request.data)
        except (PydanticValidationError, TypeError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        product = self._service.create_product(dto)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/"""
        try:
            dto = UpdateProductDTO(**request.data)
        except (PydanticValidationError, TypeError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.update_product(str(pk), dto)
        except DomainError as exc:
            return error_response(exc)
        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        try:
            self._service.delete_product(str(pk))
        except DomainError as exc:
            return error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["patch"], url_path="visibility")
    def visibility(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/visibility/ with ``{"is_visible": bool}``."""
        is_visible = request.data.get("is_visible")
        if not isinstance(is_visible, bool):
            return Response(
                {"detail": "Field 'is_visible' must be a boolean."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        try:
            product = self._service.set_visibility(str(pk), is_visible)
        except DomainError as exc:
            return error_response(exc)
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["patch"], url_path="stock")
    def stock(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/stock/ with ``{"stock": N}``."""
        try:
            dto = UpdateProductDTO(stock=request.data.get("stock"))
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        if dto.stock is None:
            return Response(
                {"detail": "Field 'stock' is required."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        try:
            product = self._service.set_stock(str(pk), dto.stock)
        except DomainError as exc:
            return error_response(exc)
        return Response(ProductSerializer(product).data)
