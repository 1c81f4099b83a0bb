"""Account API views."""

from __future__ import annotations

from django.conf import settings
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

from modules.accounts.dtos import CreateUserDTO, UpdateUserDTO
from modules.accounts.models import User
from modules.accounts.permissions import IsAdminRole
from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.accounts.serializers import UserSerializer
from modules.accounts.services import UserService
from modules.core.exceptions import DomainError
from modules.core.pagination import pagination_payload, validate_page
from modules.core.responses import error_response


class CurrentUserView(APIView):
    """GET /api/v1/me/ returns the authenticated user's profile."""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        return Response(UserSerializer(request.user).data)


class UserViewSet(GenericViewSet):
    """Admin-only user directory and account management."""

    queryset = User.objects.all()
    permission_classes = [IsAdminRole]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = UserService(repository=UserDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/v1/users/?page=&limit="""
        try:
            page, limit = validate_page(
                request.query_params.get("page", 1),
                request.query_params.get("limit", settings.DEFAULT_PAGE_SIZE),
            )
            users, total = self._service.list_users(page, limit)
        except DomainError as exc:
            return error_response(exc)
        return Response(
            {
                "users": UserSerializer(users, many=True).data,
                "pagination": pagination_payload(total, page, limit),
            }
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/users/{pk}/"""
        try:
            user = self._service.get_user(str(pk))
        except DomainError as exc:
            return error_response(exc)
        return Response(UserSerializer(user).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/users/ with ``{"name", "email", "password", "role"}``."""
        try:
            dto = CreateUserDTO(**request.data)
        except (PydanticValidationError, TypeError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            user = self._service.create_user(dto)
        except DomainError as exc:
            return error_response(exc)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/users/{pk}/ with any of name, email, role, is_active."""
        try:
            dto = UpdateUserDTO(**request.data)
        except (PydanticValidationError, TypeError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            user = self._service.update_user(str(pk), dto)
        except DomainError as exc:
            return error_response(exc)
        return Response(UserSerializer(user).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/users/{pk}/"""
        try:
            self._service.delete_user(str(pk))
        except DomainError as exc:
            return error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)
