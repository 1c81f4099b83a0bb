"""Account service layer (admin user management).

Rules enforced here:
- Email addresses are unique, compared case-insensitively.
- New accounts log in with their email as username.
- Accounts referenced by orders cannot be deleted; deactivate them instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

import structlog
from django.db import transaction
from django.db.models import ProtectedError

from modules.accounts.exceptions import EmailAlreadyRegistered, UserHasOrders, UserNotFound
from modules.core.pagination import paginate, validate_page

if TYPE_CHECKING:
    from modules.accounts.dtos import CreateUserDTO, UpdateUserDTO
    from modules.accounts.models import User
    from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserService:
    def __init__(self, repository: IUserRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_user(self, dto: CreateUserDTO) -> User:
        """Raises ``EmailAlreadyRegistered`` when the email is taken."""
        log = logger.bind(email=dto.email, role=dto.role)
        if self._repo.get_by_email(dto.email):
            log.warning("user.duplicate_email")
            raise EmailAlreadyRegistered("Email already registered.")

        user = self._repo.create(
            dto.password,
            username=dto.email,
            email=dto.email,
            name=dto.name,
            role=dto.role,
        )
        log.info("user.created", user_id=str(user.id))
        return user

    @transaction.atomic
    def update_user(self, id: str, dto: UpdateUserDTO) -> User:
        """Apply the supplied fields.

        Raises:
            UserNotFound: the user does not exist.
            EmailAlreadyRegistered: the new email belongs to another account.
        """
        user = self.get_user(id)
        log = logger.bind(user_id=str(user.id))

        if dto.email is not None and dto.email != user.email.lower():
            if self._repo.get_by_email(dto.email):
                log.warning("user.duplicate_email")
                raise EmailAlreadyRegistered("Email already registered.")

        for field in ("name", "email", "role", "is_active"):
            value = getattr(dto, field)
            if value is not None:
                setattr(user, field, value)

        user = self._repo.save(user)
        log.info("user.updated")
        return user

    @transaction.atomic
    def delete_user(self, id: str) -> None:
        """Raises ``UserNotFound`` or ``UserHasOrders``."""
        try:
            deleted = self._repo.delete(id)
        except ProtectedError as exc:
            raise UserHasOrders(
                "User has orders and cannot be deleted; deactivate it instead."
            ) from exc
        if not deleted:
            raise UserNotFound(f"User {id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_user(self, id: str) -> User:
        """Raises ``UserNotFound`` when no user has this id."""
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound(f"User {id} not found.")
        return user

    def list_users(self, page: int = 1, limit: int = 10) -> Tuple[List[User], int]:
        page, limit = validate_page(page, limit)
        users, total = paginate(self._repo.list(), page, limit)
        logger.info("user.listed", page=page, limit=limit, total=total)
        return users, total
