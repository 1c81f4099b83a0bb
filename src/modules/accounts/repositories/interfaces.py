"""User repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.accounts.models import User


class IUserRepository(IRepository["User"]):
    """Repository contract for user accounts."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive email lookup, ``None`` when nobody uses it."""

    @abstractmethod
    def create(self, password: str, **fields) -> User:
        """Create an account with a hashed *password*."""

    @abstractmethod
    def list(self) -> "models.QuerySet[User]":
        """All users, newest first."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Remove the account; ``False`` when it does not exist.

        Raises ``django.db.models.ProtectedError`` when orders reference it.
        """
