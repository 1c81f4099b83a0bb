"""Django ORM implementation of the User repository."""

from __future__ import annotations

from typing import Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models

from modules.accounts.models import User
from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserDjangoRepository(IUserRepository):
    """Concrete User repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[User]:
        """Returns ``None`` for non-existent or malformed IDs."""
        try:
            return User.objects.using(self.using).filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_email(self, email: str) -> Optional[User]:
        return User.objects.using(self.using).filter(email__iexact=email).first()

    def create(self, password: str, **fields) -> User:
        user = User(**fields)
        user.set_password(password)
        user.save(using=self.using)
        logger.info("user.saved", user_id=str(user.id))
        return user

    def list(self) -> "models.QuerySet[User]":
        return User.objects.using(self.using).order_by("-created_at")

    def save(self, entity: User) -> User:
        entity.save(using=self.using)
        logger.info("user.saved", user_id=str(entity.id))
        return entity

    def delete(self, id: str) -> bool:
        user = self.get_by_id(id)
        if not user:
            return False
        user.delete(using=self.using)
        logger.info("user.deleted", user_id=str(id))
        return True
