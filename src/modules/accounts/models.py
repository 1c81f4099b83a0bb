"""User account model.

Orders reference users by foreign key only; the workflow never reads
anything from a user besides its summary (id, name, email).  Password
hashing and token issuance are handled by Django auth and SimpleJWT.
"""

from __future__ import annotations

import structlog
from django.contrib.auth.models import AbstractUser
from django.contrib.auth.models import UserManager as DjangoUserManager
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class UserRole(models.TextChoices):
    ADMIN = "ADMIN", "Admin"
    USER = "USER", "User"


class UserManager(DjangoUserManager):
    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("role", UserRole.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser, BaseModel):
    """Storefront account.

    ``role`` gates the privileged order and catalog operations; superusers
    are always treated as admins.
    """

    name = models.CharField(max_length=255, blank=True, default="")
    email = models.EmailField(max_length=255, unique=True)
    role = models.CharField(
        max_length=10,
        choices=UserRole.choices,
        default=UserRole.USER,
    )

    objects = UserManager()

    REQUIRED_FIELDS = ["email"]

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]

    @property
    def is_admin(self) -> bool:
        return self.is_superuser or self.role == UserRole.ADMIN

    @property
    def display_name(self) -> str:
        return self.name or self.get_full_name() or self.username

    def __str__(self) -> str:
        return f"{self.display_name} <{self.email}>"
