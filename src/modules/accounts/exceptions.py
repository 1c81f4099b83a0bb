"""Account domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import ConflictError, NotFoundError


class UserNotFound(NotFoundError):
    """The requested user does not exist."""

    code = "user_not_found"


class EmailAlreadyRegistered(ConflictError):
    """Another account already uses this email address."""

    code = "email_already_registered"


class UserHasOrders(ConflictError):
    """Accounts referenced by orders cannot be deleted."""

    code = "user_has_orders"
