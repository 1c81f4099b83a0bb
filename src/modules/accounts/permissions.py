from rest_framework.permissions import BasePermission


class IsAdminRole(BasePermission):
    """Allow only authenticated users holding the ADMIN role."""

    message = "Admin access required."

    def has_permission(self, request, view) -> bool:
        user = request.user
        return bool(
            user and user.is_authenticated and getattr(user, "is_admin", False)
        )
