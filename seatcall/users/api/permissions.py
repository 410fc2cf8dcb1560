from rest_framework.permissions import SAFE_METHODS
from rest_framework.permissions import BasePermission


def is_staff(user) -> bool:
    return bool(
        user
        and getattr(user, "is_authenticated", False)
        and (getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))
    )


class IsStaff(BasePermission):
    """Allow access only to staff users."""

    def has_permission(self, request, view):
        return is_staff(getattr(request, "user", None))


class IsStaffOrReadOnly(BasePermission):
    """Any authenticated user may read; only staff may write."""

    def has_permission(self, request, view):
        u = getattr(request, "user", None)
        if not (u and getattr(u, "is_authenticated", False)):
            return False
        if request.method in SAFE_METHODS:
            return True
        return is_staff(u)
