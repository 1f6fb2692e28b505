from typing import Iterable
from rest_framework import permissions


# ---- base roles ----
class HasAnyRole(permissions.BasePermission):
    """Authenticated user whose role is one of the allowed ones"""
    allowed: Iterable[str] = ()

    def has_permission(self, request, view) -> bool:
        return bool(
            request.user
            and request.user.is_authenticated
            and (request.user.role in self.allowed)
        )


class IsEngineer(HasAnyRole):
    allowed = ("ENGINEER",)


class IsManager(HasAnyRole):
    allowed = ("MANAGER",)


# ---- object permissions ----
class IsOwnProfileOrManager(permissions.BasePermission):
    """Reads for everyone; writes when obj.user is request.user or the caller is a manager"""

    def has_object_permission(self, request, view, obj) -> bool:
        if not request.user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        if getattr(request.user, "role", None) == "MANAGER":
            return True
        return hasattr(obj, "user") and obj.user_id == request.user.id


class IsProjectManager(permissions.BasePermission):
    """Only the manager who owns the project may change it"""

    def has_object_permission(self, request, view, obj) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return request.user.is_authenticated
        return request.user.is_authenticated and obj.manager_id == request.user.id


class ReadOnlyOrManager(permissions.BasePermission):
    """SAFE methods for every authenticated user; writes for managers only"""

    def has_permission(self, request, view) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return request.user.is_authenticated
        return request.user.is_authenticated and getattr(request.user, "role", None) == "MANAGER"
