"""Role-based permission classes shared by the SpaOps API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsAdminRole(permissions.BasePermission):
    """Only admins (role ADMIN or Django superusers)."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        return hasattr(user, "is_admin_role") and user.is_admin_role()


class IsAdminOrManager(permissions.BasePermission):
    """Admins and branch managers."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        return hasattr(user, "can_manage_catalog") and user.can_manage_catalog()


class IsAdminOrManagerOrReadOnly(permissions.BasePermission):
    """
    Anyone authenticated can read, admins and managers can write.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False

        if request.method in permissions.SAFE_METHODS:
            return True

        return hasattr(user, "can_manage_catalog") and user.can_manage_catalog()


class IsInBranchScope(permissions.BasePermission):
    """
    Object-level permission: the object's branch must be the caller's
    current branch, unless the caller is an admin.
    """

    def has_object_permission(self, request, view, obj) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if hasattr(user, "is_admin_role") and user.is_admin_role():
            return True
        branch_id = getattr(obj, "branch_id", None)
        return branch_id is not None and branch_id == user.branch_id
