# catalog_admin/permissions.py
from rest_framework.permissions import BasePermission


class IsAdminToken(BasePermission):
    """
    Allows the request only when authentication produced a verified access
    token carrying a truthy `isAdmin` claim and a `username`.
    """
    message = "Admin authentication required"

    def has_permission(self, request, view):
        token = request.auth
        if token is None:
            return False
        return bool(token.get("isAdmin")) and bool(token.get("username"))
