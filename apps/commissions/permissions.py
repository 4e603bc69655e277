from rest_framework import permissions


class IsOperator(permissions.BasePermission):
    """
    Permission: Only the operator (the artist, a staff account) may act.
    """

    message = 'Only the artist can perform this action'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_staff)


class IsOperatorOrReadOnly(IsOperator):
    """
    Permission: Anyone can read; only the operator can write.
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return super().has_permission(request, view)
