from rest_framework.permissions import BasePermission


class IsMember(BasePermission):
    """Allows access only to requests carrying a verified bearer token."""

    def has_permission(self, request, view):
        user = getattr(request, 'user', None)
        return bool(user is not None and getattr(user, 'is_authenticated', False))


class IsCreator(IsMember):
    """Allows access only to members flagged as creators (site admins)."""

    message = 'Admin access required.'

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False

        from profiles.models import Profile
        return Profile._default_manager.filter(
            pk=request.user.user_id, is_creator=True
        ).exists()
