"""
Caller identity passed explicitly into every service function.

Views build a Caller from the authenticated request; tests construct one
directly. Services never look identity up from global state.
"""

from dataclasses import dataclass

from rest_framework.exceptions import NotAuthenticated


@dataclass(frozen=True)
class Caller:
    user_id: str
    is_creator: bool = False

    @classmethod
    def from_request(cls, request):
        """Build the caller for an authenticated DRF request."""
        user = getattr(request, 'user', None)
        user_id = getattr(user, 'user_id', None)
        if not user_id:
            raise NotAuthenticated()

        from profiles.models import Profile
        is_creator = Profile._default_manager.filter(pk=user_id, is_creator=True).exists()
        return cls(user_id=user_id, is_creator=is_creator)


def require_caller(caller):
    """Return the caller's user id or raise NotAuthenticated."""
    if caller is None or not getattr(caller, 'user_id', None):
        raise NotAuthenticated()
    return caller.user_id
