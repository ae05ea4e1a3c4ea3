import logging

import jwt
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from .jwt_utils import validate_jwt_token

logger = logging.getLogger(__name__)


class AuthenticatedMember:
    """Minimal user object for a request carrying a verified bearer token."""

    is_authenticated = True
    is_anonymous = False

    def __init__(self, user_id, claims=None):
        self.user_id = user_id
        self.claims = claims or {}

    @property
    def pk(self):
        return self.user_id

    def __str__(self):
        return self.user_id


class BearerJWTAuthentication(BaseAuthentication):
    keyword = 'Bearer'

    def authenticate(self, request):
        """
        Authenticate a request using a JWT provided in the Authorization header.

        Requests without an Authorization header are left unauthenticated so
        that permission classes decide whether they may proceed. On success the
        token claims are attached to `request.jwt_claims` and the subject to
        `request.user_id`.

        Raises:
            AuthenticationFailed: If the header is not "Bearer <token>" or the
                token fails verification.
        """
        auth = get_authorization_header(request).split()
        if not auth:
            return None

        if auth[0].decode('latin-1') != self.keyword or len(auth) != 2:
            raise AuthenticationFailed("Wrong token format. Expected 'Bearer token'")

        try:
            token = auth[1].decode()
        except UnicodeError:
            raise AuthenticationFailed("Invalid token header. Token contains invalid characters")

        try:
            payload = validate_jwt_token(token)
        except jwt.InvalidTokenError as e:
            logger.warning("Error while validating user token: %s", e)
            raise AuthenticationFailed(str(e))

        request.jwt_claims = payload
        request.user_id = payload['sub']
        return (AuthenticatedMember(payload['sub'], payload), token)

    def authenticate_header(self, request):
        return self.keyword
