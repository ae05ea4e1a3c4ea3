import time

import jwt
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated
from rest_framework.test import APITestCase

from memberhub.identity import Caller, require_caller
from memberhub.jwt_utils import (
    JWTManager,
    generate_test_token,
    get_user_id_from_token,
    validate_jwt_token,
)
from profiles.models import Profile


class JWTUtilsTest(TestCase):
    def test_generated_token_round_trips_subject(self):
        """A generated token validates and carries the user id as subject"""
        token = generate_test_token("user-1")
        payload = validate_jwt_token(token)

        self.assertEqual(payload['sub'], "user-1")
        self.assertGreater(payload['exp'], payload['iat'])
        self.assertEqual(get_user_id_from_token(token), "user-1")

    def test_expired_token_is_rejected(self):
        token = generate_test_token("user-1", expires_in_hours=-1)

        with self.assertRaises(jwt.InvalidTokenError) as ctx:
            validate_jwt_token(token)
        self.assertIn("expired", str(ctx.exception))
        self.assertIsNone(get_user_id_from_token(token))

    def test_token_signed_with_other_secret_is_rejected(self):
        token = jwt.encode({'sub': 'user-1', 'exp': int(time.time()) + 60}, 'another-secret', algorithm='HS256')
        self.assertIsNone(get_user_id_from_token(token))

    def test_token_without_subject_is_rejected(self):
        token = jwt.encode({'exp': int(time.time()) + 60}, 'test_jwt_secret_key', algorithm='HS256')

        with self.assertRaises(jwt.InvalidTokenError):
            JWTManager().validate_token(token)

    @override_settings(JWT_AUDIENCE='https://members.example.com/', JWT_ISSUER='https://id.example.com/')
    def test_audience_and_issuer_are_enforced_when_configured(self):
        manager = JWTManager()
        token = manager.generate_token("user-1")
        self.assertEqual(manager.validate_token(token)['aud'], 'https://members.example.com/')

        foreign = jwt.encode(
            {'sub': 'user-1', 'exp': int(time.time()) + 60, 'aud': 'https://elsewhere.example.com/'},
            'test_jwt_secret_key',
            algorithm='HS256',
        )
        with self.assertRaises(jwt.InvalidTokenError):
            manager.validate_token(foreign)


class BearerAuthenticationTest(APITestCase):
    def setUp(self):
        self.url = reverse('conversations:conversation-list')

    def test_missing_header_is_unauthorized(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_wrong_scheme_is_unauthorized(self):
        self.client.credentials(HTTP_AUTHORIZATION="Token abc")
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_invalid_token_is_unauthorized(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer garbage")
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_valid_token_is_accepted(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {generate_test_token('user-1')}")
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user_id'], 'user-1')


class CallerTest(TestCase):
    def test_require_caller_rejects_missing_identity(self):
        with self.assertRaises(NotAuthenticated):
            require_caller(None)
        with self.assertRaises(NotAuthenticated):
            require_caller(Caller(user_id=""))

    def test_require_caller_returns_user_id(self):
        self.assertEqual(require_caller(Caller(user_id="u1")), "u1")

    def test_creator_flag_is_loaded_from_profile(self):
        """Caller.from_request reads the creator flag from the profile directory"""
        Profile.objects.create(id="admin-1", full_name="Site Admin", is_creator=True)

        class _Request:
            pass

        request = _Request()
        request.user = type('U', (), {'user_id': 'admin-1'})()
        self.assertTrue(Caller.from_request(request).is_creator)

        request.user = type('U', (), {'user_id': 'member-1'})()
        self.assertFalse(Caller.from_request(request).is_creator)

        request.user = None
        with self.assertRaises(NotAuthenticated):
            Caller.from_request(request)
