import asyncio
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from tracker.services.auth import AuthService

SECRET = "test-secret"


class TestAuthService:
    """Token verification and user resolution."""

    @pytest.fixture
    def auth_service(self):
        service = AuthService()
        service.jwt_secret = SECRET
        service.audience = "authenticated"
        service.supabase_url = None
        service.supabase_anon_key = None
        return service

    def _token(self, **overrides):
        payload = {
            "sub": "5b0c8a7e-user",
            "email": "me@example.com",
            "aud": "authenticated",
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        }
        payload.update(overrides)
        return jwt.encode(payload, SECRET, algorithm="HS256")

    def test_normalize_user_from_claims(self):
        user = AuthService.normalize_user({"sub": "abc", "email": "a@b.c"})
        assert user == {"user_id": "abc", "email": "a@b.c"}

    def test_normalize_user_from_supabase_user_object(self):
        user = AuthService.normalize_user({"id": "abc", "email": "a@b.c", "aud": "authenticated"})
        assert user["user_id"] == "abc"

    def test_normalize_user_without_id(self):
        assert AuthService.normalize_user({"email": "a@b.c"}) is None

    def test_resolve_valid_token(self, auth_service):
        user = asyncio.run(auth_service.resolve_user(self._token()))
        assert user == {"user_id": "5b0c8a7e-user", "email": "me@example.com"}

    def test_expired_token_is_rejected(self, auth_service):
        token = self._token(exp=datetime.now(timezone.utc) - timedelta(hours=2))
        assert auth_service.verify_session_token(token) is None

    def test_wrong_audience_is_rejected(self, auth_service):
        assert auth_service.verify_session_token(self._token(aud="anon")) is None

    def test_wrong_secret_is_rejected(self, auth_service):
        token = jwt.encode({"sub": "x", "aud": "authenticated"}, "other-secret", algorithm="HS256")
        assert auth_service.verify_session_token(token) is None

    def test_missing_token_resolves_to_nobody(self, auth_service):
        assert asyncio.run(auth_service.resolve_user(None)) is None

    def test_no_secret_and_no_endpoint_resolves_to_nobody(self, auth_service):
        auth_service.jwt_secret = None
        assert asyncio.run(auth_service.resolve_user(self._token())) is None

    def test_dev_token_round_trips(self, auth_service):
        token = auth_service.create_dev_session_token("Dev@Example.com")

        claims = auth_service.verify_session_token(token)

        assert claims["email"] == "Dev@Example.com"
        assert claims["role"] == "authenticated"
        # Same email, same user id
        again = auth_service.verify_session_token(auth_service.create_dev_session_token("dev@example.com"))
        assert again["sub"] == claims["sub"]

    def test_dev_token_needs_secret(self, auth_service):
        auth_service.jwt_secret = None
        with pytest.raises(ValueError):
            auth_service.create_dev_session_token("dev@example.com")
