"""Tests for session token verification."""

import time

import pytest
from django.http import HttpResponse
from jose import JWTError

from saakie.core.middleware import IdentityProviderMiddleware, get_bearer_token, verify_session_token


@pytest.fixture
def middleware():
    return IdentityProviderMiddleware(lambda request: HttpResponse("ok"))


class TestGetBearerToken:
    def test_extracts_token(self, rf):
        request = rf.get("/", headers={"Authorization": "Bearer abc.def.ghi"})

        assert get_bearer_token(request) == "abc.def.ghi"

    @pytest.mark.parametrize("value", ["", "Basic abc", "Bearer ", "abc.def.ghi"])
    def test_missing_or_other_scheme(self, rf, value):
        request = rf.get("/", headers={"Authorization": value})

        assert get_bearer_token(request) is None


class TestVerifySessionToken:
    def test_returns_claims(self, make_token):
        claims = verify_session_token(make_token("user_1", sid="sess_1"))

        assert claims["sub"] == "user_1"
        assert claims["sid"] == "sess_1"

    def test_expired_token(self, make_token):
        with pytest.raises(JWTError):
            verify_session_token(make_token("user_1", exp=int(time.time()) - 60))

    def test_wrong_key(self):
        from jose import jwt

        token = jwt.encode({"sub": "user_1"}, "some-other-key", algorithm="HS256")

        with pytest.raises(JWTError):
            verify_session_token(token)

    def test_missing_subject(self, make_token):
        with pytest.raises(JWTError):
            verify_session_token(make_token(None))

    def test_authorized_party_check(self, make_token, settings):
        settings.IDENTITY_PROVIDER = {**settings.IDENTITY_PROVIDER, "AUTHORIZED_PARTIES": ["https://saakie.in"]}

        assert verify_session_token(make_token("user_1", azp="https://saakie.in"))["sub"] == "user_1"
        with pytest.raises(JWTError):
            verify_session_token(make_token("user_1", azp="https://evil.example"))

    def test_unconfigured_key(self, make_token, settings):
        token = make_token("user_1")
        settings.IDENTITY_PROVIDER = {**settings.IDENTITY_PROVIDER, "JWT_KEY": ""}

        with pytest.raises(JWTError):
            verify_session_token(token)


class TestIdentityProviderMiddleware:
    def test_sets_identity_from_valid_token(self, rf, middleware, make_token):
        request = rf.get("/", headers={"Authorization": f"Bearer {make_token('user_1')}"})

        middleware(request)

        assert request.identity_id == "user_1"
        assert request.identity_claims["sub"] == "user_1"

    def test_invalid_token_leaves_request_anonymous(self, rf, middleware):
        request = rf.get("/", headers={"Authorization": "Bearer not-a-jwt"})

        response = middleware(request)

        assert response.status_code == 200
        assert request.identity_id is None
        assert request.identity_claims == {}

    def test_no_header(self, rf, middleware):
        request = rf.get("/")

        middleware(request)

        assert request.identity_id is None
