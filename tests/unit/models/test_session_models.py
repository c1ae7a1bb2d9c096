"""
Tests for session models.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from myhours.models.session import LoginCredentials, Session, TokenGrant


class TestTokenGrant:
    def test_parses_camel_case_response(self):
        grant = TokenGrant.model_validate(
            {"accessToken": "a", "refreshToken": "r", "expiresIn": 60, "tokenType": "bearer"}
        )
        assert (grant.access_token, grant.refresh_token, grant.expires_in) == ("a", "r", 60)

    @pytest.mark.parametrize(
        "payload",
        [
            {"accessToken": "", "refreshToken": "r", "expiresIn": 60},
            {"accessToken": "a", "refreshToken": "r", "expiresIn": -1},
            {"accessToken": "a", "expiresIn": 60},
        ],
    )
    def test_rejects_malformed_grant(self, payload):
        with pytest.raises(ValidationError):
            TokenGrant.model_validate(payload)


class TestSession:
    def test_from_grant_computes_expiry_in_milliseconds(self):
        grant = TokenGrant(access_token="a", refresh_token="r", expires_in=3600)

        session = Session.from_grant("ada@example.com", grant, issued_at_ms=1_000)

        assert session.expires_at == 1_000 + 3_600_000
        assert session.email == "ada@example.com"

    @pytest.mark.parametrize(
        ("now_ms", "expired"),
        [(999, False), (1_000, True), (1_001, True)],
    )
    def test_is_expired_boundary(self, now_ms, expired):
        session = Session(email="e@x.io", access_token="a", refresh_token="r", expires_at=1_000)
        assert session.is_expired(now_ms) is expired

    def test_serializes_with_camel_case_aliases(self):
        session = Session(email="e@x.io", access_token="a", refresh_token="r", expires_at=5)
        assert session.model_dump(by_alias=True) == {
            "email": "e@x.io",
            "accessToken": "a",
            "refreshToken": "r",
            "expiresAt": 5,
        }


class TestLoginCredentials:
    def test_email_is_trimmed(self):
        creds = LoginCredentials(email="  ada@example.com\n", password="pw")
        assert creds.email == "ada@example.com"

    @pytest.mark.parametrize("email", ["", "ada", "ada@", "@example.com", "a b@example.com"])
    def test_invalid_email(self, email):
        with pytest.raises(ValidationError):
            LoginCredentials(email=email, password="pw")

    def test_empty_password(self):
        with pytest.raises(ValidationError):
            LoginCredentials(email="ada@example.com", password="")

    def test_repr_hides_password(self):
        creds = LoginCredentials(email="ada@example.com", password="hunter2")
        assert "hunter2" not in repr(creds)
