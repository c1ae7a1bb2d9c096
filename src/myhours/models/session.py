"""
Session models.

Defines Pydantic models for the cached MyHours session, the token grant
returned by the login and refresh endpoints, and interactive login
credentials.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class TokenGrant(BaseModel):
    """Access/refresh token pair issued by the token endpoints."""

    access_token: str = Field(..., min_length=1, description="Bearer token")
    refresh_token: str = Field(..., min_length=1, description="Refresh token")
    expires_in: int = Field(..., ge=0, description="Lifetime in seconds")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Session(BaseModel):
    """
    Cached authentication state for the single local user.

    ``expires_at`` is an epoch timestamp in milliseconds, measured with the
    client's clock, at or after which ``access_token`` must be refreshed.
    """

    email: str = Field(..., description="Account email address")
    access_token: str = Field(..., description="Current bearer token")
    refresh_token: str = Field(..., description="Token used to obtain a new pair")
    expires_at: int = Field(..., description="Expiry instant in epoch milliseconds")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_grant(cls, email: str, grant: TokenGrant, issued_at_ms: int) -> Session:
        """Build a session from a token grant received at ``issued_at_ms``."""
        return cls(
            email=email,
            access_token=grant.access_token,
            refresh_token=grant.refresh_token,
            expires_at=issued_at_ms + grant.expires_in * 1000,
        )

    def is_expired(self, now_ms: int) -> bool:
        """Whether the access token must be refreshed at ``now_ms``."""
        return now_ms >= self.expires_at


class LoginCredentials(BaseModel):
    """Email and password entered at the interactive login prompt."""

    email: str = Field(..., description="Account email address")
    password: str = Field(..., min_length=1, description="Account password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email address shape."""
        email = v.strip()
        if not EMAIL_PATTERN.match(email):
            raise ValueError(f"Invalid email address: {v!r}")
        return email

    def __repr__(self) -> str:
        return f"LoginCredentials(email={self.email!r}, password='***')"
