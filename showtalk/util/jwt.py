"""JWT token utilities.

Sessions belong to the hosted identity provider. Its tokens carry the user's
UUID in the standard ``sub`` claim and the display handle in ``handle``; this
module verifies them and mints compatible ones for tests and local tooling.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import jwt
from pydantic import BaseModel, ValidationError, field_validator

from showtalk.config import AuthSettings


class TokenPayload(BaseModel):
    """Claims this service relies on."""

    user_id: str
    handle: str
    exp: datetime

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        """Subjects must be user UUIDs."""
        return str(UUID(v))

    @field_validator("handle")
    @classmethod
    def validate_handle(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Handle claim is empty")
        return v

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "TokenPayload":
        return cls(
            user_id=claims.get("sub", ""),
            handle=claims.get("handle", ""),
            exp=claims["exp"],
        )


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(user_id: str, handle: str, settings: AuthSettings) -> str:
    """Mint a token shaped like the identity provider's.

    Args:
        user_id: User UUID, stored as the subject
        handle: User handle
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    now = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "handle": handle,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If the token is expired, badly signed or lacks usable claims
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            leeway=settings.jwt_leeway_seconds,
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    try:
        return TokenPayload.from_claims(claims)
    except ValidationError as e:
        raise JWTError(f"Invalid token claims: {e.error_count()} error(s)")
