"""Unit tests for JWT helpers and JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from showtalk.config import AuthSettings
from showtalk.domain.service import JWTService
from showtalk.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(
    jwt_secret="test-secret-for-showtalk-comment-threads", jwt_algorithm="HS256"
)
USER_ID = "b3c1d1a4-0000-4000-8000-000000000001"


def encode(claims: dict) -> str:
    return jwt.encode(claims, SETTINGS.jwt_secret, algorithm=SETTINGS.jwt_algorithm)


class TestVerifyToken:
    """Tests for verify_token."""

    def test_valid_token_yields_payload(self):
        token = create_token(USER_ID, "fan.showtalk.tv", SETTINGS)

        payload = verify_token(token, SETTINGS)

        assert payload.user_id == USER_ID
        assert payload.handle == "fan.showtalk.tv"

    def test_subject_claim_carries_user_id(self):
        token = create_token(USER_ID, "fan.showtalk.tv", SETTINGS)

        claims = jwt.decode(
            token, SETTINGS.jwt_secret, algorithms=[SETTINGS.jwt_algorithm]
        )

        assert claims["sub"] == USER_ID
        assert "iat" in claims

    def test_expired_token_raises_error(self):
        token = encode(
            {
                "sub": USER_ID,
                "handle": "fan.showtalk.tv",
                "exp": datetime.now(timezone.utc) - timedelta(days=2),
            }
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)

    def test_recently_expired_token_within_leeway_is_accepted(self):
        token = encode(
            {
                "sub": USER_ID,
                "handle": "fan.showtalk.tv",
                "exp": datetime.now(timezone.utc) - timedelta(seconds=5),
            }
        )

        assert verify_token(token, SETTINGS).user_id == USER_ID

    def test_non_uuid_subject_is_rejected(self):
        token = encode(
            {
                "sub": "did:plc:abc",
                "handle": "fan.showtalk.tv",
                "exp": datetime.now(timezone.utc) + timedelta(hours=1),
            }
        )

        with pytest.raises(JWTError, match="claims"):
            verify_token(token, SETTINGS)

    def test_missing_handle_is_rejected(self):
        token = encode(
            {"sub": USER_ID, "exp": datetime.now(timezone.utc) + timedelta(hours=1)}
        )

        with pytest.raises(JWTError):
            verify_token(token, SETTINGS)

    def test_token_signed_with_other_secret_raises_error(self):
        other = AuthSettings(jwt_secret="another-secret-not-used-by-the-api-01")
        token = create_token(USER_ID, "fan.showtalk.tv", other)

        with pytest.raises(JWTError):
            verify_token(token, SETTINGS)

    def test_garbage_token_raises_error(self):
        with pytest.raises(JWTError):
            verify_token("not-a-jwt", SETTINGS)


class TestJWTService:
    """Tests for JWTService.get_payload_from_token."""

    def test_missing_or_invalid_token_is_anonymous(self):
        service = JWTService(SETTINGS)

        assert service.get_payload_from_token(None) is None
        assert service.get_payload_from_token("") is None
        assert service.get_payload_from_token("not-a-jwt") is None

    def test_valid_token_is_decoded(self):
        service = JWTService(SETTINGS)
        token = service.create_token(USER_ID, "fan.showtalk.tv")

        payload = service.get_payload_from_token(token)

        assert payload is not None
        assert payload.user_id == USER_ID
