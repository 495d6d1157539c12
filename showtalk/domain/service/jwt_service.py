"""JWT token domain service."""

import logfire

from showtalk.config import AuthSettings
from showtalk.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Resolves the identity provider's tokens into viewer identities."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, handle: str) -> str:
        """Mint a token for local tooling and tests.

        Production tokens come from the identity provider.
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            return create_token(user_id, handle, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token rejected", error=str(e))
                raise
            logfire.debug("JWT token verified", user_id=payload.user_id)
            return payload

    def get_payload_from_token(self, token: str | None) -> TokenPayload | None:
        """Resolve the viewer behind an optional token.

        Reads work for anonymous visitors too; they just get no personal vote
        or reaction state. A bad token is treated like no token.

        Args:
            token: JWT token string (optional)

        Returns:
            Payload if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token)
        except JWTError:
            return None
