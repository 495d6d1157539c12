"""Request authentication helpers.

The identity provider hands browsers an auth_token cookie; scripted clients
send the same token as an Authorization: Bearer header.
"""

from fastapi import HTTPException, status

from showtalk.domain.service import JWTService
from showtalk.util.jwt import TokenPayload

BEARER_PREFIX = "bearer "


def resolve_token(auth_token: str | None, authorization: str | None) -> str | None:
    """Pick the JWT from the cookie, falling back to the Authorization header.

    Args:
        auth_token: Value of the auth_token cookie
        authorization: Value of the Authorization header

    Returns:
        Raw token string, or None when neither carries one
    """
    if auth_token:
        return auth_token
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :].strip() or None
    return None


def require_user(jwt_service: JWTService, token: str | None, action: str) -> TokenPayload:
    """Return the caller's token payload or reject the request with 401.

    Args:
        jwt_service: JWT service for token verification
        token: Raw token (may be None)
        action: What the caller tried to do, for the error message

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    payload = jwt_service.get_payload_from_token(token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return payload
