"""JWT token creation and verification.

Tokens are HS256-signed and carry the login session id (``sid``). A token
is only honoured while its session record exists, so logout revokes both
the access and the refresh token at once.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from config.settings import settings
from src.bl_common.errors import InvalidTokenError

_ALGORITHM = settings.JWT_ALGORITHM
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
_REFRESH_EXPIRE = timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS)


def _encode(user_id: str, session_id: str, token_type: str, ttl: timedelta) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "sid": session_id,
        "type": token_type,
        "iat": now,
        "exp": now + ttl,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def create_access_token(user_id: str, session_id: str) -> str:
    """Issue a short-lived access token (default: 30 min)."""
    return _encode(user_id, session_id, "access", _ACCESS_EXPIRE)


def create_refresh_token(user_id: str, session_id: str) -> str:
    """Issue a long-lived refresh token (default: 7 days)."""
    return _encode(user_id, session_id, "refresh", _REFRESH_EXPIRE)


def decode_token(token: str, expected_type: str) -> dict[str, Any]:
    """Decode and validate a JWT token.

    Args:
        token: Raw JWT string.
        expected_type: "access" or "refresh". Strictly enforced so a refresh
                       token cannot be used as an access token and vice versa.

    Raises:
        InvalidTokenError: Token invalid, expired, of the wrong type or
                           missing its subject/session claims.
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidTokenError() from None

    if payload.get("type") != expected_type:
        raise InvalidTokenError()
    if not payload.get("sub") or not payload.get("sid"):
        raise InvalidTokenError()
    return payload
