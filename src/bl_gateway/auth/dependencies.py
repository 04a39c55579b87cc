"""FastAPI dependencies: get_current_user, require_admin, require_complete_profile.

Usage in any protected router:
    from src.bl_gateway.auth.dependencies import get_current_user

    @router.get("/protected")
    async def protected(user: Annotated[User, Depends(get_current_user)]):
        ...

The StoreSession used here is the same per-request instance the endpoint
receives (FastAPI caches dependencies within a request).
"""

from typing import Annotated, Any

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from src.bl_account.domain.models import User
from src.bl_account.infrastructure.persistence import UserRepository
from src.bl_common.database import StoreSession, get_store_session
from src.bl_common.errors import ForbiddenError, InvalidTokenError, ProfileIncompleteError
from src.bl_gateway.auth.jwt_handler import decode_token
from src.bl_gateway.auth.sessions import SessionRepository

# tokenUrl tells Swagger UI where to get a token (used for the "Authorize" button)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)

_users = UserRepository()
_sessions = SessionRepository()


async def get_token_payload(
    token: Annotated[str, Depends(oauth2_scheme)],
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> dict[str, Any]:
    """Validate the Bearer access token and its login session."""
    try:
        payload = decode_token(token, expected_type="access")
    except InvalidTokenError:
        raise _CREDENTIALS_EXCEPTION from None

    login = await _sessions.get_session(session, str(payload["sid"]))
    if login is None or login.user_id != payload["sub"]:
        raise _CREDENTIALS_EXCEPTION
    return payload


async def get_current_user(
    payload: Annotated[dict[str, Any], Depends(get_token_payload)],
    session: Annotated[StoreSession, Depends(get_store_session)],
) -> User:
    user = await _users.get_user(session, str(payload["sub"]))
    if user is None:
        raise _CREDENTIALS_EXCEPTION
    return user


async def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    if not current_user.is_admin:
        raise ForbiddenError("Admin role required")
    return current_user


async def require_complete_profile(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Bets and payments stay locked until the user registers a WhatsApp contact."""
    if not current_user.profile_complete:
        raise ProfileIncompleteError()
    return current_user
