"""User service: register, authenticate, login/refresh/logout, profile, admin seeding.

Each mutating method commits the StoreSession it is given.
"""

import logging

from src.bl_account.domain.models import WHATSAPP_PLACEHOLDER, User
from src.bl_account.domain.repository import UserRepositoryProtocol
from src.bl_account.infrastructure.persistence import UserRepository
from src.bl_common.database import StoreSession
from src.bl_common.datetime_utils import utc_now
from src.bl_common.enums import UserRole
from src.bl_common.errors import (
    EmailExistsError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
)
from src.bl_common.id_generator import generate_id
from src.bl_gateway.auth.jwt_handler import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from src.bl_gateway.auth.password import hash_password, verify_password
from src.bl_gateway.auth.sessions import LoginSession, SessionRepository

logger = logging.getLogger(__name__)


class UserService:
    """Stateless service, instantiate once, reuse across requests."""

    def __init__(
        self,
        users: UserRepositoryProtocol | None = None,
        sessions: SessionRepository | None = None,
    ) -> None:
        self._users: UserRepositoryProtocol = users or UserRepository()
        self._sessions = sessions or SessionRepository()

    async def register(
        self,
        session: StoreSession,
        name: str,
        email: str,
        password: str,
        whatsapp: str,
    ) -> User:
        """Create a USER with zero balances. Emails are unique case-insensitively."""
        try:
            if await self._users.get_user_by_email(session, email) is not None:
                raise EmailExistsError()
            user = User(
                id=generate_id("user"),
                name=name.strip(),
                email=email.strip(),
                password_hash=hash_password(password),
                whatsapp=whatsapp.strip(),
                role=UserRole.USER.value,
                balance=0,
                withdrawable_balance=0,
                created_at=utc_now(),
            )
            await self._users.add_user(session, user)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info("User registered: %s", user.id)
        return user

    async def authenticate(self, session: StoreSession, email: str, password: str) -> User:
        """Return the user for valid credentials.

        Unknown email and wrong password both raise InvalidCredentialsError,
        which keeps registered emails from being enumerated.
        """
        user = await self._users.get_user_by_email(session, email)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        return user

    async def login(
        self, session: StoreSession, email: str, password: str
    ) -> tuple[User, str, str]:
        """Authenticate and open a login session. Returns (user, access, refresh)."""
        user = await self.authenticate(session, email, password)
        login = LoginSession(id=generate_id("sess"), user_id=user.id, created_at=utc_now())
        try:
            await self._sessions.add_session(session, login)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        return (
            user,
            create_access_token(user.id, login.id),
            create_refresh_token(user.id, login.id),
        )

    async def refresh(self, session: StoreSession, refresh_token: str) -> str:
        """Issue a new access token while the refresh token's session is still open."""
        payload = decode_token(refresh_token, expected_type="refresh")
        login = await self._sessions.get_session(session, str(payload["sid"]))
        if login is None or login.user_id != payload["sub"]:
            raise InvalidTokenError()
        return create_access_token(login.user_id, login.id)

    async def logout(self, session: StoreSession, session_id: str) -> None:
        try:
            await self._sessions.delete_session(session, session_id)
            await session.commit()
        except Exception:
            await session.rollback()
            raise

    async def update_profile(
        self,
        session: StoreSession,
        user_id: str,
        email: str,
        whatsapp: str,
        password: str | None = None,
    ) -> User:
        try:
            user = await self._users.get_user(session, user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            other = await self._users.get_user_by_email(session, email)
            if other is not None and other.id != user.id:
                raise EmailExistsError()
            user.email = email.strip()
            user.whatsapp = whatsapp.strip()
            if password:
                user.password_hash = hash_password(password)
            await self._users.save_user(session, user)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info("Profile updated: %s", user_id)
        return user

    async def seed_admin(
        self,
        session: StoreSession,
        email: str,
        password: str,
        name: str = "Administrator",
    ) -> User:
        """Provision the admin account. Existing users with that email are promoted."""
        try:
            user = await self._users.get_user_by_email(session, email)
            if user is None:
                user = User(
                    id=generate_id("user"),
                    name=name,
                    email=email.strip(),
                    password_hash=hash_password(password),
                    whatsapp=WHATSAPP_PLACEHOLDER,
                    role=UserRole.ADMIN.value,
                    balance=0,
                    withdrawable_balance=0,
                    created_at=utc_now(),
                )
                await self._users.add_user(session, user)
                logger.info("Admin seeded: %s", user.id)
            elif not user.is_admin:
                user.role = UserRole.ADMIN.value
                await self._users.save_user(session, user)
                logger.info("User promoted to admin: %s", user.id)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        return user
