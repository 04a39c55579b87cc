"""Unit tests for UserService against an in-memory store."""

import pytest

from src.bl_account.domain.models import WHATSAPP_PLACEHOLDER, User
from src.bl_common.database import StoreSession
from src.bl_common.enums import UserRole
from src.bl_common.errors import (
    EmailExistsError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
)
from src.bl_gateway.auth.jwt_handler import decode_token
from src.bl_gateway.user.service import UserService
from tests.factories import make_user, seed_users


@pytest.fixture
def service() -> UserService:
    return UserService()


async def _register(
    service: UserService, session: StoreSession, email: str = "ana@example.com"
) -> User:
    return await service.register(session, "Ana", email, "Secret123", "(11) 98765-4321")


class TestRegister:
    async def test_new_user_has_zero_balances(
        self, service: UserService, session: StoreSession
    ) -> None:
        user = await _register(service, session)
        assert user.role == UserRole.USER.value
        assert (user.balance, user.withdrawable_balance) == (0, 0)
        assert user.password_hash != "Secret123"
        assert user.profile_complete

    async def test_email_unique_case_insensitive(
        self, service: UserService, session: StoreSession
    ) -> None:
        await _register(service, session)
        with pytest.raises(EmailExistsError):
            await _register(service, session, "ANA@Example.com")


class TestLogin:
    async def test_login_issues_session_tokens(
        self, service: UserService, session: StoreSession
    ) -> None:
        registered = await _register(service, session)

        user, access, refresh = await service.login(session, "ana@example.com", "Secret123")

        assert user.id == registered.id
        access_payload = decode_token(access, "access")
        assert access_payload["sid"] == decode_token(refresh, "refresh")["sid"]

    @pytest.mark.parametrize(
        ("email", "password"),
        [("ana@example.com", "Wrong1234"), ("nobody@example.com", "Secret123")],
    )
    async def test_bad_credentials_are_indistinguishable(
        self, service: UserService, session: StoreSession, email: str, password: str
    ) -> None:
        await _register(service, session)
        with pytest.raises(InvalidCredentialsError):
            await service.login(session, email, password)

    async def test_refresh_then_logout(
        self, service: UserService, session: StoreSession
    ) -> None:
        await _register(service, session)
        _, access, refresh = await service.login(session, "ana@example.com", "Secret123")

        new_access = await service.refresh(session, refresh)
        assert decode_token(new_access, "access")["sid"] == decode_token(access, "access")["sid"]

        await service.logout(session, str(decode_token(access, "access")["sid"]))
        with pytest.raises(InvalidTokenError):
            await service.refresh(session, refresh)


class TestProfile:
    async def test_update(self, service: UserService, session: StoreSession) -> None:
        user = await _register(service, session)
        updated = await service.update_profile(
            session, user.id, "ana.new@example.com", "(21) 91234-5678", "NewSecret1"
        )
        assert updated.email == "ana.new@example.com"
        await service.authenticate(session, "ana.new@example.com", "NewSecret1")

    async def test_email_taken_by_other(self, service: UserService, session: StoreSession) -> None:
        user = await _register(service, session)
        await _register(service, session, "bob@example.com")
        with pytest.raises(EmailExistsError):
            await service.update_profile(session, user.id, "bob@example.com", "(21) 91234-5678")

    async def test_unknown_user(self, service: UserService, session: StoreSession) -> None:
        with pytest.raises(UserNotFoundError):
            await service.update_profile(session, "user_x", "x@example.com", "(21) 91234-5678")


class TestSeedAdmin:
    async def test_creates_admin_with_incomplete_profile(
        self, service: UserService, session: StoreSession
    ) -> None:
        admin = await service.seed_admin(session, "root@example.com", "Admin1234")
        assert admin.is_admin
        assert admin.whatsapp == WHATSAPP_PLACEHOLDER
        assert not admin.profile_complete
        await service.authenticate(session, "root@example.com", "Admin1234")

    async def test_promotes_existing_user(
        self, service: UserService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user(email="boss@example.com"))
        admin = await service.seed_admin(session, "boss@example.com", "ignored")
        assert admin.id == "user_alice"
        assert admin.is_admin

    async def test_is_idempotent(self, service: UserService, session: StoreSession) -> None:
        first = await service.seed_admin(session, "root@example.com", "Admin1234")
        second = await service.seed_admin(session, "root@example.com", "Admin1234")
        assert first.id == second.id
