"""Auth API flow: register, login, profile, refresh, logout."""

from httpx import AsyncClient

from tests.api_helpers import login, register_and_login


def new_user(email: str = "ana@example.com") -> dict[str, str]:
    return {
        "name": "Ana",
        "email": email,
        "password": "Secret123",
        "whatsapp": "(11) 98765-4321",
    }


class TestRegister:
    async def test_register_success(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/auth/register", json=new_user())
        assert resp.status_code == 201
        body = resp.json()
        assert body["code"] == 0
        assert body["data"]["email"] == "ana@example.com"
        assert body["data"]["role"] == "USER"
        assert "password" not in str(body["data"]).lower()
        assert body["request_id"].startswith("req_")
        assert resp.headers["X-Request-ID"] == body["request_id"]

    async def test_duplicate_email(self, client: AsyncClient) -> None:
        await client.post("/api/v1/auth/register", json=new_user())
        resp = await client.post("/api/v1/auth/register", json=new_user("ANA@example.com"))
        assert resp.status_code == 409
        assert resp.json()["code"] == 1001

    async def test_weak_password(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/auth/register", json={**new_user(), "password": "weakpass"}
        )
        assert resp.status_code == 422

    async def test_short_whatsapp(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/auth/register", json={**new_user(), "whatsapp": "123"})
        assert resp.status_code == 422


class TestLogin:
    async def test_wrong_password(self, client: AsyncClient) -> None:
        await client.post("/api/v1/auth/register", json=new_user())
        resp = await client.post(
            "/api/v1/auth/login", json={"email": "ana@example.com", "password": "Nope12345"}
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == 1002

    async def test_me_requires_token(self, client: AsyncClient) -> None:
        assert (await client.get("/api/v1/auth/me")).status_code == 401

    async def test_me(self, client: AsyncClient) -> None:
        headers = await register_and_login(client, "ana@example.com")
        resp = await client.get("/api/v1/auth/me", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["profile_complete"] is True


class TestSession:
    async def test_refresh(self, client: AsyncClient) -> None:
        await client.post("/api/v1/auth/register", json=new_user())
        resp = await client.post(
            "/api/v1/auth/login", json={"email": "ana@example.com", "password": "Secret123"}
        )
        refresh = resp.json()["data"]["refresh_token"]

        resp = await client.post("/api/v1/auth/refresh", json={"refresh_token": refresh})

        assert resp.status_code == 200
        access = resp.json()["data"]["access_token"]
        me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {access}"})
        assert me.status_code == 200

    async def test_refresh_token_is_not_an_access_token(self, client: AsyncClient) -> None:
        await client.post("/api/v1/auth/register", json=new_user())
        resp = await client.post(
            "/api/v1/auth/login", json={"email": "ana@example.com", "password": "Secret123"}
        )
        refresh = resp.json()["data"]["refresh_token"]
        me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {refresh}"})
        assert me.status_code == 401

    async def test_logout_revokes_token(self, client: AsyncClient) -> None:
        headers = await register_and_login(client, "ana@example.com")

        resp = await client.post("/api/v1/auth/logout", headers=headers)
        assert resp.status_code == 200

        assert (await client.get("/api/v1/auth/me", headers=headers)).status_code == 401
        # A fresh login still works
        assert await login(client, "ana@example.com", "Secret123")


class TestProfile:
    async def test_update_profile(self, client: AsyncClient) -> None:
        headers = await register_and_login(client, "ana@example.com")
        resp = await client.patch(
            "/api/v1/auth/me",
            json={"email": "ana2@example.com", "whatsapp": "(21) 91234-5678"},
            headers=headers,
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["email"] == "ana2@example.com"
        await login(client, "ana2@example.com", "Secret123")

    async def test_update_requires_longer_whatsapp(self, client: AsyncClient) -> None:
        headers = await register_and_login(client, "ana@example.com")
        resp = await client.patch(
            "/api/v1/auth/me",
            json={"email": "ana@example.com", "whatsapp": "123456789"},
            headers=headers,
        )
        assert resp.status_code == 422
