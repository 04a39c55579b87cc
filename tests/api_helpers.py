"""HTTP helpers shared by the integration tests."""

from datetime import datetime

from httpx import AsyncClient

from src.bl_common.enums import Collection
from src.bl_common.store import InMemoryStore

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Admin1234"


async def login(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    resp = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['data']['access_token']}"}


async def register_and_login(
    client: AsyncClient,
    email: str,
    password: str = "Secret123",
    whatsapp: str = "(11) 98765-4321",
) -> dict[str, str]:
    """Register a user and return its Authorization header."""
    resp = await client.post(
        "/api/v1/auth/register",
        json={
            "name": email.split("@")[0],
            "email": email,
            "password": password,
            "whatsapp": whatsapp,
        },
    )
    assert resp.status_code == 201, resp.text
    return await login(client, email, password)


async def fund(
    client: AsyncClient, user: dict[str, str], admin: dict[str, str], amount_cents: int
) -> None:
    """Deposit request + admin approval."""
    resp = await client.post(
        "/api/v1/account/deposit",
        json={"amount_cents": amount_cents, "receipt_ref": "receipt.png"},
        headers=user,
    )
    assert resp.status_code == 201, resp.text
    tx_id = resp.json()["data"]["id"]
    resp = await client.post(f"/api/v1/admin/transactions/{tx_id}/approve", headers=admin)
    assert resp.status_code == 200, resp.text


async def move_pool_times(
    store: InMemoryStore, pool_id: str, deadline: datetime, event: datetime
) -> None:
    """Rewrite a stored pool's schedule to simulate the clock moving on."""
    records = await store.get(Collection.POOLS.value)
    for record in records:
        if record["id"] == pool_id:
            record["dateTime"] = deadline.isoformat()
            record["eventDateTime"] = event.isoformat()
    await store.set(Collection.POOLS.value, records)
