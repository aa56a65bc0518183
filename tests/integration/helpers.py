"""HTTP helpers for integration tests."""

import uuid

from httpx import AsyncClient

PASSWORD = "TestPass1"


def unique_user() -> dict[str, str]:
    """Generate unique credentials to avoid collisions between users in one test."""
    uid = uuid.uuid4().hex[:8]
    return {
        "username": f"testuser_{uid}",
        "email": f"test_{uid}@example.com",
        "password": PASSWORD,
    }


async def register_and_login(client: AsyncClient, **extra: str) -> tuple[dict, dict[str, str]]:
    """Register a fresh user and return (user_info, auth_headers)."""
    creds = unique_user() | extra
    resp = await client.post("/api/v1/auth/register", json=creds)
    assert resp.status_code == 201, resp.text
    resp = await client.post(
        "/api/v1/auth/login",
        json={"username": creds["username"], "password": creds["password"]},
    )
    data = resp.json()["data"]
    return data["user"], {"Authorization": f"Bearer {data['access_token']}"}


async def make_admin(client: AsyncClient) -> dict[str, str]:
    _, headers = await register_and_login(client)
    resp = await client.post("/api/v1/admin/bootstrap", headers=headers)
    assert resp.status_code == 200, resp.text
    return headers


async def verify_mobile(client: AsyncClient, services, headers: dict[str, str], number: str) -> dict:
    resp = await client.post(
        "/api/v1/verification/send-otp", json={"mobile_number": number}, headers=headers
    )
    assert resp.status_code == 200, resp.text
    code = services.mobile_verification.engine.pending(number).code
    resp = await client.post(
        "/api/v1/verification/verify-otp",
        json={"mobile_number": number, "otp": code},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


async def create_ad(client: AsyncClient, headers: dict[str, str], **fields: str) -> dict:
    body = {"title": "Mountain bike", "location": "Pune"} | fields
    resp = await client.post("/api/v1/ads", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def grant_points(
    client: AsyncClient, admin_headers: dict[str, str], user_id: str, points: int
) -> dict:
    resp = await client.post(
        f"/api/v1/admin/users/{user_id}/points",
        json={"points": points, "description": "Test top-up"},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]
