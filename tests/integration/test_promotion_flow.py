"""Integration tests: verified seller buys, banks, attaches and detaches promotions."""

from httpx import AsyncClient

from tests.integration.helpers import (
    create_ad,
    grant_points,
    make_admin,
    register_and_login,
    verify_mobile,
)


async def _seller(client: AsyncClient, services, admin: dict[str, str], points: int):
    info, headers = await register_and_login(client)
    await verify_mobile(client, services, headers, "9876543210")
    if points:
        await grant_points(client, admin, info["user_id"], points)
    return info, headers


async def _plan_id(client: AsyncClient, name: str) -> int:
    resp = await client.get("/api/v1/promotion-plans")
    plans = {p["name"]: p for p in resp.json()["data"]["items"]}
    return plans[name]["id"]


class TestCatalogAndQuote:
    async def test_seeded_plans_are_public(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/promotion-plans")
        assert resp.status_code == 200
        names = [p["name"] for p in resp.json()["data"]["items"]]
        assert "Top Position - 7 days" in names
        assert "Top 10 - 3 days" in names

    async def test_quote(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/v1/promotion-quote", params={"position": "rank1", "duration_days": 7}
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["points"] == 1680

    async def test_quote_rejects_bad_input(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/v1/promotion-quote", params={"position": "gold", "duration_days": 7}
        )
        assert resp.status_code == 422


class TestPurchase:
    async def test_purchase_promotes_ad(self, client: AsyncClient, services) -> None:
        admin = await make_admin(client)
        _, headers = await _seller(client, services, admin, 2000)
        ad = await create_ad(client, headers)
        plan_id = await _plan_id(client, "Top Position - 7 days")

        resp = await client.post(
            f"/api/v1/ads/{ad['id']}/promote", json={"plan_id": plan_id}, headers=headers
        )
        assert resp.status_code == 200, resp.text
        data = resp.json()["data"]
        assert data["points"] == 320
        assert data["ad"]["is_promoted"] is True
        assert data["ad"]["promotion_position"] == "rank1"
        assert data["promotion"]["points_spent"] == 1680

        balance = await client.get("/api/v1/points/balance", headers=headers)
        assert balance.json()["data"]["points"] == 320

        txs = await client.get("/api/v1/points/transactions", headers=headers)
        items = txs.json()["data"]["items"]
        assert [t["amount"] for t in items] == [-1680, 2000]
        assert items[0]["points"] == 320

    async def test_insufficient_points(self, client: AsyncClient, services) -> None:
        admin = await make_admin(client)
        _, headers = await _seller(client, services, admin, 1000)
        ad = await create_ad(client, headers)
        plan_id = await _plan_id(client, "Top Position - 7 days")

        resp = await client.post(
            f"/api/v1/ads/{ad['id']}/promote", json={"plan_id": plan_id}, headers=headers
        )
        assert resp.status_code == 422
        body = resp.json()
        assert body["code"] == 2003
        assert "buy more points" in body["message"]

        balance = await client.get("/api/v1/points/balance", headers=headers)
        assert balance.json()["data"]["points"] == 1000

    async def test_unverified_seller_blocked(self, client: AsyncClient, services) -> None:
        admin = await make_admin(client)
        info, headers = await register_and_login(client)
        await grant_points(client, admin, info["user_id"], 5000)
        ad = await create_ad(client, headers)
        plan_id = await _plan_id(client, "Top 10 - 3 days")

        resp = await client.post(
            f"/api/v1/ads/{ad['id']}/promote", json={"plan_id": plan_id}, headers=headers
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == 3004

    async def test_promotion_lapses_with_clock(self, client: AsyncClient, services, clock) -> None:
        admin = await make_admin(client)
        _, headers = await _seller(client, services, admin, 1000)
        ad = await create_ad(client, headers)
        plan_id = await _plan_id(client, "Top 10 - 3 days")
        await client.post(
            f"/api/v1/ads/{ad['id']}/promote", json={"plan_id": plan_id}, headers=headers
        )

        clock.advance(days=3)
        resp = await client.get(f"/api/v1/ads/{ad['id']}")
        assert resp.json()["data"]["is_promoted"] is False


class TestAdHocAndAttach:
    async def test_bank_then_attach(self, client: AsyncClient, services) -> None:
        admin = await make_admin(client)
        _, headers = await _seller(client, services, admin, 1000)

        resp = await client.post(
            "/api/v1/ad-promotions",
            json={"position": "top10", "duration_days": 3, "points": 540},
            headers=headers,
        )
        assert resp.status_code == 201, resp.text
        promotion = resp.json()["data"]["promotion"]
        assert promotion["ad_id"] is None

        ad = await create_ad(client, headers)
        resp = await client.post(
            f"/api/v1/ad-promotions/{promotion['id']}/attach",
            json={"ad_id": ad["id"]},
            headers=headers,
        )
        assert resp.status_code == 200, resp.text
        assert resp.json()["data"]["ad"]["promotion_id"] == promotion["id"]

        listed = await client.get("/api/v1/ad-promotions", headers=headers)
        assert [p["ad_id"] for p in listed.json()["data"]["items"]] == [ad["id"]]

    async def test_lapsed_banked_promotion_cannot_attach(
        self, client: AsyncClient, services, clock
    ) -> None:
        admin = await make_admin(client)
        _, headers = await _seller(client, services, admin, 1000)
        resp = await client.post(
            "/api/v1/ad-promotions",
            json={"position": "top10", "duration_days": 1, "points": 200},
            headers=headers,
        )
        promotion = resp.json()["data"]["promotion"]
        ad = await create_ad(client, headers)

        clock.advance(days=2)
        resp = await client.post(
            f"/api/v1/ad-promotions/{promotion['id']}/attach",
            json={"ad_id": ad["id"]},
            headers=headers,
        )
        assert resp.status_code == 409
        assert resp.json()["code"] == 3009

        resp = await client.get(f"/api/v1/ads/{ad['id']}")
        assert resp.json()["data"]["promotion_id"] is None

    async def test_underpriced_ad_hoc(self, client: AsyncClient, services) -> None:
        admin = await make_admin(client)
        _, headers = await _seller(client, services, admin, 1000)
        resp = await client.post(
            "/api/v1/ad-promotions",
            json={"position": "rank1", "duration_days": 1, "points": 299},
            headers=headers,
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 3008

    async def test_attach_other_users_promotion(self, client: AsyncClient, services) -> None:
        admin = await make_admin(client)
        _, owner = await _seller(client, services, admin, 1000)
        resp = await client.post(
            "/api/v1/ad-promotions",
            json={"position": "top10", "duration_days": 3, "points": 540},
            headers=owner,
        )
        promotion_id = resp.json()["data"]["promotion"]["id"]

        _, intruder = await register_and_login(client)
        ad = await create_ad(client, intruder)
        resp = await client.post(
            f"/api/v1/ad-promotions/{promotion_id}/attach",
            json={"ad_id": ad["id"]},
            headers=intruder,
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == 3003

    async def test_detach(self, client: AsyncClient, services) -> None:
        admin = await make_admin(client)
        _, headers = await _seller(client, services, admin, 1000)
        ad = await create_ad(client, headers)
        plan_id = await _plan_id(client, "Top 10 - 3 days")
        await client.post(
            f"/api/v1/ads/{ad['id']}/promote", json={"plan_id": plan_id}, headers=headers
        )

        resp = await client.delete(f"/api/v1/ads/{ad['id']}/promotion", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["is_promoted"] is False
        assert resp.json()["data"]["promotion_id"] is None
