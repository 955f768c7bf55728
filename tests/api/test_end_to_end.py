"""Contributor upload → admin approval → wallet → purchase, through the HTTP API."""

import pytest

from tests.constants import BUYER_ID, OWNER_ID


@pytest.mark.asyncio
async def test_upload_approve_purchase_flow(client, owner_headers, admin_headers, buyer_headers):
    r = await client.post(
        "/api/uploads",
        json={
            "user_id": OWNER_ID,
            "file_name": "notes.txt",
            "file_type": "text/plain",
            "file_size": 50_000,
            "storage_path": "1760000000000-notes.txt",
        },
        headers=owner_headers,
    )
    assert r.status_code == 200
    upload = r.json()["upload"]
    assert upload["status"] == "pending"
    assert upload["tokens_earned"] == 5

    r = await client.get("/api/marketplace")
    assert r.json()["total"] == 0

    r = await client.post(
        "/api/admin/approve",
        json={"upload_id": upload["id"], "user_id": OWNER_ID, "tokens_earned": 5},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["new_balance"] == 5

    r = await client.get("/api/wallets/me", headers=owner_headers)
    assert r.json()["balance"] == 5

    r = await client.get("/api/marketplace")
    listing = r.json()["listings"][0]
    assert listing["id"] == upload["id"]
    assert listing["price"] == 0.48

    r = await client.post(
        "/api/purchases",
        json={"buyer_id": BUYER_ID, "upload_id": upload["id"], "price": listing["price"]},
        headers=buyer_headers,
    )
    assert r.status_code == 200
    assert r.json()["purchase"]["metadata"]["file_name"] == "notes.txt"
    assert r.json()["download_url"].endswith("1760000000000-notes.txt")

    r = await client.get("/api/purchases", params={"buyer_id": BUYER_ID})
    assert r.json()["purchases"][0]["uploads"]["status"] == "approved"
