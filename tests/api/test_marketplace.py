"""Tests for Marketplace API endpoints."""

import pytest

from api.models.upload import UploadStatus


class TestMarketplace:
    @pytest.mark.asyncio
    async def test_only_approved_listed(self, client, make_upload):
        approved = await make_upload(UploadStatus.APPROVED, file_name="songs.mp3", file_type="audio/mpeg")
        await make_upload(UploadStatus.PENDING)
        await make_upload(UploadStatus.REJECTED)

        r = await client.get("/api/marketplace")
        assert r.status_code == 200
        data = r.json()
        assert data["total"] == 1
        assert data["listings"][0]["id"] == approved
        assert data["listings"][0]["category"] == "audio"

    @pytest.mark.asyncio
    async def test_filters(self, client, make_upload):
        await make_upload(UploadStatus.APPROVED, file_name="cats.png", file_type="image/png")
        await make_upload(UploadStatus.APPROVED, file_name="reviews.csv", file_type="text/csv")

        r = await client.get("/api/marketplace", params={"category": "image"})
        assert [item["file_name"] for item in r.json()["listings"]] == ["cats.png"]

        r = await client.get("/api/marketplace", params={"q": "REVIEW"})
        assert [item["file_name"] for item in r.json()["listings"]] == ["reviews.csv"]

        r = await client.get("/api/marketplace", params={"category": "all"})
        assert r.json()["total"] == 2

    @pytest.mark.asyncio
    async def test_unknown_category(self, client):
        r = await client.get("/api/marketplace", params={"category": "3d"})
        assert r.status_code == 400

    @pytest.mark.asyncio
    async def test_get_listing(self, client, make_upload):
        approved = await make_upload(UploadStatus.APPROVED, file_size=1_048_576)
        pending = await make_upload(UploadStatus.PENDING)

        r = await client.get(f"/api/marketplace/{approved}")
        assert r.status_code == 200
        assert r.json()["price"] == 10.0

        r = await client.get(f"/api/marketplace/{pending}")
        assert r.status_code == 404
