"""Tests for purchase recording and listing."""

from decimal import Decimal

import pytest

from api.errors import NotFoundError
from api.models.upload import UploadStatus
from api.services.purchases import list_purchases, record_purchase
from tests.constants import BUYER_ID


class TestRecordPurchase:
    @pytest.mark.asyncio
    async def test_purchase_of_approved_upload(self, db, make_upload):
        upload_id = await make_upload(
            status=UploadStatus.APPROVED, file_name="lagos.csv", file_type="text/csv",
        )

        purchase, download_url = await record_purchase(
            db, buyer_id=BUYER_ID, upload_id=upload_id, price=Decimal("0.48"),
        )
        await db.commit()

        assert purchase.id
        assert purchase.upload_id == upload_id
        assert purchase.price == Decimal("0.48")
        assert purchase.metadata_snapshot == {"file_name": "lagos.csv", "file_type": "text/csv"}
        assert purchase.purchase_date is not None
        assert download_url == "/api/downloads/1760000000000-lagos.csv"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [UploadStatus.PENDING, UploadStatus.REJECTED])
    async def test_unapproved_upload_not_found(self, db, make_upload, status):
        upload_id = await make_upload(status=status)

        with pytest.raises(NotFoundError):
            await record_purchase(db, buyer_id=BUYER_ID, upload_id=upload_id, price=Decimal("1"))

    @pytest.mark.asyncio
    async def test_unknown_upload_not_found(self, db):
        with pytest.raises(NotFoundError):
            await record_purchase(db, buyer_id=BUYER_ID, upload_id="nope", price=Decimal("1"))

    @pytest.mark.asyncio
    async def test_same_dataset_can_be_bought_twice(self, db, make_upload):
        upload_id = await make_upload(status=UploadStatus.APPROVED)

        first, _ = await record_purchase(db, buyer_id=BUYER_ID, upload_id=upload_id, price=Decimal("1"))
        second, _ = await record_purchase(db, buyer_id="another-buyer", upload_id=upload_id, price=Decimal("1"))

        assert first.id != second.id


class TestListPurchases:
    @pytest.mark.asyncio
    async def test_filters_by_buyer_and_loads_upload(self, db, make_upload):
        upload_id = await make_upload(status=UploadStatus.APPROVED, file_name="speech.wav")
        await record_purchase(db, buyer_id=BUYER_ID, upload_id=upload_id, price=Decimal("2.50"))
        await record_purchase(db, buyer_id="another-buyer", upload_id=upload_id, price=Decimal("2.50"))
        await db.commit()

        purchases = await list_purchases(db, buyer_id=BUYER_ID)

        assert len(purchases) == 1
        assert purchases[0].upload.file_name == "speech.wav"
        assert len(await list_purchases(db)) == 2
