"""Purchase recording.

A purchase needs the upload to be approved at the time of purchase. The
buyer gets a snapshot of the upload's name and type; later changes to the
upload do not touch existing purchases. Datasets are not exclusive, so any
number of buyers may purchase the same upload.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from api.errors import DependencyError, NotFoundError
from api.models.purchase import Purchase
from api.models.upload import UploadStatus
from api.services.uploads import get_upload

logger = structlog.get_logger()

DOWNLOAD_URL_PREFIX = "/api/downloads/"


def download_url_for(storage_path: str) -> str:
    # Placeholder link; no signed URLs are issued yet
    return f"{DOWNLOAD_URL_PREFIX}{storage_path}"


async def record_purchase(
    db: AsyncSession,
    *,
    buyer_id: str,
    upload_id: str,
    price: Decimal,
) -> tuple[Purchase, str]:
    """Create a purchase of an approved upload.

    Returns the purchase and its download reference.
    """
    try:
        upload = await get_upload(db, upload_id, status=UploadStatus.APPROVED)
    except NotFoundError:
        raise NotFoundError("Dataset not found or not approved") from None

    purchase = Purchase(
        buyer_id=buyer_id,
        upload_id=upload.id,
        price=price,
        metadata_snapshot={"file_name": upload.file_name, "file_type": upload.file_type},
    )
    try:
        db.add(purchase)
        await db.flush()
        await db.refresh(purchase)
    except SQLAlchemyError as e:
        raise DependencyError("Failed to create purchase", details=str(e)) from e

    logger.info("purchase_recorded", purchase_id=purchase.id, buyer_id=buyer_id, upload_id=upload_id)
    return purchase, download_url_for(upload.storage_path)


async def list_purchases(db: AsyncSession, buyer_id: str | None = None) -> list[Purchase]:
    """List purchases newest first, each with its upload loaded."""
    query = (
        select(Purchase)
        .options(selectinload(Purchase.upload))
        .order_by(Purchase.purchase_date.desc())
        .execution_options(populate_existing=True)
    )
    if buyer_id:
        query = query.where(Purchase.buyer_id == buyer_id)

    try:
        result = await db.execute(query)
    except SQLAlchemyError as e:
        raise DependencyError("Failed to fetch purchases", details=str(e)) from e
    return list(result.scalars().all())
