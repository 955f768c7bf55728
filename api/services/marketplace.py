"""Marketplace catalogue: approved uploads with their listing price."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import DependencyError, NotFoundError, ValidationError
from api.models.upload import Upload, UploadStatus
from api.schemas.marketplace import ListingResponse
from api.services.tokens import calculate_price
from api.services.uploads import get_upload

# Category → substrings of the declared media type
CATEGORIES: dict[str, tuple[str, ...]] = {
    "image": ("image",),
    "audio": ("audio",),
    "video": ("video",),
    "text": ("text", "json", "csv"),
}


def media_category(file_type: str) -> str:
    for category, markers in CATEGORIES.items():
        if any(m in file_type for m in markers):
            return category
    return "other"


def to_listing(upload: Upload) -> ListingResponse:
    return ListingResponse(
        id=upload.id,
        user_id=upload.user_id,
        file_name=upload.file_name,
        file_type=upload.file_type,
        file_size=upload.file_size,
        size_mb=upload.size_mb,
        category=media_category(upload.file_type),
        price=float(calculate_price(upload.file_size)),
        tokens_earned=upload.tokens_earned,
        created_at=upload.created_at,
    )


async def list_listings(
    db: AsyncSession,
    q: str | None = None,
    category: str | None = None,
) -> list[ListingResponse]:
    """Approved uploads newest first, filtered by name and media category."""
    query = (
        select(Upload)
        .where(Upload.status == UploadStatus.APPROVED.value)
        .order_by(Upload.created_at.desc())
    )
    if q:
        query = query.where(Upload.file_name.icontains(q, autoescape=True))
    if category and category != "all":
        markers = CATEGORIES.get(category)
        if markers is None:
            raise ValidationError(
                f"Unknown category {category}", details={"allowed": sorted(CATEGORIES)}
            )
        query = query.where(or_(*(Upload.file_type.contains(m) for m in markers)))

    try:
        result = await db.execute(query)
    except SQLAlchemyError as e:
        raise DependencyError("Failed to fetch listings", details=str(e)) from e
    return [to_listing(u) for u in result.scalars().all()]


async def get_listing(db: AsyncSession, upload_id: str) -> ListingResponse:
    try:
        upload = await get_upload(db, upload_id, status=UploadStatus.APPROVED)
    except NotFoundError:
        raise NotFoundError("Dataset not found or not approved") from None
    return to_listing(upload)
