"""Upload record lifecycle.

  create → pending ─┬─→ approved   (admin approval, wallet credited)
                    └─→ rejected   (admin rejection)
  approved → pending only as the approval rollback.

Transitions are conditional updates (``WHERE status = :expected``) so two
concurrent decisions on the same record cannot both succeed.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import ConflictError, DependencyError, NotFoundError, ValidationError
from api.models.upload import Upload, UploadStatus
from api.services.file_storage import FileStorage, StorageError, build_object_name
from api.services.tokens import calculate_tokens

logger = structlog.get_logger()

ALLOWED_MEDIA_TYPES = {
    "text/plain": ".txt",
    "application/json": ".json",
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "audio/mpeg": ".mp3",
    "audio/wav": ".wav",
    "video/mp4": ".mp4",
    "text/csv": ".csv",
}

ALLOWED_TRANSITIONS = {
    (UploadStatus.PENDING, UploadStatus.APPROVED),
    (UploadStatus.PENDING, UploadStatus.REJECTED),
    (UploadStatus.APPROVED, UploadStatus.PENDING),
}


async def create_upload(
    db: AsyncSession,
    *,
    user_id: str,
    file_name: str,
    file_type: str,
    file_size: int,
    storage_path: str,
    tokens_earned: int | None = None,
) -> Upload:
    """Insert a pending upload record for a file already held by storage.

    The reward is always computed here; a client-supplied ``tokens_earned``
    is only compared against it.
    """
    if file_size < 0:
        raise ValidationError("file_size must be non-negative")

    tokens = calculate_tokens(file_size, file_type)
    if tokens_earned is not None and tokens_earned != tokens:
        logger.warning(
            "upload_tokens_mismatch",
            user_id=user_id, claimed=tokens_earned, computed=tokens,
        )

    upload = Upload(
        user_id=user_id,
        file_name=file_name,
        file_type=file_type,
        file_size=file_size,
        storage_path=storage_path,
        status=UploadStatus.PENDING.value,
        tokens_earned=tokens,
    )
    try:
        db.add(upload)
        await db.flush()
        await db.refresh(upload)
    except SQLAlchemyError as e:
        raise DependencyError("Failed to save upload", details=str(e)) from e

    logger.info(
        "upload_created",
        upload_id=upload.id, user_id=user_id, file_size=file_size, tokens=tokens,
    )
    return upload


async def store_and_create(
    db: AsyncSession,
    storage: FileStorage,
    *,
    user_id: str,
    file_name: str,
    file_type: str,
    data: bytes,
) -> Upload:
    """Write raw bytes to object storage, then record the upload.

    If the record cannot be saved the stored object is removed again.
    """
    if file_type not in ALLOWED_MEDIA_TYPES:
        raise ValidationError(f"File type {file_type} is not supported.")
    if not Path(file_name).name:
        raise ValidationError("file_name is required")

    object_name = build_object_name(file_name)
    try:
        storage_path = await storage.upload(object_name, data, file_type)
    except StorageError as e:
        raise DependencyError("Failed to store file", details=str(e)) from e

    try:
        return await create_upload(
            db,
            user_id=user_id,
            file_name=file_name,
            file_type=file_type,
            file_size=len(data),
            storage_path=storage_path,
        )
    except DependencyError:
        try:
            await storage.remove([storage_path])
        except StorageError as cleanup_error:
            logger.warning("orphaned_object", storage_path=storage_path, error=str(cleanup_error))
        raise


async def list_uploads(
    db: AsyncSession,
    user_id: str | None = None,
    status: UploadStatus | None = None,
) -> list[Upload]:
    """List uploads newest first, optionally filtered by owner and status."""
    query = select(Upload).order_by(Upload.created_at.desc())
    if user_id:
        query = query.where(Upload.user_id == user_id)
    if status:
        query = query.where(Upload.status == status.value)

    try:
        result = await db.execute(query)
    except SQLAlchemyError as e:
        raise DependencyError("Failed to fetch uploads", details=str(e)) from e
    return list(result.scalars().all())


async def get_upload(
    db: AsyncSession,
    upload_id: str,
    status: UploadStatus | None = None,
) -> Upload:
    query = select(Upload).where(Upload.id == upload_id).execution_options(populate_existing=True)
    if status:
        query = query.where(Upload.status == status.value)

    try:
        upload = (await db.execute(query)).scalar_one_or_none()
    except SQLAlchemyError as e:
        raise DependencyError("Failed to fetch upload", details=str(e)) from e

    if upload is None:
        raise NotFoundError("Upload not found")
    return upload


async def transition_status(
    db: AsyncSession,
    upload_id: str,
    from_status: UploadStatus,
    to_status: UploadStatus,
) -> None:
    """Move a record from ``from_status`` to ``to_status`` and commit.

    Raises NotFoundError if the record does not exist and ConflictError if
    it is no longer in ``from_status``.
    """
    if (from_status, to_status) not in ALLOWED_TRANSITIONS:
        raise ValueError(f"Illegal transition {from_status.value} -> {to_status.value}")

    try:
        result = await db.execute(
            update(Upload)
            .where(Upload.id == upload_id, Upload.status == from_status.value)
            .values(status=to_status.value)
            .returning(Upload.id)
            .execution_options(synchronize_session=False)
        )
        changed = result.scalar_one_or_none()
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise DependencyError(
            f"Failed to mark upload {to_status.value}", details=str(e)
        ) from e

    if changed is None:
        current = await get_upload(db, upload_id)
        raise ConflictError(
            f"Upload is already {current.status}",
            details={"upload_id": upload_id, "status": current.status},
        )

    logger.info(
        "upload_status_changed",
        upload_id=upload_id, from_status=from_status.value, to_status=to_status.value,
    )
