"""Uploads router — contributor submissions.

Endpoints:
  POST /api/uploads       — record a file already placed in object storage
  POST /api/uploads/file  — store a file and record it in one call
  GET  /api/uploads       — list uploads (optionally by owner / status)
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, File, UploadFile

from api.config import settings
from api.deps import DB, CurrentUser, Storage, require_self_or_admin
from api.errors import ValidationError
from api.models.upload import UploadStatus
from api.schemas.upload import UploadCreate, UploadCreated, UploadListResponse, UploadResponse
from api.services import uploads as upload_service

logger = structlog.get_logger()

router = APIRouter()


READ_CHUNK_BYTES = 1024 * 1024


async def _read_limited(file: UploadFile, limit: int) -> bytes:
    """Read an uploaded file, stopping as soon as it exceeds ``limit`` bytes."""
    too_large = ValidationError("File is too large", details={"max_bytes": limit})
    if file.size is not None and file.size > limit:
        raise too_large

    chunks = []
    total = 0
    while chunk := await file.read(READ_CHUNK_BYTES):
        total += len(chunk)
        if total > limit:
            raise too_large
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/uploads", response_model=UploadCreated)
async def create_upload(body: UploadCreate, db: DB, user: CurrentUser):
    """Save metadata for a file the client already uploaded to storage.

    The record starts pending; tokens are computed from the file size.
    """
    require_self_or_admin(user, body.user_id)
    upload = await upload_service.create_upload(
        db,
        user_id=body.user_id,
        file_name=body.file_name,
        file_type=body.file_type,
        file_size=body.file_size,
        storage_path=body.storage_path,
        tokens_earned=body.tokens_earned,
    )
    return UploadCreated(upload=UploadResponse.model_validate(upload))


@router.post("/uploads/file", response_model=UploadCreated)
async def upload_file(db: DB, user: CurrentUser, storage: Storage, file: UploadFile = File(...)):
    """Store an uploaded file and create its pending record."""
    data = await _read_limited(file, settings.MAX_UPLOAD_BYTES)
    upload = await upload_service.store_and_create(
        db,
        storage,
        user_id=user.user_id,
        file_name=file.filename or "",
        file_type=file.content_type or "",
        data=data,
    )
    return UploadCreated(upload=UploadResponse.model_validate(upload))


@router.get("/uploads", response_model=UploadListResponse)
async def list_uploads(
    db: DB,
    user_id: str | None = None,
    status: UploadStatus | None = None,
):
    """List uploads newest first."""
    uploads = await upload_service.list_uploads(db, user_id=user_id, status=status)
    return UploadListResponse(uploads=[UploadResponse.model_validate(u) for u in uploads])
