"""Admin router — moderation of pending uploads.

Endpoints:
  POST /api/admin/approve — approve upload and credit the owner's wallet
  POST /api/admin/reject  — reject upload and remove its stored file
"""

from __future__ import annotations

from fastapi import APIRouter

from api.deps import DB, AdminUser, Storage
from api.schemas.admin import ApproveRequest, ApproveResponse, RejectRequest, RejectResponse
from api.services.moderation import approve_upload, reject_upload

router = APIRouter()


@router.post("/admin/approve", response_model=ApproveResponse)
async def approve(body: ApproveRequest, db: DB, admin: AdminUser):
    new_balance = await approve_upload(
        db,
        admin,
        upload_id=body.upload_id,
        owner_id=body.user_id,
        tokens_earned=body.tokens_earned,
    )
    return ApproveResponse(new_balance=new_balance)


@router.post("/admin/reject", response_model=RejectResponse)
async def reject(body: RejectRequest, db: DB, admin: AdminUser, storage: Storage):
    """Reject an upload. Storage cleanup failures are not reported."""
    await reject_upload(
        db,
        storage,
        admin,
        upload_id=body.upload_id,
        storage_path=body.storage_path,
    )
    return RejectResponse()
