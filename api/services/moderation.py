"""Moderation workflows for pending uploads.

Approval:
  mark_approved (rollback: revert to pending) → credit_wallet
Rejection:
  mark_rejected → remove_stored_file (best effort)

Each datastore step commits before the next one starts, so a rollback
always acts on committed state.
"""

from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import ConflictError, DependencyError, MarketplaceError, NotFoundError, ValidationError
from api.models.upload import UploadStatus
from api.schemas.auth import Principal
from api.services.file_storage import FileStorage
from api.services.uploads import get_upload, transition_status
from api.services.wallet import credit_wallet
from api.services.workflow import Workflow, WorkflowFailed, WorkflowStep

logger = structlog.get_logger()


def _check_pending(upload) -> None:
    if upload.status != UploadStatus.PENDING.value:
        raise ConflictError(
            f"Upload is already {upload.status}",
            details={"upload_id": upload.id, "status": upload.status},
        )


def _surface(failure: WorkflowFailed, message: str) -> MarketplaceError:
    """Turn a failed workflow into the error returned to the caller."""
    if isinstance(failure.error, (ConflictError, NotFoundError)):
        return failure.error

    details = {
        "step": failure.step,
        "error": getattr(failure.error, "details", None) or str(failure.error),
        "rolled_back": failure.rolled_back,
    }
    if failure.rollback_errors:
        details["rollback_errors"] = {
            step: getattr(e, "details", None) or str(e)
            for step, e in failure.rollback_errors.items()
        }
    return DependencyError(message, details=details)


async def approve_upload(
    db: AsyncSession,
    actor: Principal,
    *,
    upload_id: str,
    owner_id: str,
    tokens_earned: int,
) -> int:
    """Approve a pending upload and credit its owner's wallet.

    Returns the owner's new wallet balance. If the credit fails the upload
    is put back to pending and a DependencyError is raised; if that revert
    fails too, both errors are reported in the details.
    """
    upload = await get_upload(db, upload_id)
    _check_pending(upload)
    if upload.user_id != owner_id:
        raise ValidationError("user_id does not match the upload owner")
    if upload.tokens_earned != tokens_earned:
        raise ValidationError(
            "tokens_earned does not match the upload",
            details={"expected": upload.tokens_earned, "received": tokens_earned},
        )

    async def mark_approved(ctx):
        await transition_status(db, upload_id, UploadStatus.PENDING, UploadStatus.APPROVED)

    async def revert_to_pending(ctx):
        await transition_status(db, upload_id, UploadStatus.APPROVED, UploadStatus.PENDING)

    async def credit(ctx):
        return await credit_wallet(db, owner_id, tokens_earned)

    workflow = Workflow(
        name="approve_upload",
        steps=[
            WorkflowStep("mark_approved", mark_approved, rollback=revert_to_pending),
            WorkflowStep("credit_wallet", credit),
        ],
    )

    try:
        ctx = await workflow.run()
    except WorkflowFailed as failure:
        if failure.step == "credit_wallet":
            raise _surface(failure, "Failed to update wallet") from failure
        raise _surface(failure, "Failed to approve upload") from failure

    new_balance = ctx["credit_wallet"]
    logger.info(
        "upload_approved",
        upload_id=upload_id, owner_id=owner_id, tokens=tokens_earned,
        new_balance=new_balance, admin_id=actor.user_id,
    )
    return new_balance


async def reject_upload(
    db: AsyncSession,
    storage: FileStorage,
    actor: Principal,
    *,
    upload_id: str,
    storage_path: str | None = None,
) -> None:
    """Reject a pending upload and try to remove its stored file.

    Only the object recorded for this upload is removed; a ``storage_path``
    that names any other object is refused. A failed removal is logged and
    ignored: the record stays rejected.
    """
    upload = await get_upload(db, upload_id)
    _check_pending(upload)
    if storage_path and storage_path != upload.storage_path:
        raise ValidationError(
            "storage_path does not match the upload",
            details={"upload_id": upload_id, "storage_path": storage_path},
        )
    stored_object = upload.storage_path

    async def mark_rejected(ctx):
        await transition_status(db, upload_id, UploadStatus.PENDING, UploadStatus.REJECTED)

    async def remove_stored_file(ctx):
        await storage.remove([stored_object])

    workflow = Workflow(
        name="reject_upload",
        steps=[
            WorkflowStep("mark_rejected", mark_rejected),
            WorkflowStep("remove_stored_file", remove_stored_file, best_effort=True),
        ],
    )

    try:
        await workflow.run()
    except WorkflowFailed as failure:
        raise _surface(failure, "Failed to reject upload") from failure

    logger.info(
        "upload_rejected",
        upload_id=upload_id, storage_path=stored_object, admin_id=actor.user_id,
    )
