"""Purchases router.

Endpoints:
  POST /api/purchases — buy an approved dataset
  GET  /api/purchases — list purchases with their uploads
"""

from __future__ import annotations

from fastapi import APIRouter

from api.deps import DB, CurrentUser, require_self_or_admin
from api.schemas.purchase import (
    PurchaseCreate,
    PurchaseCreated,
    PurchaseListResponse,
    PurchaseResponse,
    PurchaseWithUpload,
)
from api.services.purchases import list_purchases, record_purchase

router = APIRouter()


@router.post("/purchases", response_model=PurchaseCreated)
async def create_purchase(body: PurchaseCreate, db: DB, user: CurrentUser):
    """Record a purchase. No payment is taken; the download link is a placeholder."""
    require_self_or_admin(user, body.buyer_id)
    purchase, download_url = await record_purchase(
        db, buyer_id=body.buyer_id, upload_id=body.upload_id, price=body.price,
    )
    return PurchaseCreated(
        purchase=PurchaseResponse.model_validate(purchase),
        download_url=download_url,
    )


@router.get("/purchases", response_model=PurchaseListResponse)
async def get_purchases(db: DB, buyer_id: str | None = None):
    purchases = await list_purchases(db, buyer_id=buyer_id)
    return PurchaseListResponse(purchases=[PurchaseWithUpload.model_validate(p) for p in purchases])
