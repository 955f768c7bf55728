"""Marketplace router — public catalogue of approved datasets.

Endpoints:
  GET /api/marketplace       — list listings (search + category filter)
  GET /api/marketplace/{id}  — single listing
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from api.deps import DB
from api.schemas.marketplace import ListingListResponse, ListingResponse
from api.services.marketplace import get_listing, list_listings

router = APIRouter()


@router.get("/marketplace", response_model=ListingListResponse)
async def list_marketplace(
    db: DB,
    q: str | None = Query(None, max_length=200),
    category: str | None = None,
):
    listings = await list_listings(db, q=q, category=category)
    return ListingListResponse(listings=listings, total=len(listings))


@router.get("/marketplace/{upload_id}", response_model=ListingResponse)
async def get_marketplace_listing(upload_id: str, db: DB):
    return await get_listing(db, upload_id)
