"""Pydantic schemas for the marketplace catalogue."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ListingResponse(BaseModel):
    id: str
    user_id: str
    file_name: str
    file_type: str
    file_size: int
    size_mb: float
    category: str
    price: float
    tokens_earned: int
    created_at: datetime


class ListingListResponse(BaseModel):
    listings: list[ListingResponse]
    total: int
