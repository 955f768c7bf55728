"""Pydantic schemas for admin moderation endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ApproveRequest(BaseModel):
    upload_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    tokens_earned: int = Field(ge=0)


class ApproveResponse(BaseModel):
    success: bool = True
    message: str = "Upload approved and tokens added to wallet"
    new_balance: int


class RejectRequest(BaseModel):
    upload_id: str = Field(min_length=1)
    storage_path: str | None = None


class RejectResponse(BaseModel):
    success: bool = True
    message: str = "Upload rejected successfully"
