"""Pydantic schemas for Upload endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from api.models.upload import UploadStatus


class UploadCreate(BaseModel):
    user_id: str = Field(min_length=1)
    file_name: str = Field(min_length=1, max_length=255)
    file_type: str = Field(min_length=1, max_length=100)
    file_size: int = Field(ge=0)
    storage_path: str = Field(min_length=1)
    tokens_earned: int | None = Field(default=None, ge=0)


class UploadResponse(BaseModel):
    id: str
    user_id: str
    file_name: str
    file_type: str
    file_size: int
    size_mb: float
    storage_path: str
    status: UploadStatus
    tokens_earned: int
    created_at: datetime

    model_config = {"from_attributes": True}


class UploadCreated(BaseModel):
    success: bool = True
    upload: UploadResponse
    message: str = "Upload saved successfully. Pending admin approval."


class UploadListResponse(BaseModel):
    uploads: list[UploadResponse]
