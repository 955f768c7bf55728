"""Pydantic schemas for Purchase endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, Field, field_validator

from api.schemas.upload import UploadResponse


class PurchaseCreate(BaseModel):
    buyer_id: str = Field(min_length=1)
    upload_id: str = Field(min_length=1)
    price: Decimal = Field(gt=0)


class PurchaseResponse(BaseModel):
    id: str
    buyer_id: str
    upload_id: str
    price: float
    metadata: dict = Field(validation_alias=AliasChoices("metadata_snapshot", "metadata"))
    purchase_date: datetime

    model_config = {"from_attributes": True}

    @field_validator("price", mode="before")
    @classmethod
    def _price_as_float(cls, v):
        return float(v)


class PurchaseWithUpload(PurchaseResponse):
    uploads: UploadResponse | None = Field(
        default=None, validation_alias=AliasChoices("upload", "uploads")
    )


class PurchaseCreated(BaseModel):
    success: bool = True
    purchase: PurchaseResponse
    message: str = "Purchase completed successfully"
    download_url: str


class PurchaseListResponse(BaseModel):
    purchases: list[PurchaseWithUpload]
