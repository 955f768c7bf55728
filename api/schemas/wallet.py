"""Pydantic schemas for Wallet endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class WalletResponse(BaseModel):
    user_id: str
    balance: int
