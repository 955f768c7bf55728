"""Wallets router.

Endpoints:
  GET /api/wallets/me — current user's token balance
"""

from __future__ import annotations

from fastapi import APIRouter

from api.deps import DB, CurrentUser
from api.schemas.wallet import WalletResponse
from api.services.wallet import get_balance

router = APIRouter()


@router.get("/wallets/me", response_model=WalletResponse)
async def my_wallet(db: DB, user: CurrentUser):
    return WalletResponse(user_id=user.user_id, balance=await get_balance(db, user.user_id))
