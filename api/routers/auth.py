"""Auth router.

Sign-in, sign-up and sign-out are handled by the external auth service,
which issues the bearer tokens this API verifies.

Endpoints:
  GET /api/auth/me — current principal
"""

from __future__ import annotations

from fastapi import APIRouter

from api.deps import CurrentUser
from api.schemas.auth import Principal

router = APIRouter()


@router.get("/me", response_model=Principal)
async def get_me(user: CurrentUser):
    """Return current authenticated user info."""
    return user
