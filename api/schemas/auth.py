"""Request-scoped caller identity."""

from __future__ import annotations

from pydantic import BaseModel


class Principal(BaseModel):
    """Authenticated caller, derived from the bearer token for one request."""

    user_id: str
    email: str | None = None
    is_admin: bool = False
