"""FastAPI dependency injection providers.

Usage in routers:
    async def endpoint(db: DB, user: CurrentUser):
        ...
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.config import settings
from api.db.session import async_session_factory
from api.models.admin import Admin
from api.schemas.auth import Principal
from api.services.file_storage import FileStorage, get_file_storage

# --- Database ---

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


DB = Annotated[AsyncSession, Depends(get_db)]


# --- Auth ---

security = HTTPBearer(auto_error=False)

ALGORITHM = "HS256"


def _decode_token(token: str) -> dict:
    """Decode and validate a JWT issued by the auth service."""
    options = {"verify_aud": bool(settings.JWT_AUDIENCE)}
    try:
        return jwt.decode(
            token,
            settings.APP_SECRET_KEY,
            algorithms=[ALGORITHM],
            audience=settings.JWT_AUDIENCE or None,
            options=options,
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


async def get_current_user(
    db: DB,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Principal:
    """Build the request principal from the bearer token.

    Admin status comes from the ``admins`` table, not from token claims.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = _decode_token(credentials.credentials)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has no subject",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = await db.execute(select(Admin.user_id).where(Admin.user_id == user_id))
    return Principal(
        user_id=user_id,
        email=payload.get("email"),
        is_admin=result.scalar_one_or_none() is not None,
    )


CurrentUser = Annotated[Principal, Depends(get_current_user)]


async def get_admin_user(user: CurrentUser) -> Principal:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


AdminUser = Annotated[Principal, Depends(get_admin_user)]


def require_self_or_admin(user: Principal, user_id: str) -> None:
    """Callers may only act for themselves unless they are an admin."""
    if user.user_id != user_id and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot act on behalf of another user",
        )


# --- Storage ---

Storage = Annotated[FileStorage, Depends(get_file_storage)]
