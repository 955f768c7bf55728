"""API test fixtures: httpx AsyncClient over the ASGI app.

The database dependency is overridden with a file-backed SQLite session
and object storage with a mock, so every endpoint runs end to end
without PostgreSQL or a storage service.
"""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt

from api.config import settings
from api.deps import ALGORITHM, get_db
from api.main import app
from api.models.admin import Admin
from api.services.file_storage import get_file_storage
from tests.constants import ADMIN_ID, BUYER_ID, OWNER_ID


def _token(user_id: str) -> dict:
    token = jwt.encode(
        {"sub": user_id, "email": f"{user_id[:8]}@example.com",
         "exp": datetime(2030, 1, 1, tzinfo=timezone.utc)},
        settings.APP_SECRET_KEY, algorithm=ALGORITHM,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def storage():
    mock = MagicMock()
    mock.upload = AsyncMock(side_effect=lambda path, data, content_type: path)
    mock.remove = AsyncMock()
    return mock


@pytest_asyncio.fixture
async def client(session_maker, storage):
    async with session_maker() as session:
        session.add(Admin(user_id=ADMIN_ID))
        await session.commit()

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: storage
    async with AsyncClient(transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test") as client:
        yield client

    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_file_storage, None)


@pytest.fixture
def owner_headers():
    return _token(OWNER_ID)


@pytest.fixture
def buyer_headers():
    return _token(BUYER_ID)


@pytest.fixture
def admin_headers():
    return _token(ADMIN_ID)
