"""Shared test fixtures for all test modules."""

from __future__ import annotations

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from api.models.base import Base
from api.models.upload import Upload, UploadStatus
from api.schemas.auth import Principal
from api.services.tokens import calculate_tokens
from tests.constants import ADMIN_ID, OWNER_ID


@pytest_asyncio.fixture
async def session_maker(tmp_path):
    """File-backed SQLite database with the full schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'marketplace.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(user_id=ADMIN_ID, email="admin@example.com", is_admin=True)


@pytest.fixture
def make_upload(session_maker):
    """Insert an upload directly and return its id."""

    async def _make(
        status: UploadStatus = UploadStatus.PENDING,
        file_size: int = 50_000,
        file_type: str = "text/plain",
        file_name: str = "sample.txt",
        user_id: str = OWNER_ID,
    ) -> str:
        async with session_maker() as session:
            upload = Upload(
                user_id=user_id,
                file_name=file_name,
                file_type=file_type,
                file_size=file_size,
                storage_path=f"1760000000000-{file_name}",
                status=status.value,
                tokens_earned=calculate_tokens(file_size, file_type),
            )
            session.add(upload)
            await session.commit()
            return upload.id

    return _make
