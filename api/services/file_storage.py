"""Object storage for uploaded dataset files.

Local filesystem for development, Supabase Storage (REST) for production.
Both backends address objects by a bucket-relative storage path.
"""

from __future__ import annotations

import os
import time
from pathlib import Path

import aiofiles
import httpx
import structlog

from api.config import settings

logger = structlog.get_logger()


class StorageError(Exception):
    """Object storage call failed."""


def build_object_name(file_name: str) -> str:
    """Storage path for a new object: ``{epoch_ms}-{basename}``."""
    return f"{int(time.time() * 1000)}-{Path(file_name).name}"


class LocalFileStorage:
    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _resolve(self, storage_path: str) -> Path:
        path = (self.base_path / storage_path).resolve()
        if self.base_path.resolve() not in path.parents:
            raise StorageError(f"Storage path escapes bucket: {storage_path}")
        return path

    async def upload(self, storage_path: str, data: bytes, content_type: str) -> str:
        path = self._resolve(storage_path)
        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(data)
        except OSError as e:
            raise StorageError(str(e)) from e
        return storage_path

    async def remove(self, storage_paths: list[str]) -> None:
        for storage_path in storage_paths:
            path = self._resolve(storage_path)
            try:
                if path.exists():
                    os.remove(path)
            except OSError as e:
                raise StorageError(str(e)) from e


class SupabaseStorage:
    """Thin client for the Supabase Storage object API."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        bucket: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self.timeout = timeout
        self._transport = transport
        self._headers = {
            "Authorization": f"Bearer {service_key}",
            "apikey": service_key,
        }

    async def upload(self, storage_path: str, data: bytes, content_type: str) -> str:
        url = f"{self.base_url}/storage/v1/object/{self.bucket}/{storage_path}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    url,
                    content=data,
                    headers={**self._headers, "Content-Type": content_type, "x-upsert": "false"},
                )
            except httpx.HTTPError as e:
                raise StorageError(str(e)) from e

        if response.status_code >= 400:
            raise StorageError(f"Upload failed ({response.status_code}): {response.text}")
        return storage_path

    async def remove(self, storage_paths: list[str]) -> None:
        url = f"{self.base_url}/storage/v1/object/{self.bucket}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.request(
                    "DELETE", url, json={"prefixes": storage_paths}, headers=self._headers,
                )
            except httpx.HTTPError as e:
                raise StorageError(str(e)) from e

        if response.status_code >= 400:
            raise StorageError(f"Remove failed ({response.status_code}): {response.text}")


FileStorage = LocalFileStorage | SupabaseStorage

_storage: FileStorage | None = None


def get_file_storage() -> FileStorage:
    """Return the configured storage backend (created once per process)."""
    global _storage
    if _storage is None:
        if settings.FILE_STORAGE_TYPE == "local":
            _storage = LocalFileStorage(settings.FILE_STORAGE_PATH)
        elif settings.FILE_STORAGE_TYPE == "supabase":
            _storage = SupabaseStorage(
                settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY, settings.STORAGE_BUCKET
            )
        else:
            raise ValueError(f"Unknown storage type: {settings.FILE_STORAGE_TYPE}")
        logger.info("file_storage_ready", backend=settings.FILE_STORAGE_TYPE)
    return _storage
