"""Error taxonomy shared by services and routers.

Services raise these; ``api.main`` turns them into JSON responses of the
form ``{"error": message, "details": details}`` with the class status code.
"""

from __future__ import annotations

from typing import Any

from fastapi import status


class MarketplaceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {"error": self.message, "details": self.details}


class ValidationError(MarketplaceError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(MarketplaceError):
    """Referenced record is absent or not in the required state."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(MarketplaceError):
    """Record exists but a decision was already recorded for it."""

    status_code = status.HTTP_409_CONFLICT


class DependencyError(MarketplaceError):
    """A datastore, storage or auth-service call failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
