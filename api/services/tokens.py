"""Token reward calculation for accepted uploads.

Every upload earns a base reward; files larger than 0.1 MB (binary
megabytes, so 104,857 bytes is still under the mark) earn a bonus.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from api.models.upload import BYTES_PER_MB

BASE_TOKENS = 5
LARGE_FILE_BONUS = 2
LARGE_FILE_THRESHOLD_MB = 0.1

PRICE_PER_MB = Decimal("10")


def calculate_tokens(size_bytes: int, declared_media_type: str = "") -> int:
    """Return the token reward for a file of ``size_bytes``.

    ``declared_media_type`` does not affect the reward yet; it is part of
    the signature so type-based tiers can be added without touching callers.
    """
    tokens = BASE_TOKENS
    if size_bytes / BYTES_PER_MB > LARGE_FILE_THRESHOLD_MB:
        tokens += LARGE_FILE_BONUS
    return tokens


def calculate_price(size_bytes: int) -> Decimal:
    """Listing price: size in MB times ten, rounded to cents."""
    size_mb = Decimal(size_bytes) / Decimal(BYTES_PER_MB)
    return (size_mb * PRICE_PER_MB).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
