"""Seed script: populates the database with sample data for development.

Usage: python scripts/seed.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session

from api.config import settings
from api.models.admin import Admin
from api.models.upload import Upload, UploadStatus
from api.models.wallet import Wallet
from api.services.tokens import calculate_tokens

sync_url = settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql+psycopg2://")
engine = create_engine(sync_url)

ADMIN_ID = "00000000-0000-0000-0000-000000000001"
CONTRIBUTOR_ID = "00000000-0000-0000-0000-000000000003"

SAMPLE_UPLOADS = [
    ("swahili_news_headlines.csv", "text/csv", 482_113, UploadStatus.APPROVED),
    ("yoruba_speech_sample.wav", "audio/wav", 2_904_771, UploadStatus.APPROVED),
    ("market_prices_lagos.json", "application/json", 50_000, UploadStatus.PENDING),
    ("street_signs_nairobi.png", "image/png", 96_310, UploadStatus.PENDING),
]


def seed():
    with Session(engine) as db:
        # Check if already seeded
        existing = db.execute(text("SELECT count(*) FROM uploads")).scalar()
        if existing > 0:
            print(f"Database already has {existing} upload(s). Skipping seed.")
            return

        db.add(Admin(user_id=ADMIN_ID))
        print(f"Created admin: {ADMIN_ID}")

        credited = 0
        for i, (name, file_type, size, status) in enumerate(SAMPLE_UPLOADS):
            tokens = calculate_tokens(size, file_type)
            db.add(Upload(
                user_id=CONTRIBUTOR_ID,
                file_name=name,
                file_type=file_type,
                file_size=size,
                storage_path=f"seed-{i}-{name}",
                status=status.value,
                tokens_earned=tokens,
            ))
            if status == UploadStatus.APPROVED:
                credited += tokens
            print(f"  {name}: {status.value}, {tokens} tokens")

        # Keep the approved ⇔ credited invariant for seeded data
        db.add(Wallet(user_id=CONTRIBUTOR_ID, balance=credited))
        db.commit()
        print(f"Credited {credited} tokens to {CONTRIBUTOR_ID}")
        print()
        print("Seed complete! Try:")
        print("  curl http://localhost:8000/api/uploads")
        print("  curl http://localhost:8000/api/marketplace")
        print("  curl 'http://localhost:8000/api/marketplace?category=audio'")


if __name__ == "__main__":
    seed()
