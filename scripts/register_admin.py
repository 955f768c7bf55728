"""Grant administrator rights to a user.

Usage:
    python scripts/register_admin.py <user_id> [user_id ...]

The user id is the ``sub`` claim of the access tokens issued by the auth
service (a UUID for Supabase-issued tokens).
"""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session

from api.config import settings
from api.models.admin import Admin

sync_url = settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql+psycopg2://")
engine = create_engine(sync_url)


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/register_admin.py <user_id> [user_id ...]")
        sys.exit(1)

    with Session(engine) as db:
        for user_id in sys.argv[1:]:
            existing = db.execute(
                text("SELECT user_id FROM admins WHERE user_id = :uid"),
                {"uid": user_id},
            ).fetchone()

            if existing:
                print(f"  {user_id}: already an admin")
            else:
                db.add(Admin(user_id=user_id))
                print(f"  {user_id}: granted admin")

        db.commit()


if __name__ == "__main__":
    main()
