"""Issue a development access token signed with APP_SECRET_KEY.

Production tokens come from the auth service; this is for local testing.

Usage:
    python scripts/issue_token.py <user_id> [email]
"""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from jose import jwt

from api.config import settings
from api.deps import ALGORITHM

TOKEN_EXPIRY_HOURS = 168  # 7 days


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/issue_token.py <user_id> [email]")
        sys.exit(1)

    now = datetime.now(timezone.utc)
    payload = {
        "sub": sys.argv[1],
        "email": sys.argv[2] if len(sys.argv) > 2 else None,
        "iat": now,
        "exp": now + timedelta(hours=TOKEN_EXPIRY_HOURS),
    }
    if settings.JWT_AUDIENCE:
        payload["aud"] = settings.JWT_AUDIENCE

    print(jwt.encode(payload, settings.APP_SECRET_KEY, algorithm=ALGORITHM))


if __name__ == "__main__":
    main()
