#!/usr/bin/env python3
"""
Print a bearer token for an existing user.

Handy for scripting against the API without going through signin.
The token is signed with the ``SECRET_KEY`` of the environment, so run
this with the same configuration as the server.

Usage:
    python create_token.py --username testuser --days 365
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from publisher_api.app.core.config import Settings
from publisher_api.app.core.db import Database
from publisher_api.app.core.security import create_access_token
from publisher_api.app.services.user_service import UserService


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    ap = argparse.ArgumentParser(description="Issue a bearer token for an existing user.")
    ap.add_argument("--username", required=True, help="Username to issue the token for")
    ap.add_argument("--days", type=int, default=None, help="Token lifetime in days (default: ACCESS_TOKEN_EXPIRE_MINUTES)")
    args = ap.parse_args(argv)

    settings = settings or Settings()
    db = Database(settings.database_url)
    db.init()
    user = asyncio.run(UserService(db).get_user_by_username(args.username))
    if not user:
        print(f"[!] User not found: {args.username}", file=sys.stderr)
        return 1

    expires = args.days * 24 * 60 * 60 if args.days else None
    print(create_access_token({"sub": user.id}, settings, expires_delta=expires))
    return 0


if __name__ == "__main__":
    sys.exit(main())
