#!/usr/bin/env python3
"""
Reset a user's password in the Publisher API database.

This script does not read or reveal any existing password.  It stores
a new PBKDF2 hash for the given username.  Tokens issued earlier stay
valid until they expire.

Usage:
    python reset_password.py --username testuser --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import asyncio
import getpass
import sys
from typing import List, Optional

from publisher_api.app.core.config import Settings
from publisher_api.app.core.db import Database
from publisher_api.app.core.errors import NotFoundError
from publisher_api.app.services.user_service import UserService


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    ap = argparse.ArgumentParser(description="Reset a Publisher API user password.")
    ap.add_argument("--username", required=True, help="Username to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args(argv)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        return 1

    settings = settings or Settings()
    db = Database(settings.database_url)
    db.init()
    try:
        asyncio.run(UserService(db).set_password(args.username, new_password))
    except NotFoundError as exc:
        print(f"[!] {exc.detail}", file=sys.stderr)
        return 1

    print(f"[+] Password updated for {args.username}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
