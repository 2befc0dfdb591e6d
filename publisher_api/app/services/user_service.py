"""
Business logic for users.

``UserService`` persists accounts in the ``users`` table.  Passwords
are stored only as PBKDF2 hashes produced by ``core.security``; the
plain password never leaves ``create_user``, ``authenticate`` or
``set_password``.
"""

import logging
import sqlite3
import uuid
from typing import Optional

from ..core.db import Database
from ..core.errors import ConflictError, NotFoundError
from ..core.security import hash_password, verify_password
from ..schemas.user import UserCreate, UserRead


logger = logging.getLogger(__name__)


def _row_to_user(row: sqlite3.Row) -> UserRead:
    return UserRead(id=row["id"], username=row["username"], email=row["email"])


class UserService:
    """Account operations backed by one ``Database``."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def create_user(self, data: UserCreate) -> UserRead:
        """Create a new user and return it.

        The id is a random opaque string.  A taken username raises
        ``ConflictError``; the insert is rolled back and nothing is
        stored.
        """
        logger.info("Registering user %s", data.username)
        user_id = uuid.uuid4().hex
        try:
            with self.db.cursor() as cursor:
                cursor.execute(
                    "INSERT INTO users (id, username, email, password) VALUES (?, ?, ?, ?)",
                    (user_id, data.username, data.email, hash_password(data.password)),
                )
        except sqlite3.IntegrityError as exc:
            logger.info("Signup rejected, username %s is taken", data.username)
            raise ConflictError(f"Username {data.username} is already taken") from exc
        return UserRead(id=user_id, username=data.username, email=data.email)

    async def authenticate(self, username: str, password: str) -> Optional[UserRead]:
        """Return the user when ``password`` matches, otherwise ``None``."""
        with self.db.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, username, email, password FROM users WHERE username = ?",
                (username,),
            ).fetchone()
        if not row or not verify_password(password, row["password"]):
            return None
        return _row_to_user(row)

    async def get_user_by_id(self, user_id: str) -> Optional[UserRead]:
        with self.db.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, username, email FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        return _row_to_user(row) if row else None

    async def get_user_by_username(self, username: str) -> Optional[UserRead]:
        with self.db.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, username, email FROM users WHERE username = ?",
                (username,),
            ).fetchone()
        return _row_to_user(row) if row else None

    async def set_password(self, username: str, password: str) -> None:
        """Replace the stored hash for ``username``.

        Raises ``NotFoundError`` when no such user exists.
        """
        with self.db.cursor() as cursor:
            cursor.execute(
                "UPDATE users SET password = ? WHERE username = ?",
                (hash_password(password), username),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"User {username} not found")
        logger.info("Password reset for user %s", username)

    async def delete_user(self, user_id: str) -> None:
        """Delete a user; their publishers go with them (``ON DELETE CASCADE``)."""
        with self.db.cursor() as cursor:
            cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
            if cursor.rowcount == 0:
                raise NotFoundError(f"User {user_id} not found")
        logger.info("Deleted user %s", user_id)
