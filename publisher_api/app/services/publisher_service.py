"""
Business logic for publishers.

Every operation receives the id of the authenticated caller.  The
owner of a new publisher is always that caller.  For reads, updates
and deletes the caller is compared with the stored owner only when
the service is built with ``enforce_ownership=True``; a mismatch then
raises ``PermissionDeniedError``.
"""

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import List

from ..core.db import Database
from ..core.errors import NotFoundError, PermissionDeniedError
from ..schemas.publisher import PublisherCreate, PublisherRead, PublisherUpdate


logger = logging.getLogger(__name__)

_COLUMNS = "id, name, description, user_id, created"


def _row_to_publisher(row: sqlite3.Row) -> PublisherRead:
    return PublisherRead(
        id=row["id"],
        name=row["name"],
        desc=row["description"],
        user_id=row["user_id"],
        created=row["created"],
    )


class PublisherService:
    """Publisher CRUD backed by one ``Database``."""

    def __init__(self, db: Database, enforce_ownership: bool = False) -> None:
        self.db = db
        self.enforce_ownership = enforce_ownership

    def _fetch(self, cursor: sqlite3.Cursor, publisher_id: str, user_id: str) -> sqlite3.Row:
        row = cursor.execute(
            f"SELECT {_COLUMNS} FROM publishers WHERE id = ?", (publisher_id,)
        ).fetchone()
        if not row:
            raise NotFoundError(f"Publisher {publisher_id} not found")
        if self.enforce_ownership and row["user_id"] != user_id:
            logger.info("User %s denied access to publisher %s", user_id, publisher_id)
            raise PermissionDeniedError("Publisher belongs to another user")
        return row

    async def create_publisher(self, data: PublisherCreate, user_id: str) -> PublisherRead:
        """Store a new publisher owned by ``user_id`` and return it.

        ``created`` is the current UTC time as an ISO-8601 string and is
        never written again.
        """
        publisher_id = uuid.uuid4().hex
        created = datetime.now(timezone.utc).isoformat()
        with self.db.cursor() as cursor:
            cursor.execute(
                "INSERT INTO publishers (id, name, description, user_id, created) VALUES (?, ?, ?, ?, ?)",
                (publisher_id, data.name, data.desc, user_id, created),
            )
        logger.info("User %s created publisher %s", user_id, publisher_id)
        return PublisherRead(
            id=publisher_id,
            name=data.name,
            desc=data.desc,
            user_id=user_id,
            created=created,
        )

    async def get_publisher(self, publisher_id: str, user_id: str) -> PublisherRead:
        with self.db.cursor() as cursor:
            row = self._fetch(cursor, publisher_id, user_id)
        return _row_to_publisher(row)

    async def list_publishers(self, user_id: str) -> List[PublisherRead]:
        """Return the publishers owned by ``user_id``, oldest first."""
        with self.db.cursor() as cursor:
            rows = cursor.execute(
                f"SELECT {_COLUMNS} FROM publishers WHERE user_id = ? ORDER BY created ASC",
                (user_id,),
            ).fetchall()
        return [_row_to_publisher(row) for row in rows]

    async def update_publisher(
        self, publisher_id: str, data: PublisherUpdate, user_id: str
    ) -> PublisherRead:
        """Replace ``name`` and ``desc``; ``userID`` and ``created`` are kept."""
        with self.db.cursor() as cursor:
            row = self._fetch(cursor, publisher_id, user_id)
            cursor.execute(
                "UPDATE publishers SET name = ?, description = ? WHERE id = ?",
                (data.name, data.desc, publisher_id),
            )
        logger.info("User %s updated publisher %s", user_id, publisher_id)
        return PublisherRead(
            id=row["id"],
            name=data.name,
            desc=data.desc,
            user_id=row["user_id"],
            created=row["created"],
        )

    async def delete_publisher(self, publisher_id: str, user_id: str) -> None:
        with self.db.cursor() as cursor:
            self._fetch(cursor, publisher_id, user_id)
            cursor.execute("DELETE FROM publishers WHERE id = ?", (publisher_id,))
        logger.info("User %s deleted publisher %s", user_id, publisher_id)
