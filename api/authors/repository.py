"""
Author persistence (raw SQL).

Rows are returned in the wire shape: {id, firstName, lastName, userName}.
"""

from __future__ import annotations

from core.db import Database

_AUTHOR_COLUMNS = """
    id,
    first_name AS "firstName",
    last_name AS "lastName",
    user_name AS "userName"
"""

# Wire field -> column. Only these may appear in an UPDATE.
_UPDATABLE_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "userName": "user_name",
}


class AuthorRepository:
    def __init__(self, db: Database):
        self._db = db

    async def list_all(self) -> list[dict]:
        return await self._db.fetch_all(
            f"""
            SELECT {_AUTHOR_COLUMNS}
            FROM authors
            ORDER BY created_at ASC, id ASC
            """
        )

    async def get_by_id(self, author_id: str) -> dict | None:
        return await self._db.fetch_one(
            f"""
            SELECT {_AUTHOR_COLUMNS}
            FROM authors
            WHERE id = $1
            """,
            author_id,
        )

    async def get_by_username(self, user_name: str) -> dict | None:
        return await self._db.fetch_one(
            f"""
            SELECT {_AUTHOR_COLUMNS}
            FROM authors
            WHERE user_name = $1
            LIMIT 1
            """,
            user_name,
        )

    async def create(self, *, first_name: str, last_name: str, user_name: str) -> dict:
        row = await self._db.fetch_one(
            f"""
            INSERT INTO authors (first_name, last_name, user_name)
            VALUES ($1, $2, $3)
            RETURNING {_AUTHOR_COLUMNS}
            """,
            first_name,
            last_name,
            user_name,
        )
        if row is None:
            raise RuntimeError("Failed to create author.")
        return row

    async def update(self, author_id: str, fields: dict[str, str]) -> dict | None:
        """
        Set only the given fields. Returns the updated row, or None if the id is unknown.
        """
        if not fields:
            return await self.get_by_id(author_id)

        assignments = ", ".join(
            f"{_UPDATABLE_COLUMNS[name]} = ${index}" for index, name in enumerate(fields, start=2)
        )
        return await self._db.fetch_one(
            f"""
            UPDATE authors
            SET {assignments},
                updated_at = now()
            WHERE id = $1
            RETURNING {_AUTHOR_COLUMNS}
            """,
            author_id,
            *fields.values(),
        )

    async def delete(self, author_id: str) -> bool:
        row = await self._db.fetch_one(
            """
            DELETE FROM authors
            WHERE id = $1
            RETURNING id
            """,
            author_id,
        )
        return row is not None
