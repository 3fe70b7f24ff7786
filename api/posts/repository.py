"""
Post persistence (raw SQL).

Every read joins the referenced author, so returned posts look like:

    {id, title, content, comments, authorId, author: {id, firstName, lastName, userName} | None}

`author` is None when the referenced author row no longer exists.
"""

from __future__ import annotations

from core.db import Database

_POST_SELECT = """
    SELECT p.id,
           p.title,
           p.content,
           p.comments,
           p.author_id,
           a.id AS author_row_id,
           a.first_name AS author_first_name,
           a.last_name AS author_last_name,
           a.user_name AS author_user_name
    FROM posts p
    LEFT JOIN authors a ON a.id = p.author_id
"""

# Wire field -> column. Only these may appear in an UPDATE.
_UPDATABLE_COLUMNS = {
    "title": "title",
    "content": "content",
}


def _to_post(row: dict) -> dict:
    author = None
    if row.get("author_row_id") is not None:
        author = {
            "id": row["author_row_id"],
            "firstName": row.get("author_first_name"),
            "lastName": row.get("author_last_name"),
            "userName": row.get("author_user_name"),
        }
    return {
        "id": row["id"],
        "title": row["title"],
        "content": row["content"],
        "comments": list(row.get("comments") or []),
        "authorId": row["author_id"],
        "author": author,
    }


class PostRepository:
    def __init__(self, db: Database):
        self._db = db

    async def list_all(self) -> list[dict]:
        rows = await self._db.fetch_all(
            f"""
            {_POST_SELECT}
            ORDER BY p.created_at ASC, p.id ASC
            """
        )
        return [_to_post(row) for row in rows]

    async def get_by_id(self, post_id: str) -> dict | None:
        row = await self._db.fetch_one(
            f"""
            {_POST_SELECT}
            WHERE p.id = $1
            """,
            post_id,
        )
        return _to_post(row) if row is not None else None

    async def get_by_title(self, title: str) -> dict | None:
        """
        Oldest post carrying `title`.
        """
        row = await self._db.fetch_one(
            f"""
            {_POST_SELECT}
            WHERE p.title = $1
            ORDER BY p.created_at ASC, p.id ASC
            LIMIT 1
            """,
            title,
        )
        return _to_post(row) if row is not None else None

    async def create(self, *, title: str, content: str, author_id: str) -> str:
        row = await self._db.fetch_one(
            """
            INSERT INTO posts (title, content, author_id)
            VALUES ($1, $2, $3)
            RETURNING id
            """,
            title,
            content,
            author_id,
        )
        if row is None:
            raise RuntimeError("Failed to create post.")
        return str(row["id"])

    async def update(self, post_id: str, fields: dict[str, str]) -> bool:
        """
        Set only the given fields. Returns False if the id is unknown.
        """
        if not fields:
            row = await self._db.fetch_one("SELECT id FROM posts WHERE id = $1", post_id)
            return row is not None

        assignments = ", ".join(
            f"{_UPDATABLE_COLUMNS[name]} = ${index}" for index, name in enumerate(fields, start=2)
        )
        row = await self._db.fetch_one(
            f"""
            UPDATE posts
            SET {assignments},
                updated_at = now()
            WHERE id = $1
            RETURNING id
            """,
            post_id,
            *fields.values(),
        )
        return row is not None

    async def add_comment(self, post_id: str, content: str) -> bool:
        """
        Append one comment, keeping insertion order. Returns False if the id is unknown.
        """
        row = await self._db.fetch_one(
            """
            UPDATE posts
            SET comments = comments || jsonb_build_array(
                    jsonb_build_object('_id', gen_random_uuid()::text, 'content', $2::text)
                ),
                updated_at = now()
            WHERE id = $1
            RETURNING id
            """,
            post_id,
            content,
        )
        return row is not None

    async def delete(self, post_id: str) -> bool:
        row = await self._db.fetch_one(
            """
            DELETE FROM posts
            WHERE id = $1
            RETURNING id
            """,
            post_id,
        )
        return row is not None

    async def delete_by_author(self, author_id: str) -> int:
        rows = await self._db.fetch_all(
            """
            DELETE FROM posts
            WHERE author_id = $1
            RETURNING id
            """,
            author_id,
        )
        return len(rows)
