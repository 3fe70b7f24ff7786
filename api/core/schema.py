"""
Collections and indexes the API expects to exist.

Statements are idempotent and run every time a `Database` connects.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .db import Database

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS authors (
    id text PRIMARY KEY DEFAULT gen_random_uuid()::text,
    first_name text,
    last_name text,
    user_name text,
    created_at timestamptz NOT NULL DEFAULT now(),
    updated_at timestamptz NOT NULL DEFAULT now()
);

CREATE UNIQUE INDEX IF NOT EXISTS authors_user_name_key ON authors (user_name);

CREATE TABLE IF NOT EXISTS posts (
    id text PRIMARY KEY DEFAULT gen_random_uuid()::text,
    title text NOT NULL,
    content text NOT NULL,
    author_id text NOT NULL,
    comments jsonb NOT NULL DEFAULT '[]'::jsonb,
    created_at timestamptz NOT NULL DEFAULT now(),
    updated_at timestamptz NOT NULL DEFAULT now()
);

CREATE INDEX IF NOT EXISTS posts_author_id_idx ON posts (author_id);
CREATE INDEX IF NOT EXISTS posts_title_idx ON posts (title);
"""


async def ensure_schema(db: Database) -> None:
    await db.execute(SCHEMA_SQL)
