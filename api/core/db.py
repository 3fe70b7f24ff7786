"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns one connection pool. The process lifecycle creates it, opens
it on startup and closes it on shutdown (see `api/main.py` and
`api/server.py`); request handlers receive it through `core.dependencies`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver failures leave this module as `StoreError`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import asyncpg

from . import config, schema
from .errors import StoreError

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


async def _init_connection(conn: asyncpg.Connection) -> None:
    # Embedded documents (post comments) come back as Python lists.
    await conn.set_type_codec(
        "jsonb",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog",
    )


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(
        self,
        url: str,
        *,
        min_size: int | None = None,
        max_size: int | None = None,
        command_timeout: float | None = None,
    ) -> None:
        self.url = config.sanitize_database_url(url)
        self.min_size = min_size if min_size is not None else config.pool_min_size()
        self.max_size = max_size if max_size is not None else config.pool_max_size()
        self.command_timeout = command_timeout if command_timeout is not None else config.command_timeout()
        self._pool: asyncpg.Pool | None = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self.url,
                min_size=self.min_size,
                max_size=self.max_size,
                command_timeout=self.command_timeout,
                init=_init_connection,
            )
        except _DRIVER_ERRORS as exc:
            raise StoreError("connect", str(exc)) from exc

        try:
            await schema.ensure_schema(self)
        except StoreError:
            await self.close()
            raise
        logger.info("db_connected min_size=%s max_size=%s", self.min_size, self.max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        pool, self._pool = self._pool, None
        await pool.close()
        logger.info("db_closed")

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self.pool.fetchrow(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError("fetch_one", str(exc)) from exc
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self.pool.fetch(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError("fetch_all", str(exc)) from exc
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return the command status.
        """
        try:
            return await self.pool.execute(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError("execute", str(exc)) from exc
