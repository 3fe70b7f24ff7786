"""Database handle: pool lifecycle and driver error translation."""

import asyncpg
import pytest

from core import db as db_module
from core.errors import StoreError


class _FakePool:
    def __init__(self, error=None):
        self.error = error
        self.closed = False
        self.executed = []

    async def execute(self, sql, *args):
        if self.error is not None:
            raise self.error
        self.executed.append(sql)
        return "OK"

    async def fetchrow(self, sql, *args):
        if self.error is not None:
            raise self.error
        return {"id": "a1"}

    async def fetch(self, sql, *args):
        if self.error is not None:
            raise self.error
        return [{"id": "a1"}, {"id": "a2"}]

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_pool(monkeypatch):
    pool = _FakePool()
    created = {}

    async def create_pool(**kwargs):
        created.update(kwargs)
        return pool

    monkeypatch.setattr(db_module.asyncpg, "create_pool", create_pool)
    pool.create_kwargs = created
    return pool


async def test_connect_creates_pool_and_schema(fake_pool):
    database = db_module.Database("postgresql://u:p@db/blog?sslmode=disable", max_size=3)

    await database.connect()

    assert database.is_connected
    assert fake_pool.create_kwargs["dsn"] == "postgresql://u:p@db/blog"
    assert fake_pool.create_kwargs["max_size"] == 3
    assert any("CREATE TABLE IF NOT EXISTS posts" in sql for sql in fake_pool.executed)


async def test_close_is_idempotent(fake_pool):
    database = db_module.Database("postgresql://db/blog")
    await database.connect()

    await database.close()
    await database.close()

    assert fake_pool.closed
    assert not database.is_connected


async def test_fetch_helpers_return_dicts(fake_pool):
    database = db_module.Database("postgresql://db/blog")
    await database.connect()

    assert await database.fetch_one("SELECT 1") == {"id": "a1"}
    assert await database.fetch_all("SELECT 1") == [{"id": "a1"}, {"id": "a2"}]


async def test_driver_errors_become_store_errors(fake_pool):
    database = db_module.Database("postgresql://db/blog")
    await database.connect()
    fake_pool.error = asyncpg.PostgresError("boom")

    with pytest.raises(StoreError) as excinfo:
        await database.fetch_one("SELECT 1")

    assert excinfo.value.operation == "fetch_one"
    assert excinfo.value.to_response() == {"message": "Internal server error"}


async def test_unreachable_server_is_a_store_error(monkeypatch):
    async def create_pool(**kwargs):
        raise ConnectionRefusedError("connection refused")

    monkeypatch.setattr(db_module.asyncpg, "create_pool", create_pool)

    with pytest.raises(StoreError):
        await db_module.Database("postgresql://db/blog").connect()


async def test_schema_failure_closes_pool(fake_pool):
    fake_pool.error = asyncpg.PostgresError("permission denied")
    database = db_module.Database("postgresql://db/blog")

    with pytest.raises(StoreError):
        await database.connect()

    assert fake_pool.closed
    assert not database.is_connected


async def test_queries_before_connect_fail_loudly():
    with pytest.raises(RuntimeError):
        await db_module.Database("postgresql://db/blog").fetch_all("SELECT 1")
