"""BlogServer: start connects the store then binds; stop releases both."""

import socket

import httpx
import pytest

import server as server_module
from core.errors import StoreError
from fakes import FakeDatabase


@pytest.fixture(autouse=True)
def fake_database(monkeypatch):
    FakeDatabase.instances = []
    FakeDatabase.connect_error = None
    monkeypatch.setattr(server_module, "Database", FakeDatabase)
    return FakeDatabase


async def test_start_serves_requests_and_stop_releases_everything():
    blog = server_module.BlogServer(host="127.0.0.1")

    await blog.start("postgresql://db/blog", 0)
    try:
        assert blog.is_running
        assert blog.port
        [database] = FakeDatabase.instances
        assert database.connected
        assert blog.app.state.db is database

        async with httpx.AsyncClient() as client:
            res = await client.get(f"http://127.0.0.1:{blog.port}/health")
        assert res.status_code == 200
    finally:
        await blog.stop()

    assert database.closed
    assert not blog.is_running
    assert blog.app.state.db is None


async def test_store_failure_binds_nothing():
    FakeDatabase.connect_error = StoreError("connect", "connection refused")
    blog = server_module.BlogServer(host="127.0.0.1")

    with pytest.raises(StoreError):
        await blog.start("postgresql://db/blog", 0)

    assert blog.port is None
    assert not blog.is_running


async def test_bind_failure_disconnects_store():
    taken = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    taken.bind(("127.0.0.1", 0))
    taken.listen(1)
    try:
        blog = server_module.BlogServer(host="127.0.0.1")

        with pytest.raises(OSError):
            await blog.start("postgresql://db/blog", taken.getsockname()[1])

        [database] = FakeDatabase.instances
        assert database.closed
        assert not blog.is_running
    finally:
        taken.close()


async def test_run_and_close_server(monkeypatch):
    monkeypatch.setenv("HOST", "127.0.0.1")

    blog = await server_module.run_server("postgresql://db/blog", 0)
    assert blog.is_running

    await server_module.close_server(blog)
    assert FakeDatabase.instances[0].closed
