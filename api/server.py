"""
Programmatic start/stop of the API, for process entrypoints and tests.

`BlogServer.start` connects the store before binding the listener and tears
down whatever it opened if a later step fails. `BlogServer.stop` returns only
after the listener is closed and the store is disconnected.
"""

from __future__ import annotations

import asyncio
import logging
import socket

import uvicorn
from fastapi import FastAPI

from core import config
from core.db import Database
from main import create_app

logger = logging.getLogger(__name__)


def _bind_socket(host: str, port: int) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


class BlogServer:
    def __init__(self, app: FastAPI | None = None, *, host: str | None = None):
        self.app = app or create_app()
        self.host = host or config.host()
        self.db: Database | None = None
        self._server: uvicorn.Server | None = None
        self._task: asyncio.Task | None = None
        self._port: int | None = None

    @property
    def port(self) -> int | None:
        return self._port

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self, database_url: str, port: int | None = None) -> None:
        if self._task is not None:
            raise RuntimeError("Server is already started.")

        database = Database(database_url)
        await database.connect()

        try:
            sock = _bind_socket(self.host, config.port() if port is None else port)
        except OSError:
            await database.close()
            raise

        self.db = database
        self.app.state.db = database
        self._port = sock.getsockname()[1]

        # The store is already attached; the app's own lifespan must not open another.
        server = uvicorn.Server(uvicorn.Config(self.app, lifespan="off", log_config=None))
        task = asyncio.create_task(server.serve(sockets=[sock]))
        self._server, self._task = server, task

        while not server.started:
            if task.done():
                await self._teardown()
                sock.close()
                exc = task.exception()
                if exc is not None:
                    raise exc
                raise RuntimeError("HTTP server exited during startup.")
            await asyncio.sleep(0.01)

        logger.info("server_started host=%s port=%s", self.host, self._port)

    async def stop(self) -> None:
        if self._server is not None and self._task is not None:
            logger.info("server_stopping port=%s", self._port)
            self._server.should_exit = True
            try:
                await self._task
            finally:
                await self._teardown()
            return None
        await self._teardown()

    async def _teardown(self) -> None:
        database = self.db
        self._server, self._task = None, None
        self.db = None
        self.app.state.db = None
        if database is not None:
            await database.close()


async def run_server(database_url: str | None = None, port: int | None = None) -> BlogServer:
    server = BlogServer()
    await server.start(database_url or config.database_url(), port)
    return server


async def close_server(server: BlogServer) -> None:
    await server.stop()
