from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from authors import router as authors_router
from core import config
from core.db import Database
from core.error_handlers import register_error_handlers
from core.observability import setup_logging
from posts import router as posts_router

logger = logging.getLogger(__name__)


def create_app(database_url: str | None = None) -> FastAPI:
    """
    Build the API. The lifespan owns the store handle at `app.state.db`.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(config.log_level())
        database = Database(database_url or config.database_url())
        await database.connect()
        app.state.db = database
        try:
            yield
        finally:
            await database.close()
            app.state.db = None

    app = FastAPI(title="blog-posts-api", lifespan=lifespan, redirect_slashes=False)

    # Browser clients are allowed only from the origins listed in CORS_ORIGINS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(posts_router.router, tags=["posts"])
    app.include_router(authors_router.router, tags=["authors"])
    register_error_handlers(app)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    setup_logging(config.log_level())
    uvicorn.run(app, host=config.host(), port=config.port(), log_config=None)
