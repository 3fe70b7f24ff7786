"""
Post dependencies for FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database
from core.dependencies import get_db

from .repository import PostRepository


def get_post_repository(db: Database = Depends(get_db)) -> PostRepository:
    return PostRepository(db)
