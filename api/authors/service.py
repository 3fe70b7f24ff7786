"""
Author business logic.
"""

from __future__ import annotations

import logging

from core.errors import ConflictError, NotFoundError
from core.validation import require_matching_ids
from posts.repository import PostRepository

from . import schemas
from .repository import AuthorRepository
from .serializers import serialize_author

logger = logging.getLogger(__name__)


async def list_authors(authors: AuthorRepository) -> list[dict]:
    rows = await authors.list_all()
    return [serialize_author(row) for row in rows]


async def get_author(authors: AuthorRepository, author_id: str) -> dict:
    row = await authors.get_by_id(author_id)
    if row is None:
        raise NotFoundError("Author", author_id)
    return serialize_author(row)


async def create_author(authors: AuthorRepository, payload: schemas.CreateAuthorRequest) -> dict:
    # Check-then-insert is not atomic; the unique index rejects the loser of a race.
    existing = await authors.get_by_username(payload.userName)
    if existing is not None:
        raise ConflictError()

    row = await authors.create(
        first_name=payload.firstName,
        last_name=payload.lastName,
        user_name=payload.userName,
    )
    logger.info("author_created author_id=%s user_name=%s", row["id"], row["userName"])
    return serialize_author(row)


async def update_author(
    authors: AuthorRepository,
    author_id: str,
    payload: schemas.UpdateAuthorRequest,
) -> dict:
    require_matching_ids(author_id, payload.id)

    changes = payload.changes()
    if "userName" in changes:
        holder = await authors.get_by_username(changes["userName"])
        if holder is not None and holder["id"] != author_id:
            raise ConflictError()

    row = await authors.update(author_id, changes)
    if row is None:
        raise NotFoundError("Author", author_id)
    logger.info("author_updated author_id=%s fields=%s", author_id, ",".join(changes))
    return serialize_author(row)


async def delete_author(
    authors: AuthorRepository,
    posts: PostRepository,
    author_id: str,
) -> None:
    """
    Remove the author's posts, then the author.

    Two independent statements: if the second fails the posts are already gone.
    """
    removed_posts = await posts.delete_by_author(author_id)
    existed = await authors.delete(author_id)
    logger.info(
        "author_deleted author_id=%s existed=%s removed_posts=%s",
        author_id,
        existed,
        removed_posts,
    )
