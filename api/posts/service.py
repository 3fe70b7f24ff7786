"""
Post business logic.

Reads always go through the repository's author join; a post whose author is
gone fails serialization with NotFoundError.
"""

from __future__ import annotations

import logging

from authors.repository import AuthorRepository
from core.errors import NotFoundError
from core.validation import require_matching_ids

from . import schemas
from .repository import PostRepository
from .serializers import serialize_all_posts, serialize_one_post

logger = logging.getLogger(__name__)


async def list_posts(posts: PostRepository) -> list[dict]:
    rows = await posts.list_all()
    return [serialize_all_posts(row) for row in rows]


async def get_post(posts: PostRepository, post_id: str) -> dict:
    row = await posts.get_by_id(post_id)
    if row is None:
        raise NotFoundError("Post", post_id)
    return serialize_one_post(row)


async def create_post(
    posts: PostRepository,
    authors: AuthorRepository,
    payload: schemas.CreatePostRequest,
) -> dict:
    author = await authors.get_by_id(payload.author_id)
    if author is None:
        raise NotFoundError("Author", payload.author_id)

    post_id = await posts.create(
        title=payload.title,
        content=payload.content,
        author_id=payload.author_id,
    )
    logger.info("post_created post_id=%s author_id=%s", post_id, payload.author_id)

    # Re-read by title, not id: with duplicate titles this returns the oldest
    # match, which may not be the post just created.
    row = await posts.get_by_title(payload.title)
    if row is None:
        raise NotFoundError("Post", post_id)
    return serialize_one_post(row)


async def update_post(
    posts: PostRepository,
    post_id: str,
    payload: schemas.UpdatePostRequest,
) -> dict:
    require_matching_ids(post_id, payload.id)

    changes = payload.changes()
    found = await posts.update(post_id, changes)
    if not found:
        raise NotFoundError("Post", post_id)
    logger.info("post_updated post_id=%s fields=%s", post_id, ",".join(changes))

    row = await posts.get_by_id(post_id)
    if row is None:
        raise NotFoundError("Post", post_id)
    return serialize_all_posts(row)


async def delete_post(posts: PostRepository, post_id: str) -> None:
    existed = await posts.delete(post_id)
    logger.info("post_deleted post_id=%s existed=%s", post_id, existed)


async def add_comment(
    posts: PostRepository,
    post_id: str,
    payload: schemas.CreateCommentRequest,
) -> dict:
    found = await posts.add_comment(post_id, payload.content)
    if not found:
        raise NotFoundError("Post", post_id)

    row = await posts.get_by_id(post_id)
    if row is None:
        raise NotFoundError("Post", post_id)
    return serialize_one_post(row)
