"""
Post response views and derived fields.

`created` is the serialization instant (epoch milliseconds as a string),
not the row's creation time.
"""

from __future__ import annotations

import time

from authors.serializers import author_name
from core.errors import NotFoundError


def _now_millis() -> str:
    return str(int(time.time() * 1000))


def author_string(post: dict) -> str:
    """
    Trimmed name of the post's resolved author.

    Raises NotFoundError when the reference no longer points at an author.
    """
    author = post.get("author")
    if author is None:
        raise NotFoundError("Author", str(post.get("authorId")))
    return author_name(author)


def serialize_all_posts(post: dict) -> dict:
    return {
        "id": post["id"],
        "title": post["title"],
        "content": post["content"],
        "author": author_string(post),
        "created": _now_millis(),
    }


def serialize_one_post(post: dict) -> dict:
    view = serialize_all_posts(post)
    view["comments"] = post.get("comments", [])
    return view
