"""
Author response views and derived fields.
"""

from __future__ import annotations


def author_name(author: dict) -> str:
    first_name = author.get("firstName") or ""
    last_name = author.get("lastName") or ""
    return f"{first_name} {last_name}".strip()


def serialize_author(author: dict) -> dict:
    return {
        "_id": author["id"],
        "name": author_name(author),
        "userName": author.get("userName"),
    }
