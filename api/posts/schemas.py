"""
Post API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel

UPDATABLE_FIELDS = ("title", "content")


class CreatePostRequest(BaseModel):
    title: str
    content: str
    author_id: str


class UpdatePostRequest(BaseModel):
    id: str | None = None
    title: str | None = None
    content: str | None = None

    def changes(self) -> dict[str, str]:
        sent = self.model_dump(exclude_unset=True)
        return {name: sent[name] for name in UPDATABLE_FIELDS if sent.get(name) is not None}


class CreateCommentRequest(BaseModel):
    content: str
