"""
Author API schemas (request models).

Field names follow the wire format (camelCase).
"""

from __future__ import annotations

from pydantic import BaseModel

UPDATABLE_FIELDS = ("firstName", "lastName", "userName")


class CreateAuthorRequest(BaseModel):
    firstName: str
    lastName: str
    userName: str


class UpdateAuthorRequest(BaseModel):
    id: str | None = None
    firstName: str | None = None
    lastName: str | None = None
    userName: str | None = None

    def changes(self) -> dict[str, str]:
        """
        Updatable fields present in the request body, in declaration order.
        """
        sent = self.model_dump(exclude_unset=True)
        return {name: sent[name] for name in UPDATABLE_FIELDS if sent.get(name) is not None}
