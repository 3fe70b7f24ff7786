"""
Error taxonomy shared by the feature packages.

Services raise these; the handlers registered in `main.py` turn them into
responses. Only client errors carry their message to the response body.
"""

from __future__ import annotations

from fastapi import status

INTERNAL_ERROR_MESSAGE = "Internal server error"


class BlogError(Exception):
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def is_client_error(self) -> bool:
        return self.http_status < status.HTTP_500_INTERNAL_SERVER_ERROR

    def to_response(self) -> dict:
        if self.is_client_error:
            return {"message": self.message}
        return {"message": INTERNAL_ERROR_MESSAGE}


class ValidationError(BlogError):
    """Missing or mismatched request fields."""

    http_status = status.HTTP_400_BAD_REQUEST


class ConflictError(BlogError):
    """A unique value (author userName) is already in use."""

    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Username already taken"):
        super().__init__(message)


class NotFoundError(BlogError):
    """
    A referenced entity is absent.

    Not distinguished from other failures on the wire: it answers 500.
    """

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} '{resource_id}' not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class StoreError(BlogError):
    """Any database driver failure."""

    def __init__(self, operation: str, detail: str):
        super().__init__(f"Database {operation} failed: {detail}")
        self.operation = operation
