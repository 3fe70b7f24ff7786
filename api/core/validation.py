"""
Request checks shared by the feature services.
"""

from __future__ import annotations

from .errors import ValidationError


def missing_field_message(field: str) -> str:
    return f"Missing `{field}` in request body"


def require_matching_ids(path_id: str | None, body_id: str | None) -> None:
    """
    PUT bodies must repeat the id from the path.
    """
    if not (path_id and body_id and path_id == body_id):
        raise ValidationError(
            f"Request path id ({path_id}) and request body id ({body_id}) must match"
        )
