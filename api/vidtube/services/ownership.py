"""Ownership gate applied before every owner-only mutation."""

from __future__ import annotations

from typing import Any

from ..errors import AuthenticationError, AuthorizationError, NotFoundError
from ..store import Record
from ..validation import parse_id


def require_caller(caller_id: Any) -> Any:
    """Mutations need an identity; anonymous callers are turned away."""
    if caller_id is None:
        raise AuthenticationError()
    return parse_id(caller_id, "caller identity")


def is_owner(resource: Record, caller_id: Any, owner_field: str = "owner_id") -> bool:
    return caller_id is not None and str(resource[owner_field]) == str(caller_id)


def authorize_mutation(
    resource: Record,
    caller_id: Any,
    owner_field: str = "owner_id",
    message: str | None = None,
) -> None:
    """
    Require that the caller owns ``resource``.

    Identities are compared as strings. Raises AuthorizationError on
    mismatch, so the mutation is never attempted.
    """
    if not is_owner(resource, caller_id, owner_field):
        raise AuthorizationError(message)


def require_visible(video: Record, caller_id: Any, message: str = "Video not found") -> Record:
    """Drafts exist for their owner only; anyone else gets NotFoundError."""
    if not video["is_published"] and not is_owner(video, caller_id):
        raise NotFoundError(message)
    return video
