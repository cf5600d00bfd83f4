"""Input validation shared by services and routers."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from .errors import ValidationError


def parse_id(value: Any, name: str = "id") -> UUID:
    """
    Validate a resource identifier.

    Args:
        value: Raw identifier (path parameter, token claim or UUID)
        name: Parameter name used in the error message (e.g. "videoId")

    Returns:
        The identifier as a UUID
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name}") from None


def require_text(value: str | None, name: str) -> str:
    """Return ``value`` stripped, or fail when it is missing or blank."""
    if value is None or not value.strip():
        raise ValidationError(f"{name} is required")
    return value.strip()
