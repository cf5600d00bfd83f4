from __future__ import annotations

from typing import Any, Generic, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ============================================================================
# BASE SCHEMAS
# ============================================================================


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


T = TypeVar("T")


class Page(CamelModel, Generic[T]):
    """Generic paginated response."""

    items: list[T]
    page: int
    limit: int
    total_items: int
    total_pages: int
    has_next: bool
    has_prev: bool


class ApiResponse(CamelModel):
    """Envelope every endpoint answers with, errors included."""

    status_code: int
    success: bool
    message: str
    data: Any = None


def camelize(value: Any) -> Any:
    """Recursively convert snake_case record keys to camelCase."""
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, dict):
        return {to_camel(key) if isinstance(key, str) else key: camelize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [camelize(item) for item in value]
    return value


def respond(status_code: int, data: Any = None, message: str = "") -> JSONResponse:
    envelope = ApiResponse(
        status_code=status_code,
        success=status_code < 400,
        message=message,
        data=camelize(data),
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope.model_dump(by_alias=True)),
    )


# ============================================================================
# HEALTH
# ============================================================================


class HealthResponse(BaseModel):
    status: str = "ok"
    uptime_s: float | None = None


# ============================================================================
# REQUEST BODIES
# ============================================================================
# Emptiness is checked by the services so that direct callers get the same
# ValidationError as HTTP clients.


class CommentBody(CamelModel):
    content: str | None = Field(None, max_length=2000)


class TweetBody(CamelModel):
    content: str | None = Field(None, max_length=2000)


class PlaylistBody(CamelModel):
    name: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=1000)


class VideoCreate(CamelModel):
    title: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=5000)
    video_file_url: str | None = Field(None, max_length=1000)
    thumbnail_url: str | None = Field(None, max_length=1000)
    duration: float = Field(0.0, ge=0)
    is_published: bool = True


class VideoUpdate(CamelModel):
    title: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=5000)
    thumbnail_url: str | None = Field(None, max_length=1000)
