"""Render every failure in the response envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import VidTubeError
from .schemas import respond

logger = logging.getLogger(__name__)


def _describe(errors: list[dict]) -> str:
    parts = []
    for error in errors:
        # First loc entry is the source (path, query, body)
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(VidTubeError)
    async def _vidtube_error(request: Request, e: VidTubeError):
        if e.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {e.message}", exc_info=e)
        return respond(e.status_code, None, e.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_: Request, e: RequestValidationError):
        return respond(status.HTTP_400_BAD_REQUEST, None, _describe(e.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, e: StarletteHTTPException):
        return respond(e.status_code, None, str(e.detail))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, e: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return respond(status.HTTP_500_INTERNAL_SERVER_ERROR, None, "Internal server error")
