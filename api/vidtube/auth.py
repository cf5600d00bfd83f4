"""Bearer-token caller resolution.

Tokens are issued elsewhere; this module only verifies them and resolves the
caller's user id. ``create_access_token`` exists for local tooling and tests.
"""

from __future__ import annotations

import logging
import os
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from . import settings
from .deps import get_store
from .errors import AuthenticationError
from .store import DataStore

logger = logging.getLogger(__name__)

# Security scheme for Bearer token
oauth2_scheme = HTTPBearer(auto_error=False)

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise RuntimeError(
        "JWT_SECRET_KEY environment variable is required but not set. "
        "Generate a secure key with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
    )
# 256 bits minimum
if len(JWT_SECRET_KEY) < 32:
    raise RuntimeError("JWT_SECRET_KEY is too short. Must be at least 32 characters long.")


def create_access_token(user_id: uuid.UUID, expires_in_seconds: int | None = None) -> str:
    """
    Create a JWT access token for a user.
    """
    if expires_in_seconds is None:
        expires_in_seconds = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60

    now = datetime.now(timezone.utc)
    payload = {
        "user_id": str(user_id),
        "exp": now + timedelta(seconds=expires_in_seconds),
        "iat": now,
        "type": "access",
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_caller(token: str) -> uuid.UUID:
    """Verify a token and return the user id it carries."""
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    if payload.get("type") != "access":
        raise AuthenticationError("Invalid token type")
    user_id_str = payload.get("user_id")
    if not user_id_str:
        raise AuthenticationError("Invalid token: missing user_id")
    try:
        return uuid.UUID(user_id_str)
    except ValueError:
        raise AuthenticationError("Invalid user ID in token")


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(oauth2_scheme),
    store: DataStore = Depends(get_store),
) -> uuid.UUID:
    """
    Caller identity for mutation endpoints; raises 401 without a valid token.
    """
    if not credentials:
        raise AuthenticationError("Authentication required")

    user_id = decode_caller(credentials.credentials)
    if store.find_by_id("users", user_id) is None:
        raise AuthenticationError("User not found")
    return user_id


def get_current_user_id_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(oauth2_scheme),
    store: DataStore = Depends(get_store),
) -> uuid.UUID | None:
    """
    Caller identity if authenticated, None otherwise.

    Used for read endpoints whose views depend on who is asking.
    """
    if credentials is None:
        return None

    try:
        return get_current_user_id(credentials, store)
    except AuthenticationError as e:
        logger.debug(f"Ignoring bad credentials on anonymous-capable endpoint: {e.message}")
        return None
