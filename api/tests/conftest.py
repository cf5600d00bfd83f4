from __future__ import annotations

import os
from typing import Callable, Generator

# Point the app at a throwaway database before anything imports vidtube
os.environ["VIDTUBE_DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["VIDTUBE_RUN_MIGRATIONS"] = "false"
os.environ.setdefault("JWT_SECRET_KEY", "test-only-secret-key-0123456789-abcdefghij")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from vidtube import models  # noqa: E402,F401
from vidtube.auth import create_access_token  # noqa: E402
from vidtube.db import Base, SessionLocal, engine  # noqa: E402
from vidtube.main import app  # noqa: E402
from vidtube.store import Record, SqlStore  # noqa: E402


@pytest.fixture(autouse=True)
def schema() -> Generator[None, None, None]:
    """Fresh tables for every test."""
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    """Create a database session for testing."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture()
def store(db: Session) -> SqlStore:
    return SqlStore(db)


@pytest.fixture()
def make_user(store: SqlStore) -> Callable[..., Record]:
    def _make(username: str, **overrides) -> Record:
        doc = {
            "username": username,
            "email": f"{username}@example.com",
            "full_name": username.title(),
            "password_hash": "not-a-real-hash",
            "avatar_url": f"https://cdn.example.com/avatars/{username}.png",
        }
        doc.update(overrides)
        return store.create("users", doc)

    return _make


@pytest.fixture()
def make_video(store: SqlStore) -> Callable[..., Record]:
    def _make(owner: Record, title: str = "Video", **overrides) -> Record:
        doc = {
            "owner_id": owner["id"],
            "title": title,
            "description": f"About {title}",
            "video_file_url": f"https://cdn.example.com/videos/{title}.mp4",
            "thumbnail_url": f"https://cdn.example.com/thumbs/{title}.jpg",
            "duration": 60.0,
        }
        doc.update(overrides)
        return store.create("videos", doc)

    return _make


@pytest.fixture()
def alice(make_user) -> Record:
    return make_user("alice")


@pytest.fixture()
def bob(make_user) -> Record:
    return make_user("bob")


@pytest.fixture()
def carol(make_user) -> Record:
    return make_user("carol")


@pytest.fixture()
def auth_headers() -> Callable[[Record], dict[str, str]]:
    def _headers(user: Record) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user['id'])}"}

    return _headers
