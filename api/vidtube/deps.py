from __future__ import annotations

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from .db import get_session
from .store import SqlStore


def get_db() -> Generator[Session, None, None]:
    yield from get_session()


def get_store(db: Session = Depends(get_db)) -> SqlStore:
    return SqlStore(db)
