"""Collection-oriented data access.

The view engine and the services only talk to the :class:`DataStore`
protocol: records are plain dicts keyed by field name, predicates are
equality conjunctions. :class:`SqlStore` implements it on a SQLAlchemy
session, one commit per write, so each single-record write is atomic and
nothing spans collections.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Protocol, Sequence

from sqlalchemy import delete, false, func, inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import ConflictError, NotFoundError, StoreError, UnknownReferenceError
from .models import COLLECTIONS

logger = logging.getLogger(__name__)

Record = dict[str, Any]
Predicate = Mapping[str, Any]
# (field, descending)
SortKey = tuple[str, bool]

# SQLSTATE unique_violation (psycopg exposes it as sqlstate, psycopg2 as pgcode)
UNIQUE_VIOLATION = "23505"


@dataclass(frozen=True)
class In:
    """Predicate value matching any of ``values``."""

    values: tuple

    def __init__(self, values):
        object.__setattr__(self, "values", tuple(values))


class DataStore(Protocol):
    def find_by_id(self, collection: str, id: Any) -> Record | None: ...

    def find_many(
        self,
        collection: str,
        predicate: Predicate | None = None,
        sort: Sequence[SortKey] = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Record]: ...

    def count(self, collection: str, predicate: Predicate | None = None) -> int: ...

    def create(self, collection: str, doc: Mapping[str, Any]) -> Record: ...

    def update_by_id(self, collection: str, id: Any, patch: Mapping[str, Any]) -> Record: ...

    def delete_by_id(self, collection: str, id: Any) -> None: ...

    def delete_many(self, collection: str, predicate: Predicate) -> int: ...


class SqlStore:
    """DataStore backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Name resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _model(collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise UnknownReferenceError(f"Unknown collection '{collection}'") from None

    @staticmethod
    def _column(model, field: str):
        if field not in model.__table__.columns:
            raise UnknownReferenceError(f"Unknown field '{field}' on {model.__tablename__}")
        return getattr(model, field)

    def _where(self, model, predicate: Predicate | None) -> list:
        clauses = []
        for field, value in (predicate or {}).items():
            column = self._column(model, field)
            if isinstance(value, In):
                clauses.append(column.in_(value.values) if value.values else false())
            elif value is None:
                clauses.append(column.is_(None))
            else:
                clauses.append(column == value)
        return clauses

    def _check_fields(self, model, doc: Mapping[str, Any]) -> None:
        for field in doc:
            self._column(model, field)

    @staticmethod
    def _to_record(obj) -> Record:
        return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}

    # ------------------------------------------------------------------
    # Error translation
    # ------------------------------------------------------------------

    @contextmanager
    def _guard(self, action: str, collection: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            self.db.rollback()
            if _is_unique_violation(exc):
                logger.info(f"Duplicate record on {action} in {collection}: {exc.orig}")
                raise ConflictError(f"Conflicting {collection} record") from exc
            # Check, foreign-key and not-null failures are never "already exists"
            logger.error(f"Integrity failure on {action} in {collection}: {exc.orig}")
            raise StoreError() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Store failure on {action} in {collection}", exc_info=True)
            raise StoreError() from exc

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_by_id(self, collection: str, id: Any) -> Record | None:
        model = self._model(collection)
        with self._guard("find_by_id", collection):
            obj = self.db.get(model, id, populate_existing=True)
        return self._to_record(obj) if obj is not None else None

    def find_many(
        self,
        collection: str,
        predicate: Predicate | None = None,
        sort: Sequence[SortKey] = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Record]:
        model = self._model(collection)
        stmt = (
            select(model)
            .where(*self._where(model, predicate))
            .execution_options(populate_existing=True)
        )
        for field, descending in sort:
            column = self._column(model, field)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._guard("find_many", collection):
            rows = self.db.scalars(stmt).all()
        return [self._to_record(row) for row in rows]

    def count(self, collection: str, predicate: Predicate | None = None) -> int:
        model = self._model(collection)
        stmt = select(func.count()).select_from(model).where(*self._where(model, predicate))
        with self._guard("count", collection):
            return self.db.scalar(stmt) or 0

    # ------------------------------------------------------------------
    # Writes (each one commits on its own)
    # ------------------------------------------------------------------

    def create(self, collection: str, doc: Mapping[str, Any]) -> Record:
        model = self._model(collection)
        self._check_fields(model, doc)
        obj = model(**doc)
        with self._guard("create", collection):
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
        return self._to_record(obj)

    def update_by_id(self, collection: str, id: Any, patch: Mapping[str, Any]) -> Record:
        model = self._model(collection)
        self._check_fields(model, patch)
        with self._guard("update_by_id", collection):
            obj = self.db.get(model, id, populate_existing=True)
            if obj is None:
                raise NotFoundError(f"{collection} record not found")
            for field, value in patch.items():
                setattr(obj, field, value)
            self.db.commit()
            self.db.refresh(obj)
        return self._to_record(obj)

    def delete_by_id(self, collection: str, id: Any) -> None:
        model = self._model(collection)
        with self._guard("delete_by_id", collection):
            obj = self.db.get(model, id, populate_existing=True)
            if obj is None:
                raise NotFoundError(f"{collection} record not found")
            self.db.delete(obj)
            self.db.commit()

    def delete_many(self, collection: str, predicate: Predicate) -> int:
        model = self._model(collection)
        stmt = delete(model).where(*self._where(model, predicate))
        with self._guard("delete_many", collection):
            result = self.db.execute(stmt)
            self.db.commit()
        return result.rowcount or 0


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return code == UNIQUE_VIOLATION
    # sqlite reports constraint failures by message only
    return "UNIQUE constraint failed" in str(orig)


def get_or_404(store: DataStore, collection: str, id: Any, message: str) -> Record:
    record = store.find_by_id(collection, id)
    if record is None:
        raise NotFoundError(message)
    return record
