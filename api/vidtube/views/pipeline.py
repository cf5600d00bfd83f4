"""View pipeline executor.

A :class:`ViewSpec` describes one logical read: match a source collection,
attach related records as named sub-lists (joins, possibly nested), compute
derived fields relative to the caller, sort and project. The executor runs
the stages in that fixed order against any :class:`~vidtube.store.DataStore`.

When the sort key is a stored field and no join can drop records, sorting,
skipping and limiting are handed to the store and only the requested window
is joined; otherwise the whole match set is materialized first. Both paths
give the same result. Reads across stages are not point-in-time consistent:
a joined record may change between two store calls.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from ..errors import UnknownReferenceError
from ..pagination import WindowFetcher, paginate
from ..schemas import Page
from ..store import DataStore, In, Record, SortKey
from .derive import Derived, ViewContext
from .projection import Projection, project

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Join:
    """Attach records of ``collection`` whose ``foreign_field`` equals ``local_field``.

    ``match`` narrows the joined records, ``sort`` orders each sub-list,
    nested ``joins``/``derive`` run on the joined records and ``project``
    trims them before they are attached. A ``required`` join drops source
    records that end up with an empty sub-list.
    """

    name: str
    collection: str
    local_field: str
    foreign_field: str
    match: Mapping[str, Any] = field(default_factory=dict)
    sort: Sequence[SortKey] = ()
    joins: Sequence["Join"] = ()
    derive: Sequence[Derived] = ()
    project: Projection | None = None
    required: bool = False


@dataclass(frozen=True)
class Sort:
    """Total order on one field, ties broken by id in the same direction."""

    field: str = "created_at"
    descending: bool = True

    def keys(self) -> list[SortKey]:
        return [(self.field, self.descending), ("id", self.descending)]


@dataclass(frozen=True)
class ViewSpec:
    source: str
    match: Mapping[str, Any]
    joins: Sequence[Join] = ()
    derive: Sequence[Derived] = ()
    sort: Sort = Sort()
    project: Projection | None = None


class ViewPipeline:
    """Executes view specs against a data store."""

    def __init__(self, store: DataStore):
        self.store = store

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def run(self, spec: ViewSpec, ctx: ViewContext | None = None) -> list[Record]:
        items, _ = self.execute(spec, ctx)
        return items

    def run_one(self, spec: ViewSpec, ctx: ViewContext | None = None) -> Record | None:
        items, _ = self.execute(spec, ctx, limit=1)
        return items[0] if items else None

    def window(self, spec: ViewSpec, ctx: ViewContext | None = None) -> WindowFetcher:
        return lambda skip, limit: self.execute(spec, ctx, skip=skip, limit=limit)

    def paginate(
        self,
        spec: ViewSpec,
        ctx: ViewContext | None = None,
        page: int | None = None,
        limit: int | None = None,
        default_limit: int | None = None,
    ) -> Page:
        return paginate(self.window(spec, ctx), page, limit, default_limit)

    def execute(
        self,
        spec: ViewSpec,
        ctx: ViewContext | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> tuple[list[Record], int]:
        """Run ``spec`` and return (records in the window, total matching records)."""
        ctx = ctx or ViewContext()
        logger.debug(f"Executing view on {spec.source} match={dict(spec.match)} skip={skip} limit={limit}")

        if self._store_can_window(spec):
            total = self.store.count(spec.source, spec.match)
            records = self.store.find_many(
                spec.source, spec.match, sort=spec.sort.keys(), skip=skip, limit=limit
            )
            records = self._join(records, spec.joins, ctx)
            records = self._derive(records, spec.derive, ctx)
        else:
            records = self.store.find_many(spec.source, spec.match)
            records = self._join(records, spec.joins, ctx)
            records = self._derive(records, spec.derive, ctx)
            total = len(records)
            records = self._sort(records, spec.sort)
            end = None if limit is None else skip + limit
            records = records[skip:end]

        if spec.project is not None:
            records = [project(record, spec.project) for record in records]
        return records, total

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    @staticmethod
    def _store_can_window(spec: ViewSpec) -> bool:
        if any(join.required for join in spec.joins):
            return False
        computed = {join.name for join in spec.joins} | {d.name for d in spec.derive}
        return spec.sort.field not in computed

    def _join(self, records: list[Record], joins: Sequence[Join], ctx: ViewContext) -> list[Record]:
        for join in joins:
            for record in records:
                if join.local_field not in record:
                    raise UnknownReferenceError(
                        f"Join '{join.name}' references unknown field '{join.local_field}'"
                    )
            keys = {record[join.local_field] for record in records if record[join.local_field] is not None}

            groups: dict[Any, list[Record]] = defaultdict(list)
            if keys:
                predicate = {**join.match, join.foreign_field: In(keys)}
                related = self.store.find_many(join.collection, predicate, sort=join.sort)
                related = self._join(related, join.joins, ctx)
                related = self._derive(related, join.derive, ctx)
                for item in related:
                    groups[item[join.foreign_field]].append(item)

            for record in records:
                items = groups.get(record[join.local_field], [])
                if join.project is not None:
                    items = [project(item, join.project) for item in items]
                record[join.name] = items

            if join.required:
                records = [record for record in records if record[join.name]]
        return records

    @staticmethod
    def _derive(records: list[Record], derive: Sequence[Derived], ctx: ViewContext) -> list[Record]:
        for record in records:
            for derived in derive:
                record[derived.name] = derived.fn(record, ctx)
        return records

    @staticmethod
    def _sort(records: list[Record], sort: Sort) -> list[Record]:
        for record in records:
            if sort.field not in record:
                raise UnknownReferenceError(f"Cannot sort on unknown field '{sort.field}'")
        return sorted(records, key=lambda r: (r[sort.field], r["id"]), reverse=sort.descending)
