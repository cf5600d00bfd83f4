"""Derived-field builders.

Each builder returns a pure function ``(record, context) -> value`` that reads
the record's joined sub-lists. Membership checks compare identities as
strings, so UUIDs and their string forms match.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from ..errors import UnknownReferenceError
from ..store import Record

# Identity key that resolves to the calling user
CALLER = "caller"


@dataclass(frozen=True)
class ViewContext:
    """Request-scoped inputs of a view: the caller and named parameters."""

    caller_id: Any = None
    params: Mapping[str, Any] = field(default_factory=dict)

    def identity(self, key: str) -> Any:
        if key == CALLER:
            return self.caller_id
        return self.params.get(key)


DeriveFn = Callable[[Record, ViewContext], Any]


@dataclass(frozen=True)
class Derived:
    name: str
    fn: DeriveFn


def _value(record: Record, name: str) -> Any:
    try:
        return record[name]
    except KeyError:
        raise UnknownReferenceError(f"Record has no field '{name}'") from None


def _items(record: Record, sub_list: str) -> list[Record]:
    return _value(record, sub_list) or []


def count(sub_list: str) -> DeriveFn:
    def fn(record: Record, ctx: ViewContext) -> int:
        return len(_items(record, sub_list))

    return fn


def first(sub_list: str) -> DeriveFn:
    """Collapse a one-to-one join to its single record (or None)."""

    def fn(record: Record, ctx: ViewContext) -> Record | None:
        items = _items(record, sub_list)
        return items[0] if items else None

    return fn


def contains(sub_list: str, field_name: str, identity: str = CALLER) -> DeriveFn:
    """True when ``identity`` appears as ``field_name`` of any joined record.

    An absent identity (anonymous caller) is never a member.
    """

    def fn(record: Record, ctx: ViewContext) -> bool:
        wanted = ctx.identity(identity)
        if wanted is None:
            return False
        wanted = str(wanted)
        return any(str(_value(item, field_name)) == wanted for item in _items(record, sub_list))

    return fn


def total(sub_list: str, field_name: str) -> DeriveFn:
    def fn(record: Record, ctx: ViewContext) -> int | float:
        return sum(_value(item, field_name) or 0 for item in _items(record, sub_list))

    return fn


def pluck(sub_list: str, field_name: str) -> DeriveFn:
    """Collect ``field_name`` from each joined record, skipping empty values."""

    def fn(record: Record, ctx: ViewContext) -> list[Any]:
        values = (_value(item, field_name) for item in _items(record, sub_list))
        return [value for value in values if value is not None]

    return fn


def equals(field_name: str, identity: str = CALLER) -> DeriveFn:
    def fn(record: Record, ctx: ViewContext) -> bool:
        wanted = ctx.identity(identity)
        return wanted is not None and str(_value(record, field_name)) == str(wanted)

    return fn
