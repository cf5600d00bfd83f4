from __future__ import annotations

from typing import Any, Sequence, Union

from ..errors import UnknownReferenceError
from ..store import Record

# Field names, or (name, nested projection) pairs for joined records and lists
Projection = Sequence[Union[str, "tuple[str, Projection]"]]


def project(record: Record, fields: Projection) -> Record:
    """Keep only the allow-listed fields of ``record``."""
    result: Record = {}
    for entry in fields:
        if isinstance(entry, tuple):
            name, nested = entry
        else:
            name, nested = entry, None
        if name not in record:
            raise UnknownReferenceError(f"Cannot project unknown field '{name}'")
        value = record[name]
        if nested is not None:
            value = _project_nested(value, nested)
        result[name] = value
    return result


def _project_nested(value: Any, fields: Projection) -> Any:
    if value is None:
        return None
    if isinstance(value, list):
        return [project(item, fields) for item in value]
    return project(value, fields)
