"""
import_engine.converter - Flat CSV row → nested record.

Each mapping's dot path ("address.city") becomes nested dicts;
siblings under one parent share the same dict.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from import_engine.field_map import FieldMapping

_MISSING = object()


def set_nested(record: dict, path: Sequence[str], value: Any) -> None:
    """Assign value at path, creating intermediate dicts on demand."""
    node = record
    for key in path[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[path[-1]] = value


def get_nested(record: dict, path: Sequence[str], default: Any = None) -> Any:
    node: Any = record
    for key in path:
        if not isinstance(node, dict):
            return default
        node = node.get(key, _MISSING)
        if node is _MISSING:
            return default
    return node


def to_record(row: dict[str, str], mappings: Iterable[FieldMapping]) -> dict:
    """
    Convert one row.  Blank or absent columns are left out entirely so
    an update only touches the columns the file actually filled in.
    """
    record: dict = {}
    for m in mappings:
        raw = row.get(m.csv_column)
        if raw is None or raw == "":
            continue
        set_nested(record, m.path, m.type.convert(raw))
    return record


def to_row(record: dict, mappings: Iterable[FieldMapping]) -> dict[str, str]:
    """Inverse of to_record: flatten a stored record back to CSV strings."""
    return {
        m.csv_column: m.type.to_text(get_nested(record, m.path))
        for m in mappings
    }
