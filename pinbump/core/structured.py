"""Typed reads from untyped data: TOML tables and GitHub JSON payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

StrDict = dict[str, object]


def as_str_dict(obj: object) -> StrDict | None:
    """Return ``obj`` as a string-keyed dict, or None if it is not one."""
    if not isinstance(obj, dict):
        return None
    d = cast(dict[object, object], obj)
    if not all(isinstance(k, str) for k in d):
        return None
    return cast(StrDict, d)


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string at ``key``; None when missing, not a string, or blank."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def get_nested_str(data: Mapping[str, object], *path: str) -> str | None:
    """Follow ``path`` through nested tables, e.g. ``("object", "sha")``."""
    *tables, leaf = path
    current: Mapping[str, object] = data
    for key in tables:
        nested = get_table(current, key)
        if nested is None:
            return None
        current = nested
    return get_str(current, leaf)
