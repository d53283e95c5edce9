"""Typed accessors for untyped TOML data.

``tomllib`` hands back plain dicts; these helpers validate shapes at the
boundary so the rest of the code only sees narrowed types. A missing key
reads as None; a key holding the wrong type raises ``TypeError``.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def _wrong_type(key: str, expected: str, value: object) -> TypeError:
    return TypeError(f"'{key}' must be {expected}, got {type(value).__name__}")


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripped.

    Returns None if missing or empty after stripping.
    """
    if key not in table:
        return None
    value = table[key]
    if not isinstance(value, str):
        raise _wrong_type(key, "a string", value)
    s = value.strip()
    return s or None


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    if key not in table:
        return None
    value = table[key]
    if not isinstance(value, bool):
        raise _wrong_type(key, "a boolean", value)
    return value


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    if key not in table:
        return None
    value = as_str_dict(table[key])
    if value is None:
        raise _wrong_type(key, "a table", table[key])
    return value


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Get a list of strings, dropping blank entries."""
    if key not in table:
        return None
    value = table[key]
    if not isinstance(value, list):
        raise _wrong_type(key, "a list of strings", value)
    items = cast(list[object], value)
    out: list[str] = []
    for item in items:
        if not isinstance(item, str):
            raise _wrong_type(key, "a list of strings", item)
        s = item.strip()
        if s:
            out.append(s)
    return out
