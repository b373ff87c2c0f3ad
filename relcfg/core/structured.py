"""Helpers for safely working with dynamic (untyped) structures.

Release configs arrive as JSON, YAML, TOML or JS literals. These helpers
validate shapes at that boundary and narrow types for static checkers.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


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


def is_obj_list(obj: object) -> TypeGuard[ObjList]:
    return isinstance(obj, list)


def as_obj_list(obj: object) -> ObjList | None:
    if is_obj_list(obj):
        return obj
    return None


def is_str_list(obj: object) -> TypeGuard[list[str]]:
    """Return True if obj is a list whose items are all strings."""
    if not isinstance(obj, list):
        return False
    items = cast(list[object], obj)
    return all(isinstance(item, str) for item in items)


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value from a mapping, stripping whitespace.

    Returns None if missing, not a str, or empty after stripping.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_int(table: Mapping[str, object], key: str) -> int | None:
    value = table.get(key)
    # bool is a subclass of int; never accept it as a number.
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    if not isinstance(value, bool):
        return None
    return value


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))


def get_list(table: Mapping[str, object], key: str) -> ObjList | None:
    return as_obj_list(table.get(key))
