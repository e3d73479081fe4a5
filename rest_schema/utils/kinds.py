from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Optional


STRING_TYPES = {"string", "str"}
NUMBER_TYPES = {"number", "integer", "int", "float", "double"}
BOOLEAN_TYPES = {"boolean", "bool"}
OBJECT_TYPES = {"object", "dict", "mapping"}
ARRAY_TYPES = {"array", "list"}
NULL_TYPES = {"null", "none"}

ALLOWED_KIND_NAMES = (
    STRING_TYPES | NUMBER_TYPES | BOOLEAN_TYPES | OBJECT_TYPES | ARRAY_TYPES | NULL_TYPES
)


class _Missing:
    """Marker for a member key that is absent from the validated mapping."""

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def normalize_type_name(type_name: Any) -> Optional[str]:
    if type_name is None:
        return None
    if isinstance(type_name, str):
        return type_name.strip().lower()
    return str(type_name).strip().lower()


def canonical_kind(type_name: Optional[str]) -> Optional[str]:
    """Map a normalized type name (or alias) onto one of the six JSON kinds."""
    if not type_name:
        return None
    for canonical, names in (
        ("string", STRING_TYPES),
        ("number", NUMBER_TYPES),
        ("boolean", BOOLEAN_TYPES),
        ("object", OBJECT_TYPES),
        ("array", ARRAY_TYPES),
        ("null", NULL_TYPES),
    ):
        if type_name in names:
            return canonical
    return None


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def kind_of(value: Any) -> str:
    """Return the JSON kind name of a Python value, as used in error messages."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    # bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_array(value):
        return "array"
    if is_mapping(value):
        return "object"
    return type(value).__name__


def is_falsy(value: Any) -> bool:
    """Falsiness of a JSON value.

    Absent, null, false, zero, NaN and the empty string are falsy.
    Empty arrays and empty objects are present values and count as truthy.
    """
    if value is MISSING or value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0 or math.isnan(value)
    if isinstance(value, str):
        return value == ""
    return False
