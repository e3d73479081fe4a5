# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Field definitions: the building blocks of a Schema.

A field tree is built once, statically, and then walked for every payload.
Each node answers two questions: does a value satisfy me (``validate``), and
what do I look like as a JSON-Schema fragment (``describe_schema``).

``validate`` returns ``None`` on success or a human-readable message on failure.
Nested failures are prefixed with their location as the recursion unwinds, so a
deep failure reads outward-in::

    In property address: In property street: Expected string, got number. ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..exceptions import SchemaDefinitionError
from ..utils.kinds import (
    MISSING,
    canonical_kind,
    is_array,
    is_falsy,
    is_mapping,
    kind_of,
    normalize_type_name,
)


DEFAULT_FIELD_DESCRIPTION = "No description available"


class FieldType(str, Enum):
    """Valid kinds for scalar fields, aligned with the JSON data types."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"


def parse_field_type(kind: Union[FieldType, str]) -> FieldType:
    if isinstance(kind, FieldType):
        return kind
    canonical = canonical_kind(normalize_type_name(kind))
    if canonical is None:
        raise SchemaDefinitionError(
            f"Unsupported field type '{kind}'. Valid types: {[t.value for t in FieldType]}"
        )
    return FieldType(canonical)


class Field(ABC):
    """Abstract field: a single typed validation rule, optionally nested."""

    required: bool
    description: str

    @abstractmethod
    def validate(self, value: Any = MISSING) -> Optional[str]:
        """Validate a value against the field definition.

        Returns an error message if validation fails, or None if successful.
        """

    @abstractmethod
    def describe_schema(self) -> Dict[str, Any]:
        """Return the JSON-Schema fragment for this field."""

    def _bypassed(self, value: Any) -> bool:
        # Optional fields accept any falsy value without checking its type.
        return not self.required and is_falsy(value)

    def _normalize_common(self) -> None:
        if self.description is None or self.description == "":
            object.__setattr__(self, "description", DEFAULT_FIELD_DESCRIPTION)
        elif not isinstance(self.description, str):
            raise SchemaDefinitionError(
                f"Field description must be a string, got {type(self.description).__name__}"
            )
        object.__setattr__(self, "required", bool(self.required))


def _ensure_field(candidate: Any, where: str) -> Field:
    if not isinstance(candidate, Field):
        raise SchemaDefinitionError(
            f"{where} must be a Field instance, got {type(candidate).__name__}"
        )
    return candidate


@dataclass(frozen=True)
class ScalarField(Field):
    """Checks that a value's kind matches the expected kind."""

    kind: FieldType
    required: bool = False
    description: str = DEFAULT_FIELD_DESCRIPTION

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", parse_field_type(self.kind))
        self._normalize_common()

    def validate(self, value: Any = MISSING) -> Optional[str]:
        if self._bypassed(value):
            return None
        actual = kind_of(value)
        if actual != self.kind.value:
            return f"Expected {self.kind.value}, got {actual}. Field description: {self.description}"
        return None

    def describe_schema(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "description": self.description}


@dataclass(frozen=True)
class ListField(Field):
    """Checks that a value is a list whose every element satisfies ``item_field``."""

    item_field: Field
    required: bool = False
    description: str = DEFAULT_FIELD_DESCRIPTION

    def __post_init__(self) -> None:
        _ensure_field(self.item_field, "List item field")
        self._normalize_common()

    def validate(self, value: Any = MISSING) -> Optional[str]:
        if self._bypassed(value):
            return None
        if not is_array(value):
            return f"Expected a list, got {kind_of(value)}. Field description: {self.description}"
        for item in value:
            error = self.item_field.validate(item)
            if error:
                return f"In list: {error}. List description: {self.description}"
        return None

    def describe_schema(self) -> Dict[str, Any]:
        return {
            "type": "array",
            "items": self.item_field.describe_schema(),
            "description": self.description,
        }


def validate_members(members: Mapping[str, Field], value: Mapping[str, Any]) -> Optional[Tuple[str, str]]:
    """Walk ``members`` in declaration order and stop at the first failure.

    Returns ``(key, error)`` for the first failing member, or None.
    Keys present in ``value`` but not declared are ignored.
    """
    for key, member in members.items():
        error = member.validate(value.get(key, MISSING))
        if error:
            return key, error
    return None


def describe_members(members: Mapping[str, Field], description: str) -> Dict[str, Any]:
    properties: Dict[str, Any] = {}
    required: List[str] = []

    for key, member in members.items():
        properties[key] = member.describe_schema()
        if member.required:
            required.append(key)

    return {
        "type": "object",
        "properties": properties,
        "required": required,
        "description": description,
    }


def freeze_members(members: Optional[Mapping[str, Any]], where: str) -> Mapping[str, Field]:
    if members is None:
        members = {}
    if not is_mapping(members):
        raise SchemaDefinitionError(
            f"{where} members must be a mapping of names to fields, got {type(members).__name__}"
        )
    frozen: Dict[str, Field] = {}
    for key, member in members.items():
        if not isinstance(key, str):
            raise SchemaDefinitionError(f"{where} member names must be strings, got {key!r}")
        frozen[key] = _ensure_field(member, f"{where} member '{key}'")
    return MappingProxyType(frozen)


def shape_error(value: Any, description: str) -> str:
    return f"Expected an key-value object, got {kind_of(value)}. Field description: {description}"


@dataclass(frozen=True)
class ObjectField(Field):
    """Checks that a value is a mapping and each declared member satisfies its field."""

    members: Mapping[str, Field]
    required: bool = False
    description: str = DEFAULT_FIELD_DESCRIPTION

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", freeze_members(self.members, "Object field"))
        self._normalize_common()

    def __hash__(self) -> int:
        # mappingproxy is unhashable
        return hash((tuple(self.members.items()), self.required, self.description))

    def validate(self, value: Any = MISSING) -> Optional[str]:
        if self._bypassed(value):
            return None
        if not is_mapping(value):
            return shape_error(value, self.description)
        failure = validate_members(self.members, value)
        if failure:
            key, error = failure
            return f"In property {key}: {error}. Object description: {self.description}"
        return None

    def describe_schema(self) -> Dict[str, Any]:
        return describe_members(self.members, self.description)
