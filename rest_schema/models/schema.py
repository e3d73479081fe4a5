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

"""Schema: the root validation contract for a whole object.

The constructor takes the member field definitions and derives the
structural (JSON-Schema / OpenAPI compatible) description once.

Validation rule:
  * Members are checked in declaration order.
  * The **first** failing member raises :class:`ValidationError`; later
    members are not evaluated.
  * On success the payload is retained for :meth:`Schema.data` (declared
    keys only) and :meth:`Schema.full_data`.

Example::

    user_schema = Schema({
        "name": ScalarField(FieldType.STRING, True),
        "age": ScalarField(FieldType.NUMBER, True),
    })
    user = user_schema.validate(payload).data()
    print(user.name, user["age"])

A Schema instance keeps the last accepted payload, so a single instance must
not be shared by concurrent callers. Use :meth:`Schema.validate_data` instead
when one schema serves interleaved requests.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping as MappingABC
from typing import Any, Dict, Iterator, Mapping, Optional

from ..exceptions import AccessError, ValidationError
from .fields import Field, describe_members, freeze_members, shape_error, validate_members

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_DESCRIPTION = "No schema description available"

_NOT_VALIDATED_MESSAGE = (
    "Must call an error free <Schema>.validate(data) before accessing data. "
    "Either the data is not valid or validate() is not called."
)


class ValidatedData(MappingABC):
    """Read-only view over the payload accepted by the last successful validate.

    Only keys declared by the schema can be read, by item or by attribute.
    Declared members absent from the payload read as None. The view follows
    the schema's state: after ``clear()`` every read raises AccessError.

    Attribute access resolves declared members before the Mapping methods, so a
    member named ``items`` or ``get`` reads its value rather than the method.
    """

    def __init__(self, schema: "Schema"):
        object.__setattr__(self, "_schema", schema)

    def __getattribute__(self, name: str) -> Any:
        if not name.startswith("_"):
            schema = object.__getattribute__(self, "_schema")
            if name in schema.members:
                return object.__getattribute__(self, "__getitem__")(name)
        return object.__getattribute__(self, name)

    def _payload(self) -> Dict[str, Any]:
        return self._schema._require_validated()

    def __getitem__(self, key: str) -> Any:
        if key not in self._schema.members:
            raise AccessError(f"Property {key} does not exist in the schema.")
        return self._payload().get(key)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __setattr__(self, name: str, value: Any) -> None:
        raise AccessError("Validated data is read-only.")

    def __contains__(self, key: object) -> bool:
        self._payload()
        return key in self._schema.members

    def __iter__(self) -> Iterator[str]:
        self._payload()
        return iter(self._schema.members)

    def __len__(self) -> int:
        self._payload()
        return len(self._schema.members)

    def __repr__(self) -> str:
        if not self._schema.is_validated:
            return "ValidatedData(<not validated>)"
        values = {key: self[key] for key in self}
        return f"ValidatedData({values!r})"


class Schema:
    """Root validation contract composed of named fields."""

    def __init__(self, members: Optional[Mapping[str, Field]] = None, description: Optional[str] = None):
        """Construct a Schema.

        Args:
            members: Mapping of member names to field definitions, in declaration order.
            description: The schema description.
        """
        self._members = freeze_members(members, "Schema")
        self._description = description or DEFAULT_SCHEMA_DESCRIPTION
        self._schema = describe_members(self._members, self._description)
        self._last_validated: Optional[Dict[str, Any]] = None
        logger.debug(f"Schema built with members {list(self._members)}")

    @property
    def members(self) -> Mapping[str, Field]:
        return self._members

    @property
    def description(self) -> str:
        return self._description

    @property
    def is_validated(self) -> bool:
        return self._last_validated is not None

    def _check(self, data: Any) -> None:
        if not isinstance(data, MappingABC):
            raise ValidationError(shape_error(data, self._description))
        failure = validate_members(self._members, data)
        if failure:
            key, error = failure
            logger.debug(f"Validation failed at property '{key}'")
            raise ValidationError(f"In property {key}: {error}", property=key)

    def validate(self, data: Any) -> "Schema":
        """Validate ``data`` and retain it for later access.

        A failed validation raises ValidationError and leaves any previously
        retained payload in place.

        Returns:
            The schema itself, so access can be chained.
        """
        self._check(data)
        self._last_validated = dict(data)
        return self

    def validate_data(self, data: Any) -> Dict[str, Any]:
        """Validate ``data`` without touching instance state.

        Returns:
            A shallow copy of the accepted payload.
        """
        self._check(data)
        return dict(data)

    def describe_schema(self) -> Dict[str, Any]:
        """Return the schema as a JSON-Schema / OpenAPI 3 compatible object."""
        return copy.deepcopy(self._schema)

    def _require_validated(self) -> Dict[str, Any]:
        if self._last_validated is None:
            raise AccessError(_NOT_VALIDATED_MESSAGE)
        return self._last_validated

    def data(self) -> ValidatedData:
        """Controlled access to the values accepted by the last ``validate``.

        Raises:
            AccessError: If no validation has succeeded since construction or ``clear()``.
        """
        self._require_validated()
        return ValidatedData(self)

    def full_data(self) -> Dict[str, Any]:
        """Return a shallow copy of the whole payload accepted by the last ``validate``.

        Raises:
            AccessError: If no validation has succeeded since construction or ``clear()``.
        """
        return dict(self._require_validated())

    def clear(self) -> None:
        """Discard the retained payload so the instance can be reused for another one."""
        self._last_validated = None

    def __repr__(self) -> str:
        return f"Schema(members={list(self._members)!r}, description={self._description!r})"
