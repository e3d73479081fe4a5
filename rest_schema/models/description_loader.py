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

"""Build field trees from structural descriptions.

This is the reverse of ``describe_schema``: a description document (a dict,
or a YAML/JSON file) is checked against the bundled ``description.json``
JSON Schema and then turned into Field / Schema instances.

Mapping rules:

* ``type: array`` with ``items`` becomes a ListField. Items are loaded as
  required, since every element of a described array must match ``items``.
* ``type: object`` with ``properties`` becomes an ObjectField; a member is
  required when its name is listed in the parent's ``required`` array.
* anything else becomes a ScalarField of that kind (``integer`` loads as
  ``number``).

For any Schema ``s``, ``schema_from_description(s.describe_schema())``
describes identically to ``s``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import jsonschema
from jsonschema.exceptions import SchemaError
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError

from ..exceptions import SchemaDefinitionError
from .fields import Field, FieldType, ListField, ObjectField, ScalarField, parse_field_type
from .parsing.schema_parser import schema_parser
from .schema import Schema

logger = logging.getLogger(__name__)

DESCRIPTION_SCHEMA_FILE = "description.json"

# Schema cache to avoid reloading files
_SCHEMA_CACHE: Dict[str, dict] = {}


def get_schema_path(name: str = DESCRIPTION_SCHEMA_FILE) -> Path:
    """Get the path to a JSON Schema document bundled with the package."""
    schema_dir = Path(__file__).parent.parent / "schema"
    return schema_dir / name


def load_description_schema(name: str = DESCRIPTION_SCHEMA_FILE) -> dict:
    """Load a bundled JSON Schema document.

    Raises:
        FileNotFoundError: If the schema file doesn't exist
        json.JSONDecodeError: If the schema file is invalid JSON
    """
    if name in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[name]

    schema_path = get_schema_path(name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise json.JSONDecodeError(
            f"Invalid JSON in schema file {schema_path}: {e.msg}",
            e.doc,
            e.pos,
        ) from e

    _SCHEMA_CACHE[name] = schema
    return schema


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()


def _pointer(path) -> str:
    return "/" + "/".join(str(p) for p in path) if path else "/"


def validate_description(description: Any) -> None:
    """Check a description document against the bundled description schema.

    Raises:
        SchemaDefinitionError: With the JSON pointer of the offending node.
    """
    try:
        jsonschema.validate(instance=description, schema=load_description_schema())
    except JsonSchemaValidationError as e:
        raise SchemaDefinitionError(
            f"Invalid schema description at {_pointer(e.absolute_path)}: {e.message}"
        ) from e


def check_description(description: Mapping[str, Any]) -> None:
    """Check that an emitted description is itself a valid JSON Schema (Draft 7).

    Raises:
        SchemaDefinitionError: If the description violates the meta-schema.
    """
    try:
        jsonschema.Draft7Validator.check_schema(description)
    except SchemaError as e:
        raise SchemaDefinitionError(
            f"Description is not a valid JSON Schema at {_pointer(e.absolute_path)}: {e.message}"
        ) from e


def _members_from_description(description: Mapping[str, Any], path: str) -> Dict[str, Field]:
    properties = description.get("properties") or {}
    required = description.get("required") or []

    unknown = [name for name in required if name not in properties]
    if unknown:
        raise SchemaDefinitionError(
            f"Invalid schema description at {path or '/'}: required names {unknown} are not declared in properties"
        )

    return {
        name: _build_field(member, name in required, f"{path}/properties/{name}")
        for name, member in properties.items()
    }


def _build_field(description: Mapping[str, Any], required: bool, path: str) -> Field:
    kind = parse_field_type(description["type"])
    text = description.get("description")

    if kind is FieldType.ARRAY and "items" in description:
        return ListField(_build_field(description["items"], True, f"{path}/items"), required, text)

    if kind is FieldType.OBJECT and "properties" in description:
        return ObjectField(_members_from_description(description, path), required, text)

    return ScalarField(kind, required, text)


def field_from_description(description: Mapping[str, Any], required: bool = False) -> Field:
    """Build a Field tree from a structural description."""
    validate_description(description)
    return _build_field(description, required, "")


def schema_from_description(description: Mapping[str, Any]) -> Schema:
    """Build a Schema from the structural description of a root object."""
    validate_description(description)
    if parse_field_type(description["type"]) is not FieldType.OBJECT:
        raise SchemaDefinitionError(
            f"Schema description root must be of type 'object', got '{description['type']}'"
        )
    members = _members_from_description(description, "")
    logger.debug(f"Schema loaded from description with {len(members)} members")
    return Schema(members, description.get("description"))


def load_schema_file(file_path: Union[str, Path]) -> Schema:
    """Load a Schema from a YAML or JSON description file."""
    document = schema_parser.load_document(file_path)
    try:
        return schema_from_description(document)
    except SchemaDefinitionError as exc:
        raise SchemaDefinitionError(f"{exc} (file: {file_path})") from exc


def load_schema_string(content: str) -> Schema:
    """Load a Schema from YAML or JSON description text."""
    return schema_from_description(schema_parser.load_document_from_string(content))
