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

"""Declarative data validation and schema description engine."""

__version__ = "1.0.0"

from .exceptions import (
    AccessError,
    RestRequestError,
    RestSchemaError,
    SchemaDefinitionError,
    ValidationError,
)
from .models.fields import (
    DEFAULT_FIELD_DESCRIPTION,
    Field,
    FieldType,
    ListField,
    ObjectField,
    ScalarField,
)
from .models.schema import DEFAULT_SCHEMA_DESCRIPTION, Schema, ValidatedData
from .models.description_loader import (
    check_description,
    field_from_description,
    load_schema_file,
    load_schema_string,
    schema_from_description,
)
from .rest.rest_request import RequestHandlerOutput, RestRequest

__all__ = [
    "AccessError",
    "DEFAULT_FIELD_DESCRIPTION",
    "DEFAULT_SCHEMA_DESCRIPTION",
    "Field",
    "FieldType",
    "ListField",
    "ObjectField",
    "RequestHandlerOutput",
    "RestRequest",
    "RestRequestError",
    "RestSchemaError",
    "ScalarField",
    "Schema",
    "SchemaDefinitionError",
    "ValidatedData",
    "ValidationError",
    "check_description",
    "field_from_description",
    "load_schema_file",
    "load_schema_string",
    "schema_from_description",
]
