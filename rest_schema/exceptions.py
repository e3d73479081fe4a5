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

"""Custom exceptions for the rest_schema validation engine."""

from typing import Optional


class RestSchemaError(Exception):
    """Base exception for rest_schema related errors."""
    pass


class SchemaDefinitionError(RestSchemaError):
    """Exception raised for an invalid field tree or schema description."""
    pass


class ValidationError(RestSchemaError):
    """Exception raised when a payload does not satisfy a schema.

    ``property`` names the top-level member that failed, when known.
    """

    def __init__(self, message: str, property: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.property = property


class AccessError(RestSchemaError):
    """Exception raised when validated data is read before a successful validation
    or through a key that the schema does not declare."""
    pass


class RestRequestError(RestSchemaError):
    """Exception raised by request handlers, carrying the HTTP status to respond with."""

    def __init__(self, message: str, status: int = 500):
        super().__init__(message)
        self.message = message
        self.status = status
