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

"""Transport-neutral REST request adapter built on two Schemas.

A ``RestRequest`` turns a plain request event (``method``, ``headers``,
``body``) into a response (``status_code``, ``body``, ``headers``):

* the method is checked against the allowed list (405),
* the body is validated against the request schema (400),
* the handler runs; its failures become :class:`RestRequestError` (500 unless
  the handler raised a RestRequestError with its own status),
* the handler result is validated against the response schema (500),
* the validated result is serialized as JSON (200).

Every response carries the default CORS headers and an ``x-req-track-id``.

Usage::

    request_schema = Schema({...})
    response_schema = Schema({...})
    rest_request = RestRequest(
        namespace="The Credit API",
        url_path="/some_url",
        description="Some api url description",
        methods=["POST", "GET"],
        request_schema=request_schema,
        response_schema=response_schema,
        handler=lambda body: processed_data,
    )
    response = rest_request.handle({"method": "POST", "headers": {}, "body": {...}})
"""

from __future__ import annotations

import inspect
import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from ..exceptions import RestRequestError, ValidationError
from ..models.schema import Schema

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "No description available"

DEFAULT_RESPONSE_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PATCH, DELETE",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Credentials": "true",
    "Content-Type": "application/json",
}

TRACK_ID_HEADER = "x-req-track-id"

Handler = Callable[[Any], Any]
LoggerFunc = Callable[[Dict[str, Any], str], None]


def default_logger(data: Dict[str, Any], log_type: str) -> None:
    """Route adapter events to the module logger."""
    message = json.dumps(data, default=str)
    if log_type == "error":
        logger.error(message)
    elif log_type == "warning":
        logger.warning(message)
    elif log_type in ("success", "log"):
        logger.info(message)
    else:
        logger.debug(message)


@dataclass
class RequestHandlerOutput:
    status_code: int
    body: str
    headers: Dict[str, Any] = field(default_factory=dict)

    def json(self) -> Any:
        return json.loads(self.body)

    def to_dict(self) -> Dict[str, Any]:
        return {"status_code": self.status_code, "body": self.body, "headers": dict(self.headers)}


class RestRequest:
    """Validates requests and responses of one REST endpoint against Schemas."""

    def __init__(
        self,
        *,
        namespace: str,
        url_path: str,
        request_schema: Schema,
        response_schema: Schema,
        handler: Handler,
        description: Optional[str] = None,
        methods: Optional[Iterable[str]] = None,
        response_headers: Optional[Mapping[str, Any]] = None,
        logger: Optional[LoggerFunc] = None,
    ):
        """Construct a RestRequest.

        Args:
            namespace: The common namespace (OpenAPI title) of the endpoint.
            url_path: The url path of the endpoint.
            request_schema: Schema the request body must satisfy.
            response_schema: Schema the handler result must satisfy.
            handler: Synchronous callable receiving the request body and returning the
                response payload. Awaitable results are rejected with a 500.
            description: The endpoint description.
            methods: Allowed HTTP methods. Empty allows every method.
            response_headers: Headers overriding or extending the defaults.
            logger: Callable receiving ``(data, type)`` for each lifecycle event,
                where type is one of ``error``, ``success``, ``warning``, ``log``.
        """
        self.namespace = namespace
        self.url_path = url_path
        self.description = description or DEFAULT_DESCRIPTION
        self.methods: List[str] = [m.upper() for m in (methods or [])]
        self.request_schema = request_schema
        self.response_schema = response_schema
        self._handler = handler
        self._log = logger or default_logger
        self.response_headers: Dict[str, Any] = {
            **DEFAULT_RESPONSE_HEADERS,
            **(response_headers or {}),
        }

    def _emit(self, track_id: str, event_type: str, log_type: str, **data: Any) -> None:
        self._log({TRACK_ID_HEADER: track_id, **data, "__type": event_type}, log_type)

    def _handle_request(self, event: Mapping[str, Any], track_id: str) -> Tuple[int, Dict[str, Any]]:
        method = str(event.get("method") or "").upper()
        body = event.get("body")

        if self.methods and method not in self.methods:
            payload = {"message": "Method not allowed"}
            self._emit(track_id, "request_method_validation_error", "error", body=payload)
            return 405, payload

        try:
            self.request_schema.validate_data(body)
        except ValidationError as error:
            payload = {"message": f"Invalid request body. {error}"}
            self._emit(track_id, "request_input_validation_error", "error", body=payload)
            return 400, payload

        try:
            try:
                self._emit(track_id, "request_input", "log", body=body)
                result = self._handler(body)
                if inspect.isawaitable(result):
                    if inspect.iscoroutine(result):
                        result.close()
                    raise RestRequestError("Request handler must be synchronous, got an awaitable result", 500)
            except RestRequestError:
                raise
            except Exception as error:
                raise RestRequestError(str(error), 500) from error

            validated = self.response_schema.validate_data(result)
            self._emit(track_id, "request_response", "log", validated_result=validated)
            return 200, validated
        except RestRequestError as error:
            payload = {"message": error.message}
            self._emit(track_id, "request_handler_error", "error", body=payload)
            return error.status, payload
        except ValidationError as error:
            payload = {"message": f"Invalid response. {error}"}
            self._emit(track_id, "request_response_resolution_error", "error", body=payload)
            return 500, payload

    def handle(self, event: Mapping[str, Any], track_id: Optional[str] = None) -> RequestHandlerOutput:
        """Handle a request event and build the full response, headers included.

        Args:
            event: Mapping with ``method``, ``headers`` and ``body``.
            track_id: Correlation id of the call. A uuid4 is generated when omitted.
        """
        track_id = track_id or str(uuid.uuid4())
        status_code, payload = self._handle_request(event, track_id)
        try:
            body = json.dumps(payload)
        except (TypeError, ValueError) as error:
            payload = {"message": f"Invalid response. {error}"}
            self._emit(track_id, "request_response_resolution_error", "error", body=payload)
            status_code, body = 500, json.dumps(payload)

        return RequestHandlerOutput(
            status_code=status_code,
            body=body,
            headers={
                **self.response_headers,
                **(event.get("headers") or {}),
                TRACK_ID_HEADER: track_id,
            },
        )

    def openapi(self) -> Dict[str, Any]:
        """Generate an OpenAPI 3.0.0 document describing this endpoint.

        GET operations expose the request schema properties as query parameters;
        other methods take the request schema as a JSON request body.
        """
        error_response = {
            "application/json": {
                "schema": {
                    "type": "object",
                    "properties": {"message": {"type": "string"}},
                },
            },
        }
        responses = {
            "200": {
                "description": "Successful response",
                "content": {"application/json": {"schema": self.response_schema.describe_schema()}},
            },
            "400": {"description": "Invalid request body", "content": error_response},
            "405": {"description": "Method not allowed", "content": error_response},
            "500": {"description": "Internal server error", "content": error_response},
        }

        request_description = self.request_schema.describe_schema()
        operations: Dict[str, Any] = {}
        for method in self.methods:
            operation: Dict[str, Any] = {"description": self.description, "responses": responses}
            if method == "GET":
                operation["parameters"] = [
                    {"name": name, "in": "query", "schema": {"type": prop["type"]}}
                    for name, prop in request_description["properties"].items()
                ]
            else:
                operation["requestBody"] = {
                    "content": {"application/json": {"schema": request_description}},
                }
            operations[method.lower()] = operation

        return {
            "openapi": "3.0.0",
            "info": {"title": self.namespace, "version": "1.0.0"},
            "paths": {self.url_path: operations},
        }
