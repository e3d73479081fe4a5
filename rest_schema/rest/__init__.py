"""REST request adaptation over request/response Schemas."""

from .rest_request import (
    DEFAULT_RESPONSE_HEADERS,
    RequestHandlerOutput,
    RestRequest,
)

__all__ = ["DEFAULT_RESPONSE_HEADERS", "RequestHandlerOutput", "RestRequest"]
