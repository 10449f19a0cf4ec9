"""
HTTP data types exchanged between an HTTP engine and the pipeline.

Nothing in this package touches a socket: requests arrive already parsed
and responses leave as plain status/headers/body objects.
"""

from .request import HTTPRequest
from .response import HTTPResponse, bad_request, not_found
from .status_codes import HTTPStatus
from .mime_types import MIME_TYPES, get_mime_type, get_content_type
from .urls import decode_uri, parse_query_string

__all__ = [
    "HTTPRequest",
    "HTTPResponse",
    "HTTPStatus",
    "bad_request",
    "not_found",
    "MIME_TYPES",
    "get_mime_type",
    "get_content_type",
    "decode_uri",
    "parse_query_string",
]
