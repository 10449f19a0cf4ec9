"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes this package produces or inspects.

    ┌────────┬─────────────────────────────────────────────────────────────┐
    │  200   │ default status of a fresh HTTPResponse                      │
    │  400   │ StaticFileServer - resolved path escapes the served root    │
    │  404   │ NotFound         - nothing earlier in the chain responded   │
    │  500   │ engine           - a handler raised during dispatch         │
    └────────┴─────────────────────────────────────────────────────────────┘

Everything else is set (or left alone) by user handlers as a plain int.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes.

    Because this is an IntEnum, members compare equal to plain ints:

        >>> HTTPStatus.NOT_FOUND == 404
        True
    """

    OK = 200
    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500
