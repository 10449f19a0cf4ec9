"""
=============================================================================
RAW HTTP RESPONSE
=============================================================================

The response object the pipeline hands back to the HTTP engine.

Only three things matter to the engine: the status, the headers and the
body. Serializing them onto the wire is the engine's job, not ours.

    HTTPResponse(
        status=HTTPStatus.OK,
        headers={"Server": "BaseHTTP/0.6 Meddle/0.0",
                 "Content-Type": "text/css; charset=utf-8"},
        body=b"body { margin: 0 }",
    )

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, Union

from .status_codes import HTTPStatus


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    ``status`` is usually an HTTPStatus member, but any int is accepted;
    IntEnum members compare equal to ints so callers never need to care.
    """

    status: int = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def set_body(self, body: Union[str, bytes]) -> "HTTPResponse":
        """Set the body; strings are encoded as UTF-8."""
        if isinstance(body, str):
            self.body = body.encode("utf-8")
        else:
            self.body = body
        return self


# =============================================================================
# CONVENIENCE CONSTRUCTORS
# =============================================================================

def bad_request() -> HTTPResponse:
    """Empty 400 Bad Request."""
    return HTTPResponse(status=HTTPStatus.BAD_REQUEST)


def not_found() -> HTTPResponse:
    """Empty 404 Not Found."""
    return HTTPResponse(status=HTTPStatus.NOT_FOUND)
