"""
=============================================================================
BUILT-IN MIDDLEWARE
=============================================================================

Units that decorate the request or response and then forward.

DefaultHeaders:
    Appends the meddle version signature to the Server header.

URLDecoder:
    Decodes the request path and query string into state.

CookieCodec:
    Parses the Cookie header into state; emits Set-Cookie on the way out.

BodyDecoder:
    Parses a form-encoded body into state.

AccessLog:
    Logs every request with timing, status and a request id.

Units that end a dispatch (StaticFileServer, NotFound) live in
``meddle.handlers``.

=============================================================================
"""

from .headers import DefaultHeaders
from .decoders import URLDecoder, BodyDecoder
from .cookies import CookieCodec, parse_cookie_header, format_set_cookie
from .logging import AccessLog, RequestLog

__all__ = [
    "DefaultHeaders",
    "URLDecoder",
    "BodyDecoder",
    "CookieCodec",
    "parse_cookie_header",
    "format_set_cookie",
    "AccessLog",
    "RequestLog",
]
