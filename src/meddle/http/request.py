"""
=============================================================================
RAW HTTP REQUEST
=============================================================================

The already-parsed request an HTTP engine hands to the pipeline.

Wire-level parsing is the engine's job. By the time a request reaches
``meddle.handle`` it is just data:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   GET /static/app.js?v=3 HTTP/1.1        HTTPRequest(                │
    │   Host: example.com            ─────►      method="GET",             │
    │   Cookie: sid=abc; theme=dark              resource="/static/app.js?v=3",
    │                                            headers={...},            │
    │                                            body=b"",                 │
    │                                          )                           │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

``resource`` is the request target exactly as it appeared on the request
line, still percent-encoded and still carrying its query string. The
``path`` and ``query_string`` properties split it; decoding is left to
URLDecoder.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class HTTPRequest:
    """
    Represents a parsed HTTP request.

    Attributes:
        method:         HTTP method ("GET", "POST", ...)
        resource:       Raw request target, e.g. "/a%20b?x=1"
        headers:        Header name -> value, names as sent by the client
        body:           Raw request body bytes
        client_address: (ip, port) of the peer, when the engine knows it
    """

    method: str = "GET"
    resource: str = "/"
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    client_address: tuple[str, int] = ("", 0)

    @property
    def path(self) -> str:
        """The resource without its query string (still percent-encoded)."""
        return self.resource.partition("?")[0]

    @property
    def query_string(self) -> str:
        """Everything after the first ``?`` in the resource, or ""."""
        return self.resource.partition("?")[2]

    @property
    def user_agent(self) -> str:
        return self.get_header("User-Agent")

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a header value (case-insensitive lookup).

        HTTP header names are case-insensitive (RFC 7230), but engines
        differ in how they store them, so we compare lowercased names
        instead of normalizing the dict.

        Example:
            request.get_header("cookie")   # finds "Cookie: a=1"
        """
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default
