"""
=============================================================================
COOKIE CODEC
=============================================================================

Decodes inbound cookies into request state and, once the rest of the stack
has run, encodes response cookies into a Set-Cookie header.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   IN    Cookie: sid=abc; theme=dark; flag                            │
    │           └──► request.state.cookies = {"sid": "abc",                │
    │                                         "theme": "dark",             │
    │                                         "flag": ""}                  │
    │                                                                      │
    │         ... forward(request, response) ...                           │
    │                                                                      │
    │   OUT   response.state.cookies = {"sid": "xyz", "seen": "1"}         │
    │           └──► Set-Cookie: sid=xyz,seen=1                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Outbound cookies are comma-joined into ONE Set-Cookie header, not one
header per cookie.

=============================================================================
"""

from typing import Dict, Optional

from ..core.dispatch import forward
from ..core.stack import Middleware


def parse_cookie_header(header: Optional[str]) -> Dict[str, str]:
    """
    Parse a ``Cookie`` header value into a dict.

    Pairs are separated by ``"; "`` and split on the first ``=``. A pair
    without ``=`` maps to "". Duplicate names: the last one wins.
    """
    cookies: Dict[str, str] = {}
    if not header:
        return cookies
    for pair in header.split("; "):
        if not pair:
            continue
        name, _, value = pair.partition("=")
        cookies[name] = value
    return cookies


def format_set_cookie(cookies: Dict[str, str]) -> str:
    """Serialize cookies as comma-joined ``name=value`` fragments."""
    return ",".join(f"{name}={value}" for name, value in cookies.items())


class CookieCodec(Middleware):
    """Decode ``Cookie`` on the way in, emit ``Set-Cookie`` on the way out."""

    provides = frozenset({"cookies"})

    def __call__(self, request, response):
        request.state.cookies = parse_cookie_header(request.req.get_header("Cookie"))

        request, response = forward(request, response)

        if "cookies" in response.state:
            response.res.headers["Set-Cookie"] = format_set_cookie(response.state.cookies)
        return request, response
