"""
=============================================================================
DECODING MIDDLEWARE
=============================================================================

Units that turn raw, encoded request data into usable state.

    URLDecoder
        state.url_query  "foo=hello%20world&bar=fun"
            ─────► state.url_params  [("foo", "hello world"), ("bar", "fun")]
        raw path         "/docs/read%20me.txt"
            ─────► state.resource    "/docs/read me.txt"

    BodyDecoder
        raw body         b"name=Ada&lang=en"
            ─────► state.data        {"name": "Ada", "lang": "en"}

Both always forward. Input that does not look encoded (no ``=``) is
simply left undecoded; neither unit ever rejects a request.

=============================================================================
"""

from ..core.dispatch import forward
from ..core.stack import Middleware
from ..http.urls import decode_uri, parse_query_string


class URLDecoder(Middleware):
    """
    Decode the query string and the request path into state.

    Put it early in the stack: StaticFileServer and most user units read
    ``state.resource``.
    """

    expects = frozenset({"url_query"})
    provides = frozenset({"url_params", "resource"})

    def __call__(self, request, response):
        state = request.state
        if "=" in (state.url_query or ""):
            state.url_params = parse_query_string(state.url_query)
        state.resource = decode_uri(request.req.path)
        return forward(request, response)


class BodyDecoder(Middleware):
    """
    Decode a form-encoded request body into ``state.data``.

    Repeated keys keep their last value. Bodies that are not UTF-8 are
    decoded with replacement characters rather than rejected.
    """

    provides = frozenset({"data"})

    def __call__(self, request, response):
        body = request.req.body
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        if "=" in body:
            request.state.data = dict(parse_query_string(body))
        return forward(request, response)
