"""
=============================================================================
MEDDLE
=============================================================================

Rack/Connect style middleware stacks.

Build a stack once, then run each request/response pair through it:

    from meddle import (middleware, handle, MeddleRequest, MeddleResponse,
                        DefaultHeaders, CookieCodec, StaticFileServer, NotFound)

    stack = middleware(DefaultHeaders,
                       CookieCodec,
                       StaticFileServer("./public"),
                       NotFound)

    request, response = handle(stack, MeddleRequest(raw_req), MeddleResponse(raw_res))

Units are called with ``(request, response)``:

    - return forward(request, response)   to continue with the next unit
    - return request, response            to stop and respond now

Units talk to each other through ``request.state`` and ``response.state``.

=============================================================================
"""

from .config import MEDDLE_VERSION, SERVER_SIGNATURE, MeddleConfig, setup_logging
from .http import HTTPRequest, HTTPResponse, HTTPStatus
from .middleware import (
    DefaultHeaders,
    URLDecoder,
    CookieCodec,
    BodyDecoder,
    AccessLog,
)
from .handlers import StaticFileServer, NotFound
from .core import (
    Middleware,
    FunctionMiddleware,
    function_middleware,
    MiddlewareStack,
    EMPTY_STACK,
    middleware,
    MeddleRequest,
    MeddleResponse,
    RequestState,
    ResponseState,
    DispatchFrame,
    set_status,
    forward,
    handle,
)

__version__ = MEDDLE_VERSION

__all__ = [
    # Configuration
    "MEDDLE_VERSION",
    "SERVER_SIGNATURE",
    "MeddleConfig",
    "setup_logging",

    # Dispatch engine
    "Middleware",
    "FunctionMiddleware",
    "function_middleware",
    "MiddlewareStack",
    "EMPTY_STACK",
    "middleware",
    "MeddleRequest",
    "MeddleResponse",
    "RequestState",
    "ResponseState",
    "DispatchFrame",
    "set_status",
    "forward",
    "handle",

    # HTTP data
    "HTTPRequest",
    "HTTPResponse",
    "HTTPStatus",

    # Built-in units
    "DefaultHeaders",
    "URLDecoder",
    "CookieCodec",
    "BodyDecoder",
    "AccessLog",
    "StaticFileServer",
    "NotFound",
]
