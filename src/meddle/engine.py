"""
=============================================================================
HTTP ENGINE ADAPTER
=============================================================================

Connects a MiddlewareStack to the standard library's ``http.server``.

The pipeline never sees sockets. This module is the collaborator on the
other side of that line: it parses the wire request, hands the pipeline a
ready-made request/response pair, and writes back whatever response the
stack returned.

    ┌──────────────┐   HTTPRequest    ┌────────────────┐
    │ http.server  │ ───────────────► │ handle(stack,  │
    │ (one thread  │                  │   req, res)    │
    │ per request) │ ◄─────────────── │                │
    └──────────────┘   HTTPResponse   └────────────────┘

The initial response carries the engine's own ``Server`` string, so
DefaultHeaders has something to append to.

Each request is dispatched on its own thread with its own request,
response and frame. Only the stack is shared, and a stack is immutable.

=============================================================================
"""

import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional

from .config import MeddleConfig
from .core.context import MeddleRequest, MeddleResponse
from .core.dispatch import handle
from .core.stack import EMPTY_STACK, MiddlewareStack
from .http.request import HTTPRequest
from .http.response import HTTPResponse
from .http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)


def build_request(handler: BaseHTTPRequestHandler) -> HTTPRequest:
    """Read one parsed request (body included) off a request handler."""
    length = int(handler.headers.get("Content-Length") or 0)
    body = handler.rfile.read(length) if length > 0 else b""
    return HTTPRequest(
        method=handler.command,
        resource=handler.path,
        headers=dict(handler.headers.items()),
        body=body,
        client_address=tuple(handler.client_address[:2]),
    )


class MeddleRequestHandler(BaseHTTPRequestHandler):
    """
    ``http.server`` request handler that dispatches through ``stack``.

    Subclass (or use ``make_server``) to bind a stack:

        class Handler(MeddleRequestHandler):
            stack = middleware(DefaultHeaders, NotFound)
    """

    stack: MiddlewareStack = EMPTY_STACK

    def do_GET(self):
        self._dispatch()

    do_HEAD = do_GET
    do_POST = do_GET
    do_PUT = do_GET
    do_PATCH = do_GET
    do_DELETE = do_GET
    do_OPTIONS = do_GET

    def _dispatch(self):
        request = MeddleRequest(build_request(self))
        response = MeddleResponse(HTTPResponse(headers={"Server": self.version_string()}))

        try:
            request, response = handle(self.stack, request, response)
        except Exception:
            # The dispatch is lost; the connection still gets an answer.
            logger.exception(f"Dispatch failed: {self.command} {self.path}")
            self.send_error(int(HTTPStatus.INTERNAL_SERVER_ERROR))
            return

        self._send(response.res)

    def _send(self, res: HTTPResponse):
        self.send_response_only(int(res.status))

        headers = dict(res.headers)
        headers.setdefault("Date", self.date_time_string())
        headers.setdefault("Content-Length", str(len(res.body)))
        for name, value in headers.items():
            self.send_header(name, value)
        self.end_headers()

        if self.command != "HEAD":
            self.wfile.write(res.body)

    def log_message(self, format, *args):
        # Access lines come from AccessLog; keep http.server's own chatter quiet.
        logger.debug(f"{self.address_string()} {format % args}")


def make_server(
    stack: MiddlewareStack,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> ThreadingHTTPServer:
    """Create (but do not start) a threaded server dispatching to ``stack``."""
    handler = type("BoundMeddleRequestHandler", (MeddleRequestHandler,), {"stack": stack})
    server = ThreadingHTTPServer((host, port), handler)
    server.daemon_threads = True
    return server


def serve(stack: MiddlewareStack, config: Optional[MeddleConfig] = None) -> None:
    """
    Serve ``stack`` until interrupted.

    Blocks the calling thread. Ctrl+C shuts down cleanly.
    """
    config = config or MeddleConfig()
    server = make_server(stack, config.host, config.port)
    host, port = server.server_address[:2]
    logger.info(f"Serving {stack!r} on http://{host}:{port}")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
