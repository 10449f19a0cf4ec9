"""
DefaultHeaders: stamps the meddle signature onto the ``Server`` header.

Belongs near the front of a stack. It depends on nothing, and because it
writes the header before forwarding, every response that keeps the
original raw response carries it:

    Server: BaseHTTP/0.6 Python/3.12             (set by the engine)
    Server: BaseHTTP/0.6 Python/3.12 Meddle/0.0  (after DefaultHeaders)
"""

from ..config import SERVER_SIGNATURE
from ..core.dispatch import forward
from ..core.stack import Middleware


class DefaultHeaders(Middleware):
    """Append a version signature to the ``Server`` header, then forward."""

    def __init__(self, signature: str = SERVER_SIGNATURE):
        self.signature = signature

    def __call__(self, request, response):
        headers = response.res.headers
        current = headers.get("Server", "")
        headers["Server"] = f"{current} {self.signature}" if current else self.signature
        return forward(request, response)
