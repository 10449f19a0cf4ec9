"""
NotFound: the catch-all last unit of a stack.

Whatever reaches it was not handled by anything earlier, so it answers
404 without looking at the request.
"""

from ..core.context import MeddleResponse
from ..core.stack import Middleware
from ..http.response import not_found


class NotFound(Middleware):
    """Always terminate with a fresh, empty 404 response."""

    def __call__(self, request, response):
        return request, MeddleResponse(not_found())
