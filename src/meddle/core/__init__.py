"""
Dispatch engine: handler units, stacks, request/response context and the
forward/handle pair that runs a stack.
"""

from .stack import (
    Middleware,
    FunctionMiddleware,
    function_middleware,
    MiddlewareStack,
    EMPTY_STACK,
    middleware,
)
from .context import (
    MeddleRequest,
    MeddleResponse,
    RequestState,
    ResponseState,
    DispatchFrame,
    set_status,
)
from .dispatch import forward, handle

__all__ = [
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
]
