"""
=============================================================================
MIDDLEWARE UNITS AND STACKS
=============================================================================

Defines the handler unit protocol and the immutable stack of units that a
request is dispatched through.

=============================================================================
CHAIN OF RESPONSIBILITY, CURSOR STYLE
=============================================================================

A stack is an ordered tuple of units. Dispatch walks it with a cursor:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       STACK OF LENGTH 4                              │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   position:   0              1              2              3         │
    │          ┌─────────┐    ┌─────────┐    ┌─────────┐    ┌─────────┐   │
    │   req ──►│ Default │───►│ Cookie  │───►│ Static  │───►│   Not   │   │
    │          │ Headers │    │  Codec  │    │  Files  │    │  Found  │   │
    │          └─────────┘    └────┬────┘    └────┬────┘    └────┬────┘   │
    │                              │              │              │        │
    │                        (after forward   (file found:   (always      │
    │                         returns: emit    terminate)    terminate)   │
    │                         Set-Cookie)                                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Each unit receives ``(request, response)`` and either:

    CONTINUE   return forward(request, response)
    TERMINATE  return request, response        (without calling forward)

There is no third option. Code placed after ``forward`` runs on the way
back out, once everything later in the stack has finished.

=============================================================================
UNIT METADATA
=============================================================================

Every unit carries ``expects`` and ``provides``: the state keys it reads
and writes. Dispatch ignores them today; they document the contract
between units and leave room for ordering by dependency later.

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, FrozenSet, Iterable, Optional, Tuple
import logging


logger = logging.getLogger(__name__)


# Handler is the signature every unit implements:
#     (MeddleRequest, MeddleResponse) -> (MeddleRequest, MeddleResponse)
Handler = Callable[[Any, Any], Tuple[Any, Any]]


class Middleware(ABC):
    """
    Abstract base class for a handler unit.

    Subclasses implement ``__call__`` and may declare the state keys they
    read and write:

        class RequireUser(Middleware):
            expects = frozenset({"cookies"})
            provides = frozenset({"user"})

            def __call__(self, request, response):
                sid = request.state["cookies"].get("sid")
                if sid is None:
                    set_status(response, 401)
                    return request, response         # terminate
                request.state["user"] = load_user(sid)
                return forward(request, response)    # continue

    Units are built once at composition time and shared by every request,
    so ``__call__`` must not mutate the unit itself.
    """

    expects: FrozenSet[str] = frozenset()
    provides: FrozenSet[str] = frozenset()

    @abstractmethod
    def __call__(self, request, response):
        """
        Process one request/response pair.

        Returns:
            The (request, response) pair, either straight from forward()
            or produced here to end the dispatch.
        """

    @property
    def name(self) -> str:
        """Unit name for logging."""
        return self.__class__.__name__

    def __repr__(self) -> str:
        return f"<{self.name}>"


class FunctionMiddleware(Middleware):
    """
    Wraps a plain function as a handler unit.

    Used for quick inline units without writing a class, and by
    ``middleware()`` to wrap bare callables:

        def stamp(request, response):
            response.headers["X-Stamp"] = "1"
            return forward(request, response)

        stack = middleware(stamp, NotFound)
    """

    def __init__(
        self,
        func: Handler,
        expects: Iterable[str] = (),
        provides: Iterable[str] = (),
        name: Optional[str] = None,
    ):
        self._func = func
        self.expects = frozenset(expects)
        self.provides = frozenset(provides)
        self._name = name or getattr(func, "__name__", type(func).__name__)

    def __call__(self, request, response):
        """Delegate to the wrapped function."""
        return self._func(request, response)

    @property
    def name(self) -> str:
        return self._name

    @property
    def func(self) -> Handler:
        return self._func


def function_middleware(
    func: Optional[Handler] = None,
    *,
    expects: Iterable[str] = (),
    provides: Iterable[str] = (),
    name: Optional[str] = None,
):
    """
    Decorator to create a handler unit from a function.

    Works bare or with metadata:

        @function_middleware
        def powered_by(request, response):
            response.headers["X-Powered-By"] = "meddle"
            return forward(request, response)

        @function_middleware(expects=["cookies"], provides=["session"])
        def session(request, response):
            ...
    """
    def decorate(f: Handler) -> FunctionMiddleware:
        return FunctionMiddleware(f, expects=expects, provides=provides, name=name)

    if func is not None:
        return decorate(func)
    return decorate


class MiddlewareStack(tuple):
    """
    An immutable, ordered sequence of handler units.

    Being a tuple, a stack cannot be changed after construction, which is
    what lets one stack be shared by every in-flight request without
    locking. Build one with ``middleware()``.
    """

    __slots__ = ()

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(unit.name for unit in self)

    def __repr__(self) -> str:
        return f"MiddlewareStack({', '.join(self.names)})"


EMPTY_STACK = MiddlewareStack()


def _as_unit(item: Any) -> Middleware:
    if isinstance(item, Middleware):
        return item
    # A unit class stands for its default instance: middleware(NotFound)
    if isinstance(item, type) and issubclass(item, Middleware):
        return item()
    if callable(item):
        return FunctionMiddleware(item)
    raise TypeError(
        f"middleware() expects handler units or callables, got {type(item).__name__}"
    )


def middleware(*units: Any) -> MiddlewareStack:
    """
    Build a MiddlewareStack from units, unit classes and bare functions.

    Order is preserved exactly as given; the first unit runs first.

        stack = middleware(DefaultHeaders,
                           CookieCodec,
                           StaticFileServer("/srv/www"),
                           NotFound)

    Raises:
        TypeError: If an item is neither a unit nor callable.
    """
    stack = MiddlewareStack(_as_unit(item) for item in units)
    logger.debug(f"Built middleware stack: {', '.join(stack.names) or '(empty)'}")
    return stack
