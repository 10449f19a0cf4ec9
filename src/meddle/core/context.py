"""
=============================================================================
REQUEST / RESPONSE CONTEXT
=============================================================================

The wrappers every handler unit receives.

    ┌──────────────────────────────┐      ┌──────────────────────────────┐
    │ MeddleRequest                │      │ MeddleResponse               │
    ├──────────────────────────────┤      ├──────────────────────────────┤
    │ req    raw HTTPRequest       │      │ res    raw HTTPResponse      │
    │ state  RequestState          │      │ state  ResponseState         │
    │ frame  DispatchFrame         │      └──────────────────────────────┘
    │          stack    (active)   │
    │          position (cursor)   │
    └──────────────────────────────┘

=============================================================================
STATE
=============================================================================

State is how units talk to each other. The keys the built-in units use are
real, typed dataclass fields; anything else lands in ``extensions``. Both
are reachable through one mapping interface:

    request.state.cookies              # typed access
    request.state["cookies"]           # same value, mapping access
    request.state["user"] = user       # unknown key -> extensions

A typed field counts as present only once it holds something other than
None, so ``"cookies" in response.state`` means "somebody set cookies".

=============================================================================
DISPATCH FRAMES
=============================================================================

``frame`` is the request's view of the dispatch currently running it. Each
call to ``handle`` creates a brand-new frame, so a nested dispatch over
another stack advances its own cursor and can never move the outer one.

=============================================================================
"""

from collections.abc import MutableMapping
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .stack import EMPTY_STACK, Middleware, MiddlewareStack
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


class _StateMapping(MutableMapping):
    """Mapping access over typed fields plus an ``extensions`` dict."""

    def _typed_fields(self) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(self) if f.name != "extensions")

    def __getitem__(self, key: str) -> Any:
        if key in self._typed_fields():
            value = getattr(self, key)
            if value is None:
                raise KeyError(key)
            return value
        return self.extensions[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key in self._typed_fields():
            setattr(self, key, value)
        else:
            self.extensions[key] = value

    def __delitem__(self, key: str) -> None:
        if key in self._typed_fields():
            if getattr(self, key) is None:
                raise KeyError(key)
            setattr(self, key, None)
        else:
            del self.extensions[key]

    def __iter__(self) -> Iterator[str]:
        for name in self._typed_fields():
            if getattr(self, name) is not None:
                yield name
        yield from self.extensions

    def __len__(self) -> int:
        return sum(1 for _ in self)


@dataclass(eq=False)
class RequestState(_StateMapping):
    """
    Per-request state shared between units.

    Typed fields (None until a unit sets them):
        url_query:  raw query string, seeded from the request target
        url_params: decoded query pairs, in order (URLDecoder)
        resource:   percent-decoded request path (URLDecoder)
        cookies:    inbound cookies (CookieCodec)
        data:       decoded form body (BodyDecoder)
    """

    url_query: Optional[str] = None
    url_params: Optional[List[Tuple[str, str]]] = None
    resource: Optional[str] = None
    cookies: Optional[Dict[str, str]] = None
    data: Optional[Dict[str, str]] = None
    extensions: Dict[str, Any] = field(default_factory=dict)


@dataclass(eq=False)
class ResponseState(_StateMapping):
    """
    Per-response state. ``cookies`` set here are emitted by CookieCodec
    as a Set-Cookie header once the rest of the stack has run.
    """

    cookies: Optional[Dict[str, str]] = None
    extensions: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DispatchFrame:
    """
    One dispatch's progress through one stack.

    Invariant: ``0 <= position <= len(stack)``, and position only grows.
    """

    stack: MiddlewareStack = EMPTY_STACK
    position: int = 0

    @property
    def done(self) -> bool:
        return self.position >= len(self.stack)

    def advance(self) -> Middleware:
        """Return the unit under the cursor and move the cursor past it."""
        unit = self.stack[self.position]
        self.position += 1
        return unit


@dataclass(eq=False)
class MeddleRequest:
    """
    A raw request plus the pipeline's per-request state.

    Created once per inbound request by the HTTP engine. If the raw
    request target carries a query string, it is copied into
    ``state.url_query`` so URLDecoder can parse it.
    """

    req: HTTPRequest
    state: RequestState = field(default_factory=RequestState)
    frame: DispatchFrame = field(default_factory=DispatchFrame)

    def __post_init__(self):
        query = getattr(self.req, "query_string", "")
        if query and self.state.url_query is None:
            self.state.url_query = query

    @property
    def stack(self) -> MiddlewareStack:
        """The stack currently dispatching this request."""
        return self.frame.stack

    @property
    def stack_pos(self) -> int:
        """Cursor into ``stack``: how many units have been entered."""
        return self.frame.position


@dataclass(eq=False)
class MeddleResponse:
    """A raw response plus the pipeline's per-response state."""

    res: HTTPResponse
    state: ResponseState = field(default_factory=ResponseState)

    @property
    def status(self) -> int:
        return self.res.status

    @property
    def headers(self) -> Dict[str, str]:
        return self.res.headers

    @property
    def body(self) -> bytes:
        return self.res.body


def set_status(response: MeddleResponse, status: int) -> None:
    """Set the status code of the wrapped raw response."""
    response.res.status = status
