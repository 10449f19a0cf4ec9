"""
=============================================================================
DISPATCH
=============================================================================

Two functions run a request through a stack:

    handle(stack, req, res)   entry point; runs a whole stack
    forward(req, res)         advance primitive; runs the next unit

=============================================================================
HOW A DISPATCH UNFOLDS
=============================================================================

``handle`` runs only the first unit. Every unit that wants to continue
calls ``forward``, which runs the next one, so a fully-forwarding stack is
one nested call per unit:

    handle(stack, req, res)
      └─ forward ─► unit[0]
                      └─ forward ─► unit[1]
                                      └─ forward ─► unit[2]   (terminates)
                                      ◄──────────── (req, res)
                      ◄──────────── (req, res)
      ◄──────────── (req, res)

Calling ``forward`` past the last unit is a no-op that hands the pair
straight back, so the last unit may forward without checking bounds.

=============================================================================
RE-ENTRANCY
=============================================================================

A unit may itself call ``handle`` with a different stack, e.g. to delegate
to a sub-pipeline. Each ``handle`` call gives the request a fresh
DispatchFrame and switches the request back to the caller's frame when it
returns, normally or by exception. The outer frame is never written by the
inner dispatch, so the outer cursor is exactly where it was.

=============================================================================
FAULTS
=============================================================================

Nothing here catches handler exceptions. A unit that raises aborts the
whole dispatch and the exception propagates to whoever called ``handle``.

=============================================================================
"""

from typing import Iterable, Tuple, Union
import logging

from .context import DispatchFrame, MeddleRequest, MeddleResponse
from .stack import Middleware, MiddlewareStack, middleware


logger = logging.getLogger(__name__)


def forward(
    request: MeddleRequest,
    response: MeddleResponse,
) -> Tuple[MeddleRequest, MeddleResponse]:
    """
    Run the next unit of the active stack.

    If the cursor is already past the last unit, the pair is returned
    unchanged. Otherwise the unit under the cursor is taken, the cursor
    moves past it, and whatever the unit returns is returned.
    """
    frame = request.frame
    if frame.done:
        return request, response

    unit = frame.advance()
    logger.debug(f"Dispatching to {unit.name} ({frame.position}/{len(frame.stack)})")
    return unit(request, response)


def handle(
    stack: Union[MiddlewareStack, Iterable[Middleware]],
    request: MeddleRequest,
    response: MeddleResponse,
) -> Tuple[MeddleRequest, MeddleResponse]:
    """
    Run ``request`` and ``response`` through every unit of ``stack``.

    Safe to call from inside a running unit: the caller's stack and cursor
    are back in place when this returns.

    Args:
        stack: A MiddlewareStack (anything else is passed to middleware())
        request: The request to dispatch
        response: The initial response

    Returns:
        The (request, response) pair produced by the stack. The response
        may be a different object than the one passed in.
    """
    if not isinstance(stack, MiddlewareStack):
        stack = middleware(*stack)

    outer = request.frame
    request.frame = DispatchFrame(stack)
    try:
        return forward(request, response)
    finally:
        request.frame = outer
