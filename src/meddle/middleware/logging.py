"""
=============================================================================
ACCESS LOGGING
=============================================================================

AccessLog records one line per request: what was asked for, what came
back and how long the rest of the stack took.

=============================================================================
WHERE IT GOES IN THE STACK
=============================================================================

Everything AccessLog times is *after* it, so put it first (or right after
DefaultHeaders):

    middleware(DefaultHeaders, AccessLog, URLDecoder, CookieCodec, ...)

It always forwards, and it sees the final response on the way back out,
including 400/404 responses produced by units further down.

=============================================================================
REQUEST IDS
=============================================================================

Each request gets a short random id. It is stored in
``request.state["request_id"]`` for later units and, by default, echoed
back as ``X-Request-ID`` so a client can quote it when reporting a problem.

=============================================================================
"""

import time
import json
import uuid
import logging
from dataclasses import dataclass, asdict
from typing import Iterable, Optional

from ..core.dispatch import forward
from ..core.stack import Middleware


# Namespaced logger so access lines can be routed separately:
#   logging.getLogger("meddle.access").addHandler(file_handler)
logger = logging.getLogger("meddle.access")


@dataclass
class RequestLog:
    """Structured log entry for one dispatched request."""

    request_id: str
    method: str
    resource: str
    client_ip: str
    user_agent: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        entry = asdict(self)
        entry["duration_ms"] = round(self.duration_ms, 2)
        return entry

    def to_text(self) -> str:
        """Apache-style access line with the duration appended."""
        return (
            f'{self.client_ip or "-"} - - [{self.timestamp}] '
            f'"{self.method} {self.resource}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


class AccessLog(Middleware):
    """
    Request logging unit.

    Usage:
        middleware(AccessLog)                                # text lines
        middleware(AccessLog(log_format="json"))             # JSON lines
        middleware(AccessLog(skip_paths=["/healthz"]))       # quiet probes
    """

    provides = frozenset({"request_id"})

    def __init__(
        self,
        log_format: str = "text",
        include_request_id: bool = True,
        log_level: int = logging.INFO,
        skip_paths: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            log_format: "text" (human readable) or "json" (for aggregators)
            include_request_id: Echo the id back as X-Request-ID
            log_level: Level access lines are logged at
            skip_paths: Raw paths never logged (health probes are noisy)
        """
        self.log_format = log_format
        self.include_request_id = include_request_id
        self.log_level = log_level
        self.skip_paths = frozenset(skip_paths or ())

    def __call__(self, request, response):
        raw = request.req
        request_id = str(uuid.uuid4())[:8]
        request.state["request_id"] = request_id

        start_time = time.time()
        try:
            request, response = forward(request, response)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed: {raw.method} {raw.resource} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise
        duration_ms = (time.time() - start_time) * 1000

        if self.include_request_id:
            response.res.headers["X-Request-ID"] = request_id

        if raw.path in self.skip_paths:
            return request, response

        entry = RequestLog(
            request_id=request_id,
            method=raw.method,
            resource=raw.resource,
            client_ip=raw.client_address[0],
            user_agent=raw.user_agent or "-",
            status_code=int(response.res.status),
            content_length=len(response.res.body),
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        if self.log_format == "json":
            logger.log(self.log_level, json.dumps(entry.to_dict()))
        else:
            logger.log(self.log_level, entry.to_text())

        return request, response
