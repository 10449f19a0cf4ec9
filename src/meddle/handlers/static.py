"""
=============================================================================
STATIC FILE SERVER
=============================================================================

Serves files from one root directory, or steps aside for the next unit.

=============================================================================
FLOW
=============================================================================

    Request: GET /css/site.css        root: /srv/www

    1. Take the decoded resource, strip the leading slashes   "css/site.css"
    2. Join with root and normalize                 "/srv/www/css/site.css"
    3. Containment: still under /srv/www?     no ──► 400 Bad Request (END)
    4. Is it a regular file?                  no ──► forward (NotFound etc.)
    5. Set Content-Type, read the whole file into the body        (END)

A served file always ends the dispatch. A missing file never does, which
is what lets StaticFileServer sit in front of application units:

    middleware(StaticFileServer("/srv/www"), app, NotFound)

=============================================================================
SECURITY: DIRECTORY ESCAPE
=============================================================================

    GET /../etc/passwd   ──►  normpath("/srv/www/../etc/passwd")
                         ──►  "/etc/passwd"            not under root: 400

The check is textual (normpath, no symlink resolution). A path only counts
as inside the root if the root is followed by a path separator, so a
sibling such as "/srv/wwwroot/x" is rejected even though it starts with
the characters "/srv/www".

=============================================================================
MEMORY
=============================================================================

Files are read whole, so memory per request grows with file size. A file
that vanishes or becomes unreadable between the existence check and the
read raises out of the dispatch; no fallback response is made up.

=============================================================================
"""

import os
import re
import logging
from pathlib import Path
from typing import Union

from ..core.context import MeddleResponse
from ..core.dispatch import forward
from ..core.stack import Middleware
from ..http.mime_types import get_content_type
from ..http.response import bad_request
from ..http.urls import decode_uri


logger = logging.getLogger(__name__)


# Leading run of slashes, then the relative path we care about.
RESOURCE_PATTERN = re.compile(r"^/+(.*)$", re.DOTALL)


def path_in_dir(path: str, directory: str) -> bool:
    """
    True if ``path`` lies strictly below ``directory``.

    Both arguments must already be normalized absolute paths. The
    directory itself is not "in" the directory.
    """
    if len(path) <= len(directory) or not path.startswith(directory):
        return False
    return directory.endswith(os.sep) or path[len(directory)] == os.sep


class StaticFileServer(Middleware):
    """
    Serve files found under ``root``; forward everything else.

    Usage:
        stack = middleware(URLDecoder, StaticFileServer("./public"), NotFound)
    """

    expects = frozenset({"resource"})

    def __init__(self, root: Union[str, Path]):
        """
        Args:
            root: Directory to serve. Made absolute and normalized here,
                  so relative roots are relative to the working directory
                  at construction time.
        """
        self.root = os.path.normpath(os.path.abspath(str(root)))
        if not os.path.isdir(self.root):
            logger.warning(f"Static root is not a directory: {self.root}")

    def __call__(self, request, response):
        resource = request.state.resource
        if resource is None:
            # No URLDecoder upstream; decode the raw path ourselves.
            resource = decode_uri(request.req.path)

        match = RESOURCE_PATTERN.match(resource)
        if match is None:
            return forward(request, response)

        path = os.path.normpath(os.path.join(self.root, match.group(1)))

        if not path_in_dir(path, self.root):
            logger.warning(f"Directory escape attempt: {resource!r} -> {path}")
            return request, MeddleResponse(bad_request())

        if not os.path.isfile(path):
            return forward(request, response)

        response.res.headers["Content-Type"] = get_content_type(path)
        response.res.body = Path(path).read_bytes()
        logger.debug(f"Served {path} ({len(response.res.body)} bytes)")
        return request, response

    def __repr__(self) -> str:
        return f"<StaticFileServer root={self.root!r}>"
