"""
Handlers: units that can end a dispatch with a final response.

StaticFileServer:
    Serves files from a root directory, with directory-escape protection.
    Forwards when the file does not exist.

NotFound:
    Always answers 404. Put it last.
"""

from .static import StaticFileServer, path_in_dir
from .not_found import NotFound

__all__ = [
    "StaticFileServer",
    "path_in_dir",
    "NotFound",
]
