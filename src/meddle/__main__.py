"""
=============================================================================
MEDDLE CLI ENTRY POINT
=============================================================================

Serve a directory through the standard meddle stack:

    python -m meddle                          # serve the working directory
    python -m meddle --static ./public        # serve ./public
    python -m meddle --port 3000 --host 0.0.0.0
    python -m meddle --log-format json        # JSON access lines

The stack that gets served:

    DefaultHeaders ─► AccessLog ─► URLDecoder ─► CookieCodec ─►
        BodyDecoder ─► StaticFileServer(static) ─► NotFound

Environment variables (MEDDLE_HOST, MEDDLE_PORT, ...) provide defaults;
flags override them.

=============================================================================
"""

import argparse
import os
import sys
from typing import List, Optional

from .config import MEDDLE_VERSION, MeddleConfig, setup_logging
from .core.stack import MiddlewareStack, middleware
from .engine import serve
from .handlers import NotFound, StaticFileServer
from .middleware import AccessLog, BodyDecoder, CookieCodec, DefaultHeaders, URLDecoder


def build_stack(config: MeddleConfig) -> MiddlewareStack:
    """The default file-serving stack for ``config``."""
    units = [DefaultHeaders]
    if config.access_log:
        units.append(AccessLog(log_format=config.log_format))
    units += [
        URLDecoder,
        CookieCodec,
        BodyDecoder,
        StaticFileServer(config.static_dir or os.getcwd()),
        NotFound,
    ]
    return middleware(*units)


def parse_args(argv: Optional[List[str]] = None) -> MeddleConfig:
    """Parse command-line flags on top of the environment defaults."""
    defaults = MeddleConfig.from_env()

    parser = argparse.ArgumentParser(
        prog="meddle",
        description="Serve static files through a meddle middleware stack",
    )
    parser.add_argument(
        "--host", "-H",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})",
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})",
    )
    parser.add_argument(
        "--static", "-s",
        default=defaults.static_dir,
        help="Directory to serve (default: current directory)",
    )
    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=defaults.log_level.upper(),
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default=defaults.log_format,
        help="Access log format (default: text)",
    )
    parser.add_argument(
        "--no-access-log",
        action="store_true",
        help="Disable per-request access logging",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"meddle {MEDDLE_VERSION}",
    )

    args = parser.parse_args(argv)
    return MeddleConfig(
        host=args.host,
        port=args.port,
        static_dir=args.static,
        log_level=args.log_level,
        log_format=args.log_format,
        access_log=not args.no_access_log,
    )


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_args(argv)
    try:
        config.validate()
    except ValueError as e:
        print(f"meddle: {e}", file=sys.stderr)
        return 2

    setup_logging(config)
    serve(build_stack(config), config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
