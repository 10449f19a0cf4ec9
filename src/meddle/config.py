"""
=============================================================================
CONFIGURATION
=============================================================================

Process-wide settings for meddle.

Two kinds of values live here:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   CONSTANTS         MEDDLE_VERSION, SERVER_SIGNATURE                 │
    │                     Fixed at import time, read by any unit that      │
    │                     needs them (DefaultHeaders). Never reassigned.   │
    │                                                                      │
    │   MeddleConfig      Startup settings for the bundled CLI / engine.   │
    │                     Priority: CLI flags > environment > defaults.    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import os
import logging
from dataclasses import dataclass
from typing import Final, Optional


MEDDLE_VERSION: Final = "0.0"

SERVER_SIGNATURE: Final = f"Meddle/{MEDDLE_VERSION}"

LOG_FORMATS = ("text", "json")


@dataclass
class MeddleConfig:
    """
    Startup configuration for serving a stack with ``python -m meddle``.

    Development:
        MeddleConfig(port=8000, static_dir="./public", log_level="DEBUG")

    Containers:
        MeddleConfig(host="0.0.0.0", port=80, log_format="json")
    """

    host: str = "127.0.0.1"
    """Interface to bind. "0.0.0.0" listens on every interface."""

    port: int = 8000

    static_dir: Optional[str] = None
    """Root directory for StaticFileServer. Defaults to the working directory."""

    log_level: str = "INFO"

    log_format: str = "text"
    """Access log format: 'text' (Apache-like) or 'json'."""

    access_log: bool = True

    @classmethod
    def from_env(cls) -> "MeddleConfig":
        """
        Create configuration from environment variables.

            MEDDLE_HOST        (default: 127.0.0.1)
            MEDDLE_PORT        (default: 8000)
            MEDDLE_STATIC_DIR  (default: None)
            MEDDLE_LOG_LEVEL   (default: INFO)
            MEDDLE_LOG_FORMAT  (default: text)
        """
        return cls(
            host=os.getenv("MEDDLE_HOST", "127.0.0.1"),
            port=int(os.getenv("MEDDLE_PORT", "8000")),
            static_dir=os.getenv("MEDDLE_STATIC_DIR"),
            log_level=os.getenv("MEDDLE_LOG_LEVEL", "INFO"),
            log_format=os.getenv("MEDDLE_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Fails fast at startup rather than on the first request.

        Raises:
            ValueError: If any setting is out of range.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {self.log_level}")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid log format: {self.log_format}. Must be one of {', '.join(LOG_FORMATS)}."
            )

        if self.static_dir is not None and not os.path.isdir(self.static_dir):
            raise ValueError(f"Static directory does not exist: {self.static_dir}")


def setup_logging(config: MeddleConfig) -> None:
    """Configure root logging and the ``meddle`` logger from ``config``."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("meddle").setLevel(level)
