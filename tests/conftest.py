"""
pytest configuration and fixtures.
"""

from typing import Callable, Dict, Optional, Tuple
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from meddle import HTTPRequest, HTTPResponse, MeddleRequest, MeddleResponse


Pair = Tuple[MeddleRequest, MeddleResponse]


@pytest.fixture
def make_pair() -> Callable[..., Pair]:
    """Factory for a fresh (MeddleRequest, MeddleResponse) pair."""
    def factory(
        resource: str = "/",
        headers: Optional[Dict[str, str]] = None,
        body: bytes = b"",
        method: str = "GET",
        server: Optional[str] = "Base/1.0",
    ) -> Pair:
        raw_request = HTTPRequest(
            method=method,
            resource=resource,
            headers=dict(headers or {}),
            body=body,
            client_address=("127.0.0.1", 54321),
        )
        raw_response = HTTPResponse()
        if server is not None:
            raw_response.headers["Server"] = server
        return MeddleRequest(raw_request), MeddleResponse(raw_response)

    return factory


@pytest.fixture
def static_root(tmp_path: Path) -> Path:
    """
    A served directory plus a sibling that shares its name as a prefix:

        tmp/www/index.html
        tmp/www/css/site.css
        tmp/www/img/logo.png
        tmp/www/notes.md
        tmp/www/hello world.txt
        tmp/wwwroot/secret.txt
    """
    root = tmp_path / "www"
    (root / "css").mkdir(parents=True)
    (root / "img").mkdir()
    (root / "index.html").write_text("<h1>It works</h1>")
    (root / "css" / "site.css").write_text("body { margin: 0 }")
    (root / "img" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "notes.md").write_text("# notes")
    (root / "hello world.txt").write_text("hi")

    sibling = tmp_path / "wwwroot"
    sibling.mkdir()
    (sibling / "secret.txt").write_text("top secret")

    return root
