"""
Unit tests for StaticFileServer.
"""

import logging
import os
from pathlib import Path

import pytest

from meddle import (
    EMPTY_STACK,
    NotFound,
    StaticFileServer,
    URLDecoder,
    forward,
    handle,
    middleware,
)
from meddle.handlers import path_in_dir


class TestServing:
    """Tests for files that exist under the root."""

    def test_serves_index_html(self, static_root, make_pair):
        stack = middleware(URLDecoder, StaticFileServer(static_root), NotFound)

        _, response = handle(stack, *make_pair("/index.html"))

        assert response.status == 200
        assert response.body == b"<h1>It works</h1>"
        # .html really maps to "test/html"; .htm is the one with text/html
        assert response.headers["Content-Type"] == "test/html; charset=utf-8"

    def test_content_types(self, static_root, make_pair):
        stack = middleware(StaticFileServer(static_root), NotFound)

        _, css = handle(stack, *make_pair("/css/site.css"))
        _, png = handle(stack, *make_pair("/img/logo.png"))
        _, md = handle(stack, *make_pair("/notes.md"))

        assert css.headers["Content-Type"] == "text/css; charset=utf-8"
        assert png.headers["Content-Type"] == "image/png; charset=utf-8"
        assert png.body == b"\x89PNG\r\n\x1a\n"
        assert md.headers["Content-Type"] == "text/plain; charset=utf-8"

    def test_serving_terminates(self, static_root, make_pair):
        calls = []

        def later(request, response):
            calls.append(1)
            return forward(request, response)

        handle(middleware(StaticFileServer(static_root), later), *make_pair("/index.html"))

        assert calls == []

    def test_keeps_existing_response(self, static_root, make_pair):
        """A served file fills in the response it was given."""
        request, response = make_pair("/index.html")

        _, out = handle(middleware(StaticFileServer(static_root)), request, response)

        assert out is response
        assert out.headers["Server"] == "Base/1.0"

    def test_repeated_slashes(self, static_root, make_pair):
        _, response = handle(middleware(StaticFileServer(static_root)), *make_pair("///css//site.css"))

        assert response.body == b"body { margin: 0 }"

    def test_uses_decoded_resource(self, static_root, make_pair):
        stack = middleware(URLDecoder, StaticFileServer(static_root), NotFound)

        _, response = handle(stack, *make_pair("/hello%20world.txt"))

        assert response.status == 200
        assert response.body == b"hi"

    def test_decodes_raw_path_without_url_decoder(self, static_root, make_pair):
        stack = middleware(StaticFileServer(static_root), NotFound)

        _, response = handle(stack, *make_pair("/hello%20world.txt?download=1"))

        assert response.body == b"hi"

    def test_relative_root(self, static_root, make_pair, monkeypatch):
        monkeypatch.chdir(static_root.parent)
        server = StaticFileServer("www")

        assert os.path.isabs(server.root)
        assert os.path.samefile(server.root, static_root)
        _, response = handle(middleware(server), *make_pair("/notes.md"))
        assert response.body == b"# notes"

    def test_read_failure_aborts_dispatch(self, static_root, make_pair, monkeypatch):
        """A file that exists but cannot be read fails the whole dispatch."""
        served = static_root / "index.html"
        read_bytes = Path.read_bytes

        def deny(self):
            if os.path.samefile(self, served):
                raise PermissionError(13, "Permission denied", str(self))
            return read_bytes(self)

        monkeypatch.setattr(Path, "read_bytes", deny)
        calls = []

        def later(request, response):
            calls.append(1)
            return forward(request, response)

        request, response = make_pair("/index.html")
        stack = middleware(StaticFileServer(static_root), later, NotFound)

        with pytest.raises(PermissionError):
            handle(stack, request, response)

        assert calls == []
        assert request.stack is EMPTY_STACK
        assert response.status == 200


class TestForwarding:
    """Tests for requests the server steps aside for."""

    def test_missing_file_reaches_not_found(self, static_root, make_pair):
        stack = middleware(StaticFileServer(static_root), NotFound)

        _, response = handle(stack, *make_pair("/nope.html"))

        assert response.status == 404

    def test_missing_file_as_last_unit(self, static_root, make_pair):
        request, response = make_pair("/nope.html")

        _, out = handle(middleware(StaticFileServer(static_root)), request, response)

        assert out is response
        assert out.status == 200
        assert out.body == b""

    def test_directory_is_not_served(self, static_root, make_pair):
        stack = middleware(StaticFileServer(static_root), NotFound)

        _, response = handle(stack, *make_pair("/css"))

        assert response.status == 404

    def test_resource_without_leading_slash(self, static_root, make_pair):
        request, response = make_pair()
        request.state.resource = "index.html"
        stack = middleware(StaticFileServer(static_root), NotFound)

        _, out = handle(stack, request, response)

        assert out.status == 404

    def test_missing_root_forwards(self, tmp_path, make_pair, caplog):
        caplog.set_level(logging.WARNING)
        server = StaticFileServer(tmp_path / "does-not-exist")

        _, response = handle(middleware(server, NotFound), *make_pair("/index.html"))

        assert response.status == 404
        assert "not a directory" in caplog.text


class TestDirectoryEscape:
    """Tests for path containment."""

    def test_parent_escape_is_rejected(self, static_root, make_pair, caplog):
        caplog.set_level(logging.WARNING)
        stack = middleware(StaticFileServer(static_root), NotFound)

        _, response = handle(stack, *make_pair("/../etc/passwd"))

        assert response.status == 400
        assert "Directory escape" in caplog.text

    def test_encoded_escape_is_rejected(self, static_root, make_pair):
        stack = middleware(URLDecoder, StaticFileServer(static_root), NotFound)

        _, response = handle(stack, *make_pair("/%2E%2E/%2E%2E/etc/passwd"))

        assert response.status == 400

    def test_sibling_with_shared_prefix_is_rejected(self, static_root, make_pair):
        """www/../wwwroot/secret.txt starts with the root's text but is outside it."""
        stack = middleware(StaticFileServer(static_root), NotFound)

        _, response = handle(stack, *make_pair("/../wwwroot/secret.txt"))

        assert response.status == 400
        assert response.body == b""

    def test_root_itself_is_rejected(self, static_root, make_pair):
        stack = middleware(StaticFileServer(static_root), NotFound)

        _, response = handle(stack, *make_pair("/"))

        assert response.status == 400

    def test_escape_returns_fresh_response(self, static_root, make_pair):
        request, response = make_pair("/../x")

        _, out = handle(middleware(StaticFileServer(static_root)), request, response)

        assert out is not response
        assert "Server" not in out.headers

    def test_inner_dotdot_that_stays_inside(self, static_root, make_pair):
        stack = middleware(StaticFileServer(static_root), NotFound)

        _, response = handle(stack, *make_pair("/css/../index.html"))

        assert response.status == 200


class TestPathInDir:
    """Tests for the containment helper."""

    @pytest.mark.parametrize("path, expected", [
        ("/srv/www/index.html", True),
        ("/srv/www/a/b/c", True),
        ("/srv/www", False),
        ("/srv/wwwroot/index.html", False),
        ("/srv", False),
        ("/etc/passwd", False),
    ])
    def test_containment(self, path, expected):
        assert path_in_dir(path.replace("/", os.sep), "/srv/www".replace("/", os.sep)) is expected

    def test_filesystem_root(self):
        assert path_in_dir(os.sep + "etc", os.sep)
