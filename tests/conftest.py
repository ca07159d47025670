"""Shared fixtures: a fake Gemini upstream and a configured key."""

import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from unittest.mock import Mock, patch

import pytest

from gemini_proxy import config


def make_upstream_response(status_code=200, body=None):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = body if body is not None else {}
    return response


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


@pytest.fixture
def mock_post():
    """Patch the outbound POST; defaults to a 200 with a JSON candidate."""
    with patch("gemini_proxy.upstream.requests.post") as post:
        post.return_value = make_upstream_response(
            200, {"candidates": [{"content": [{"text": '{"a": 1}'}]}]}
        )
        yield post


class _UpstreamHandler(BaseHTTPRequestHandler):
    """Answers every POST with a fixed generateContent-style body."""

    def do_POST(self):
        self.rfile.read(int(self.headers.get("Content-Length", 0)))
        body = json.dumps({"candidates": [{"content": [{"text": "ok"}]}]}).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def local_upstream(monkeypatch):
    """A real HTTP upstream on localhost, so requests/urllib3 run unmocked."""
    server = HTTPServer(("127.0.0.1", 0), _UpstreamHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    monkeypatch.setattr(config, "GEMINI_API_BASE", f"http://127.0.0.1:{server.server_port}/v1beta")
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def dead_upstream(monkeypatch):
    """Points the upstream at a local port nobody listens on."""
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    monkeypatch.setattr(config, "GEMINI_API_BASE", f"http://127.0.0.1:{port}/v1beta")
