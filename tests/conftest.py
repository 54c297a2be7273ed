"""
Shared pytest fixtures for link-preview tests.
"""

import pytest
import sys
import threading
import time
import importlib.util
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

# Project root for finding the Cloud Function module and shared package
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from shared.config import PreviewConfig


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load the Cloud Function module with a unique name at module load time
_link_preview_module = _load_module_from_path(
    'link_preview_main',
    PROJECT_ROOT / 'link-preview' / 'main.py'
)


# ============================================================================
# Link Preview Function Fixtures
# ============================================================================

@pytest.fixture
def link_preview_module():
    """Returns the loaded link-preview main module."""
    return _link_preview_module


@pytest.fixture
def link_preview():
    """Returns main entry point from link-preview."""
    return _link_preview_module.link_preview


@pytest.fixture
def preview_config():
    """Config with short timeouts and the default mirror."""
    return PreviewConfig(timeout=2.0)


@pytest.fixture(autouse=True)
def default_function_config(monkeypatch):
    """Keep environment overrides from leaking into the entry point."""
    monkeypatch.setattr(_link_preview_module, 'CONFIG', PreviewConfig(timeout=2.0))


@pytest.fixture
def sample_article_html():
    """Returns HTML of a page with full Open Graph metadata."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Morning Prayer | Example Church</title>
        <meta property="og:title" content="Morning Prayer &amp; Reflection">
        <meta property="og:description" content="A short guide to starting the day in prayer.">
        <meta property="og:image" content="/images/prayer.jpg">
        <meta property="og:site_name" content="Example Church">
        <meta name="twitter:title" content="Twitter Title">
        <meta name="description" content="Generic description">
    </head>
    <body>
        <article>
            <h1>Morning Prayer</h1>
            <p>Begin each morning with a few quiet minutes of reflection.</p>
        </article>
    </body>
    </html>
    """


@pytest.fixture
def sample_video_html():
    """Returns HTML of a video page with Twitter player tags only."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Sunday Sermon</title>
        <meta name="twitter:title" content="Sunday Sermon: Hope">
        <meta name="twitter:description" content="Full recording of this week's sermon.">
        <meta name="twitter:image" content="//cdn.example.com/sermon.jpg">
        <meta name="twitter:player" content="https://player.example.com/embed/42">
    </head>
    <body><div id="player"></div></body>
    </html>
    """


@pytest.fixture
def title_only_html():
    """Returns HTML with nothing but a <title> tag, padded past the usable threshold."""
    filler = "<p>" + ("Plain page content without any social tags. " * 10) + "</p>"
    return f"<html><head><title>My Page</title></head><body>{filler}</body></html>"


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, json_data=None, method='POST', data=b''):
            self._json = json_data
            self.method = method
            self.data = data

        def get_json(self, force=False, silent=False):
            return self._json

    return MockRequest


# ============================================================================
# Local HTTP server fixtures (real sockets, no request mocking)
# ============================================================================

class _TrickleHandler(BaseHTTPRequestHandler):
    """Sends a 200 header, then 64 bytes every 50ms until the client hangs up."""

    def do_GET(self):
        self.send_response(200)
        self.send_header('Content-Type', 'text/html')
        self.end_headers()
        try:
            while True:
                self.wfile.write(b'<p>' + b'x' * 56 + b'</p>\n')
                self.wfile.flush()
                time.sleep(0.05)
        except (BrokenPipeError, ConnectionResetError):
            return

    def log_message(self, format, *args):
        pass


@pytest.fixture
def trickle_server_url():
    """URL of a local server whose response body never ends."""
    server = ThreadingHTTPServer(('127.0.0.1', 0), _TrickleHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        yield f"http://{host}:{port}/stream"
    finally:
        server.shutdown()
        server.server_close()
