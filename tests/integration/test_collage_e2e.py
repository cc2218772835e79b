import base64
import io
import threading
import time
from datetime import date
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
from PIL import Image

from collage_generator import CollageOrchestrator, CollageRequest, Settings, handle_json_request
from collage_generator.errors import FetchError
from collage_generator.fetchers import RequestsFetcher, build_fetcher


def _png(color):
    buf = io.BytesIO()
    Image.new("RGB", (240, 180), color).save(buf, format="PNG")
    return buf.getvalue()


PNG_RED = _png((220, 20, 20))
PNG_BLUE = _png((20, 20, 220))


class Handler(BaseHTTPRequestHandler):
    seen_agents = []

    def do_GET(self):
        Handler.seen_agents.append(self.headers.get("User-Agent"))
        if self.path == "/red.png":
            self._send(200, PNG_RED)
        elif self.path == "/blue.png":
            self._send(200, PNG_BLUE)
        elif self.path == "/slow.png":
            time.sleep(2)
            self._send(200, PNG_RED)
        elif self.path == "/drip.png":
            self._drip(PNG_RED[:8])
        elif self.path == "/empty.png":
            self._send(200, b"")
        else:
            self._send(404, b"not found")

    def _send(self, status, body):
        try:
            self.send_response(status)
            self.send_header("Content-Type", "image/png")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def _drip(self, body):
        try:
            self.send_response(200)
            self.send_header("Content-Type", "image/png")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            for i in range(len(body)):
                self.wfile.write(body[i : i + 1])
                self.wfile.flush()
                time.sleep(0.5)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server(monkeypatch):
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "http_proxy", "https_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    Handler.seen_agents = []
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    httpd.daemon_threads = True
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()


@pytest.fixture
def orchestrator():
    settings = Settings(fetch_timeout=0.5)
    return CollageOrchestrator(
        fetcher=build_fetcher(settings),
        settings=settings,
        quiet=True,
        today=lambda: date(2025, 1, 5),
    )


def test_collage_over_http(server, orchestrator):
    urls = [f"{server}/red.png", f"{server}/slow.png", f"{server}/missing.png", f"{server}/empty.png", f"{server}/blue.png"]
    result = orchestrator.generate(CollageRequest(image_refs=urls, title="Live"))
    assert result.processed_count == 5
    assert result.failed_count == 3
    errors = {f.index: f.error for f in result.failures}
    assert errors == {1: "timeout", 2: "status 404", 3: "empty body"}
    im = Image.open(io.BytesIO(result.image_bytes))
    assert im.format == "JPEG"
    assert im.size == (1200, 800)
    assert set(Handler.seen_agents) == {orchestrator.settings.user_agent}


def test_json_request_over_http(server, orchestrator):
    resp = handle_json_request(
        {"imageUrls": [f"{server}/red.png", f"{server}/slow.png"], "width": 800, "height": 600},
        orchestrator=orchestrator,
    )
    assert resp["success"] is True
    data = resp["data"]
    assert data["processedImages"] == 2
    assert data["failedImageErrors"] == [{"index": 1, "error": "timeout"}]
    b64 = data["imageUrl"].split(",", 1)[1]
    assert Image.open(io.BytesIO(base64.b64decode(b64))).size == (800, 600)


def test_trickling_body_is_cut_off_at_deadline(server):
    start = time.monotonic()
    with pytest.raises(FetchError, match="^timeout$"):
        RequestsFetcher().fetch(f"{server}/drip.png", 1.0)
    assert time.monotonic() - start < 1.6


def test_trickling_image_becomes_placeholder_in_time(server, orchestrator):
    start = time.monotonic()
    result = orchestrator.generate(CollageRequest(image_refs=[f"{server}/drip.png", f"{server}/blue.png"]))
    assert time.monotonic() - start < 3
    assert [(f.index, f.error) for f in result.failures] == [(0, "timeout")]
