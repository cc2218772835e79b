import io
import os
import sys
import threading
import time

import pytest
from PIL import Image

# Ensure project root is importable during tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def image_bytes(color=(255, 0, 0), size=(64, 64), fmt="JPEG"):
    buf = io.BytesIO()
    Image.new("RGB", size, color=color).save(buf, format=fmt)
    return buf.getvalue()


class FakeFetcher:
    """In-memory fetcher: ref -> bytes or exception, with optional per-ref delay."""

    def __init__(self, responses=None, delays=None, default=None):
        self.responses = dict(responses or {})
        self.delays = dict(delays or {})
        self.default = default
        self.calls = []
        self._lock = threading.Lock()

    def fetch(self, ref, timeout):
        with self._lock:
            self.calls.append((ref, timeout))
        if ref in self.delays:
            time.sleep(self.delays[ref])
        value = self.responses.get(ref, self.default)
        if callable(value):
            value = value()
        if isinstance(value, BaseException):
            raise value
        if value is None:
            raise AssertionError(f"unexpected fetch of {ref}")
        return value


@pytest.fixture
def make_image():
    return image_bytes


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


@pytest.fixture(autouse=True)
def quiet_debug(monkeypatch):
    # Keep debug output off unless a test turns it on
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("COLLAGE_DEBUG", raising=False)
    yield
