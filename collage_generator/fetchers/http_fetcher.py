"""HTTP image fetcher built on requests.

The download runs on a helper thread and the caller waits at most `timeout`
seconds for it, so the deadline covers connecting, the headers and the body
in wall-clock time. When it passes, the response socket is shut down and the
fetch fails with a "timeout" reason. There are no retries.
"""
from __future__ import annotations

import socket
import threading
import time
from typing import Any, Callable, List, Optional

import requests

from ..config import DEFAULT_USER_AGENT
from ..errors import FetchError

CHUNK_SIZE = 64 * 1024


def _is_timeout(exc: BaseException) -> bool:
    # streamed reads surface urllib3 read timeouts as ConnectionError
    return isinstance(exc, requests.Timeout) or "timed out" in str(exc).lower()


def _shutdown_socket(resp: Any) -> None:
    """Wake a thread blocked reading `resp`; closing the fd alone does not."""
    conn = getattr(getattr(resp, "raw", None), "_connection", None)
    sock = getattr(conn, "sock", None)
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass


class _Download:
    """State shared between a fetch call and its helper thread."""

    def __init__(self):
        self.data: Optional[bytes] = None
        self.error: Optional[BaseException] = None
        self.aborted = False
        self._resp: Any = None
        self._lock = threading.Lock()

    def attach(self, resp: Any) -> bool:
        with self._lock:
            if self.aborted:
                return False
            self._resp = resp
            return True

    def abort(self) -> None:
        with self._lock:
            self.aborted = True
            resp = self._resp
        if resp is not None:
            _shutdown_socket(resp)
            resp.close()


class RequestsFetcher:
    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        max_bytes: Optional[int] = None,
        http_get: Optional[Callable[..., Any]] = None,
    ):
        self.user_agent = user_agent
        self.max_bytes = max_bytes
        # http_get can be injected to ease testing
        self._get = http_get or requests.get

    def fetch(self, ref: str, timeout: float) -> bytes:
        download = _Download()
        worker = threading.Thread(
            target=self._download,
            args=(ref, timeout, download),
            name="collage-download",
            daemon=True,
        )
        worker.start()
        worker.join(timeout)
        if worker.is_alive():
            download.abort()
            raise FetchError("timeout")
        if download.error is not None:
            raise download.error
        return download.data

    def _download(self, ref: str, timeout: float, download: _Download) -> None:
        try:
            download.data = self._fetch_blocking(ref, timeout, download)
        except Exception as e:
            download.error = e

    def _fetch_blocking(self, ref: str, timeout: float, download: _Download) -> bytes:
        deadline = time.monotonic() + timeout
        try:
            resp = self._get(
                ref,
                headers={"User-Agent": self.user_agent},
                timeout=timeout,
                stream=True,
            )
        except requests.RequestException as e:
            if _is_timeout(e):
                raise FetchError("timeout") from e
            raise FetchError(f"network error: {e}") from e

        try:
            if not download.attach(resp):
                raise FetchError("timeout")
            if not 200 <= resp.status_code < 300:
                raise FetchError(f"status {resp.status_code}", status=resp.status_code)
            data = self._read_body(resp, deadline, download)
        finally:
            resp.close()

        if not data:
            raise FetchError("empty body")
        return data

    def _read_body(self, resp: Any, deadline: float, download: _Download) -> bytes:
        chunks: List[bytes] = []
        total = 0
        if time.monotonic() > deadline:
            raise FetchError("timeout")
        try:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if download.aborted or time.monotonic() > deadline:
                    raise FetchError("timeout")
                if not chunk:
                    continue
                total += len(chunk)
                if self.max_bytes is not None and total > self.max_bytes:
                    raise FetchError("body too large")
                chunks.append(chunk)
        except requests.RequestException as e:
            if download.aborted or _is_timeout(e):
                raise FetchError("timeout") from e
            raise FetchError(f"network error: {e}") from e
        return b"".join(chunks)
