from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from ..config import Settings
from ..errors import FetchError
from .base import ImageFetcher
from .file_fetcher import FileFetcher
from .http_fetcher import RequestsFetcher


class RoutingFetcher:
    """Dispatch on URL scheme: http(s) to the network, the rest to disk if allowed."""

    def __init__(self, http: ImageFetcher, local: Optional[ImageFetcher] = None):
        self.http = http
        self.local = local

    def fetch(self, ref: str, timeout: float) -> bytes:
        scheme = urlparse(ref).scheme.lower()
        if scheme in ("http", "https"):
            return self.http.fetch(ref, timeout)
        # single letters are Windows drive names, not schemes
        if self.local is not None and (scheme in ("", "file") or len(scheme) == 1):
            return self.local.fetch(ref, timeout)
        raise FetchError("unsupported URL scheme")


def build_fetcher(settings: Settings) -> RoutingFetcher:
    http = RequestsFetcher(user_agent=settings.user_agent, max_bytes=settings.max_download_bytes)
    local = FileFetcher(max_bytes=settings.max_download_bytes) if settings.allow_local_files else None
    return RoutingFetcher(http, local)
