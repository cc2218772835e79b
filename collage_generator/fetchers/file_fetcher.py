from __future__ import annotations

import os
from typing import Optional
from urllib.parse import unquote, urlparse

from ..errors import FetchError


def local_path(ref: str) -> str:
    """Filesystem path for a plain path or a file:// URL."""
    if ref.startswith("file://"):
        return unquote(urlparse(ref).path)
    return ref


class FileFetcher:
    """Reads images from the local filesystem (CLI inputs)."""

    def __init__(self, max_bytes: Optional[int] = None):
        self.max_bytes = max_bytes

    def fetch(self, ref: str, timeout: float) -> bytes:
        path = local_path(ref)
        try:
            size = os.path.getsize(path)
            if self.max_bytes is not None and size > self.max_bytes:
                raise FetchError("body too large")
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise FetchError(f"file error: {e.strerror or e}") from e
        if not data:
            raise FetchError("empty body")
        return data
