"""Error taxonomy for collage generation.

Only ValidationError and CompositeError fail a request. FetchError and
ProcessingError stay local to one image and end up in the diagnostics.
"""
from __future__ import annotations

from typing import Optional

TIMEOUT_MESSAGE = "Request timeout - some images took too long to process"
MEMORY_MESSAGE = "Memory limit exceeded - try with fewer images"
GENERIC_MESSAGE = "Failed to generate collage"


class CollageError(Exception):
    """Base class for all collage errors."""


class ValidationError(CollageError):
    pass


class FetchError(CollageError):
    def __init__(self, reason: str, status: Optional[int] = None):
        super().__init__(reason)
        self.reason = reason
        self.status = status


class ProcessingError(CollageError):
    pass


class CompositeError(CollageError):
    pass


def classify_error(exc: BaseException) -> str:
    """Turn a request-level failure into the message shown to the caller."""
    if isinstance(exc, ValidationError):
        return str(exc)
    if isinstance(exc, MemoryError):
        return MEMORY_MESSAGE
    text = str(exc)
    lowered = text.lower()
    if "timeout" in lowered or "timed out" in lowered:
        return TIMEOUT_MESSAGE
    if "memory" in lowered:
        return MEMORY_MESSAGE
    return text or GENERIC_MESSAGE
