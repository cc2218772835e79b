"""Request, task and result types passed between pipeline stages."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from .errors import ValidationError

MAX_IMAGES = 10
DEFAULT_WIDTH = 1200
DEFAULT_HEIGHT = 800


@dataclass(frozen=True)
class CollageRequest:
    image_refs: List[str]
    title: Optional[str] = None
    description: Optional[str] = None
    canvas_width: int = DEFAULT_WIDTH
    canvas_height: int = DEFAULT_HEIGHT
    layout_hint: str = "grid"

    @classmethod
    def from_dict(
        cls,
        payload: Mapping[str, Any],
        default_width: int = DEFAULT_WIDTH,
        default_height: int = DEFAULT_HEIGHT,
    ) -> "CollageRequest":
        """Parse the caller's camelCase payload.

        Count limits are checked by the orchestrator; this only rejects
        values of the wrong shape.
        """
        urls = payload.get("imageUrls")
        if not isinstance(urls, list) or not urls:
            raise ValidationError("No images provided")
        for idx, url in enumerate(urls):
            if not isinstance(url, str) or not url.strip():
                raise ValidationError(f"Image URL at index {idx} must be a non-empty string")

        title = payload.get("title")
        description = payload.get("description")
        if title is not None and not isinstance(title, str):
            raise ValidationError("title must be a string")
        if description is not None and not isinstance(description, str):
            raise ValidationError("description must be a string")

        layout = payload.get("layout") or "grid"
        if not isinstance(layout, str):
            raise ValidationError("layout must be a string")

        return cls(
            image_refs=[u.strip() for u in urls],
            title=title,
            description=description,
            canvas_width=_dimension(payload, "width", default_width),
            canvas_height=_dimension(payload, "height", default_height),
            layout_hint=layout,
        )


def _dimension(payload: Mapping[str, Any], name: str, default: int) -> int:
    value = payload.get(name)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{name} must be a positive integer")
    return value


@dataclass(frozen=True)
class LayoutSlot:
    index: int
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self):
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass
class ImageTask:
    index: int
    ref: str
    tile: bytes
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class FailedImage:
    index: int
    error: str


@dataclass
class CollageResult:
    image_bytes: bytes
    processed_count: int
    failed_count: int
    width: int
    height: int
    failures: List[FailedImage] = field(default_factory=list)
    mime_type: str = "image/jpeg"

    @property
    def succeeded_count(self) -> int:
        return self.processed_count - self.failed_count
