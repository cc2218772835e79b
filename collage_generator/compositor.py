"""Assemble the final collage: canvas, text overlays, tiles, footer."""
from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence
import io

from PIL import Image

from .errors import CompositeError
from .image_processing import cover_fit
from .models import CollageRequest, LayoutSlot
from .text_overlay import TextOverlay, description_overlay, footer_overlay, title_overlay

BACKGROUND = (255, 255, 255)


def _paste_overlay(canvas: Image.Image, overlay: TextOverlay) -> None:
    canvas.paste(overlay.image, (0, overlay.top), overlay.image)


def _paste_tile(canvas: Image.Image, tile: bytes, slot: LayoutSlot) -> None:
    with Image.open(io.BytesIO(tile)) as im:
        im = cover_fit(im.convert("RGBA"), slot.width, slot.height)
    canvas.paste(im, (slot.x, slot.y), im)


def build_composite(
    request: CollageRequest,
    tiles: Sequence[bytes],
    slots: Sequence[LayoutSlot],
    quality: int = 90,
    today: Optional[date] = None,
    font_path: Optional[str] = None,
    font_bold_path: Optional[str] = None,
) -> bytes:
    """Compose and JPEG-encode the collage.

    Layering, back to front: white canvas, title, description, tiles in
    index order, footer. Any failure here is fatal and raised as
    CompositeError.
    """
    width, height = request.canvas_width, request.canvas_height
    try:
        canvas = Image.new("RGB", (width, height), BACKGROUND)

        overlays: List[TextOverlay] = []
        if request.title:
            overlays.append(title_overlay(request.title, width, font_bold_path))
        if request.description:
            overlays.append(description_overlay(request.description, width, font_path))
        for overlay in overlays:
            _paste_overlay(canvas, overlay)

        for tile, slot in zip(tiles, slots):
            _paste_tile(canvas, tile, slot)

        _paste_overlay(canvas, footer_overlay(width, height, today, font_path))

        buf = io.BytesIO()
        canvas.save(buf, format="JPEG", quality=quality, optimize=True)
        out = buf.getvalue()
    except MemoryError as e:
        raise CompositeError("out of memory while composing collage") from e
    except (OSError, ValueError) as e:
        raise CompositeError(str(e) or "failed to encode collage") from e
    if not out:
        raise CompositeError("encode resulted in empty bytes")
    return out
