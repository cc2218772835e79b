from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union
import io

from PIL import Image, ImageDraw, ImageOps

from .errors import FetchError, ProcessingError
from .text_overlay import load_font, text_size

TILE_SIZE = 300
PLACEHOLDER_FILL = "#f3f4f6"
PLACEHOLDER_BORDER = "#d1d5db"
PLACEHOLDER_TEXT = "#6b7280"
PLACEHOLDER_FONT_SIZE = 12


@dataclass
class ProcessedTile:
    data: bytes
    error: Optional[str] = None


def cover_fit(im: Image.Image, width: int, height: int) -> Image.Image:
    """Scale to fill width x height and crop the overflow, centred."""
    return ImageOps.fit(im, (width, height), Image.LANCZOS, centering=(0.5, 0.5))


def encode_png(im: Image.Image) -> bytes:
    buf = io.BytesIO()
    im.save(buf, format="PNG")
    out = buf.getvalue()
    if not out:
        raise RuntimeError("encode resulted in empty bytes")
    return out


def resize_tile_bytes(data: bytes, width: int, height: int) -> bytes:
    try:
        with Image.open(io.BytesIO(data)) as im:
            im.load()
            im = ImageOps.exif_transpose(im)
            im = im.convert("RGBA")
            return encode_png(cover_fit(im, width, height))
    except Exception as e:
        raise ProcessingError(f"decode failed: {e}") from e


def placeholder_tile(width: int, height: int, label: str) -> bytes:
    im = Image.new("RGB", (width, height), PLACEHOLDER_FILL)
    draw = ImageDraw.Draw(im)
    draw.rectangle((0, 0, width - 1, height - 1), outline=PLACEHOLDER_BORDER, width=2)
    font = load_font(PLACEHOLDER_FONT_SIZE)
    left, top, right, bottom = text_size(draw, label, font)
    x = (width - (right - left)) // 2 - left
    y = (height - (bottom - top)) // 2 - top
    draw.text((x, y), label, font=font, fill=PLACEHOLDER_TEXT)
    return encode_png(im)


def process_tile(
    outcome: Union[bytes, FetchError],
    tile_width: int = TILE_SIZE,
    tile_height: int = TILE_SIZE,
    label_index: int = 0,
) -> ProcessedTile:
    """Turn a fetch outcome into a tile of exactly tile_width x tile_height.

    Never raises: failed fetches and undecodable bytes both yield a
    placeholder captioned "Image N" plus the failure reason.
    """
    if isinstance(outcome, FetchError):
        error = str(outcome)
    else:
        try:
            return ProcessedTile(resize_tile_bytes(outcome, tile_width, tile_height))
        except ProcessingError as e:
            error = str(e)
    return ProcessedTile(placeholder_tile(tile_width, tile_height, f"Image {label_index + 1}"), error)
