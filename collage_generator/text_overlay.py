"""Text bands drawn on top of the collage canvas."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

REGULAR_FONTS = ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf", "LiberationSans-Regular.ttf")
BOLD_FONTS = ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf", "LiberationSans-Bold.ttf")
BAND_PADDING = 20
SIDE_PADDING = 10


@dataclass(frozen=True)
class TextStyle:
    font_size: int
    bold: bool = False
    color: str = "#000000"


TITLE_STYLE = TextStyle(font_size=48, bold=True, color="#1f2937")
DESCRIPTION_STYLE = TextStyle(font_size=24, color="#6b7280")
FOOTER_STYLE = TextStyle(font_size=16, color="#9ca3af")

TITLE_TOP = 20
DESCRIPTION_TOP = 80
FOOTER_OFFSET = 60


@dataclass
class TextOverlay:
    image: Image.Image
    top: int


def load_font(size: int, bold: bool = False, path: Optional[str] = None) -> Font:
    """TrueType font for `size`, falling back to Pillow's bundled font."""
    candidates = ((path,) if path else ()) + (BOLD_FONTS if bold else REGULAR_FONTS)
    for name in candidates:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def footer_text(today: Optional[date] = None) -> str:
    d = today or date.today()
    return f"Created on {d:%B} {d.day}, {d.year}"


def text_size(draw: ImageDraw.ImageDraw, text: str, font: Font) -> Tuple[int, int, int, int]:
    return draw.textbbox((0, 0), text, font=font)


def _text_width(draw: ImageDraw.ImageDraw, text: str, font: Font) -> int:
    left, _, right, _ = text_size(draw, text, font)
    return right - left


def fit_text(draw: ImageDraw.ImageDraw, text: str, font: Font, max_width: int) -> str:
    """Return `text`, or its longest prefix plus "..." that fits `max_width`."""
    # no glyph is narrower than one pixel, so longer text can never fit
    if len(text) <= max_width and _text_width(draw, text, font) <= max_width:
        return text

    # binary search over the prefix length keeps this O(log n) measurements
    lo, hi = 0, min(len(text), max_width)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if _text_width(draw, text[:mid].rstrip() + "...", font) <= max_width:
            lo = mid
        else:
            hi = mid - 1
    candidate = text[:lo].rstrip() + "..."
    if _text_width(draw, candidate, font) <= max_width:
        return candidate
    return ""


def render_text(
    text: str,
    area_width: int,
    y: int,
    style: TextStyle,
    font_path: Optional[str] = None,
) -> TextOverlay:
    """Render `text` centred in a transparent band of `area_width` x (size + 20)."""
    band = Image.new("RGBA", (area_width, style.font_size + BAND_PADDING), (0, 0, 0, 0))
    draw = ImageDraw.Draw(band)
    font = load_font(style.font_size, style.bold, font_path)

    line = fit_text(draw, text, font, max(1, area_width - 2 * SIDE_PADDING))
    if line:
        left, top, right, bottom = text_size(draw, line, font)
        x = (area_width - (right - left)) // 2 - left
        ty = (band.height - (bottom - top)) // 2 - top
        draw.text((x, ty), line, font=font, fill=style.color)
    return TextOverlay(image=band, top=y)


def title_overlay(text: str, width: int, font_path: Optional[str] = None) -> TextOverlay:
    return render_text(text, width, TITLE_TOP, TITLE_STYLE, font_path)


def description_overlay(text: str, width: int, font_path: Optional[str] = None) -> TextOverlay:
    return render_text(text, width, DESCRIPTION_TOP, DESCRIPTION_STYLE, font_path)


def footer_overlay(width: int, height: int, today: Optional[date] = None, font_path: Optional[str] = None) -> TextOverlay:
    return render_text(footer_text(today), width, height - FOOTER_OFFSET, FOOTER_STYLE, font_path)
