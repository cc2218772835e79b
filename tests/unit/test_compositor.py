import io
from datetime import date

import pytest
from PIL import Image

from collage_generator.compositor import build_composite
from collage_generator.errors import MEMORY_MESSAGE, CompositeError, classify_error
from collage_generator.image_processing import process_tile
from collage_generator.layout import compute_layout
from collage_generator.models import CollageRequest

TODAY = date(2025, 1, 5)


def _tile(make_image, color):
    return process_tile(make_image(color=color, size=(120, 90))).data


def _decode(b):
    im = Image.open(io.BytesIO(b))
    im.load()
    return im


def _close(pixel, expected, tol=40):
    return all(abs(a - b) <= tol for a, b in zip(pixel, expected))


def _centre(slot):
    return (slot.x + slot.width // 2, slot.y + slot.height // 2)


def _has_ink(im, box):
    region = im.crop(box).convert("L")
    return region.getextrema()[0] < 225


def test_two_tiles_side_by_side(make_image):
    req = CollageRequest(image_refs=["a", "b"])
    slots = compute_layout(2, 1200, 800)
    out = build_composite(req, [_tile(make_image, (255, 0, 0)), _tile(make_image, (0, 0, 255))], slots, today=TODAY)
    im = _decode(out)
    assert im.format == "JPEG"
    assert im.size == (1200, 800)
    assert _close(im.getpixel(_centre(slots[0])), (255, 0, 0))
    assert _close(im.getpixel(_centre(slots[1])), (0, 0, 255))
    assert _close(im.getpixel((5, 5)), (255, 255, 255), tol=8)
    # no title or description: the title band stays white
    assert not _has_ink(im, (0, 0, 1200, 120))
    # footer is always drawn
    assert _has_ink(im, (0, 740, 1200, 776))


def test_title_and_description_are_drawn(make_image):
    req = CollageRequest(image_refs=["a"], title="Summer Trip", description="Best moments")
    slots = compute_layout(1, 1200, 800)
    im = _decode(build_composite(req, [_tile(make_image, (0, 255, 0))], slots, today=TODAY))
    assert _has_ink(im, (0, 20, 1200, 80))
    assert _has_ink(im, (0, 84, 1200, 124))
    assert _close(im.getpixel(_centre(slots[0])), (0, 255, 0))


def test_tiles_are_stretched_to_fill_slots(make_image):
    req = CollageRequest(image_refs=["a", "b", "c"])
    slots = compute_layout(3, 1200, 800)
    tiles = [_tile(make_image, c) for c in [(255, 0, 0), (0, 255, 0), (0, 0, 255)]]
    im = _decode(build_composite(req, tiles, slots, today=TODAY))
    bottom = slots[2]
    # corners of the wide bottom slot are covered, not letterboxed
    assert _close(im.getpixel((bottom.x + 3, bottom.y + 3)), (0, 0, 255))
    assert _close(im.getpixel((bottom.x + bottom.width - 4, bottom.y + bottom.height - 4)), (0, 0, 255))


def test_quality_changes_output(make_image):
    req = CollageRequest(image_refs=["a"], title="q")
    slots = compute_layout(1, 1200, 800)
    tiles = [process_tile(make_image(size=(300, 300))).data]
    low = build_composite(req, tiles, slots, quality=20, today=TODAY)
    high = build_composite(req, tiles, slots, quality=90, today=TODAY)
    assert low != high


def test_memory_error_is_composite_error(make_image, monkeypatch):
    import collage_generator.compositor as comp

    def boom(*a, **k):
        raise MemoryError()

    monkeypatch.setattr(comp.Image, "new", boom)
    with pytest.raises(CompositeError) as ei:
        build_composite(CollageRequest(image_refs=["a"]), [b""], compute_layout(1, 1200, 800), today=TODAY)
    assert classify_error(ei.value) == MEMORY_MESSAGE


def test_corrupt_tile_is_composite_error():
    with pytest.raises(CompositeError):
        build_composite(CollageRequest(image_refs=["a"]), [b"junk"], compute_layout(1, 1200, 800), today=TODAY)
