"""Map an image count and canvas size to slot rectangles.

The canvas keeps a title band on top and a footer band at the bottom. What
remains, inset by MARGIN, is the content area. Counts 2-5 use fixed tables,
larger counts a uniform grid.
"""
from __future__ import annotations

import math
from typing import Callable, Dict, List, Sequence, Tuple

from .models import LayoutSlot

MARGIN = 20
GUTTER = 20
TITLE_HEIGHT = 120
FOOTER_HEIGHT = 60

Rect = Tuple[float, float, float, float]

# (x, y, width, height) in terms of content width `aw` and height `ah`
_FIXED_LAYOUTS: Dict[int, Callable[[float, float], Sequence[Rect]]] = {
    2: lambda aw, ah: (
        (MARGIN, TITLE_HEIGHT + MARGIN, aw / 2 - MARGIN / 2, ah),
        (aw / 2 + MARGIN / 2, TITLE_HEIGHT + MARGIN, aw / 2 - MARGIN / 2, ah),
    ),
    3: lambda aw, ah: (
        (MARGIN, TITLE_HEIGHT + MARGIN, aw / 2 - MARGIN / 2, ah / 2 - MARGIN / 2),
        (aw / 2 + MARGIN / 2, TITLE_HEIGHT + MARGIN, aw / 2 - MARGIN / 2, ah / 2 - MARGIN / 2),
        (MARGIN, TITLE_HEIGHT + ah / 2 + MARGIN / 2, aw, ah / 2 - MARGIN / 2),
    ),
    4: lambda aw, ah: (
        (MARGIN, TITLE_HEIGHT + MARGIN, aw / 2 - MARGIN / 2, ah / 2 - MARGIN / 2),
        (aw / 2 + MARGIN / 2, TITLE_HEIGHT + MARGIN, aw / 2 - MARGIN / 2, ah / 2 - MARGIN / 2),
        (MARGIN, TITLE_HEIGHT + ah / 2 + MARGIN / 2, aw / 2 - MARGIN / 2, ah / 2 - MARGIN / 2),
        (aw / 2 + MARGIN / 2, TITLE_HEIGHT + ah / 2 + MARGIN / 2, aw / 2 - MARGIN / 2, ah / 2 - MARGIN / 2),
    ),
    5: lambda aw, ah: (
        (MARGIN, TITLE_HEIGHT + MARGIN, aw / 3 - MARGIN / 2, ah / 2 - MARGIN / 2),
        (aw / 3 + MARGIN / 2, TITLE_HEIGHT + MARGIN, aw / 3 - MARGIN, ah / 2 - MARGIN / 2),
        (2 * aw / 3 + MARGIN / 2, TITLE_HEIGHT + MARGIN, aw / 3 - MARGIN / 2, ah / 2 - MARGIN / 2),
        (MARGIN, TITLE_HEIGHT + ah / 2 + MARGIN / 2, aw / 2 - MARGIN / 2, ah / 2 - MARGIN / 2),
        (aw / 2 + MARGIN / 2, TITLE_HEIGHT + ah / 2 + MARGIN / 2, aw / 2 - MARGIN / 2, ah / 2 - MARGIN / 2),
    ),
}


def content_area(canvas_width: int, canvas_height: int) -> Tuple[int, int]:
    """Width and height left for tiles once bands and margins are removed."""
    return (
        canvas_width - MARGIN * 2,
        canvas_height - TITLE_HEIGHT - FOOTER_HEIGHT - MARGIN * 2,
    )


def grid_shape(count: int) -> Tuple[int, int]:
    cols = int(math.ceil(math.sqrt(count)))
    rows = int(math.ceil(count / cols))
    return cols, rows


def compute_layout(count: int, canvas_width: int, canvas_height: int) -> List[LayoutSlot]:
    aw, ah = content_area(canvas_width, canvas_height)

    if count == 1:
        rects: Sequence[Rect] = ((MARGIN, TITLE_HEIGHT + MARGIN, aw, ah),)
    elif count in _FIXED_LAYOUTS:
        rects = _FIXED_LAYOUTS[count](aw, ah)
    else:
        rects = _grid(count, aw, ah)

    return [
        LayoutSlot(index=i, x=int(x), y=int(y), width=int(w), height=int(h))
        for i, (x, y, w, h) in enumerate(rects)
    ]


def _grid(count: int, aw: float, ah: float) -> List[Rect]:
    cols, rows = grid_shape(count)
    cell_w = aw / cols
    cell_h = ah / rows
    cells = []
    for i in range(count):
        row, col = divmod(i, cols)
        cells.append((
            MARGIN + col * cell_w,
            TITLE_HEIGHT + MARGIN + row * cell_h,
            cell_w - GUTTER,
            cell_h - GUTTER,
        ))
    return cells
