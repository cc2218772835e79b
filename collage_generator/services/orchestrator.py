"""CollageOrchestrator: validates, fans out per-image work and builds the result."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Callable, List, Optional

from ..compositor import build_composite
from ..config import Settings
from ..errors import FetchError, ValidationError
from ..fetchers import ImageFetcher, build_fetcher
from ..image_processing import TILE_SIZE, process_tile
from ..layout import compute_layout
from ..log import debug, log
from ..models import MAX_IMAGES, CollageRequest, CollageResult, FailedImage, ImageTask

MIN_CANVAS_WIDTH = 200
MIN_CANVAS_HEIGHT = 300


def validate_request(request: CollageRequest) -> None:
    count = len(request.image_refs)
    if count == 0:
        raise ValidationError("No images provided")
    if count > MAX_IMAGES:
        raise ValidationError(f"Maximum {MAX_IMAGES} images allowed")
    w, h = request.canvas_width, request.canvas_height
    if w < MIN_CANVAS_WIDTH or h < MIN_CANVAS_HEIGHT:
        raise ValidationError(f"Canvas must be at least {MIN_CANVAS_WIDTH}x{MIN_CANVAS_HEIGHT}")


class CollageOrchestrator:
    def __init__(
        self,
        fetcher: Optional[ImageFetcher] = None,
        settings: Optional[Settings] = None,
        quiet: bool = False,
        today: Optional[Callable[[], date]] = None,
    ):
        self.settings = settings or Settings()
        self.fetcher = fetcher or build_fetcher(self.settings)
        self.quiet = quiet
        self._today = today or date.today

    def generate(self, request: CollageRequest) -> CollageResult:
        validate_request(request)
        refs = request.image_refs
        log(
            f"Collage request: {len(refs)} images, {request.canvas_width}x{request.canvas_height}, "
            f"title={request.title!r}, layout={request.layout_hint}",
            self.quiet,
        )

        tasks = self._run_tasks(refs)
        failures = [FailedImage(t.index, t.error) for t in tasks if not t.succeeded]
        for f in failures:
            log(f"Image {f.index + 1} failed: {f.error}", self.quiet)

        slots = compute_layout(len(refs), request.canvas_width, request.canvas_height)
        debug(f"layout slots: {[s.box for s in slots]}", self.settings.debug)
        image_bytes = build_composite(
            request,
            [t.tile for t in tasks],
            slots,
            quality=self.settings.output_quality,
            today=self._today(),
            font_path=self.settings.font_path,
            font_bold_path=self.settings.font_bold_path,
        )
        log(f"Collage generated: {len(image_bytes)} bytes, {len(failures)} failed", self.quiet)

        return CollageResult(
            image_bytes=image_bytes,
            processed_count=len(refs),
            failed_count=len(failures),
            width=request.canvas_width,
            height=request.canvas_height,
            failures=failures,
        )

    def _run_tasks(self, refs: List[str]) -> List[ImageTask]:
        workers = max(1, min(len(refs), self.settings.max_workers))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="collage-fetch") as pool:
            futures = [pool.submit(self._run_task, idx, ref) for idx, ref in enumerate(refs)]
            # futures are in submission order, so results line up with refs
            return [f.result() for f in futures]

    def _run_task(self, index: int, ref: str) -> ImageTask:
        debug(f"fetching image {index + 1}: {ref}", self.settings.debug)
        try:
            outcome = self.fetcher.fetch(ref, self.settings.fetch_timeout)
        except FetchError as e:
            outcome = e
        except Exception as e:
            outcome = FetchError(f"network error: {e}")
        tile = process_tile(outcome, TILE_SIZE, TILE_SIZE, index)
        return ImageTask(index=index, ref=ref, tile=tile.data, error=tile.error)
