"""Public API for collage_generator.

Expose a small, explicit set of helpers used by the CLI, callers and tests.
"""
from importlib.metadata import version

try:
	__version__ = version("collage-generator")
except Exception:
	__version__ = "0.0.0"

from .config import Settings, load_config, load_config_from_env
from .errors import (
	CollageError,
	CompositeError,
	FetchError,
	ProcessingError,
	ValidationError,
	classify_error,
)
from .models import CollageRequest, CollageResult, FailedImage, ImageTask, LayoutSlot
from .layout import compute_layout, grid_shape
from .image_processing import process_tile, placeholder_tile, TILE_SIZE
from .text_overlay import TextStyle, render_text, footer_text
from .compositor import build_composite
from .services.orchestrator import CollageOrchestrator
from .json_api import handle_json_request

__all__ = [
	"Settings",
	"load_config",
	"load_config_from_env",
	"CollageError",
	"CompositeError",
	"FetchError",
	"ProcessingError",
	"ValidationError",
	"classify_error",
	"CollageRequest",
	"CollageResult",
	"FailedImage",
	"ImageTask",
	"LayoutSlot",
	"compute_layout",
	"grid_shape",
	"process_tile",
	"placeholder_tile",
	"TILE_SIZE",
	"TextStyle",
	"render_text",
	"footer_text",
	"build_composite",
	"CollageOrchestrator",
	"handle_json_request",
	"__version__",
]
