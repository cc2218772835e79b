"""Command line entry point: build a collage from URLs or local files."""
from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from .config import load_config
from .errors import CollageError, classify_error
from .image_io import expand_image_patterns, save_image
from .json_api import result_to_dict
from .log import log
from .models import CollageRequest
from .services.orchestrator import CollageOrchestrator


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="collage-generator",
        description="Compose up to 10 images into a titled collage.",
    )
    parser.add_argument(
        "images",
        nargs="+",
        help="Image URLs or file paths (supports glob masks like '*.jpg').",
    )
    parser.add_argument("-t", "--title", dest="title", help="Title drawn at the top.")
    parser.add_argument("-d", "--description", dest="description", help="Description drawn under the title.")
    parser.add_argument("-W", "--width", dest="width", type=int, help="Override COLLAGE_WIDTH (canvas width).")
    parser.add_argument("-H", "--height", dest="height", type=int, help="Override COLLAGE_HEIGHT (canvas height).")
    parser.add_argument(
        "-o",
        "--output",
        dest="output",
        default="collage.jpg",
        help="Where to write the JPEG (default: collage.jpg).",
    )
    parser.add_argument(
        "-T",
        "--timeout",
        dest="timeout",
        type=float,
        help="Override COLLAGE_FETCH_TIMEOUT (seconds per image).",
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the response object (without the image data URI) instead of a summary.",
    )
    parser.add_argument("--debug", dest="debug", action="store_true", help="Enable debug output to stderr.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress informational logs.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    cfg = load_config()

    # CLI overrides for config
    if args.width is not None:
        cfg.default_width = args.width
    if args.height is not None:
        cfg.default_height = args.height
    if args.timeout is not None:
        cfg.fetch_timeout = args.timeout
    if args.debug:
        cfg.debug = True
    cfg.allow_local_files = True

    refs = expand_image_patterns(args.images)
    log(f"Images: {len(refs)}", args.quiet)
    for r in refs:
        log(f" → {r}", args.quiet)
    log(f"Canvas: {cfg.default_width}x{cfg.default_height}, timeout={cfg.fetch_timeout}s", args.quiet)

    orchestrator = CollageOrchestrator(settings=cfg, quiet=args.quiet)
    request = CollageRequest(
        image_refs=refs,
        title=args.title,
        description=args.description,
        canvas_width=cfg.default_width,
        canvas_height=cfg.default_height,
    )
    try:
        result = orchestrator.generate(request)
    except CollageError as e:
        if args.as_json:
            print(json.dumps({"success": False, "message": classify_error(e)}, ensure_ascii=False, indent=2))
        else:
            print(f"Failed to generate collage: {classify_error(e)}", file=sys.stderr)
        sys.exit(1)

    out_path = save_image(args.output, result.image_bytes)
    if args.as_json:
        payload = result_to_dict(result, include_image=False)
        payload["data"]["output"] = out_path
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    for f in result.failures:
        print(f"Image {f.index + 1} ({refs[f.index]}) replaced by placeholder: {f.error}", file=sys.stderr)
    print(f"Saved collage to {out_path}")


if __name__ == "__main__":
    main()
