#!/usr/bin/env python3
"""Thin runner for the `collage_generator` package; delegates to `collage_generator.cli.main()`.

Provides a convenient `python collage.py URL...` entrypoint for local development.
"""
import sys
from collage_generator.cli import main


def run() -> None:
    try:
        main()
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    run()
