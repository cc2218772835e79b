import os
import sys


def log(msg: str, quiet: bool = False) -> None:
    """Prefixed log line on stderr."""
    if not quiet:
        print(f"[collage_generator] {msg}", file=sys.stderr)


def debug_enabled() -> bool:
    # DEBUG wins, COLLAGE_DEBUG kept for per-service overrides
    env_dbg = os.environ.get("DEBUG", None)
    if env_dbg is None:
        env_dbg = os.environ.get("COLLAGE_DEBUG", "")
    return str(env_dbg).lower() in ("1", "true", "yes")


def debug(msg: str, enabled: bool = False) -> None:
    """Print a debug line when `enabled` is set or the env flag is on."""
    if enabled or debug_enabled():
        print(f"[COLLAGE_DEBUG] {msg}", file=sys.stderr)
