from dataclasses import dataclass
from typing import Mapping, Optional
import os

from dotenv import load_dotenv, find_dotenv

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; CollageGenerator/1.0)"


@dataclass
class Settings:
    fetch_timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    max_download_bytes: int = 20 * 1024 * 1024
    output_quality: int = 90
    max_workers: int = 10
    default_width: int = 1200
    default_height: int = 800
    font_path: Optional[str] = None
    font_bold_path: Optional[str] = None
    allow_local_files: bool = False
    debug: bool = False


def _find_env_file() -> str:
    # Try find_dotenv(); if it fails to locate a file, search parent directories
    _env = find_dotenv()
    if _env:
        return _env
    for start in (os.getcwd(), os.path.dirname(__file__)):
        p = os.path.abspath(start)
        while True:
            cand = os.path.join(p, ".env")
            if os.path.exists(cand):
                return cand
            parent = os.path.dirname(p)
            if parent == p:
                break
            p = parent
    return ".env"


def load_config() -> Settings:
    load_dotenv(_find_env_file())
    return load_config_from_env(os.environ)


def load_config_from_env(env: Mapping[str, str]) -> Settings:
    """Build Settings from a mapping; invalid numbers fall back to defaults."""
    defaults = Settings()

    def _int_env(name: str, default: int) -> int:
        v = env.get(name)
        if not v:
            return default
        try:
            value = int(v)
        except ValueError:
            return default
        return value if value > 0 else default

    def _float_env(name: str, default: float) -> float:
        v = env.get(name)
        if not v:
            return default
        try:
            value = float(v)
        except ValueError:
            return default
        return value if value > 0 else default

    def _bool_env(name: str) -> bool:
        return str(env.get(name, "")).lower() in ("1", "true", "yes", "on")

    debug_env = env.get("DEBUG", None)
    if debug_env is None:
        debug_env = env.get("COLLAGE_DEBUG", "")

    return Settings(
        fetch_timeout=_float_env("COLLAGE_FETCH_TIMEOUT", defaults.fetch_timeout),
        user_agent=env.get("COLLAGE_USER_AGENT") or DEFAULT_USER_AGENT,
        max_download_bytes=_int_env("COLLAGE_MAX_DOWNLOAD_BYTES", defaults.max_download_bytes),
        output_quality=min(_int_env("COLLAGE_QUALITY", defaults.output_quality), 95),
        max_workers=_int_env("COLLAGE_MAX_WORKERS", defaults.max_workers),
        default_width=_int_env("COLLAGE_WIDTH", defaults.default_width),
        default_height=_int_env("COLLAGE_HEIGHT", defaults.default_height),
        font_path=env.get("FONT_PATH") or None,
        font_bold_path=env.get("FONT_BOLD_PATH") or None,
        allow_local_files=_bool_env("COLLAGE_ALLOW_LOCAL_FILES"),
        debug=str(debug_env).lower() in ("1", "true", "yes"),
    )
