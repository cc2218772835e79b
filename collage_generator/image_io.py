from __future__ import annotations

from typing import List, Sequence
import base64
import glob
import os


def image_bytes_to_data_url(data: bytes, mime_type: str = "image/jpeg") -> str:
    b64 = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{b64}"


def save_image(path: str, data: bytes) -> str:
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)
    return path


def expand_image_patterns(patterns: Sequence[str]) -> List[str]:
    """Expand glob masks; URLs and unmatched entries are kept as given, deduplicated."""
    result: List[str] = []
    for p in patterns:
        expanded = [] if "://" in p else glob.glob(p)
        if expanded:
            result.extend(sorted(expanded))
        else:
            result.append(p)
    seen = set()
    uniq: List[str] = []
    for p in result:
        if p not in seen:
            seen.add(p)
            uniq.append(p)
    return uniq
