"""
Runtime configuration.

Defaults come from environment variables so that scheduled exports (cron,
CI) can be steered without touching the command line:

    OUTPUT_DIR         directory the CLI writes into (default "public")
    YEAR_DOTS_TZ       IANA zone used for "today" (default: local time)
    YEAR_DOTS_QUALITY  JPEG quality, 1-95 (default 90)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

DEFAULT_OUTPUT_DIR = "public"
DEFAULT_QUALITY = 90
MIN_QUALITY = 1
MAX_QUALITY = 95


def output_dir() -> Path:
    return Path(os.environ.get("OUTPUT_DIR", DEFAULT_OUTPUT_DIR))


def time_zone() -> Optional[str]:
    return os.environ.get("YEAR_DOTS_TZ") or None


def jpeg_quality() -> int:
    raw = os.environ.get("YEAR_DOTS_QUALITY")
    if not raw:
        return DEFAULT_QUALITY
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"YEAR_DOTS_QUALITY must be an integer, got {raw!r}") from None
    return clamp_quality(value)


def clamp_quality(value: int) -> int:
    """Keep JPEG quality inside the range Pillow recommends."""
    return max(MIN_QUALITY, min(MAX_QUALITY, int(value)))
