"""
Render entry points: progress in, image bytes out.

PNG output goes through the package's own encoder; JPEG output hands the
same canvas to Pillow.
"""

from __future__ import annotations

import io
import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional

from PIL import Image

from yeardots.config import DEFAULT_QUALITY, clamp_quality
from yeardots.errors import EncodingFailure
from yeardots.png import encode_png
from yeardots.progress import YearProgress
from yeardots.raster import Canvas
from yeardots.scene import PRESETS, LayoutVariant, OutputPreset, render_scene

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    "png": "image/png",
    "jpg": "image/jpeg",
}


def normalize_format(fmt: str) -> str:
    """Map a user-supplied format/extension to "png" or "jpg"."""
    key = fmt.lower().lstrip(".")
    if key == "jpeg":
        key = "jpg"
    if key not in CONTENT_TYPES:
        raise ValueError(f"Unsupported image format '{fmt}' (expected png or jpg)")
    return key


def get_preset(name: str) -> OutputPreset:
    try:
        return PRESETS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown preset '{name}' (expected one of: {', '.join(PRESETS)})"
        ) from None


# ─────────────────────────── Encoding ─────────────────────────

def to_pil_image(canvas: Canvas) -> Image.Image:
    """Copy a canvas into a Pillow RGBA image."""
    return Image.frombytes("RGBA", (canvas.width, canvas.height), bytes(canvas.pixels))


def encode_jpeg(canvas: Canvas, quality: int = DEFAULT_QUALITY) -> bytes:
    """JPEG has no alpha channel; pixels are composited onto black first."""
    img = to_pil_image(canvas)
    flat = Image.new("RGB", img.size, (0, 0, 0))
    flat.paste(img, mask=img.getchannel("A"))

    buf = io.BytesIO()
    try:
        flat.save(buf, format="JPEG", quality=clamp_quality(quality))
    except (OSError, ValueError) as exc:
        raise EncodingFailure(f"JPEG encoding failed: {exc}") from exc
    return buf.getvalue()


def encode_canvas(canvas: Canvas, fmt: str = "png", quality: int = DEFAULT_QUALITY) -> bytes:
    if normalize_format(fmt) == "png":
        return encode_png(canvas)
    return encode_jpeg(canvas, quality)


# ─────────────────────────── Entry points ─────────────────────

def render_image(
    width: int,
    height: int,
    progress: YearProgress,
    *,
    fmt: str = "png",
    quality: int = DEFAULT_QUALITY,
    variant: Optional[LayoutVariant] = None,
) -> bytes:
    """
    Render the chart at an arbitrary size and encode it.

    Raises:
        ValueError:      unknown ``fmt``.
        GeometryError:   the size cannot hold the chart.
        EncodingFailure: the encoder produced no output.
    """
    fmt = normalize_format(fmt)
    started = time.perf_counter()
    canvas = render_scene(width, height, progress, variant)
    data = encode_canvas(canvas, fmt, quality)
    logger.debug(
        "Rendered %dx%d %s in %.2fs (%d bytes)",
        width, height, fmt, time.perf_counter() - started, len(data),
    )
    return data


def render_preset(
    name: str,
    progress: YearProgress,
    *,
    fmt: str = "png",
    quality: int = DEFAULT_QUALITY,
) -> bytes:
    preset = get_preset(name)
    return render_image(
        preset.width, preset.height, progress,
        fmt=fmt, quality=quality, variant=preset.variant,
    )


@dataclass(frozen=True)
class ImageExport:
    """A rendered image plus what a download handler needs to serve it."""
    filename: str
    content_type: str
    data: bytes
    progress: YearProgress

    @property
    def metadata(self) -> Dict[str, str]:
        return {
            "year": str(self.progress.year),
            "filled": str(self.progress.filled),
            "total": str(self.progress.total),
            "percent": self.progress.percent,
        }


def export_image(
    progress: YearProgress,
    preset: Optional[str] = None,
    *,
    width: Optional[int] = None,
    height: Optional[int] = None,
    fmt: str = "png",
    quality: int = DEFAULT_QUALITY,
) -> ImageExport:
    """
    Render either a named preset or a custom ``width`` x ``height`` image.

    Exactly one of ``preset`` or the (width, height) pair must be given.
    """
    fmt = normalize_format(fmt)
    custom = width is not None or height is not None
    if preset is not None and custom:
        raise ValueError("Pass either a preset or width/height, not both")

    if preset is not None:
        label = get_preset(preset).name
        data = render_preset(label, progress, fmt=fmt, quality=quality)
    elif width is not None and height is not None:
        label = f"{width}x{height}"
        data = render_image(width, height, progress, fmt=fmt, quality=quality)
    else:
        raise ValueError("Custom size needs both width and height")

    return ImageExport(
        filename=f"year-dots-{progress.year}-{label}.{fmt}",
        content_type=CONTENT_TYPES[fmt],
        data=data,
        progress=progress,
    )
