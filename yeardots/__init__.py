"""
Year-progress dot chart renderer.

Architecture:
    progress  - calendar engine (YearProgress, leap years, day of year)
    raster    - RGBA canvas with rect/circle/ring/text primitives
    font      - fixed 5x7 bitmap glyphs
    layout    - dot grid solver
    scene     - composes labels and grid for a given output size
    png       - PNG container encoder
    export    - render entry points, JPEG via Pillow
"""

from yeardots.errors import EncodingFailure, GeometryError, InvalidTimeZone, YearDotsError
from yeardots.export import ImageExport, export_image, render_image, render_preset
from yeardots.layout import LayoutResult, solve_layout
from yeardots.png import encode_png
from yeardots.progress import YearProgress, compute_year_progress, is_leap_year
from yeardots.raster import Canvas
from yeardots.scene import PRESETS, render_scene

__version__ = "0.1.0"

__all__ = [
    "PRESETS",
    "Canvas",
    "EncodingFailure",
    "GeometryError",
    "ImageExport",
    "InvalidTimeZone",
    "LayoutResult",
    "YearDotsError",
    "YearProgress",
    "compute_year_progress",
    "encode_png",
    "export_image",
    "is_leap_year",
    "render_image",
    "render_preset",
    "render_scene",
    "solve_layout",
]
