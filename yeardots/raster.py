"""
RGBA raster canvas and drawing primitives.

The canvas is a plain row-major ``bytearray`` (4 bytes per pixel) with its
dimensions as public fields. Every primitive clips to the canvas bounds:
writes that fall outside are dropped, never raised.
"""

from __future__ import annotations

import math
from typing import Tuple

from yeardots import font
from yeardots.errors import GeometryError

# ─────────────────────────── Types ────────────────────────────

Color = Tuple[int, int, int, int]  # R, G, B, A

TRANSPARENT: Color = (0, 0, 0, 0)
BLACK: Color = (0, 0, 0, 255)
WHITE: Color = (255, 255, 255, 255)


def _check_color(color: Color) -> bytes:
    if len(color) != 4 or any(not 0 <= c <= 255 for c in color):
        raise ValueError(f"color must be four channels in [0, 255], got {color!r}")
    return bytes(color)


# ─────────────────────────── Canvas ───────────────────────────

class Canvas:
    """
    Addressable grid of RGBA pixels, initialised to transparent black.

    One canvas belongs to one render call; nothing here is shared between
    instances, so separate renders can run side by side.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise GeometryError(f"canvas must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height * 4)

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"

    def _offset(self, x: int, y: int) -> int:
        return (y * self.width + x) * 4

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> Color:
        if not self.in_bounds(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        i = self._offset(x, y)
        r, g, b, a = self.pixels[i:i + 4]
        return (r, g, b, a)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        if not self.in_bounds(x, y):
            return
        i = self._offset(x, y)
        self.pixels[i:i + 4] = _check_color(color)

    def clear(self, color: Color = TRANSPARENT) -> None:
        self.pixels[:] = _check_color(color) * (self.width * self.height)

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
        """Fill the half-open rectangle [x0, x1) x [y0, y1)."""
        x0 = max(0, int(x0))
        y0 = max(0, int(y0))
        x1 = min(self.width, int(x1))
        y1 = min(self.height, int(y1))
        if x0 >= x1 or y0 >= y1:
            return

        span = _check_color(color) * (x1 - x0)
        for y in range(y0, y1):
            i = self._offset(x0, y)
            self.pixels[i:i + len(span)] = span

    def _scan_disk(self, cx: float, cy: float, radius: float):
        """Yield (x, y, squared distance) for pixels in the disk's bounding box."""
        x0 = max(0, math.floor(cx - radius) - 1)
        x1 = min(self.width, math.ceil(cx + radius) + 2)
        y0 = max(0, math.floor(cy - radius) - 1)
        y1 = min(self.height, math.ceil(cy + radius) + 2)
        for y in range(y0, y1):
            dy2 = (y - cy) * (y - cy)
            for x in range(x0, x1):
                dx = x - cx
                yield x, y, dx * dx + dy2

    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None:
        """Set every pixel whose centre lies within ``radius`` of (cx, cy)."""
        if radius < 0:
            return
        px = _check_color(color)
        r2 = radius * radius
        for x, y, d2 in self._scan_disk(cx, cy, radius):
            if d2 <= r2:
                i = self._offset(x, y)
                self.pixels[i:i + 4] = px

    def draw_ring(
        self, cx: float, cy: float, outer_radius: float, thickness: float, color: Color
    ) -> None:
        """Set pixels whose distance from (cx, cy) is within [outer - thickness, outer]."""
        if outer_radius < 0:
            return
        px = _check_color(color)
        inner = max(0.0, outer_radius - thickness)
        outer2 = outer_radius * outer_radius
        inner2 = inner * inner
        for x, y, d2 in self._scan_disk(cx, cy, outer_radius):
            if inner2 <= d2 <= outer2:
                i = self._offset(x, y)
                self.pixels[i:i + 4] = px

    def draw_text(
        self,
        text: str,
        x: int,
        y: int,
        scale: int,
        color: Color,
        letter_spacing: int = 1,
    ) -> None:
        """
        Draw ``text`` with the 5x7 bitmap font, top-left corner at (x, y).

        Each lit glyph cell becomes a ``scale`` x ``scale`` block.
        """
        if scale <= 0:
            raise GeometryError(f"text scale must be positive, got {scale}")
        cursor = x
        for char in text:
            for col, row in font.glyph_cells(char):
                px = cursor + col * scale
                py = y + row * scale
                self.fill_rect(px, py, px + scale, py + scale, color)
            cursor += font.advance(scale, letter_spacing)
