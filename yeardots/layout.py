"""
Grid layout solver.

Fits N dots into a content rectangle with a fixed column count. The dot
diameter is derived from whichever axis is tighter, the gap is a fixed
ratio of the diameter, and both are clamped so dots never grow past a
legible ceiling on large canvases. When the clamped grid is smaller than
the rectangle, callers centre it with ``grid_origin``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Tuple

from yeardots.errors import GeometryError


@dataclass(frozen=True)
class LayoutResult:
    columns: int
    rows: int
    dot_diameter: int
    gap: int

    @property
    def step(self) -> int:
        """Distance between neighbouring dot origins."""
        return self.dot_diameter + self.gap

    @property
    def drawn_width(self) -> int:
        return self.columns * self.dot_diameter + (self.columns - 1) * self.gap

    @property
    def drawn_height(self) -> int:
        return self.rows * self.dot_diameter + (self.rows - 1) * self.gap

    def fits(self, width: int, height: int) -> bool:
        return self.drawn_width <= width and self.drawn_height <= height


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def solve_layout(
    total_dots: int,
    content_width: int,
    content_height: int,
    columns: int,
    gap_ratio: float,
    min_dot: int,
    max_dot: int,
    min_gap: int,
    max_gap: int,
) -> LayoutResult:
    """
    Compute dot diameter and gap for a ``columns``-wide grid of ``total_dots``.

    Solving for the diameter d of an n-dot axis of length L:
        L = n * d + (n - 1) * d * gap_ratio
        d = L / (n + (n - 1) * gap_ratio)

    Raises:
        GeometryError: on degenerate input, or when even the minimum
            dot and gap sizes overflow the content rectangle.
    """
    if total_dots <= 0:
        raise GeometryError(f"total_dots must be positive, got {total_dots}")
    if columns <= 0:
        raise GeometryError(f"columns must be positive, got {columns}")
    if content_width <= 0 or content_height <= 0:
        raise GeometryError(
            f"content area must be non-empty, got {content_width}x{content_height}"
        )
    if gap_ratio < 0:
        raise GeometryError(f"gap_ratio must be >= 0, got {gap_ratio}")
    if not 0 < min_dot <= max_dot:
        raise GeometryError(f"invalid dot bounds [{min_dot}, {max_dot}]")
    if not 0 <= min_gap <= max_gap:
        raise GeometryError(f"invalid gap bounds [{min_gap}, {max_gap}]")

    rows = math.ceil(total_dots / columns)

    dot_by_width = content_width / (columns + (columns - 1) * gap_ratio)
    dot_by_height = content_height / (rows + (rows - 1) * gap_ratio)
    raw_dot = math.floor(min(dot_by_width, dot_by_height))
    # Gap follows the unclamped dot; both are clamped afterwards.
    dot = _clamp(raw_dot, min_dot, max_dot)
    gap = _clamp(math.floor(raw_dot * gap_ratio), min_gap, max_gap)
    result = LayoutResult(columns=columns, rows=rows, dot_diameter=dot, gap=gap)

    # Only the lower clamps can push a tight grid past the rectangle;
    # shrink the dot until it fits or the dot floor is reached.
    while not result.fits(content_width, content_height):
        if dot <= min_dot:
            raise GeometryError(
                f"{total_dots} dots in {columns} columns do not fit "
                f"{content_width}x{content_height} at the minimum dot size {min_dot}"
            )
        dot -= 1
        gap = _clamp(math.floor(dot * gap_ratio), min_gap, max_gap)
        result = LayoutResult(columns=columns, rows=rows, dot_diameter=dot, gap=gap)

    return result


def grid_origin(
    result: LayoutResult, x: int, y: int, width: int, height: int
) -> Tuple[int, int]:
    """Top-left corner of the drawn grid, centred in the given rectangle."""
    return (
        x + (width - result.drawn_width) // 2,
        y + (height - result.drawn_height) // 2,
    )


def dot_centers(
    result: LayoutResult, origin: Tuple[int, int], count: int
) -> Iterator[Tuple[int, float, float]]:
    """Yield (index, cx, cy) for dots 0..count-1, filled row by row."""
    ox, oy = origin
    radius = result.dot_diameter / 2
    for i in range(count):
        row, col = divmod(i, result.columns)
        yield i, ox + col * result.step + radius, oy + row * result.step + radius
