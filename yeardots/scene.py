"""
Scene composer.

Turns a YearProgress into a finished canvas:

    LayoutVariant  - column count, safe area and dot clamps per aspect
    OutputPreset   - named output sizes (square post, story, OG preview)
    SceneLayout    - computes text placement and dot grid geometry
    SceneRenderer  - draws background, labels, footer and dots onto a Canvas
    render_scene() - the two above in one call
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from yeardots import font
from yeardots.errors import GeometryError
from yeardots.layout import LayoutResult, dot_centers, grid_origin, solve_layout
from yeardots.progress import YearProgress
from yeardots.raster import BLACK, WHITE, Canvas, Color

logger = logging.getLogger(__name__)

Bounds = Tuple[int, int, int, int]  # left, top, right, bottom

LETTER_SPACING = 2
# Widest label is "366/366": 7 glyphs of 5 cells plus 6 gaps of 2 cells.
HEADER_CELLS = 7 * (font.GLYPH_WIDTH + LETTER_SPACING) - LETTER_SPACING


# ─────────────────────────── Variants & presets ───────────────

@dataclass(frozen=True)
class SafeZone:
    """
    Margins kept free of content, as fractions of the output's short side.

    Social apps draw their own chrome (profile bar, reply box) over the
    image edges; scaling the margins with the image keeps the labels and
    the grid clear of it at any size.
    """
    top: float = 0.08
    bottom: float = 0.08
    left: float = 0.08
    right: float = 0.08

    def content_bounds(self, width: int, height: int) -> Bounds:
        short = min(width, height)
        return (
            round(short * self.left),
            round(short * self.top),
            width - round(short * self.right),
            height - round(short * self.bottom),
        )


@dataclass(frozen=True)
class LayoutVariant:
    """Grid parameters for one family of aspect ratios."""
    name: str
    columns: int
    safe_zone: SafeZone = field(default_factory=SafeZone)
    gap_ratio: float = 0.32
    min_dot: int = 12
    max_dot: int = 64
    min_gap: int = 3
    max_gap: int = 28


# Wide canvases have room for more columns; tall story canvases fewer.
VARIANT_WIDE = LayoutVariant(name="wide", columns=37)
VARIANT_SQUARE = LayoutVariant(name="square", columns=28)
VARIANT_STORY = LayoutVariant(
    name="story",
    columns=19,
    # 260 / 320 / 90 px at 1080 wide: clears the story header and reply bar.
    safe_zone=SafeZone(top=0.2408, bottom=0.2963, left=0.0834, right=0.0834),
)


def variant_for_size(width: int, height: int) -> LayoutVariant:
    if width >= 1.5 * height:
        return VARIANT_WIDE
    if width >= height:
        return VARIANT_SQUARE
    return VARIANT_STORY


@dataclass(frozen=True)
class OutputPreset:
    name: str
    width: int
    height: int
    variant: LayoutVariant


PRESET_SQUARE = OutputPreset(name="square", width=1080, height=1080, variant=VARIANT_SQUARE)
PRESET_STORY = OutputPreset(name="story", width=1080, height=1920, variant=VARIANT_STORY)
PRESET_OG = OutputPreset(name="og", width=1200, height=630, variant=VARIANT_WIDE)

PRESETS: Mapping[str, OutputPreset] = MappingProxyType({
    p.name: p for p in (PRESET_SQUARE, PRESET_STORY, PRESET_OG)
})


# ─────────────────────────── Layout ───────────────────────────

@dataclass(frozen=True)
class TextBlock:
    text: str
    x: int
    y: int
    scale: int

    @property
    def width(self) -> int:
        return font.measure_text(self.text, self.scale, LETTER_SPACING)

    @property
    def height(self) -> int:
        return font.text_height(self.scale)


@dataclass(frozen=True)
class SceneGeometry:
    """Everything needed to draw a scene, computed without touching pixels."""
    width: int
    height: int
    variant: LayoutVariant
    content: Bounds
    header: TextBlock
    sub: TextBlock
    footer: TextBlock
    grid_bounds: Bounds
    grid: LayoutResult
    origin: Tuple[int, int]
    ring_thickness: int

    @property
    def dot_radius(self) -> float:
        return self.grid.dot_diameter / 2

    def dot_centers(self, count: int):
        return dot_centers(self.grid, self.origin, count)


class SceneLayout:
    """
    Places the two labels at the top of the safe area and the year at its
    bottom, then fits the dot grid into the band between them.
    """

    HEADER_DIVISOR = 60     # header scale = short side / this
    SUB_RATIO = 0.7         # sub-label scale relative to the header
    RING_RATIO = 0.12       # ring thickness = dot diameter * this
    MIN_RING = 2
    MAX_RING = 6

    @classmethod
    def compute(
        cls,
        width: int,
        height: int,
        progress: YearProgress,
        variant: Optional[LayoutVariant] = None,
    ) -> SceneGeometry:
        if width <= 0 or height <= 0:
            raise GeometryError(f"output size must be positive, got {width}x{height}")
        variant = variant or variant_for_size(width, height)

        left, top, right, bottom = variant.safe_zone.content_bounds(width, height)
        content_width = right - left
        if content_width <= 0 or bottom <= top:
            raise GeometryError(f"safe area leaves no room in a {width}x{height} image")

        header_scale = min(
            max(4, min(width, height) // cls.HEADER_DIVISOR),
            content_width // HEADER_CELLS,
        )
        header_scale = max(1, header_scale)
        sub_scale = max(1, int(header_scale * cls.SUB_RATIO))

        header = cls._centered(progress.header_text, left, content_width, top, header_scale)
        sub = cls._centered(
            progress.percent_text, left, content_width, top + header_scale * 10, sub_scale
        )

        footer = cls._centered(
            str(progress.year), left, content_width,
            bottom - font.text_height(sub_scale), sub_scale,
        )

        grid_top = sub.y + sub.height + header_scale * 3
        grid_bottom = footer.y - header_scale * 2
        grid_height = grid_bottom - grid_top
        if grid_height <= 0:
            raise GeometryError(f"no room for the dot grid in a {width}x{height} image")

        grid = solve_layout(
            progress.total,
            content_width,
            grid_height,
            variant.columns,
            variant.gap_ratio,
            variant.min_dot,
            variant.max_dot,
            variant.min_gap,
            variant.max_gap,
        )
        origin = grid_origin(grid, left, grid_top, content_width, grid_height)
        ring = max(cls.MIN_RING, min(cls.MAX_RING, round(grid.dot_diameter * cls.RING_RATIO)))

        return SceneGeometry(
            width=width,
            height=height,
            variant=variant,
            content=(left, top, right, bottom),
            header=header,
            sub=sub,
            footer=footer,
            grid_bounds=(left, grid_top, right, grid_bottom),
            grid=grid,
            origin=origin,
            ring_thickness=ring,
        )

    @staticmethod
    def _centered(text: str, left: int, span: int, y: int, scale: int) -> TextBlock:
        text_width = font.measure_text(text, scale, LETTER_SPACING)
        return TextBlock(text=text, x=left + round((span - text_width) / 2), y=y, scale=scale)


def scene_geometry(
    width: int,
    height: int,
    progress: YearProgress,
    variant: Optional[LayoutVariant] = None,
) -> SceneGeometry:
    return SceneLayout.compute(width, height, progress, variant)


# ─────────────────────────── Renderer ─────────────────────────

@dataclass(frozen=True)
class SceneStyle:
    """Colours: light marks on a dark background."""
    background: Color = BLACK
    foreground: Color = WHITE
    sub_alpha: int = 220
    footer_alpha: int = 153


class SceneRenderer:
    """Draws a computed SceneGeometry onto a fresh Canvas."""

    def __init__(self, geometry: SceneGeometry, style: Optional[SceneStyle] = None):
        self.geometry = geometry
        self.style = style or SceneStyle()

    def render(self, progress: YearProgress) -> Canvas:
        g = self.geometry
        canvas = Canvas(g.width, g.height)
        canvas.fill_rect(0, 0, g.width, g.height, self.style.background)

        self._draw_labels(canvas)
        self._draw_dots(canvas, progress)
        return canvas

    def _draw_labels(self, canvas: Canvas) -> None:
        fg = self.style.foreground
        g = self.geometry
        sub_color: Color = (fg[0], fg[1], fg[2], self.style.sub_alpha)
        footer_color: Color = (fg[0], fg[1], fg[2], self.style.footer_alpha)
        for block, color in ((g.header, fg), (g.sub, sub_color), (g.footer, footer_color)):
            canvas.draw_text(block.text, block.x, block.y, block.scale, color, LETTER_SPACING)

    def _draw_dots(self, canvas: Canvas, progress: YearProgress) -> None:
        """Outline every day; fill the ones already elapsed."""
        g = self.geometry
        fg = self.style.foreground
        radius = g.dot_radius
        thickness = g.ring_thickness

        for i, cx, cy in g.dot_centers(progress.total):
            canvas.draw_ring(cx, cy, radius, thickness, fg)
            if i < progress.filled:
                canvas.fill_circle(cx, cy, radius - thickness, fg)


def render_scene(
    width: int,
    height: int,
    progress: YearProgress,
    variant: Optional[LayoutVariant] = None,
    style: Optional[SceneStyle] = None,
) -> Canvas:
    """
    Render the year-progress chart at ``width`` x ``height``.

    Raises:
        GeometryError: the size leaves no room for labels and grid.
    """
    geometry = SceneLayout.compute(width, height, progress, variant)
    logger.debug(
        "Scene %dx%d (%s): %d cols x %d rows, dot=%d gap=%d",
        width, height, geometry.variant.name,
        geometry.grid.columns, geometry.grid.rows,
        geometry.grid.dot_diameter, geometry.grid.gap,
    )
    return SceneRenderer(geometry, style).render(progress)
