import pytest

from yeardots.errors import GeometryError
from yeardots.layout import LayoutResult
from yeardots.raster import BLACK, WHITE
from yeardots.scene import (
    PRESETS,
    VARIANT_SQUARE,
    VARIANT_STORY,
    VARIANT_WIDE,
    SafeZone,
    render_scene,
    scene_geometry,
    variant_for_size,
)


@pytest.mark.parametrize(
    "size,variant",
    [((1200, 630), VARIANT_WIDE), ((1080, 1080), VARIANT_SQUARE), ((1080, 1920), VARIANT_STORY), ((800, 700), VARIANT_SQUARE)],
)
def test_variant_by_aspect(size, variant):
    assert variant_for_size(*size) is variant


def test_wider_layouts_use_more_columns():
    assert VARIANT_WIDE.columns > VARIANT_SQUARE.columns > VARIANT_STORY.columns


def test_presets():
    assert (PRESETS["square"].width, PRESETS["square"].height) == (1080, 1080)
    assert (PRESETS["story"].width, PRESETS["story"].height) == (1080, 1920)
    assert (PRESETS["og"].width, PRESETS["og"].height) == (1200, 630)


def test_story_safe_zone_in_pixels():
    assert VARIANT_STORY.safe_zone.content_bounds(1080, 1920) == (90, 260, 990, 1600)
    assert SafeZone().content_bounds(1080, 1080) == (86, 86, 994, 994)


def test_square_geometry(march_first):
    g = scene_geometry(1080, 1080, march_first)
    assert g.content == (86, 86, 994, 994)
    assert (g.header.scale, g.sub.scale) == (18, 12)
    assert g.grid == LayoutResult(columns=28, rows=14, dot_diameter=24, gap=7)
    assert g.grid_bounds == (86, 404, 994, 874)
    assert g.origin == (109, 425)
    assert (g.footer.text, g.footer.y, g.footer.scale) == ("2023", 910, 12)
    assert g.ring_thickness == 3


@pytest.mark.parametrize(
    "name,grid",
    [
        ("story", LayoutResult(columns=19, rows=20, dot_diameter=34, gap=10)),
        ("og", LayoutResult(columns=37, rows=10, dot_diameter=21, gap=6)),
    ],
)
def test_preset_geometry(march_first, name, grid):
    preset = PRESETS[name]
    g = scene_geometry(preset.width, preset.height, march_first, preset.variant)
    assert g.grid == grid


@pytest.mark.parametrize("name", ["square", "story", "og"])
def test_labels_are_centred_inside_safe_area(leap_year_end, name):
    preset = PRESETS[name]
    g = scene_geometry(preset.width, preset.height, leap_year_end, preset.variant)
    left, top, right, bottom = g.content
    for block in (g.header, g.sub, g.footer):
        assert left <= block.x and block.x + block.width <= right
        assert abs((block.x - left) - (right - block.x - block.width)) <= 1
    assert g.header.y == top
    assert g.sub.y > g.header.y + g.header.height
    assert g.grid_bounds[1] > g.sub.y + g.sub.height
    assert g.footer.y + g.footer.height == bottom
    assert g.grid_bounds[3] < g.footer.y


def test_dots_are_inside_content_and_disjoint(march_first):
    g = scene_geometry(1080, 1080, march_first)
    left, top, right, bottom = g.content
    r = g.dot_radius
    centers = [(cx, cy) for _, cx, cy in g.dot_centers(march_first.total)]

    assert len(centers) == 365
    assert len(set(centers)) == 365
    for cx, cy in centers:
        assert left <= cx - r and cx + r <= right
        assert g.grid_bounds[1] <= cy - r and cy + r <= g.grid_bounds[3]
    # Neighbours are one dot plus one gap apart, so discs never touch.
    xs = sorted({cx for cx, _ in centers})
    ys = sorted({cy for _, cy in centers})
    assert all(b - a == g.grid.step for a, b in zip(xs, xs[1:]))
    assert all(b - a == g.grid.step for a, b in zip(ys, ys[1:]))
    assert g.grid.step > g.grid.dot_diameter


def test_render_square_marks_filled_days(march_first):
    canvas = render_scene(1080, 1080, march_first)
    g = scene_geometry(1080, 1080, march_first)

    assert (canvas.width, canvas.height) == (1080, 1080)
    assert canvas.get_pixel(0, 0) == BLACK
    assert canvas.get_pixel(1079, 1079) == BLACK

    for i, cx, cy in g.dot_centers(march_first.total):
        x, y = int(cx), int(cy)
        centre = canvas.get_pixel(x, y)
        edge = canvas.get_pixel(x + int(g.dot_radius) - 1, y)
        assert edge == WHITE
        assert centre == (WHITE if i < march_first.filled else BLACK)

    # Pixels in the gap between the first two dots stay background.
    _, cx0, cy0 = next(g.dot_centers(1))
    assert canvas.get_pixel(int(cx0 + g.dot_radius + g.grid.gap // 2), int(cy0)) == BLACK


def test_render_draws_labels_and_footer(march_first):
    canvas = render_scene(1080, 1080, march_first)
    g = scene_geometry(1080, 1080, march_first)

    def colors_in(block):
        return {
            canvas.get_pixel(x, y)
            for y in range(block.y, block.y + block.height)
            for x in range(block.x, block.x + block.width)
        }

    assert WHITE in colors_in(g.header)
    assert (255, 255, 255, 220) in colors_in(g.sub)
    assert (255, 255, 255, 153) in colors_in(g.footer)


@pytest.mark.parametrize("size", [(0, 100), (100, -1), (60, 60)])
def test_degenerate_sizes_raise(march_first, size):
    with pytest.raises(GeometryError):
        render_scene(*size, march_first)
