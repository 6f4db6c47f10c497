import itertools

import pytest

from yeardots import font
from yeardots.errors import GeometryError
from yeardots.layout import LayoutResult, dot_centers, grid_origin, solve_layout

CLAMPS = dict(gap_ratio=0.32, min_dot=12, max_dot=64, min_gap=3, max_gap=28)


def test_measure_text_closed_form():
    assert font.measure_text("", 4, 2) == 0
    assert font.measure_text("1", 3, 2) == 15
    assert font.measure_text("60/365", 10, 2) == 6 * 7 * 10 - 20
    assert font.measure_text("60/365", 1) == 6 * 6 - 1


def test_glyph_table_is_read_only():
    with pytest.raises(TypeError):
        font.GLYPHS["A"] = (0,) * 7
    assert set(font.GLYPHS) == set("0123456789/.% ")
    assert all(len(rows) == 7 and all(0 <= r < 32 for r in rows) for rows in font.GLYPHS.values())


def test_story_grid():
    result = solve_layout(365, 900, 1022, 19, **CLAMPS)
    assert result == LayoutResult(columns=19, rows=20, dot_diameter=36, gap=11)


def test_square_grid():
    result = solve_layout(365, 908, 590, 28, **CLAMPS)
    assert result == LayoutResult(columns=28, rows=14, dot_diameter=24, gap=7)
    assert result.drawn_width == 861
    assert result.drawn_height == 427


def test_large_area_hits_the_dot_ceiling():
    # Unclamped dot is 383, so the gap is floor(383 * 0.32) = 122 -> 28.
    result = solve_layout(366, 10_000, 10_000, 19, **CLAMPS)
    assert result.dot_diameter == 64
    assert result.gap == 28
    assert result.drawn_width < 10_000


@pytest.mark.parametrize("size", [2000, 5000, 10_000])
def test_gap_follows_unclamped_dot(size):
    columns, rows = 19, 20
    raw = int(min(
        size / (columns + (columns - 1) * 0.32),
        size / (rows + (rows - 1) * 0.32),
    ))
    result = solve_layout(365, size, size, columns, **CLAMPS)
    assert result.dot_diameter == min(64, raw)
    assert result.gap == max(3, min(28, int(raw * 0.32)))


def test_ceiling_gap_on_5000_square():
    result = solve_layout(365, 5000, 5000, 19, **CLAMPS)
    assert result == LayoutResult(columns=19, rows=20, dot_diameter=64, gap=28)


@pytest.mark.parametrize(
    "total,width,height,columns",
    list(itertools.product([1, 7, 365, 366], [300, 908, 1100, 2000], [300, 590, 1022], [1, 7, 19, 28, 37])),
)
def test_result_fits_and_respects_clamps(total, width, height, columns):
    try:
        result = solve_layout(total, width, height, columns, **CLAMPS)
    except GeometryError:
        # Only acceptable when even the smallest dots cannot fit.
        smallest = LayoutResult(columns, -(-total // columns), 12, 3)
        assert not smallest.fits(width, height)
        return
    assert result.rows == -(-total // columns)
    assert result.fits(width, height)
    assert 12 <= result.dot_diameter <= 64
    assert 3 <= result.gap <= 28


def test_min_gap_clamp_shrinks_dot_to_fit():
    # Unclamped: dot 13, gap floor(1.3) = 1; the gap clamp to 3 overflows.
    result = solve_layout(10, 10 * 14 + 9, 14, 10, 0.1, 5, 64, 3, 28)
    assert result.fits(10 * 14 + 9, 14)
    assert result.gap == 3
    assert result.dot_diameter < 14


def test_too_small_area_raises():
    with pytest.raises(GeometryError, match="do not fit"):
        solve_layout(365, 100, 100, 19, **CLAMPS)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(total_dots=0),
        dict(columns=0),
        dict(content_width=0),
        dict(content_height=-5),
        dict(gap_ratio=-0.1),
        dict(min_dot=0),
        dict(min_dot=70),
        dict(min_gap=30),
    ],
)
def test_degenerate_input_rejected(kwargs):
    args = dict(total_dots=365, content_width=900, content_height=900, columns=19, **CLAMPS)
    args.update(kwargs)
    with pytest.raises(GeometryError):
        solve_layout(**args)


def test_grid_origin_centres_the_drawn_block():
    result = LayoutResult(columns=28, rows=14, dot_diameter=24, gap=7)
    assert grid_origin(result, 86, 404, 908, 590) == (86 + 23, 404 + 81)


def test_dot_centers_fill_row_by_row():
    result = LayoutResult(columns=3, rows=2, dot_diameter=10, gap=2)
    centers = list(dot_centers(result, (100, 50), 5))
    assert centers[0] == (0, 105.0, 55.0)
    assert centers[2] == (2, 129.0, 55.0)
    assert centers[3] == (3, 105.0, 67.0)
    assert len(centers) == 5
