"""
Fixed 5x7 bitmap font.

Each glyph is seven rows of five bits, most significant bit on the left.
Only the characters needed for "filled/total" and "percent%" labels are
defined; anything else renders as a blank cell.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

GLYPH_WIDTH = 5
GLYPH_HEIGHT = 7

Glyph = Tuple[int, int, int, int, int, int, int]

GLYPHS: Mapping[str, Glyph] = MappingProxyType({
    "0": (0b01110, 0b10001, 0b10011, 0b10101, 0b11001, 0b10001, 0b01110),
    "1": (0b00100, 0b01100, 0b00100, 0b00100, 0b00100, 0b00100, 0b01110),
    "2": (0b01110, 0b10001, 0b00001, 0b00010, 0b00100, 0b01000, 0b11111),
    "3": (0b11110, 0b00001, 0b00001, 0b01110, 0b00001, 0b00001, 0b11110),
    "4": (0b00010, 0b00110, 0b01010, 0b10010, 0b11111, 0b00010, 0b00010),
    "5": (0b11111, 0b10000, 0b10000, 0b11110, 0b00001, 0b00001, 0b11110),
    "6": (0b01110, 0b10000, 0b10000, 0b11110, 0b10001, 0b10001, 0b01110),
    "7": (0b11111, 0b00001, 0b00010, 0b00100, 0b01000, 0b01000, 0b01000),
    "8": (0b01110, 0b10001, 0b10001, 0b01110, 0b10001, 0b10001, 0b01110),
    "9": (0b01110, 0b10001, 0b10001, 0b01111, 0b00001, 0b00001, 0b01110),
    "/": (0b00001, 0b00010, 0b00100, 0b01000, 0b10000, 0b00000, 0b00000),
    ".": (0b00000, 0b00000, 0b00000, 0b00000, 0b00000, 0b00110, 0b00110),
    "%": (0b11001, 0b11010, 0b00100, 0b01000, 0b10110, 0b00110, 0b00000),
    " ": (0, 0, 0, 0, 0, 0, 0),
})


def glyph_for(char: str) -> Glyph:
    return GLYPHS.get(char, GLYPHS[" "])


def glyph_cells(char: str):
    """Yield (column, row) for every lit cell of a character's glyph."""
    for row, bits in enumerate(glyph_for(char)):
        for col in range(GLYPH_WIDTH):
            if (bits >> (GLYPH_WIDTH - 1 - col)) & 1:
                yield col, row


def advance(scale: int, letter_spacing: int = 1) -> int:
    """Horizontal cursor step per character, in pixels."""
    return (GLYPH_WIDTH + letter_spacing) * scale


def measure_text(text: str, scale: int, letter_spacing: int = 1) -> int:
    """Rendered width of ``text`` in pixels, without the trailing spacing."""
    if not text:
        return 0
    return len(text) * advance(scale, letter_spacing) - letter_spacing * scale


def text_height(scale: int) -> int:
    return GLYPH_HEIGHT * scale
