"""
Minimal PNG writer.

Supports exactly one flavour: 8-bit truecolour with alpha (colour type 6),
non-interlaced, filter type 0 on every scanline, one IDAT chunk.
"""

from __future__ import annotations

import logging
import struct
import zlib
from typing import Tuple

from yeardots.errors import EncodingFailure
from yeardots.raster import Canvas

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
BIT_DEPTH = 8
COLOR_TYPE_RGBA = 6
BYTES_PER_PIXEL = 4


# ─────────────────────────── CRC-32 ───────────────────────────

def _make_crc_table() -> Tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = (c >> 1) ^ 0xEDB88320 if c & 1 else c >> 1
        table.append(c)
    return tuple(table)


CRC_TABLE = _make_crc_table()


def crc32(data: bytes, crc: int = 0) -> int:
    """IEEE CRC-32 (reflected polynomial 0xEDB88320), as PNG requires.

    ``crc`` continues a previous result, like ``zlib.crc32``.
    """
    c = crc ^ 0xFFFFFFFF
    for byte in data:
        c = CRC_TABLE[(c ^ byte) & 0xFF] ^ (c >> 8)
    return c ^ 0xFFFFFFFF


# ─────────────────────────── Chunks ───────────────────────────

def png_chunk(chunk_type: bytes, data: bytes) -> bytes:
    """Length, 4-byte type tag, data, CRC over tag + data."""
    if len(chunk_type) != 4:
        raise ValueError(f"chunk type must be 4 bytes, got {chunk_type!r}")
    crc = crc32(data, crc32(chunk_type))
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


def ihdr_data(width: int, height: int) -> bytes:
    # compression, filter and interlace methods are all 0
    return struct.pack(">IIBBBBB", width, height, BIT_DEPTH, COLOR_TYPE_RGBA, 0, 0, 0)


def frame_scanlines(pixels: bytes, width: int, height: int) -> bytes:
    """Prefix each row of RGBA bytes with filter type 0 (None)."""
    stride = width * BYTES_PER_PIXEL
    raw = bytearray(height * (stride + 1))
    src = memoryview(pixels)
    for y in range(height):
        start = y * (stride + 1)
        raw[start] = 0
        raw[start + 1:start + 1 + stride] = src[y * stride:(y + 1) * stride]
    return bytes(raw)


# ─────────────────────────── Encoder ──────────────────────────

def encode_rgba(width: int, height: int, pixels: bytes) -> bytes:
    """
    Encode a row-major RGBA buffer as PNG.

    Raises:
        EncodingFailure: dimensions and buffer size disagree, or
            compression failed.
    """
    if width <= 0 or height <= 0:
        raise EncodingFailure(f"cannot encode a {width}x{height} image")
    expected = width * height * BYTES_PER_PIXEL
    if len(pixels) != expected:
        raise EncodingFailure(
            f"pixel buffer size mismatch: got {len(pixels)}, expected {expected}"
        )

    try:
        idat = zlib.compress(frame_scanlines(pixels, width, height), 9)
    except zlib.error as exc:
        raise EncodingFailure(f"compression failed: {exc}") from exc

    out = b"".join([
        PNG_SIGNATURE,
        png_chunk(b"IHDR", ihdr_data(width, height)),
        png_chunk(b"IDAT", idat),
        png_chunk(b"IEND", b""),
    ])
    logger.debug("Encoded %dx%d PNG: %d bytes (IDAT %d)", width, height, len(out), len(idat))
    return out


def encode_png(canvas: Canvas) -> bytes:
    return encode_rgba(canvas.width, canvas.height, canvas.pixels)
