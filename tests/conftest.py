from __future__ import annotations

import struct
from typing import List, Sequence, Tuple

import pytest

from ambilight.models.bitmap_model import BitmapImage, Color
from ambilight.services.bitmap_service import BitmapService

RGB = Tuple[int, int, int]


def make_bmp(
    rows: Sequence[Sequence[RGB]],
    bits_per_pixel: int = 24,
    compression: int = 0,
    height: int | None = None,
) -> bytes:
    """Собирает 24-битный BMP; строки пишутся в переданном порядке, пиксели как (B, G, R)."""
    width = len(rows[0])
    padding = (4 - (width * 3) % 4) % 4
    body = bytearray()
    for row in rows:
        for r, g, b in row:
            body += bytes((b, g, r))
        body += b"\x00" * padding
    header = bytearray(54)
    header[0:2] = b"BM"
    struct.pack_into("<I", header, 2, 54 + len(body))
    struct.pack_into("<I", header, 10, 54)
    struct.pack_into("<I", header, 14, 40)
    struct.pack_into("<i", header, 18, width)
    struct.pack_into("<i", header, 22, len(rows) if height is None else height)
    struct.pack_into("<H", header, 26, 1)
    struct.pack_into("<H", header, 28, bits_per_pixel)
    struct.pack_into("<I", header, 30, compression)
    struct.pack_into("<I", header, 34, len(body))
    return bytes(header) + bytes(body)


def make_image(rows: Sequence[Sequence[RGB]]) -> BitmapImage:
    colors: List[Color] = [Color(*p) for row in rows for p in row]
    return BitmapImage.from_colors(len(rows[0]), len(rows), colors)


def uniform_rows(width: int, height: int, rgb: RGB) -> List[List[RGB]]:
    return [[rgb] * width for _ in range(height)]


def gradient_rows(width: int, height: int) -> List[List[RGB]]:
    """Красный канал = x, зелёный = y, синий = x + y (по модулю 256)."""
    return [[(x % 256, y % 256, (x + y) % 256) for x in range(width)] for y in range(height)]


@pytest.fixture
def service() -> BitmapService:
    return BitmapService()
