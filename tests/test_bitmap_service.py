import io
import logging

import numpy as np
import pytest
from PIL import Image, ImageOps

from ambilight.models.bitmap_model import Color
from ambilight.models.errors import BitmapIOError, FormatError
from ambilight.services.bitmap_service import row_padding
from conftest import gradient_rows, make_bmp, uniform_rows


def test_decode_red_4x2(service):
    data = make_bmp(uniform_rows(4, 2, (255, 0, 0)))
    image = service.decode_bytes(data)
    assert (image.width, image.height) == (4, 2)
    assert image.pixels == (Color(255, 0, 0),) * 8


@pytest.mark.parametrize("width,height", [(1, 1), (3, 2), (5, 3), (6, 4), (7, 1)])
def test_decode_preserves_values_and_row_order(service, width, height):
    rows = gradient_rows(width, height)
    image = service.decode_bytes(make_bmp(rows))
    assert len(image.pixels) == width * height
    for y in range(height):
        assert [p.as_tuple() for p in image.row(y)] == rows[y]


def test_decode_reorders_bgr_to_rgb(service):
    image = service.decode_bytes(make_bmp([[(10, 20, 30)]]))
    assert image.pixel_at(0, 0) == Color(red=10, green=20, blue=30)


@pytest.mark.parametrize("width,expected", [(1, 1), (2, 2), (3, 3), (4, 0), (5, 1), (8, 0)])
def test_row_padding(width, expected):
    assert row_padding(width) == expected


def test_rejects_short_header(service):
    with pytest.raises(FormatError):
        service.decode_bytes(b"BM" + b"\x00" * 20)


def test_rejects_non_24_bit(service):
    data = make_bmp(uniform_rows(2, 2, (1, 2, 3)), bits_per_pixel=32)
    with pytest.raises(FormatError):
        service.decode_bytes(data)


def test_rejects_compressed(service):
    data = make_bmp(uniform_rows(2, 2, (1, 2, 3)), compression=1)
    with pytest.raises(FormatError):
        service.decode_bytes(data)


def test_rejects_non_positive_height(service):
    data = make_bmp(uniform_rows(2, 2, (1, 2, 3)), height=-2)
    with pytest.raises(FormatError):
        service.decode_bytes(data)


def test_rejects_truncated_pixels(service):
    data = make_bmp(uniform_rows(3, 3, (1, 2, 3)))
    with pytest.raises(FormatError):
        service.decode_bytes(data[:-10])


def test_missing_trailing_padding_is_tolerated(service):
    # 3 px wide -> 3 bytes padding after each row; the last one may be absent
    data = make_bmp(uniform_rows(3, 2, (9, 8, 7)))
    image = service.decode_bytes(data[:-3])
    assert image.pixels == (Color(9, 8, 7),) * 6


class _FailingStream(io.BytesIO):
    def read(self, size=-1):
        raise OSError("device gone")


def test_read_failure_is_io_error(service):
    with pytest.raises(BitmapIOError):
        service.decode(_FailingStream(b""))


def test_load_missing_file(service, tmp_path):
    with pytest.raises(BitmapIOError):
        service.load(tmp_path / "missing.bmp")


def test_load_from_disk(service, tmp_path):
    path = tmp_path / "flag.bmp"
    path.write_bytes(make_bmp(uniform_rows(4, 2, (0, 146, 70))))
    image = service.load(path)
    assert image.pixels == (Color(0, 146, 70),) * 8


def test_decode_pillow_bitmap_keeps_file_row_order(service, tmp_path):
    grid = np.array([[(x * 40, y * 80, 7) for x in range(5)] for y in range(3)], dtype=np.uint8)
    source = Image.fromarray(grid)
    path = tmp_path / "pillow.bmp"
    source.save(path, format="BMP")

    image = service.load(path)
    # Pillow stores rows bottom-up; the decoder keeps that order
    flipped = ImageOps.flip(source)
    assert np.array_equal(np.asarray(image.to_pil()), np.asarray(flipped))


def test_decode_keeps_channels_as_uint8_array(service):
    width, height = 321, 7
    rows = gradient_rows(width, height)
    image = service.decode_bytes(make_bmp(rows))
    assert image.channels.shape == (width * height, 3)
    assert image.channels.dtype == np.uint8
    assert not image.channels.flags.writeable
    assert np.array_equal(image.channels.reshape(height, width, 3), np.array(rows, dtype=np.uint8))


def test_decode_logs_success_for_plain_streams(service, caplog):
    with caplog.at_level(logging.INFO, logger="ambilight.services.bitmap_service"):
        service.decode_bytes(make_bmp(uniform_rows(3, 2, (1, 2, 3))))
    assert "Decoded 3x2 bitmap" in caplog.text
