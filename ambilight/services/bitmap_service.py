"""Декодирование несжатых 24-битных BMP в `BitmapImage`.

Принципы:
- SRP: класс отвечает только за чтение заголовка и пикселей.
- OCP: источник данных любой: файл на диске или произвольный бинарный поток.

Формат: 54-байтный заголовок, поля little-endian по фиксированным смещениям,
строки пикселей дополнены до кратности 4 байтам, пиксель хранится как (B, G, R).
Строки сохраняются в порядке файла, без переворота снизу вверх.
"""
from __future__ import annotations

import io
import logging
import struct
from pathlib import Path
from typing import BinaryIO, List

import numpy as np

from ambilight.models.bitmap_model import BitmapImage
from ambilight.models.errors import BitmapIOError, FormatError

logger = logging.getLogger(__name__)

HEADER_SIZE = 54
WIDTH_OFFSET = 18
HEIGHT_OFFSET = 22
BITS_PER_PIXEL_OFFSET = 28
COMPRESSION_OFFSET = 30

SUPPORTED_BITS_PER_PIXEL = 24
COMPRESSION_NONE = 0  # BI_RGB
BYTES_PER_PIXEL = 3


def row_padding(width: int) -> int:
    """Число байт выравнивания после строки из `width` пикселей."""
    return (4 - (width * BYTES_PER_PIXEL) % 4) % 4


class BitmapService:
    def load(self, file_path: str | Path) -> BitmapImage:
        """Открывает файл и декодирует его.

        Raises:
            BitmapIOError: если файл не удаётся открыть или прочитать.
            FormatError: если формат не поддерживается или данные обрезаны.
        """
        path = Path(file_path)
        try:
            with path.open("rb") as stream:
                image = self.decode(stream)
        except FileNotFoundError as exc:
            raise BitmapIOError(f"Файл не найден: {path}") from exc
        except IsADirectoryError as exc:
            raise BitmapIOError(f"Путь не указывает на файл: {path}") from exc
        except BitmapIOError:
            raise
        except OSError as exc:
            raise BitmapIOError(f"Не удалось прочитать {path}: {exc}") from exc
        logger.debug("Loaded %s", path)
        return image

    def decode(self, stream: BinaryIO) -> BitmapImage:
        """Декодирует BMP из читаемого и поддерживающего seek потока.

        Args:
            stream: Бинарный поток, позиция на начале заголовка.

        Returns:
            `BitmapImage`; строки в порядке файла, каналы переставлены в RGB.

        Raises:
            BitmapIOError: если чтение или seek завершились ошибкой ОС.
            FormatError: заголовок короче 54 байт, bpp != 24, есть сжатие,
                неположительные размеры или пиксельных данных меньше заявленного.
        """
        header = self._read(stream, HEADER_SIZE)
        if len(header) < HEADER_SIZE:
            raise FormatError(f"Заголовок слишком короткий: {len(header)} из {HEADER_SIZE} байт")

        (width,) = struct.unpack_from("<i", header, WIDTH_OFFSET)
        (height,) = struct.unpack_from("<i", header, HEIGHT_OFFSET)
        (bits_per_pixel,) = struct.unpack_from("<H", header, BITS_PER_PIXEL_OFFSET)
        (compression,) = struct.unpack_from("<I", header, COMPRESSION_OFFSET)
        logger.debug(
            "BMP header: width=%d height=%d bpp=%d compression=%d",
            width, height, bits_per_pixel, compression,
        )

        if bits_per_pixel != SUPPORTED_BITS_PER_PIXEL or compression != COMPRESSION_NONE:
            raise FormatError(
                "Поддерживаются только 24-битные BMP без сжатия "
                f"(bpp={bits_per_pixel}, compression={compression})"
            )
        if width <= 0 or height <= 0:
            raise FormatError(f"Неподдерживаемые размеры: {width}x{height}")

        padding = row_padding(width)
        row_size = width * BYTES_PER_PIXEL
        rows: List[np.ndarray] = []
        for y in range(height):
            row = self._read(stream, row_size)
            if len(row) < row_size:
                raise FormatError(
                    f"Данные пикселей обрезаны на строке {y}: {len(row)} из {row_size} байт"
                )
            # stored as B, G, R
            rows.append(np.frombuffer(row, dtype=np.uint8).reshape(width, BYTES_PER_PIXEL)[:, ::-1])
            if padding:
                self._skip(stream, padding)

        image = BitmapImage(width=width, height=height, channels=np.concatenate(rows))
        logger.info("Decoded %dx%d bitmap", width, height)
        return image

    def decode_bytes(self, data: bytes) -> BitmapImage:
        return self.decode(io.BytesIO(data))

    # ---- Helpers ----
    def _read(self, stream: BinaryIO, size: int) -> bytes:
        try:
            return stream.read(size)
        except OSError as exc:
            raise BitmapIOError(f"Ошибка чтения: {exc}") from exc

    def _skip(self, stream: BinaryIO, size: int) -> None:
        try:
            stream.seek(size, io.SEEK_CUR)
        except OSError as exc:
            raise BitmapIOError(f"Ошибка seek: {exc}") from exc
