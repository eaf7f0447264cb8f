"""Средние цвета по зонам изображения: полосы, линии краёв и подсекции.

Все операции сводятся к одному примитиву `_mean`: сумма каналов в int64,
целочисленное деление на число пикселей. Деление на секции всегда усекающее,
остаток отбрасывается (последняя секция его не забирает).
"""
from __future__ import annotations

from typing import Iterable, List

import numpy as np

from ambilight.models.bitmap_model import BitmapImage, Color
from ambilight.models.errors import InvalidRangeError


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _trunc_div(a: int, b: int) -> int:
    """Целочисленное деление с усечением к нулю (а не к минус бесконечности)."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _require_sections(count: int) -> None:
    if count <= 0:
        raise InvalidRangeError(f"Число секций должно быть больше нуля: {count}")


class ZoneSampler:
    """Выборка средних цветов из одного `BitmapImage`.

    Изображение только читается (массив каналов берётся без копии); между
    вызовами ничего не кэшируется.
    """
    def __init__(self, image: BitmapImage) -> None:
        self._image = image
        self._channels = image.to_array()

    @property
    def image(self) -> BitmapImage:
        return self._image

    # ---- Whole image and strips ----
    def average(self) -> Color:
        """Средний цвет всех пикселей."""
        return self._mean(np.arange(self._image.pixel_count))

    def vertical_strip(self, start_x: int, end_x: int) -> Color:
        """Средний цвет столбцов [start_x, end_x] по всем строкам.

        Границы зажимаются в [0, width - 1] независимо друг от друга; если после
        этого start_x > end_x, диапазон пуст и поднимается `InvalidRangeError`.
        """
        last = self._image.width - 1
        start_x = _clamp(start_x, 0, last)
        end_x = _clamp(end_x, 0, last)
        return self._mean(self._columns(start_x, end_x, 0, self._image.height - 1))

    def horizontal_strip(self, start_y: int, end_y: int) -> Color:
        """Средний цвет строк [start_y, end_y] по всем столбцам."""
        last = self._image.height - 1
        start_y = _clamp(start_y, 0, last)
        end_y = _clamp(end_y, 0, last)
        return self._mean(self._columns(0, self._image.width - 1, start_y, end_y))

    # ---- Edge lines ----
    def top_line(self, sections: int) -> List[Color]:
        """Секции верхней строки (y = 0), слева направо."""
        return self._row_sections(0, sections)

    def bottom_line(self, sections: int) -> List[Color]:
        """Секции нижней строки (y = height - 1), слева направо."""
        return self._row_sections(self._image.height - 1, sections)

    def right_line(self, sections: int) -> List[Color]:
        """Секции правого столбца (x = width - 1) по возрастанию y."""
        return self._column_sections(self._image.width - 1, sections)

    def left_line(self, sections: int) -> List[Color]:
        """Секции левого столбца (x = 0) по возрастанию y."""
        return self._column_sections(0, sections)

    def vertical_subsections(self, start_x: int, end_x: int, sections: int) -> List[Color]:
        """Делит диапазон столбцов на `sections` вертикальных полос.

        Границы диапазона зажимаются в [0, width - 1], ширина подсекции:
        `(end_x - start_x + 1) / sections` с усечением. Границы каждой подсекции
        повторно зажимаются в исходный [start_x, end_x], поэтому вырожденная
        подсекция превращается в один столбец у ближайшего края, а не в ошибку.

        Returns:
            Цвета по возрастанию x; разворот для правой/левой стороны остаётся заботой
            вызывающего кода.
        """
        _require_sections(sections)
        last = self._image.width - 1
        start_x = _clamp(start_x, 0, last)
        end_x = _clamp(end_x, 0, last)

        range_width = end_x - start_x + 1
        sub_width = _trunc_div(range_width, sections)

        colors: List[Color] = []
        for i in range(sections):
            sub_start = start_x + i * sub_width
            sub_end = sub_start + sub_width - 1
            sub_start = _clamp(sub_start, start_x, end_x)
            sub_end = _clamp(sub_end, start_x, end_x)
            colors.append(self.vertical_strip(sub_start, sub_end))
        return colors

    # ---- Helpers ----
    def _row_sections(self, y: int, sections: int) -> List[Color]:
        _require_sections(sections)
        step = self._image.width // sections
        return [
            self._mean(self._columns(i * step, (i + 1) * step - 1, y, y))
            for i in range(sections)
        ]

    def _column_sections(self, x: int, sections: int) -> List[Color]:
        _require_sections(sections)
        step = self._image.height // sections
        return [
            self._mean(self._columns(x, x, i * step, (i + 1) * step - 1))
            for i in range(sections)
        ]

    def _columns(self, start_x: int, end_x: int, start_y: int, end_y: int) -> np.ndarray:
        """Плоские индексы прямоугольника построчно; пустой, если start > end."""
        xs = np.arange(start_x, end_x + 1, dtype=np.intp)
        ys = np.arange(start_y, end_y + 1, dtype=np.intp)
        return self._image.index(xs[np.newaxis, :], ys[:, np.newaxis]).ravel()

    def _mean(self, indices: Iterable[int]) -> Color:
        idx = np.asarray(indices, dtype=np.intp)
        count = idx.size
        if count == 0:
            raise InvalidRangeError("Секция не содержит ни одного пикселя")
        sums = self._channels[idx].sum(axis=0, dtype=np.int64)
        red, green, blue = (int(s) // count for s in sums)
        return Color(red & 0xFF, green & 0xFF, blue & 0xFF)
