"""Модели данных для декодированного битмапа.

Принципы:
- SRP: только структура данных и адресация пикселей, без логики усреднения.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class Color:
    """Цвет из трёх 8-битных каналов (без альфа)."""
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Канал {name} вне диапазона 0..255: {value}")

    @property
    def hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.red, self.green, self.blue


@dataclass(frozen=True, eq=False)
class BitmapImage:
    """Неизменяемая сетка пикселей в порядке строк.

    Fields:
        width: Ширина, px (> 0).
        height: Высота, px (> 0).
        channels: Массив uint8 формы (width * height, 3), каналы RGB, только для чтения.
            Пиксель (x, y) лежит по индексу `y * width + x`. Строки хранятся в том
            порядке, в каком они записаны в файле.
    """
    width: int
    height: int
    channels: np.ndarray

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Размеры должны быть положительными: {self.width}x{self.height}")
        channels = np.ascontiguousarray(self.channels, dtype=np.uint8)
        if channels.shape != (self.width * self.height, 3):
            raise ValueError(
                f"Ожидалось {self.width * self.height} пикселей, получен массив {channels.shape}"
            )
        if channels is self.channels:
            channels = channels.copy()
        channels.setflags(write=False)
        object.__setattr__(self, "channels", channels)

    @classmethod
    def from_colors(cls, width: int, height: int, colors: Sequence[Color]) -> "BitmapImage":
        arr = np.array([c.as_tuple() for c in colors], dtype=np.uint8).reshape(-1, 3)
        return cls(width=width, height=height, channels=arr)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitmapImage):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.channels, other.channels)
        )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def pixels(self) -> Tuple[Color, ...]:
        """Все пиксели как `Color`; строит объекты заново, для больших изображений дорого."""
        return tuple(_color(rgb) for rgb in self.channels)

    def index(self, x, y):
        """Плоский индекс пикселя (x, y); работает и с массивами numpy."""
        return y * self.width + x

    def pixel_at(self, x: int, y: int) -> Color:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Пиксель ({x}, {y}) вне изображения {self.width}x{self.height}")
        return _color(self.channels[self.index(x, y)])

    def row(self, y: int) -> Tuple[Color, ...]:
        start = self.index(0, y)
        return tuple(_color(rgb) for rgb in self.channels[start:start + self.width])

    def to_array(self) -> np.ndarray:
        """Массив uint8 формы (width * height, 3) в порядке RGB (тот же, без копии)."""
        return self.channels

    def to_pil(self) -> Image.Image:
        """Изображение PIL (RGB) с теми же строками, что и в сетке, без переворота."""
        return Image.fromarray(self.channels.reshape(self.height, self.width, 3))


def _color(rgb: np.ndarray) -> Color:
    red, green, blue = (int(v) for v in rgb)
    return Color(red, green, blue)
