"""Раскладка LED-ленты вокруг монитора."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

DEFAULT_MONITOR_SIZE = 21.0


def parse_monitor_size(text: str, default: float = DEFAULT_MONITOR_SIZE) -> float:
    """Диагональ из пользовательского ввода; запятая допускается как разделитель.

    Нечисловые и неположительные значения, а также nan и inf заменяются
    на `default`.
    """
    try:
        size = float(text.strip().replace(",", "."))
    except ValueError:
        return default
    if not math.isfinite(size) or size <= 0:
        return default
    return size


@dataclass(frozen=True)
class StripLayout:
    """Число светодиодов на каждой стороне и столбцы, из которых берутся боковые зоны.

    Fields:
        top, right, bottom, left: Количество светодиодов (секций) на стороне.
        edge_fraction: Доля ширины (1/edge_fraction), занимаемая боковой зоной.
        right_margin: Сколько правых столбцов отбрасывается у правой зоны.
        left_start_x: Первый столбец левой зоны.
    """
    top: int
    right: int
    bottom: int
    left: int
    edge_fraction: int = 10
    right_margin: int = 6
    left_start_x: int = 28

    @classmethod
    def from_monitor_size(cls, size_inches: float = DEFAULT_MONITOR_SIZE) -> "StripLayout":
        """Раскладка по диагонали монитора: ~2.333 светодиода на дюйм.

        Raises:
            ValueError: если диагональ не конечна или не положительна.
        """
        if not math.isfinite(size_inches) or size_inches <= 0:
            raise ValueError(f"Некорректная диагональ монитора: {size_inches}")
        total = int(size_inches * 2.333) + 1
        return cls(
            top=int(total * 0.30) + 1,
            right=int(total * 0.20),
            bottom=int(total * 0.30) + 1,
            left=int(total * 0.20),
        )

    @property
    def total(self) -> int:
        return self.top + self.right + self.bottom + self.left

    def right_range(self, width: int) -> Tuple[int, int]:
        # starts at the last 1/edge_fraction, drops the last right_margin columns
        return (width // self.edge_fraction) * (self.edge_fraction - 1), width - self.right_margin

    def left_range(self, width: int) -> Tuple[int, int]:
        return self.left_start_x, width // self.edge_fraction
