from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List

from ambilight.models.bitmap_model import BitmapImage, Color
from ambilight.models.errors import InvalidRangeError
from ambilight.models.layout_model import StripLayout
from ambilight.services.zone_service import ZoneSampler

logger = logging.getLogger(__name__)


@dataclass
class AmbilightFrame:
    """Цвета зон по сторонам в порядке выборки (слева направо / по возрастанию x).

    Пустой список означает, что зону не удалось посчитать (см. `skipped`).
    """
    top: List[Color] = field(default_factory=list)
    right: List[Color] = field(default_factory=list)
    bottom: List[Color] = field(default_factory=list)
    left: List[Color] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def strip_order(self) -> List[Color]:
        """Цвета в порядке хода ленты: верх, правая, низ и левая в обратном порядке."""
        return [*self.top, *self.right, *reversed(self.bottom), *reversed(self.left)]

    def flipped_rows(self) -> "AmbilightFrame":
        """Кадр для показа изображения, перевёрнутого по вертикали.

        Верх и низ меняются местами; боковые зоны берутся по столбцам через все
        строки и от переворота не зависят.
        """
        return AmbilightFrame(
            top=list(self.bottom),
            right=list(self.right),
            bottom=list(self.top),
            left=list(self.left),
            skipped=list(self.skipped),
        )


class AmbilightService:
    def compute_frame(self, image: BitmapImage, layout: StripLayout) -> AmbilightFrame:
        """
        Считает цвета всех четырёх сторон по раскладке ленты.
        Зона с `InvalidRangeError` остаётся пустой, остальные считаются как обычно.
        """
        sampler = ZoneSampler(image)
        right_start, right_end = layout.right_range(image.width)
        left_start, left_end = layout.left_range(image.width)

        frame = AmbilightFrame()
        frame.top = self._sample(frame, "top", lambda: sampler.top_line(layout.top))
        frame.right = self._sample(
            frame, "right", lambda: sampler.vertical_subsections(right_start, right_end, layout.right)
        )
        frame.bottom = self._sample(frame, "bottom", lambda: sampler.bottom_line(layout.bottom))
        frame.left = self._sample(
            frame, "left", lambda: sampler.vertical_subsections(left_start, left_end, layout.left)
        )
        return frame

    def _sample(self, frame: AmbilightFrame, zone: str, query: Callable[[], List[Color]]) -> List[Color]:
        try:
            return query()
        except InvalidRangeError as exc:
            logger.warning("Skipping %s zone: %s", zone, exc)
            frame.skipped.append(zone)
            return []
