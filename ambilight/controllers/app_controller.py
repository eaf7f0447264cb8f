"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики декодирования и усреднения).
- DIP: зависит от сервисов как от ролей; конкретные реализации инкапсулированы.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from tkinter import filedialog, TclError
from typing import Optional, Tuple

import customtkinter as ctk

from ambilight.models.bitmap_model import BitmapImage
from ambilight.models.errors import BitmapError
from ambilight.services.ambilight_service import AmbilightService
from ambilight.services.bitmap_service import BitmapService
from ambilight.ui.image_viewer import ImageViewer
from ambilight.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка битмапов через `BitmapService`.
    - Пересчёт цветов зон через `AmbilightService` при смене файла или раскладки.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    window: ctk.CTk

    _bitmap_service: BitmapService = BitmapService()
    _ambilight_service: AmbilightService = AmbilightService()
    _current_image: Optional[BitmapImage] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_layout_change = self._handle_layout_change
        self.sidebar.on_flip_change = self.viewer.set_flip_rows
        self.viewer.set_flip_rows(self.sidebar.get_flip_rows())
        self.viewer.on_cursor_move = self._handle_cursor_move

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите BMP",
                filetypes=(
                    ("Bitmap", "*.bmp"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return
        self.open_file(file_path)

    def _handle_layout_change(self) -> None:
        self._apply_layout()

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgb: Optional[Tuple[int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgb)

    # ---- Public API ----
    def open_file(self, file_path: str | Path) -> None:
        """Загружает битмап и обновляет все представления.

        Ошибки формата и чтения показываются в строке статуса; предыдущее
        изображение остаётся на экране.
        """
        path = Path(file_path)
        try:
            image = self._bitmap_service.load(path)
        except BitmapError as exc:
            logger.error("Cannot open %s: %s", path, exc)
            self.sidebar.set_status(str(exc))
            return

        self._current_image = image
        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        self.sidebar.set_status("")
        self.sidebar.set_image_info(path, image, size_bytes)
        self.viewer.set_image(image.to_pil())
        self._apply_layout()

    # ---- Helpers ----
    def _apply_layout(self) -> None:
        if self._current_image is None:
            return
        layout = self.sidebar.get_layout()
        frame = self._ambilight_service.compute_frame(self._current_image, layout)
        if frame.skipped:
            self.sidebar.set_status(f"Пропущены зоны: {', '.join(frame.skipped)}")
        self.viewer.set_frame(frame)
        self.sidebar.set_frame(frame)
