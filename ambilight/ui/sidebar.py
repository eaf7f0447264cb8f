"""Боковая панель: открытие файла, информация, раскладка ленты и цвета зон.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Tuple

import customtkinter as ctk

from ambilight.models.bitmap_model import BitmapImage, Color
from ambilight.models.layout_model import DEFAULT_MONITOR_SIZE, StripLayout, parse_monitor_size
from ambilight.services.ambilight_service import AmbilightFrame


def _rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    r, g, b = rgb[:3]
    return f"#{r:02X}{g:02X}{b:02X}"


class Sidebar(ctk.CTkFrame):
    """Панель с блоками: файл, информация, курсор, лента, зоны."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_layout_change: Optional[Callable[[], None]] = None
        self.on_flip_change: Optional[Callable[[bool], None]] = None

        # Controls
        self._title = ctk.CTkLabel(self, text="Инструменты", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть BMP…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")

        self._info_path.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=5, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=6, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgb_val = ctk.StringVar(value="—")

        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_rgb = ctk.CTkLabel(self, textvariable=self._cursor_rgb_val, anchor="w", justify="left")
        self._cursor_xy.grid(row=7, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_rgb.grid(row=8, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Strip layout
        self._layout_title = ctk.CTkLabel(self, text="Лента", font=ctk.CTkFont(size=16, weight="bold"))
        self._layout_title.grid(row=9, column=0, padx=8, pady=(8, 4), sticky="w")

        self._monitor_label = ctk.CTkLabel(self, text="Диагональ монитора, дюймы:")
        self._monitor_label.grid(row=10, column=0, padx=8, pady=(0, 2), sticky="w")
        self._monitor_val = ctk.StringVar(value=f"{DEFAULT_MONITOR_SIZE:g}")
        self._monitor_entry = ctk.CTkEntry(self, textvariable=self._monitor_val, width=80)
        self._monitor_entry.grid(row=11, column=0, padx=8, pady=(0, 2), sticky="w")
        self._monitor_entry.bind("<FocusOut>", self._on_layout_commit)
        self._monitor_entry.bind("<Return>", self._on_layout_commit)

        self._flip_val = ctk.BooleanVar(value=True)
        self._flip_check = ctk.CTkCheckBox(
            self, text="Показывать снизу вверх", variable=self._flip_val, command=self._emit_flip_change
        )
        self._flip_check.grid(row=12, column=0, padx=8, pady=(4, 2), sticky="w")

        self._counts_val = ctk.StringVar(value="—")
        self._counts_label = ctk.CTkLabel(self, textvariable=self._counts_val, anchor="w", justify="left")
        self._counts_label.grid(row=13, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Zones
        self._zones_title = ctk.CTkLabel(self, text="Зоны", font=ctk.CTkFont(size=16, weight="bold"))
        self._zones_title.grid(row=14, column=0, padx=8, pady=(8, 4), sticky="w")
        self._zones_box = ctk.CTkTextbox(self, width=260, height=200)
        self._zones_box.grid(row=15, column=0, padx=8, pady=(0, 8), sticky="nsew")
        self._zones_box.configure(state="disabled")
        self.grid_rowconfigure(15, weight=1)

        self._status_val = ctk.StringVar(value="")
        self._status = ctk.CTkLabel(
            self, textvariable=self._status_val, wraplength=250, anchor="w", justify="left", text_color="#D9534F"
        )
        self._status.grid(row=16, column=0, padx=8, pady=(0, 8), sticky="ew")

        self.set_layout_info(self.get_layout())

    # ---- Public API ----
    def set_image_info(self, path: Path, image: BitmapImage, size_bytes: Optional[int]) -> None:
        """Отображает метаданные загруженного битмапа."""
        self._path_val.set(str(path))
        self._size_val.set(self._format_size(size_bytes))
        self._dims_val.set(f"{image.width} × {image.height} px, строки в порядке файла")

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgb: Optional[Tuple[int, int, int]]) -> None:
        """Обновляет информацию по курсору (координаты, RGB, HEX)."""
        if x is None or y is None or rgb is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgb_val.set("—")
            return
        self._cursor_xy_val.set(f"({x}, {y})")
        r, g, b = rgb[:3]
        self._cursor_rgb_val.set(f"RGB: {r}, {g}, {b}  {_rgb_to_hex(rgb)}")

    def set_layout_info(self, layout: StripLayout) -> None:
        self._counts_val.set(
            f"Верх {layout.top}, право {layout.right}, низ {layout.bottom}, лево {layout.left} "
            f"(всего {layout.total})"
        )

    def set_frame(self, frame: Optional[AmbilightFrame]) -> None:
        """Выводит цвета зон по сторонам в порядке выборки."""
        lines: List[str] = []
        if frame is not None:
            for name, colors in (
                ("Верх", frame.top), ("Право", frame.right), ("Низ", frame.bottom), ("Лево", frame.left)
            ):
                lines.append(f"{name}:")
                lines.extend(self._format_colors(colors))
        self._zones_box.configure(state="normal")
        self._zones_box.delete("1.0", "end")
        self._zones_box.insert("1.0", "\n".join(lines))
        self._zones_box.configure(state="disabled")

    def set_status(self, text: str) -> None:
        self._status_val.set(text)

    def get_flip_rows(self) -> bool:
        return bool(self._flip_val.get())

    def get_layout(self) -> StripLayout:
        """Возвращает раскладку по введённой диагонали (по умолчанию 21")."""
        return StripLayout.from_monitor_size(parse_monitor_size(self._monitor_val.get()))

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_flip_change(self) -> None:
        if self.on_flip_change:
            self.on_flip_change(self.get_flip_rows())

    def _on_layout_commit(self, _event: object) -> None:
        self.set_layout_info(self.get_layout())
        if self.on_layout_change:
            self.on_layout_change()

    # ---- Helpers ----
    def _format_colors(self, colors: List[Color]) -> List[str]:
        if not colors:
            return ["  (пропущено)"]
        return [f"  R={c.red}, G={c.green}, B={c.blue}" for c in colors]

    def _format_size(self, size_bytes: Optional[int]) -> str:
        if size_bytes is None:
            return "—"
        thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3), ("ГБ", 1024**4)]
        for label, limit in thresholds:
            if size_bytes < limit:
                if label == "Б":
                    return f"{size_bytes} {label}"
                value = size_bytes / (limit // 1024)
                return f"{value:.1f} {label}"
        value = size_bytes / (1024**4)
        return f"{value:.1f} ГБ"
