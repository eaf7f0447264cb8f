"""Виджет просмотра битмапа с подсветкой: изображение и LED-зоны по краям.

Принципы:
- SRP: отвечает только за представление, цвета зон получает готовыми.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageOps, ImageTk

from ambilight.models.bitmap_model import Color
from ambilight.services.ambilight_service import AmbilightFrame

LED_BAND = 18  # px, толщина полосы светодиодов вокруг изображения
LED_GAP = 4


class ImageViewer(ctk.CTkFrame):
    """Канва: изображение по центру, вокруг него полосы средних цветов зон."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None
        self._frame: Optional[AmbilightFrame] = None
        self._flip_rows = False

        self._scale_factor: float = 1.0
        self._image_top_left: Optional[Tuple[int, int]] = None

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int], Optional[Tuple[int, int, int]]], None]] = None

        self._canvas.bind("<Configure>", self._on_canvas_resize)
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", self._on_mouse_leave)

    # ---- Public API ----
    def set_image(self, image: Image.Image) -> None:
        """Устанавливает изображение (RGB) и сбрасывает цвета зон."""
        self._image = image if image.mode == "RGB" else image.convert("RGB")
        self._frame = None
        self._render()

    def set_frame(self, frame: Optional[AmbilightFrame]) -> None:
        """Устанавливает цвета зон и перерисовывает рамку."""
        self._frame = frame
        self._render()

    def set_flip_rows(self, flip: bool) -> None:
        """Показывать строки перевёрнутыми (BMP снизу вверх). Данные и координаты
        курсора остаются в порядке файла, меняется только отрисовка."""
        self._flip_rows = flip
        self._render()

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        if self._image is None:
            return
        self._render()

    def _render(self) -> None:
        self._canvas.delete("all")
        if self._image is None:
            return

        canvas_w = int(self._canvas.winfo_width())
        canvas_h = int(self._canvas.winfo_height())
        margin = LED_BAND + LED_GAP
        self._compute_fit_scale(canvas_w - 2 * margin, canvas_h - 2 * margin)

        shown = ImageOps.flip(self._image) if self._flip_rows else self._image
        img_w, img_h = shown.size
        scaled_w = max(1, int(img_w * self._scale_factor))
        scaled_h = max(1, int(img_h * self._scale_factor))
        # pixel art stays crisp on upscale
        resample = Image.Resampling.NEAREST if self._scale_factor >= 1.0 else Image.Resampling.LANCZOS
        resized = shown.resize((scaled_w, scaled_h), resample)

        ox = max(margin, (canvas_w - scaled_w) // 2)
        oy = max(margin, (canvas_h - scaled_h) // 2)
        self._image_top_left = (ox, oy)

        self._tk_image = ImageTk.PhotoImage(resized)
        self._canvas.create_image(ox, oy, image=self._tk_image, anchor="nw")

        if self._frame is not None:
            self._draw_leds(ox, oy, scaled_w, scaled_h)

    def _draw_leds(self, ox: int, oy: int, w: int, h: int) -> None:
        frame = self._frame.flipped_rows() if self._flip_rows else self._frame
        top = oy - LED_GAP - LED_BAND
        bottom = oy + h + LED_GAP
        left = ox - LED_GAP - LED_BAND
        right = ox + w + LED_GAP
        self._draw_band(frame.top, ox, top, w, LED_BAND, horizontal=True)
        self._draw_band(frame.bottom, ox, bottom, w, LED_BAND, horizontal=True)
        # side zones are ordered by column, drawn top to bottom as the strip runs
        self._draw_band(frame.right, right, oy, LED_BAND, h, horizontal=False)
        self._draw_band(frame.left, left, oy, LED_BAND, h, horizontal=False)

    def _draw_band(self, colors: List[Color], x: int, y: int, w: int, h: int, horizontal: bool) -> None:
        if not colors:
            self._canvas.create_rectangle(x, y, x + w, y + h, outline="#808080", dash=(2, 2))
            return
        count = len(colors)
        for i, color in enumerate(colors):
            if horizontal:
                x0 = x + (w * i) // count
                x1 = x + (w * (i + 1)) // count
                box = (x0, y, x1, y + h)
            else:
                y0 = y + (h * i) // count
                y1 = y + (h * (i + 1)) // count
                box = (x, y0, x + w, y1)
            self._canvas.create_rectangle(*box, fill=color.hex, outline="")

    def _compute_fit_scale(self, avail_w: int, avail_h: int) -> None:
        if self._image is None:
            self._scale_factor = 1.0
            return
        avail_w = max(1, avail_w)
        avail_h = max(1, avail_h)
        img_w, img_h = self._image.size
        self._scale_factor = max(0.05, min(8.0, min(avail_w / img_w, avail_h / img_h)))

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self._image is None or self.on_cursor_move is None:
            return
        img_x, img_y = self._canvas_to_image_coords(event.x, event.y)
        if img_x is None or img_y is None:
            self.on_cursor_move(None, None, None)
            return
        self.on_cursor_move(img_x, img_y, self._image.getpixel((img_x, img_y)))

    def _on_mouse_leave(self, _event: tk.Event) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(None, None, None)

    def _canvas_to_image_coords(self, cx: int, cy: int) -> Tuple[Optional[int], Optional[int]]:
        if self._image is None or self._image_top_left is None:
            return None, None
        ox, oy = self._image_top_left
        dx = cx - ox
        dy = cy - oy
        if dx < 0 or dy < 0:
            return None, None
        img_w, img_h = self._image.size
        x = int(dx / self._scale_factor)
        y = int(dy / self._scale_factor)
        if 0 <= x < img_w and 0 <= y < img_h:
            return x, (img_h - 1 - y if self._flip_rows else y)
        return None, None

    def _get_canvas_bg(self) -> str:
        # CTk does not expose canvas theme, so pick neutral
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"
