"""Ошибки декодирования и выборки зон.

Три вида ошибок различимы, чтобы вызывающий код мог решить, прерывать ли весь
конвейер (`BitmapIOError`, `FormatError`) или пропустить одну зону
(`InvalidRangeError`).
"""
from __future__ import annotations


class BitmapError(Exception):
    """Базовая ошибка пакета."""


class BitmapIOError(BitmapError, OSError):
    """Источник не удалось открыть или прочитать."""


class FormatError(BitmapError, ValueError):
    """Неподдерживаемый заголовок или обрезанные данные пикселей."""


class InvalidRangeError(BitmapError, ValueError):
    """Нулевое/отрицательное число секций или секция без пикселей."""
