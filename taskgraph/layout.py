from __future__ import annotations

from PyQt6.QtGui import QFont, QFontMetricsF

from .constants import (
    TASK_CHAR_WIDTH,
    TASK_LINE_HEIGHT,
    TASK_MIN_WIDTH,
    TASK_PADDING_X,
    TASK_PADDING_Y,
)


class TaskLayout:
    """Sizes task boxes from their names.

    The base layout estimates the text width from a fixed character width so
    the model can be used without a GUI application.
    """

    def __init__(
        self,
        padding_x: float = TASK_PADDING_X,
        padding_y: float = TASK_PADDING_Y,
    ) -> None:
        self.padding_x = padding_x
        self.padding_y = padding_y

    def text_size(self, text: str) -> tuple[float, float]:
        return len(text) * TASK_CHAR_WIDTH, TASK_LINE_HEIGHT

    def task_size(self, name: str) -> tuple[float, float]:
        text_width, text_height = self.text_size(name)
        width = max(TASK_MIN_WIDTH, text_width + (2.0 * self.padding_x))
        height = text_height + (2.0 * self.padding_y)
        return width, height


class FontTaskLayout(TaskLayout):
    """Sizes task boxes with real font metrics; needs a QGuiApplication."""

    def __init__(self, font: QFont, **kwargs) -> None:
        super().__init__(**kwargs)
        self.font = QFont(font)
        self._metrics = QFontMetricsF(self.font)

    def text_size(self, text: str) -> tuple[float, float]:
        return self._metrics.horizontalAdvance(text), self._metrics.height()
