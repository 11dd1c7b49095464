from __future__ import annotations

from PyQt6.QtCore import QLineF, QPointF, Qt
from PyQt6.QtGui import QColor, QFont, QPainter, QPainterPath, QPen, QPolygonF
from PyQt6.QtWidgets import QGraphicsPathItem, QGraphicsRectItem, QGraphicsSimpleTextItem

from .constants import (
    EDGE_ARROW_SIZE,
    EDGE_COLOR,
    EDGE_LINE_WIDTH,
    EDGE_PREVIEW_COLOR,
    TASK_BORDER_COLOR,
    TASK_COMPLETED_TEXT_COLOR,
    TASK_FILL_COLOR,
    TASK_PADDING_X,
    TASK_PADDING_Y,
    TASK_SELECTED_BORDER_COLOR,
    TASK_SELECTED_FILL_COLOR,
    TASK_TEXT_COLOR,
)


def _draw_arrowhead(
    painter: QPainter, start: QPointF, end: QPointF, color: QColor, size: float
) -> None:
    angle = end - start
    length = (angle.x() ** 2 + angle.y() ** 2) ** 0.5
    if length == 0:
        return
    ux = angle.x() / length
    uy = angle.y() / length
    left = QPointF(end.x() - ux * size - uy * (size / 2.0), end.y() - uy * size + ux * (size / 2.0))
    right = QPointF(end.x() - ux * size + uy * (size / 2.0), end.y() - uy * size - ux * (size / 2.0))
    painter.save()
    painter.setBrush(color)
    painter.setPen(Qt.PenStyle.NoPen)
    painter.drawPolygon(QPolygonF([end, left, right]))
    painter.restore()


class TaskItem(QGraphicsRectItem):
    def __init__(self, task_id: str, font: QFont | None = None) -> None:
        super().__init__()
        self.task_id = task_id
        self.text_item = QGraphicsSimpleTextItem(self)
        if font is not None:
            self.text_item.setFont(font)
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.text_item.setAcceptedMouseButtons(Qt.MouseButton.NoButton)

    def sync_from_model(self, task, selected: bool) -> None:
        self.setRect(0, 0, task.width, task.height)
        self.setPos(task.pos)
        pen = QPen(QColor(TASK_SELECTED_BORDER_COLOR if selected else TASK_BORDER_COLOR))
        pen.setWidthF(2.0 if selected else 1.0)
        self.setPen(pen)
        self.setBrush(QColor(TASK_SELECTED_FILL_COLOR if selected else TASK_FILL_COLOR))
        font = self.text_item.font()
        font.setStrikeOut(task.completed)
        self.text_item.setFont(font)
        self.text_item.setBrush(
            QColor(TASK_COMPLETED_TEXT_COLOR if task.completed else TASK_TEXT_COLOR)
        )
        self.text_item.setText(task.name)
        self.text_item.setPos(TASK_PADDING_X, TASK_PADDING_Y)


class DependencyItem(QGraphicsPathItem):
    def __init__(self, dep_id: str | None = None, preview: bool = False) -> None:
        super().__init__()
        self.dep_id = dep_id
        pen = QPen(QColor(EDGE_PREVIEW_COLOR if preview else EDGE_COLOR))
        pen.setWidth(EDGE_LINE_WIDTH)
        if preview:
            pen.setStyle(Qt.PenStyle.DashLine)
        self.setPen(pen)
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)

    def sync_from_line(self, line: QLineF | None) -> None:
        if line is None:
            self.setPath(QPainterPath())
            return
        path = QPainterPath(line.p1())
        path.lineTo(line.p2())
        self.setPath(path)

    def paint(self, painter: QPainter, option, widget=None) -> None:
        super().paint(painter, option, widget)
        path = self.path()
        if path.elementCount() < 2:
            return
        last = path.elementAt(path.elementCount() - 1)
        prev = path.elementAt(path.elementCount() - 2)
        _draw_arrowhead(
            painter,
            QPointF(prev.x, prev.y),
            QPointF(last.x, last.y),
            self.pen().color(),
            EDGE_ARROW_SIZE,
        )
