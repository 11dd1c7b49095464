from __future__ import annotations

import math

from PyQt6.QtCore import QObject, QPointF, pyqtSignal
from PyQt6.QtGui import QTransform

from .constants import MAX_ZOOM, MIN_ZOOM, ZOOM_SNAP_TARGET, ZOOM_SNAP_TOLERANCE


def snap(value: float, target: float = ZOOM_SNAP_TARGET, tolerance: float = ZOOM_SNAP_TOLERANCE) -> float:
    if abs(value - target) < tolerance:
        return target
    return value


class PanZoom(QObject):
    """Translation and scale applied to the whole item layer.

    Task coordinates never change when panning or zooming; the view maps
    ``viewport = pan + zoom * world``.
    """

    changed = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self.pan = QPointF(0.0, 0.0)
        self.zoom = 1.0

    def apply_pan_delta(self, dx: float, dy: float) -> None:
        if dx == 0.0 and dy == 0.0:
            return
        self.pan = QPointF(self.pan.x() + dx, self.pan.y() + dy)
        self.changed.emit()

    def apply_zoom_factor(self, factor: float) -> bool:
        if factor <= 0.0:
            return False
        new_zoom = snap(self.zoom * factor)
        if new_zoom < MIN_ZOOM or new_zoom > MAX_ZOOM:
            return False
        self.zoom = new_zoom
        self.changed.emit()
        return True

    def map_to_world(self, point: QPointF) -> QPointF:
        return QPointF(
            (point.x() - self.pan.x()) / self.zoom,
            (point.y() - self.pan.y()) / self.zoom,
        )

    def map_from_world(self, point: QPointF) -> QPointF:
        return QPointF(
            self.pan.x() + (point.x() * self.zoom),
            self.pan.y() + (point.y() * self.zoom),
        )

    def transform(self) -> QTransform:
        return QTransform(self.zoom, 0.0, 0.0, self.zoom, self.pan.x(), self.pan.y())

    def zoom_label(self) -> str:
        if self.zoom == 1.0:
            return ""
        return f"{math.floor(self.zoom * 100)}% zoom"
