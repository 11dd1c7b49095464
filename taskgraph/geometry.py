from __future__ import annotations

from PyQt6.QtCore import QPointF, QRectF


def squared_distance(p: QPointF, q: QPointF) -> float:
    dx = p.x() - q.x()
    dy = p.y() - q.y()
    return (dx * dx) + (dy * dy)


def box_center(box: QRectF) -> QPointF:
    return QPointF(box.left() + (box.width() / 2.0), box.top() + (box.height() / 2.0))


def expand_box(box: QRectF, margin: float) -> QRectF:
    return QRectF(
        box.left() - margin,
        box.top() - margin,
        box.width() + (2.0 * margin),
        box.height() + (2.0 * margin),
    )


def box_contains(box: QRectF, point: QPointF) -> bool:
    if box.width() <= 0.0 or box.height() <= 0.0:
        return False
    return (
        box.left() <= point.x() <= box.left() + box.width()
        and box.top() <= point.y() <= box.top() + box.height()
    )


def intersect_line_box(a: QPointF, b: QPointF, box: QRectF) -> QPointF | None:
    """Return where the segment a->b leaves or enters the boundary of box.

    Every edge of the box is tested against its supporting line; the hit
    closest to ``a`` (smallest parameter in (0, 1]) that lies on the finite
    edge wins. ``None`` when the points coincide, the box is degenerate or
    the segment never reaches the boundary.
    """
    width = box.width()
    height = box.height()
    if width <= 0.0 or height <= 0.0:
        return None
    dx = b.x() - a.x()
    dy = b.y() - a.y()
    if dx == 0.0 and dy == 0.0:
        return None
    left = box.left()
    top = box.top()
    right = left + width
    bottom = top + height
    hits: list[tuple[float, QPointF]] = []
    if dx != 0.0:
        for edge_x in (left, right):
            t = (edge_x - a.x()) / dx
            y = a.y() + (t * dy)
            if top <= y <= bottom:
                hits.append((t, QPointF(edge_x, y)))
    if dy != 0.0:
        for edge_y in (top, bottom):
            t = (edge_y - a.y()) / dy
            x = a.x() + (t * dx)
            if left <= x <= right:
                hits.append((t, QPointF(x, edge_y)))
    best = None
    for t, point in hits:
        if t <= 0.0 or t > 1.0:
            continue
        if best is None or t < best[0]:
            best = (t, point)
    if best is None:
        return None
    return best[1]
