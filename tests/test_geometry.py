from __future__ import annotations

import pytest
from PyQt6.QtCore import QPointF, QRectF

from taskgraph.geometry import (
    box_center,
    box_contains,
    expand_box,
    intersect_line_box,
    squared_distance,
)


def test_squared_distance() -> None:
    assert squared_distance(QPointF(0, 0), QPointF(3, 4)) == 25


def test_box_center_and_expand() -> None:
    box = QRectF(10, 20, 40, 30)
    assert box_center(box) == QPointF(30, 35)
    expanded = expand_box(box, 8)
    assert expanded == QRectF(2, 12, 56, 46)
    assert box_center(expanded) == box_center(box)


def test_intersect_exits_expanded_box() -> None:
    box = expand_box(QRectF(-10, -10, 20, 20), 8)
    point = intersect_line_box(QPointF(0, 0), QPointF(100, 0), box)
    assert point is not None
    assert point.x() == pytest.approx(18)
    assert point.y() == pytest.approx(0)


def test_intersect_enters_target_box() -> None:
    box = QRectF(90, -10, 20, 20)
    point = intersect_line_box(QPointF(0, 0), QPointF(100, 0), box)
    assert point is not None
    assert point.x() == pytest.approx(90)


def test_intersect_diagonal_hits_corner_region() -> None:
    box = QRectF(-10, -10, 20, 20)
    point = intersect_line_box(QPointF(0, 0), QPointF(100, 50), box)
    assert point is not None
    assert point.x() == pytest.approx(10)
    assert point.y() == pytest.approx(5)


def test_intersect_degenerate_inputs() -> None:
    box = QRectF(-10, -10, 20, 20)
    assert intersect_line_box(QPointF(0, 0), QPointF(0, 0), box) is None
    assert intersect_line_box(QPointF(0, 0), QPointF(50, 0), QRectF(0, 0, 0, 10)) is None


def test_intersect_segment_too_short() -> None:
    box = QRectF(-10, -10, 20, 20)
    assert intersect_line_box(QPointF(0, 0), QPointF(5, 0), box) is None


def test_box_contains_is_closed() -> None:
    box = QRectF(0, 0, 10, 10)
    assert box_contains(box, QPointF(10, 10))
    assert box_contains(box, QPointF(0, 5))
    assert not box_contains(box, QPointF(10.1, 5))
