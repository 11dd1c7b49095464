from __future__ import annotations

import pytest
from PyQt6.QtCore import QPointF

from taskgraph.constants import MAX_ZOOM
from taskgraph.panzoom import PanZoom, snap


def test_starts_at_identity() -> None:
    panzoom = PanZoom()
    assert panzoom.pan == QPointF(0, 0)
    assert panzoom.zoom == 1.0
    assert panzoom.zoom_label() == ""


def test_zoom_snaps_near_one() -> None:
    panzoom = PanZoom()
    panzoom.apply_zoom_factor(1.02)
    assert panzoom.zoom == 1.0


def test_zoom_outside_window_does_not_snap() -> None:
    panzoom = PanZoom()
    panzoom.zoom = 1.3
    panzoom.apply_zoom_factor(0.9)
    assert panzoom.zoom == pytest.approx(1.17)
    assert panzoom.zoom != 1.0


def test_zoom_limits_are_refused() -> None:
    panzoom = PanZoom()
    panzoom.zoom = MAX_ZOOM
    assert panzoom.apply_zoom_factor(1.5) is False
    assert panzoom.zoom == MAX_ZOOM


def test_snap_helper() -> None:
    assert snap(0.95) == 1.0
    assert snap(0.85) == 0.85


def test_pan_and_mapping_round_trip() -> None:
    panzoom = PanZoom()
    changes = []
    panzoom.changed.connect(lambda: changes.append(1))
    panzoom.apply_pan_delta(10, -20)
    panzoom.zoom = 2.0
    world = panzoom.map_to_world(QPointF(30, 0))
    assert world == QPointF(10, 10)
    assert panzoom.map_from_world(world) == QPointF(30, 0)
    assert changes == [1]


def test_transform_matches_mapping() -> None:
    panzoom = PanZoom()
    panzoom.apply_pan_delta(5, 7)
    panzoom.apply_zoom_factor(2.0)
    mapped = panzoom.transform().map(QPointF(3, 4))
    assert mapped == panzoom.map_from_world(QPointF(3, 4))
    assert panzoom.zoom_label() == "200% zoom"
