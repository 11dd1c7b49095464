from __future__ import annotations

import pytest
from PyQt6.QtCore import QPointF

from taskgraph.editor import EditorState
from taskgraph.interaction import POINTER_DOWN, POINTER_MOVE, POINTER_UP, PointerEvent
from taskgraph.view import GraphView


def test_scene_mirrors_editor(qapp) -> None:
    editor = EditorState()
    view = GraphView(editor)
    scene = view.graph_scene
    a = editor.add_task("Alpha", QPointF(0, 0))
    b = editor.add_task("Beta", QPointF(300, 0))
    assert set(scene.task_items) == {a.id, b.id}
    assert scene.task_items[a.id].rect().width() == a.width

    dep = editor.model.add_dependency(a.id, b.id)
    assert not scene.dependency_items[dep.id].path().isEmpty()

    editor.model.delete_task(b.id)
    assert set(scene.task_items) == {a.id}
    assert scene.dependency_items == {}


def test_layer_follows_panzoom(qapp) -> None:
    editor = EditorState()
    view = GraphView(editor)
    editor.panzoom.apply_pan_delta(40, 25)
    editor.panzoom.apply_zoom_factor(2.0)
    transform = view.graph_scene.layer.transform()
    assert transform.dx() == 40
    assert transform.dy() == 25
    assert transform.m11() == 2.0


def test_drag_moves_task_item(qapp) -> None:
    editor = EditorState()
    view = GraphView(editor)
    task = editor.add_task("Alpha", QPointF(0, 0))
    press = QPointF(task.width / 2.0, task.height / 2.0)
    editor.interaction.handle(POINTER_DOWN, PointerEvent(1, press))
    editor.interaction.handle(POINTER_MOVE, PointerEvent(1, press + QPointF(30, 40)))
    editor.interaction.handle(POINTER_UP, PointerEvent(1, press + QPointF(30, 40)))
    pos = view.graph_scene.task_items[task.id].pos()
    assert pos.x() == pytest.approx(30)
    assert pos.y() == pytest.approx(40)
