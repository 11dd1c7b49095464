from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtCore import QPointF

from taskgraph.editor import EditorState


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def editor() -> EditorState:
    return EditorState()


@pytest.fixture
def two_tasks(editor: EditorState):
    """Tasks A at (0, 0) and B at (200, 0); default boxes are 40 x 32."""
    a = editor.add_task("A", QPointF(0, 0))
    b = editor.add_task("B", QPointF(200, 0))
    return a, b
