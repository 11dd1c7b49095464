from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QPen
from PyQt6.QtWidgets import QGraphicsRectItem, QGraphicsScene

from .constants import CANVAS_BACKGROUND_COLOR
from .editor import EditorState
from .items import DependencyItem, TaskItem


class GraphScene(QGraphicsScene):
    """Mirrors the editor state into graphics items.

    All tasks and edges hang off one layer item; panning and zooming only
    change the layer transform.
    """

    def __init__(self, editor: EditorState, font: QFont | None = None) -> None:
        super().__init__()
        self.editor = editor
        self.task_font = font
        self.setBackgroundBrush(QColor(CANVAS_BACKGROUND_COLOR))
        self.layer = QGraphicsRectItem()
        self.layer.setPen(QPen(Qt.PenStyle.NoPen))
        self.addItem(self.layer)
        self.task_items: dict[str, TaskItem] = {}
        self.dependency_items: dict[str, DependencyItem] = {}
        self.preview_item = DependencyItem(preview=True)
        self.preview_item.setParentItem(self.layer)
        self.preview_item.setZValue(2)

        model = editor.model
        model.model_reset.connect(self.refresh_items)
        model.tasks_changed.connect(self.refresh_items)
        model.task_geometry_changed.connect(self.sync_task)
        editor.renderer.paths_changed.connect(self.refresh_paths)
        editor.selection.selection_changed.connect(self.refresh_selection)
        editor.panzoom.changed.connect(self.apply_panzoom)

        self.apply_panzoom()
        self.refresh_items()

    def apply_panzoom(self) -> None:
        self.layer.setTransform(self.editor.panzoom.transform())

    def refresh_items(self) -> None:
        model = self.editor.model
        selection = self.editor.selection
        new_items: dict[str, TaskItem] = {}
        for z, task in enumerate(model.tasks.values()):
            item = self.task_items.get(task.id)
            if item is None:
                item = TaskItem(task.id, self.task_font)
                item.setParentItem(self.layer)
            item.setZValue(10 + z)
            item.sync_from_model(task, selection.is_selected(task.id))
            new_items[task.id] = item
        for task_id, item in self.task_items.items():
            if task_id not in new_items:
                self.removeItem(item)
        self.task_items = new_items
        self.refresh_paths()

    def sync_task(self, task_id: str) -> None:
        task = self.editor.model.get_task(task_id)
        item = self.task_items.get(task_id)
        if task is None or item is None:
            return
        item.sync_from_model(task, self.editor.selection.is_selected(task_id))

    def refresh_selection(self, _selected=None) -> None:
        for task_id in self.task_items:
            self.sync_task(task_id)

    def refresh_paths(self) -> None:
        renderer = self.editor.renderer
        new_items: dict[str, DependencyItem] = {}
        for dep_id, line in renderer.paths.items():
            item = self.dependency_items.get(dep_id)
            if item is None:
                item = DependencyItem(dep_id)
                item.setParentItem(self.layer)
                item.setZValue(1)
            item.sync_from_line(line)
            new_items[dep_id] = item
        for dep_id, item in self.dependency_items.items():
            if dep_id not in new_items:
                self.removeItem(item)
        self.dependency_items = new_items
        self.preview_item.sync_from_line(renderer.preview)
