from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QPointF, QSizeF, pyqtSignal

from .constants import DEFAULT_VIEWPORT_HEIGHT, DEFAULT_VIEWPORT_WIDTH, TASK_STATUS_TODO
from .interaction import InteractionController
from .layout import TaskLayout
from .model import Task, TaskGraphModel
from .panzoom import PanZoom
from .paths import PathRenderer
from .persistence import from_document, to_document
from .selection import SelectionManager

logger = logging.getLogger("taskgraph.editor")


class EditorState(QObject):
    """One canvas worth of state and the operations offered to the shell."""

    selection_changed = pyqtSignal(object)
    task_moved = pyqtSignal(object)
    new_dependency = pyqtSignal()

    def __init__(self, layout: TaskLayout | None = None) -> None:
        super().__init__()
        self.model = TaskGraphModel(layout)
        self.panzoom = PanZoom()
        self.selection = SelectionManager(self.model)
        self.renderer = PathRenderer(self.model)
        self.interaction = InteractionController(
            self.model, self.panzoom, self.selection, self.renderer
        )
        self.viewport_size = QSizeF(DEFAULT_VIEWPORT_WIDTH, DEFAULT_VIEWPORT_HEIGHT)
        self.selection.selection_changed.connect(self.selection_changed)
        self.interaction.task_moved.connect(self.task_moved)
        self.interaction.new_dependency.connect(self.new_dependency)

    @property
    def link_mode(self) -> bool:
        return self.interaction.link_mode_enabled

    def set_link_mode(self, enabled: bool) -> None:
        self.interaction.link_mode_enabled = bool(enabled)

    def set_viewport_size(self, width: float, height: float) -> None:
        self.viewport_size = QSizeF(width, height)

    def view_center(self) -> QPointF:
        center = QPointF(self.viewport_size.width() / 2.0, self.viewport_size.height() / 2.0)
        return self.panzoom.map_to_world(center)

    def centered_position(self, name: str) -> QPointF:
        width, height = self.model.task_size(name)
        center = self.view_center()
        return QPointF(center.x() - (width / 2.0), center.y() - (height / 2.0))

    def add_task(
        self,
        name: str,
        pos: QPointF | None = None,
        status: str = TASK_STATUS_TODO,
    ) -> Task:
        if pos is None:
            pos = self.centered_position(name)
        return self.model.add_task(name, pos, status)

    def rename_task(self, task_id: str, name: str) -> None:
        self.model.rename_task(task_id, name)

    def selected_tasks(self) -> list[Task]:
        return self.selection.selected_tasks()

    def select_all(self) -> None:
        self.selection.select_all()

    def delete_selected(self) -> None:
        self.interaction.cancel_active()
        for task_id in self.selection.selected_ids():
            self.model.delete_task(task_id)
        self.selection.clear()

    def complete_selected(self) -> None:
        for task_id in self.selection.selected_ids():
            self.model.toggle_completed(task_id)

    def clear_graph(self) -> None:
        self.interaction.cancel_active()
        had_selection = bool(self.selection.selected_ids())
        self.model.clear()
        if had_selection:
            self.selection.clear()

    def load_graph(self, document: dict) -> list[dict]:
        self.interaction.cancel_active()
        had_selection = bool(self.selection.selected_ids())
        skipped = from_document(self.model, document, place=self.centered_position)
        if skipped:
            logger.warning("Loaded graph with %d unresolved dependencies", len(skipped))
        if had_selection:
            self.selection.clear()
        return skipped

    def get_graph(self) -> dict:
        return to_document(self.model)
