from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from .model import Task, TaskGraphModel


class SelectionManager(QObject):
    selection_changed = pyqtSignal(object)

    def __init__(self, model: TaskGraphModel) -> None:
        super().__init__()
        self.model = model
        self._selected: set[str] = set()

    def is_selected(self, task_id: str) -> bool:
        return task_id in self._selected

    def selected_ids(self) -> list[str]:
        return [task_id for task_id in self.model.tasks if task_id in self._selected]

    def selected_tasks(self) -> list[Task]:
        return [task for task in self.model.tasks.values() if task.id in self._selected]

    def _emit(self) -> None:
        self._selected &= set(self.model.tasks)
        self.selection_changed.emit(self.selected_tasks())

    def click(self, task_id: str, shift: bool = False) -> None:
        if task_id not in self.model.tasks:
            return
        if shift:
            if task_id in self._selected:
                self._selected.discard(task_id)
            else:
                self._selected.add(task_id)
        else:
            self._selected = {task_id}
        self._emit()

    def select_all(self) -> None:
        self._selected = set(self.model.tasks)
        self._emit()

    def clear(self) -> None:
        self._selected = set()
        self._emit()
