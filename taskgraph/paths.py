from __future__ import annotations

from PyQt6.QtCore import QLineF, QObject, QPointF, pyqtSignal

from .constants import EDGE_MARGIN
from .geometry import box_center, expand_box, intersect_line_box
from .model import Dependency, Task, TaskGraphModel, new_id


def render_line(
    source: Task,
    target: Task | None,
    live_destination: QPointF | None = None,
    margin: float = EDGE_MARGIN,
) -> QLineF | None:
    source_box = source.box()
    center_a = box_center(source_box)
    if live_destination is not None:
        center_b = QPointF(live_destination)
    elif target is not None:
        center_b = box_center(target.box())
    else:
        return None
    point_a = intersect_line_box(center_a, center_b, expand_box(source_box, margin))
    if live_destination is not None:
        point_b = center_b
    else:
        point_b = intersect_line_box(center_a, center_b, expand_box(target.box(), margin))
    if point_a is None or point_b is None:
        return None
    return QLineF(point_a, point_b)


def render_path(
    model: TaskGraphModel,
    dependency: Dependency,
    live_destination: QPointF | None = None,
) -> QLineF | None:
    source = model.get_task(dependency.predecessor)
    if source is None:
        return None
    target = model.get_task(dependency.successor)
    return render_line(source, target, live_destination)


class PathRenderer(QObject):
    """Keeps the rendered line of every dependency in step with the model."""

    paths_changed = pyqtSignal()

    def __init__(self, model: TaskGraphModel) -> None:
        super().__init__()
        self.model = model
        self.paths: dict[str, QLineF | None] = {}
        self.preview: QLineF | None = None
        self.preview_dependency: Dependency | None = None
        self.model.model_reset.connect(self.update_all)
        self.model.dependencies_changed.connect(self.update_all)
        self.model.tasks_changed.connect(self.update_all)
        self.model.task_geometry_changed.connect(self.update_task)

    def path_for(self, dep_id: str) -> QLineF | None:
        return self.paths.get(dep_id)

    def update_path(self, dep_id: str) -> None:
        dependency = self.model.get_dependency(dep_id)
        if dependency is None:
            self.paths.pop(dep_id, None)
            return
        self.paths[dep_id] = render_path(self.model, dependency)

    def update_task(self, task_id: str) -> None:
        for dependency in self.model.incident_dependencies(task_id):
            self.update_path(dependency.id)
        self.paths_changed.emit()

    def update_all(self) -> None:
        self.paths = {
            dep_id: render_path(self.model, dependency)
            for dep_id, dependency in self.model.dependencies.items()
        }
        if (
            self.preview_dependency is not None
            and self.model.get_task(self.preview_dependency.predecessor) is None
        ):
            self.clear_preview()
            return
        self.paths_changed.emit()

    def begin_preview(self, task_id: str) -> None:
        # Provisional edge: no successor until the link is released on a task.
        self.preview_dependency = Dependency(new_id(), task_id, None)
        self.preview = None
        self.paths_changed.emit()

    def update_preview(self, destination: QPointF) -> None:
        if self.preview_dependency is None:
            self.preview = None
        else:
            self.preview = render_path(self.model, self.preview_dependency, destination)
        self.paths_changed.emit()

    def clear_preview(self) -> None:
        self.preview_dependency = None
        self.preview = None
        self.paths_changed.emit()
