from __future__ import annotations

from dataclasses import dataclass, field
import logging
import uuid

from PyQt6.QtCore import QObject, QPointF, QRectF, pyqtSignal

from .constants import TASK_STATUS_COMPLETED, TASK_STATUS_TODO, TASK_STATUSES
from .geometry import box_contains
from .layout import TaskLayout

logger = logging.getLogger("taskgraph.model")


class GraphError(ValueError):
    pass


class EndpointNotFound(GraphError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No task named {name!r}")
        self.name = name


class AmbiguousName(GraphError):
    def __init__(self, name: str, count: int) -> None:
        super().__init__(f"{count} tasks are named {name!r}")
        self.name = name
        self.count = count


def new_id() -> str:
    return uuid.uuid4().hex


def normalize_status(value: object) -> str:
    status = str(value or TASK_STATUS_TODO).strip().lower()
    if status not in TASK_STATUSES:
        return TASK_STATUS_TODO
    return status


@dataclass
class Task:
    id: str
    name: str
    pos: QPointF
    status: str = TASK_STATUS_TODO
    width: float = 0.0
    height: float = 0.0
    outgoing: list[str] = field(default_factory=list)
    incoming: list[str] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.status == TASK_STATUS_COMPLETED

    def box(self) -> QRectF:
        return QRectF(self.pos.x(), self.pos.y(), self.width, self.height)


@dataclass
class Dependency:
    id: str
    predecessor: str
    successor: str | None


class TaskGraphModel(QObject):
    """Arena of tasks and dependencies addressed by id.

    Dict insertion order is the render order: later tasks are drawn on top.
    """

    model_reset = pyqtSignal()
    tasks_changed = pyqtSignal()
    dependencies_changed = pyqtSignal()
    task_geometry_changed = pyqtSignal(str)

    def __init__(self, layout: TaskLayout | None = None) -> None:
        super().__init__()
        self.layout = layout or TaskLayout()
        self.tasks: dict[str, Task] = {}
        self.dependencies: dict[str, Dependency] = {}

    def set_layout(self, layout: TaskLayout) -> None:
        self.layout = layout
        for task in self.tasks.values():
            task.width, task.height = layout.task_size(task.name)
            self.task_geometry_changed.emit(task.id)

    def task_size(self, name: str) -> tuple[float, float]:
        return self.layout.task_size(name)

    def get_task(self, task_id: str | None) -> Task | None:
        if task_id is None:
            return None
        return self.tasks.get(task_id)

    def get_dependency(self, dep_id: str | None) -> Dependency | None:
        if dep_id is None:
            return None
        return self.dependencies.get(dep_id)

    def add_task(
        self,
        name: str,
        pos: QPointF | None = None,
        status: str = TASK_STATUS_TODO,
    ) -> Task:
        width, height = self.task_size(name)
        task = Task(
            id=new_id(),
            name=name,
            pos=QPointF(pos) if pos is not None else QPointF(0.0, 0.0),
            status=normalize_status(status),
            width=width,
            height=height,
        )
        self.tasks[task.id] = task
        self.tasks_changed.emit()
        return task

    def add_dependency(self, predecessor_id: str, successor_id: str) -> Dependency | None:
        predecessor = self.tasks.get(predecessor_id)
        successor = self.tasks.get(successor_id)
        if predecessor is None or successor is None:
            logger.warning(
                "Could not add dependency %s -> %s: endpoint not found",
                predecessor_id,
                successor_id,
            )
            return None
        if predecessor_id == successor_id:
            logger.warning("Rejected self dependency on task %r", predecessor.name)
            return None
        existing = self.find_dependency(predecessor_id, successor_id)
        if existing is not None:
            logger.debug(
                "Dependency %r -> %r already exists", predecessor.name, successor.name
            )
            return existing
        dependency = Dependency(id=new_id(), predecessor=predecessor_id, successor=successor_id)
        self.dependencies[dependency.id] = dependency
        predecessor.outgoing.append(dependency.id)
        successor.incoming.append(dependency.id)
        self.dependencies_changed.emit()
        return dependency

    def link_by_name(self, predecessor_name: str, successor_name: str) -> Dependency | None:
        try:
            predecessor = self.resolve_name(predecessor_name)
            successor = self.resolve_name(successor_name)
        except GraphError as exc:
            logger.warning(
                "Could not add dependency %r -> %r: %s",
                predecessor_name,
                successor_name,
                exc,
            )
            return None
        return self.add_dependency(predecessor.id, successor.id)

    def find_dependency(self, predecessor_id: str, successor_id: str) -> Dependency | None:
        predecessor = self.tasks.get(predecessor_id)
        if predecessor is None:
            return None
        for dep_id in predecessor.outgoing:
            dependency = self.dependencies[dep_id]
            if dependency.successor == successor_id:
                return dependency
        return None

    def tasks_named(self, name: str) -> list[Task]:
        return [task for task in self.tasks.values() if task.name == name]

    def resolve_name(self, name: str) -> Task:
        matches = self.tasks_named(name)
        if not matches:
            raise EndpointNotFound(name)
        if len(matches) > 1:
            raise AmbiguousName(name, len(matches))
        return matches[0]

    def incident_dependencies(self, task_id: str) -> list[Dependency]:
        task = self.tasks.get(task_id)
        if task is None:
            return []
        return [self.dependencies[dep_id] for dep_id in task.outgoing + task.incoming]

    def delete_dependency(self, dep_id: str) -> Dependency | None:
        dependency = self.dependencies.pop(dep_id, None)
        if dependency is None:
            return None
        predecessor = self.tasks.get(dependency.predecessor)
        if predecessor is not None and dep_id in predecessor.outgoing:
            predecessor.outgoing.remove(dep_id)
        successor = self.tasks.get(dependency.successor)
        if successor is not None and dep_id in successor.incoming:
            successor.incoming.remove(dep_id)
        self.dependencies_changed.emit()
        return dependency

    def delete_task(self, task_id: str) -> Task | None:
        task = self.tasks.get(task_id)
        if task is None:
            return None
        for dep_id in list(task.outgoing):
            self.delete_dependency(dep_id)
        for dep_id in list(task.incoming):
            self.delete_dependency(dep_id)
        del self.tasks[task_id]
        self.tasks_changed.emit()
        return task

    def move_task(self, task_id: str, pos: QPointF) -> None:
        task = self.tasks.get(task_id)
        if task is None:
            return
        if task.pos == pos:
            return
        task.pos = QPointF(pos)
        self.task_geometry_changed.emit(task_id)

    def set_status(self, task_id: str, status: str) -> None:
        task = self.tasks.get(task_id)
        if task is None:
            return
        status = normalize_status(status)
        if task.status == status:
            return
        task.status = status
        self.tasks_changed.emit()

    def toggle_completed(self, task_id: str) -> None:
        task = self.tasks.get(task_id)
        if task is None:
            return
        self.set_status(
            task_id, TASK_STATUS_TODO if task.completed else TASK_STATUS_COMPLETED
        )

    def rename_task(self, task_id: str, name: str) -> None:
        task = self.tasks.get(task_id)
        if task is None or task.name == name:
            return
        task.name = name
        task.width, task.height = self.task_size(name)
        self.tasks_changed.emit()
        self.task_geometry_changed.emit(task_id)

    def task_at(self, point: QPointF) -> Task | None:
        for task in reversed(list(self.tasks.values())):
            if box_contains(task.box(), point):
                return task
        return None

    def clear(self) -> None:
        self.tasks = {}
        self.dependencies = {}
        self.model_reset.emit()
