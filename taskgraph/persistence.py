from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable

from PyQt6.QtCore import QPointF

from .constants import TASK_STATUSES
from .model import GraphError, TaskGraphModel

logger = logging.getLogger("taskgraph.persistence")


def to_document(model: TaskGraphModel) -> dict:
    tasks = [
        {
            "name": task.name,
            "pos": {"x": task.pos.x(), "y": task.pos.y()},
            "status": task.status,
        }
        for task in model.tasks.values()
    ]
    dependencies = []
    for dependency in model.dependencies.values():
        predecessor = model.tasks[dependency.predecessor]
        successor = model.tasks[dependency.successor]
        dependencies.append(
            {"predecessor": predecessor.name, "successor": successor.name}
        )
    return {"tasks": tasks, "dependencies": dependencies}


def from_document(
    model: TaskGraphModel,
    data: dict,
    place: Callable[[str], QPointF] | None = None,
) -> list[dict]:
    """Replace the model contents with ``data``.

    Dependencies refer to tasks by name; records whose endpoints do not
    resolve to exactly one task are skipped and returned. Tasks without a
    position are placed by ``place`` when given.
    """
    model.clear()
    for record in data.get("tasks", []):
        pos = record.get("pos")
        if pos:
            position = QPointF(float(pos["x"]), float(pos["y"]))
        elif place is not None:
            position = place(record["name"])
        else:
            position = None
        model.add_task(
            record["name"],
            position,
            record.get("status", "todo"),
        )
    skipped = []
    for record in data.get("dependencies", []):
        try:
            predecessor = model.resolve_name(record["predecessor"])
            successor = model.resolve_name(record["successor"])
        except GraphError as exc:
            logger.warning("Skipping dependency %s: %s", record, exc)
            skipped.append(record)
            continue
        if model.add_dependency(predecessor.id, successor.id) is None:
            skipped.append(record)
    return skipped


def validate_document(data: object) -> dict:
    if not isinstance(data, dict):
        raise ValueError("Graph document must be an object")
    tasks = data.get("tasks", [])
    dependencies = data.get("dependencies", [])
    if not isinstance(tasks, list) or not isinstance(dependencies, list):
        raise ValueError("Graph document needs 'tasks' and 'dependencies' lists")
    for index, task in enumerate(tasks):
        if not isinstance(task, dict) or not isinstance(task.get("name"), str):
            raise ValueError(f"Task {index} has no name")
        pos = task.get("pos")
        if pos is not None:
            try:
                float(pos["x"])
                float(pos["y"])
            except (KeyError, TypeError, ValueError):
                raise ValueError(f"Task {task['name']!r} has an invalid position") from None
        status = task.get("status", "todo")
        if status not in TASK_STATUSES:
            raise ValueError(f"Task {task['name']!r} has unknown status {status!r}")
    for index, dependency in enumerate(dependencies):
        if (
            not isinstance(dependency, dict)
            or not isinstance(dependency.get("predecessor"), str)
            or not isinstance(dependency.get("successor"), str)
        ):
            raise ValueError(f"Dependency {index} needs predecessor and successor names")
    return data


def save_graph(path: str | Path, document: dict) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")


def load_graph_file(path: str | Path) -> dict:
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    return validate_document(data)
