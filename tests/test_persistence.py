from __future__ import annotations

import json

import pytest

from taskgraph.model import TaskGraphModel
from taskgraph.persistence import (
    from_document,
    load_graph_file,
    save_graph,
    to_document,
    validate_document,
)

DOCUMENT = {
    "tasks": [
        {"name": "Design", "pos": {"x": 10, "y": 20}, "status": "completed"},
        {"name": "Build", "pos": {"x": 200.5, "y": 20}, "status": "todo"},
        {"name": "Ship", "pos": {"x": 400, "y": -35}, "status": "todo"},
    ],
    "dependencies": [
        {"predecessor": "Design", "successor": "Build"},
        {"predecessor": "Build", "successor": "Ship"},
    ],
}


def test_document_round_trip() -> None:
    model = TaskGraphModel()
    assert from_document(model, DOCUMENT) == []
    assert to_document(model) == DOCUMENT


def test_round_trip_twice_is_stable() -> None:
    model = TaskGraphModel()
    from_document(model, DOCUMENT)
    first = to_document(model)
    from_document(model, first)
    assert to_document(model) == first


def test_unresolved_dependencies_are_skipped(caplog) -> None:
    document = {
        "tasks": [
            {"name": "A", "pos": {"x": 0, "y": 0}, "status": "todo"},
            {"name": "A", "pos": {"x": 100, "y": 0}, "status": "todo"},
            {"name": "B", "pos": {"x": 200, "y": 0}, "status": "todo"},
        ],
        "dependencies": [
            {"predecessor": "A", "successor": "B"},
            {"predecessor": "B", "successor": "Nowhere"},
        ],
    }
    model = TaskGraphModel()
    with caplog.at_level("WARNING", logger="taskgraph.persistence"):
        skipped = from_document(model, document)
    assert skipped == document["dependencies"]
    assert len(model.tasks) == 3
    assert model.dependencies == {}
    assert "Nowhere" in caplog.text


def test_load_replaces_previous_contents() -> None:
    model = TaskGraphModel()
    model.add_task("Old")
    from_document(model, DOCUMENT)
    assert [task.name for task in model.tasks.values()] == ["Design", "Build", "Ship"]


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"tasks": {}},
        {"tasks": [{"pos": {"x": 0, "y": 0}}]},
        {"tasks": [{"name": "A", "pos": {"x": "left", "y": 0}}]},
        {"tasks": [{"name": "A", "status": "blocked"}]},
        {"tasks": [], "dependencies": [{"predecessor": "A"}]},
    ],
)
def test_validate_rejects_malformed(document) -> None:
    with pytest.raises(ValueError):
        validate_document(document)


def test_save_and_load_file(tmp_path) -> None:
    path = tmp_path / "nested" / "graph.json"
    save_graph(path, DOCUMENT)
    assert json.loads(path.read_text(encoding="utf-8")) == DOCUMENT
    assert load_graph_file(path) == DOCUMENT


def test_load_file_rejects_bad_json(tmp_path) -> None:
    path = tmp_path / "graph.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_graph_file(path)
