from __future__ import annotations

from PyQt6.QtCore import QPointF


def test_add_task_centers_in_view(editor) -> None:
    editor.set_viewport_size(400, 300)
    task = editor.add_task("A")
    assert task.pos == QPointF(200 - 20, 150 - 16)


def test_add_task_centers_under_pan(editor) -> None:
    editor.set_viewport_size(400, 300)
    editor.panzoom.apply_pan_delta(100, 0)
    task = editor.add_task("A")
    assert task.pos == QPointF(80, 134)


def test_delete_selected_cascades_and_clears(editor, two_tasks) -> None:
    a, b = two_tasks
    c = editor.add_task("C", QPointF(400, 0))
    editor.model.add_dependency(a.id, b.id)
    editor.model.add_dependency(b.id, c.id)
    events = []
    editor.selection_changed.connect(events.append)
    editor.selection.click(b.id)
    editor.delete_selected()
    assert events[-1] == []
    assert list(editor.model.tasks) == [a.id, c.id]
    assert editor.model.dependencies == {}
    assert a.outgoing == [] and c.incoming == []
    assert editor.renderer.paths == {}


def test_complete_selected_toggles(editor, two_tasks) -> None:
    a, b = two_tasks
    editor.select_all()
    editor.complete_selected()
    assert a.completed and b.completed
    editor.selection.click(a.id)
    editor.complete_selected()
    assert not a.completed and b.completed


def test_load_and_get_graph(editor) -> None:
    document = {
        "tasks": [
            {"name": "A", "pos": {"x": 0, "y": 0}, "status": "todo"},
            {"name": "B", "pos": {"x": 100, "y": 50}, "status": "completed"},
        ],
        "dependencies": [{"predecessor": "A", "successor": "B"}],
    }
    editor.load_graph(document)
    assert editor.get_graph() == document
    dep_id = next(iter(editor.model.dependencies))
    assert editor.renderer.path_for(dep_id) is not None


def test_load_clears_selection(editor, two_tasks) -> None:
    events = []
    editor.selection_changed.connect(events.append)
    editor.select_all()
    editor.load_graph({"tasks": [], "dependencies": []})
    assert events[-1] == []
    assert editor.model.tasks == {}


def test_clear_graph(editor, two_tasks) -> None:
    a, b = two_tasks
    editor.model.add_dependency(a.id, b.id)
    editor.clear_graph()
    assert editor.get_graph() == {"tasks": [], "dependencies": []}
    assert editor.renderer.paths == {}


def test_rename_updates_document(editor, two_tasks) -> None:
    a, b = two_tasks
    editor.model.add_dependency(a.id, b.id)
    editor.rename_task(a.id, "Alpha")
    assert editor.get_graph()["dependencies"] == [{"predecessor": "Alpha", "successor": "B"}]
