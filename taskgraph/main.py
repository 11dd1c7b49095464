from __future__ import annotations

import logging
import sys
from pathlib import Path

from PyQt6.QtCore import QSettings, QStandardPaths
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QFileDialog,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
)

from .constants import AUTOSAVE_FILE_NAME, SETTINGS_APPLICATION, SETTINGS_ORGANIZATION
from .editor import EditorState
from .persistence import load_graph_file, save_graph
from .view import GraphView

logger = logging.getLogger("taskgraph.main")


def autosave_path() -> Path:
    location = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.AppDataLocation
    )
    return Path(location) / AUTOSAVE_FILE_NAME


def _setting_bool(value: object, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("1", "true", "yes")


class MainWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.settings = QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)
        self.editor = EditorState()
        self.view = GraphView(self.editor, self)
        self.setCentralWidget(self.view)
        self.autosave_path = autosave_path()
        self.zoom_label = QLabel()
        self.statusBar().addPermanentWidget(self.zoom_label)

        self._setup_actions()
        self.editor.selection_changed.connect(self._on_selection_changed)
        self.editor.task_moved.connect(self._autosave)
        self.editor.new_dependency.connect(self._autosave)
        self.editor.panzoom.changed.connect(self._update_zoom_indicator)

        self._restore_settings()
        self._load_autosave()
        self._on_selection_changed([])
        self._update_zoom_indicator()
        self.setWindowTitle("Task Graph")

    def _setup_actions(self) -> None:
        file_menu = self.menuBar().addMenu("File")
        edit_menu = self.menuBar().addMenu("Edit")
        toolbar = self.addToolBar("Tasks")
        toolbar.setObjectName("tasks_toolbar")

        new_graph_action = QAction("New Graph", self)
        new_graph_action.setShortcut(QKeySequence("Ctrl+N"))
        new_graph_action.triggered.connect(self.new_graph)
        file_menu.addAction(new_graph_action)

        open_action = QAction("Open...", self)
        open_action.setShortcut(QKeySequence("Ctrl+O"))
        open_action.triggered.connect(self.open_graph)
        file_menu.addAction(open_action)

        save_action = QAction("Save As...", self)
        save_action.setShortcut(QKeySequence("Ctrl+S"))
        save_action.triggered.connect(self.save_graph_as)
        file_menu.addAction(save_action)

        file_menu.addSeparator()
        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        self.create_task_action = QAction("New Task", self)
        self.create_task_action.setShortcut(QKeySequence("I"))
        self.create_task_action.triggered.connect(self.create_task)

        self.delete_task_action = QAction("Delete", self)
        self.delete_task_action.setShortcuts([QKeySequence("D"), QKeySequence("Delete")])
        self.delete_task_action.triggered.connect(self.delete_selected)

        self.complete_task_action = QAction("Complete", self)
        self.complete_task_action.setShortcut(QKeySequence("C"))
        self.complete_task_action.triggered.connect(self.complete_selected)

        self.rename_task_action = QAction("Rename", self)
        self.rename_task_action.setShortcut(QKeySequence("F2"))
        self.rename_task_action.triggered.connect(self.rename_selected)

        self.select_all_action = QAction("Select All", self)
        self.select_all_action.setShortcut(QKeySequence("Ctrl+A"))
        self.select_all_action.triggered.connect(self.editor.select_all)

        self.link_mode_action = QAction("Link Mode", self)
        self.link_mode_action.setCheckable(True)
        self.link_mode_action.setShortcut(QKeySequence("L"))
        self.link_mode_action.toggled.connect(self._set_link_mode)

        for action in (
            self.create_task_action,
            self.delete_task_action,
            self.complete_task_action,
            self.rename_task_action,
            self.select_all_action,
            self.link_mode_action,
        ):
            edit_menu.addAction(action)
        for action in (
            self.create_task_action,
            self.delete_task_action,
            self.complete_task_action,
            self.link_mode_action,
        ):
            toolbar.addAction(action)

    def _set_link_mode(self, enabled: bool) -> None:
        self.editor.set_link_mode(enabled)
        self.settings.setValue("view/link_mode", enabled)

    def _on_selection_changed(self, selection) -> None:
        has_selection = len(selection) > 0
        self.create_task_action.setVisible(not has_selection)
        self.link_mode_action.setVisible(not has_selection)
        self.delete_task_action.setVisible(has_selection)
        self.complete_task_action.setVisible(has_selection)
        self.rename_task_action.setEnabled(len(selection) == 1)

    def _update_zoom_indicator(self) -> None:
        self.zoom_label.setText(self.editor.panzoom.zoom_label())

    def _autosave(self, *_args) -> None:
        try:
            save_graph(self.autosave_path, self.editor.get_graph())
        except OSError as exc:
            logger.warning("Autosave to %s failed: %s", self.autosave_path, exc)

    def _load_autosave(self) -> None:
        if not self.autosave_path.exists():
            return
        try:
            document = load_graph_file(self.autosave_path)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable autosave %s: %s", self.autosave_path, exc)
            return
        self.editor.load_graph(document)

    def create_task(self) -> None:
        name, ok = QInputDialog.getText(self, "New Task", "Name")
        name = name.strip()
        if not ok or not name:
            return
        self.editor.add_task(name)
        self._autosave()

    def rename_selected(self) -> None:
        selected = self.editor.selected_tasks()
        if len(selected) != 1:
            return
        task = selected[0]
        name, ok = QInputDialog.getText(self, "Rename Task", "Name", text=task.name)
        name = name.strip()
        if not ok or not name:
            return
        self.editor.rename_task(task.id, name)
        self._autosave()

    def delete_selected(self) -> None:
        self.editor.delete_selected()
        self._autosave()

    def complete_selected(self) -> None:
        self.editor.complete_selected()
        self._autosave()

    def new_graph(self) -> None:
        self.editor.clear_graph()
        self._autosave()

    def open_graph(self) -> None:
        filename, _ = QFileDialog.getOpenFileName(self, "Open Graph", "", "Task Graphs (*.json)")
        if not filename:
            return
        path = Path(filename)
        try:
            document = load_graph_file(path)
        except (OSError, ValueError) as exc:
            QMessageBox.warning(self, "Open Failed", f"Could not open graph file.\n{exc}")
            return
        skipped = self.editor.load_graph(document)
        self.settings.setValue("last_file", str(path))
        self._autosave()
        if skipped:
            names = "\n".join(
                f"{record.get('predecessor')} -> {record.get('successor')}" for record in skipped
            )
            QMessageBox.information(
                self,
                "Dependencies Skipped",
                f"{len(skipped)} dependencies could not be resolved:\n{names}",
            )

    def save_graph_as(self) -> bool:
        filename, _ = QFileDialog.getSaveFileName(
            self, "Save Graph As", self.settings.value("last_file", "graph.json"), "Task Graphs (*.json)"
        )
        if not filename:
            return False
        path = Path(filename)
        if path.suffix.lower() != ".json":
            path = path.with_suffix(".json")
        try:
            save_graph(path, self.editor.get_graph())
        except OSError as exc:
            QMessageBox.warning(self, "Save Failed", f"Could not save graph file.\n{exc}")
            return False
        self.settings.setValue("last_file", str(path))
        return True

    def _restore_settings(self) -> None:
        geometry = self.settings.value("window/geometry")
        if geometry:
            self.restoreGeometry(geometry)
        else:
            self.resize(1024, 720)
        self.link_mode_action.setChecked(
            _setting_bool(self.settings.value("view/link_mode"), False)
        )

    def closeEvent(self, event) -> None:
        self._autosave()
        self.settings.setValue("window/geometry", self.saveGeometry())
        self.settings.sync()
        event.accept()


def run() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    app.setOrganizationName(SETTINGS_ORGANIZATION)
    app.setApplicationName(SETTINGS_APPLICATION)
    window = MainWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(run())
