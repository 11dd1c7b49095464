from __future__ import annotations

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QFrame, QGraphicsView

from .constants import MOUSE_POINTER_ID
from .editor import EditorState
from .interaction import DRAGGING_TASK, IDLE, LINKING, PANNING, PointerEvent
from .layout import FontTaskLayout
from .scene import GraphScene


class GraphView(QGraphicsView):
    """Viewport onto a GraphScene.

    Scene coordinates equal viewport coordinates; every mouse press, move
    and release is forwarded to the interaction controller as a pointer
    event and the view itself never scrolls.
    """

    def __init__(self, editor: EditorState, parent=None) -> None:
        super().__init__(parent)
        self.editor = editor
        self.editor.model.set_layout(FontTaskLayout(self.font()))
        self.graph_scene = GraphScene(editor, self.font())
        self.setScene(self.graph_scene)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setRenderHints(self.renderHints() | QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.editor.interaction.gesture_changed.connect(self._on_gesture_changed)
        self._sync_viewport()

    def _sync_viewport(self) -> None:
        size = self.viewport().size()
        self.setSceneRect(QRectF(0, 0, size.width(), size.height()))
        self.editor.set_viewport_size(size.width(), size.height())

    def _pointer_event(self, event) -> PointerEvent:
        scene_pos = self.mapToScene(event.position().toPoint())
        shift = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)
        return PointerEvent(MOUSE_POINTER_ID, QPointF(scene_pos), shift)

    def _on_gesture_changed(self, state: str) -> None:
        if state == PANNING:
            self.viewport().setCursor(Qt.CursorShape.ClosedHandCursor)
        elif state == DRAGGING_TASK:
            self.viewport().setCursor(Qt.CursorShape.SizeAllCursor)
        elif state == LINKING:
            self.viewport().setCursor(Qt.CursorShape.CrossCursor)
        elif state == IDLE:
            self.viewport().unsetCursor()

    def mousePressEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            event.ignore()
            return
        self.editor.interaction.pointer_down(self._pointer_event(event))
        event.accept()

    def mouseMoveEvent(self, event) -> None:
        self.editor.interaction.pointer_move(self._pointer_event(event))
        event.accept()

    def mouseReleaseEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            event.ignore()
            return
        self.editor.interaction.pointer_up(self._pointer_event(event))
        event.accept()

    def mouseDoubleClickEvent(self, event) -> None:
        self.mousePressEvent(event)

    def wheelEvent(self, event) -> None:
        self.editor.interaction.handle_wheel(event.angleDelta().y())
        event.accept()

    def keyPressEvent(self, event) -> None:
        if event.key() == Qt.Key.Key_Escape and self.editor.interaction.gesture is not None:
            self.editor.interaction.cancel_active()
            event.accept()
            return
        super().keyPressEvent(event)

    def focusOutEvent(self, event) -> None:
        self.editor.interaction.cancel_active()
        super().focusOutEvent(event)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._sync_viewport()
