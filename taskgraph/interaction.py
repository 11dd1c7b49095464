from __future__ import annotations

from dataclasses import dataclass
import logging

from PyQt6.QtCore import QObject, QPointF, pyqtSignal

from .constants import DRAG_THRESHOLD, ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR
from .geometry import squared_distance
from .model import Task, TaskGraphModel
from .panzoom import PanZoom
from .paths import PathRenderer
from .selection import SelectionManager

logger = logging.getLogger("taskgraph.interaction")

IDLE = "idle"
PANNING = "panning"
DRAGGING_TASK = "dragging_task"
LINKING = "linking"

POINTER_DOWN = "down"
POINTER_MOVE = "move"
POINTER_UP = "up"
POINTER_CANCEL = "cancel"


@dataclass
class PointerEvent:
    pointer_id: int
    pos: QPointF
    shift: bool = False


@dataclass
class Gesture:
    state: str
    pointer_id: int
    start_position: QPointF
    last_position: QPointF
    moved: bool = False
    task_id: str | None = None
    press_offset: QPointF | None = None
    origin_pos: QPointF | None = None


class InteractionController(QObject):
    """Turns raw pointer events into selection, drag, link and pan gestures.

    Pointer positions are viewport coordinates. Only one gesture is tracked
    at a time; events from another pointer are ignored until it ends.
    """

    task_moved = pyqtSignal(object)
    new_dependency = pyqtSignal()
    gesture_changed = pyqtSignal(str)

    def __init__(
        self,
        model: TaskGraphModel,
        panzoom: PanZoom,
        selection: SelectionManager,
        renderer: PathRenderer,
        threshold: float = DRAG_THRESHOLD,
    ) -> None:
        super().__init__()
        self.model = model
        self.panzoom = panzoom
        self.selection = selection
        self.renderer = renderer
        self.squared_threshold = threshold * threshold
        self.link_mode_enabled = False
        self.gesture: Gesture | None = None

    @property
    def state(self) -> str:
        if self.gesture is None:
            return IDLE
        return self.gesture.state

    def handle(self, kind: str, event: PointerEvent) -> None:
        if kind == POINTER_DOWN:
            self._pointer_down(event)
        elif kind == POINTER_MOVE:
            self._pointer_move(event)
        elif kind == POINTER_UP:
            self._pointer_up(event)
        elif kind == POINTER_CANCEL:
            self._pointer_cancel(event)
        else:
            logger.debug("Ignoring unknown pointer event kind %r", kind)

    def pointer_down(self, event: PointerEvent) -> None:
        self.handle(POINTER_DOWN, event)

    def pointer_move(self, event: PointerEvent) -> None:
        self.handle(POINTER_MOVE, event)

    def pointer_up(self, event: PointerEvent) -> None:
        self.handle(POINTER_UP, event)

    def pointer_cancel(self, event: PointerEvent) -> None:
        self.handle(POINTER_CANCEL, event)

    def cancel_active(self) -> None:
        if self.gesture is None:
            return
        self._pointer_cancel(
            PointerEvent(self.gesture.pointer_id, QPointF(self.gesture.last_position))
        )

    def handle_wheel(self, delta: float) -> bool:
        if delta == 0:
            return False
        factor = ZOOM_IN_FACTOR if delta > 0 else ZOOM_OUT_FACTOR
        return self.panzoom.apply_zoom_factor(factor)

    def _set_gesture(self, gesture: Gesture | None) -> None:
        self.gesture = gesture
        state = self.state
        logger.debug("Gesture state -> %s", state)
        self.gesture_changed.emit(state)

    def _active_gesture(self, event: PointerEvent) -> Gesture | None:
        gesture = self.gesture
        if gesture is None or gesture.pointer_id != event.pointer_id:
            return None
        return gesture

    def _gesture_task(self, gesture: Gesture) -> Task | None:
        task = self.model.get_task(gesture.task_id)
        if task is None:
            logger.debug("Task %s vanished during gesture; discarding", gesture.task_id)
            self._discard(gesture)
        return task

    def _track_movement(self, gesture: Gesture, pos: QPointF) -> None:
        if gesture.moved:
            return
        if squared_distance(gesture.start_position, pos) > self.squared_threshold:
            gesture.moved = True

    def _pointer_down(self, event: PointerEvent) -> None:
        if self.gesture is not None:
            logger.debug(
                "Pointer %s pressed while pointer %s owns a gesture; ignored",
                event.pointer_id,
                self.gesture.pointer_id,
            )
            return
        start = QPointF(event.pos)
        world = self.panzoom.map_to_world(start)
        task = self.model.task_at(world)
        if task is None:
            self.selection.clear()
            self._set_gesture(
                Gesture(PANNING, event.pointer_id, start, QPointF(start))
            )
            return
        if event.shift or self.link_mode_enabled:
            self.renderer.begin_preview(task.id)
            self._set_gesture(
                Gesture(LINKING, event.pointer_id, start, QPointF(start), task_id=task.id)
            )
            return
        self._set_gesture(
            Gesture(
                DRAGGING_TASK,
                event.pointer_id,
                start,
                QPointF(start),
                task_id=task.id,
                press_offset=world - task.pos,
                origin_pos=QPointF(task.pos),
            )
        )

    def _pointer_move(self, event: PointerEvent) -> None:
        gesture = self._active_gesture(event)
        if gesture is None:
            return
        pos = QPointF(event.pos)
        if gesture.state == PANNING:
            delta = pos - gesture.last_position
            gesture.last_position = pos
            self.panzoom.apply_pan_delta(delta.x(), delta.y())
            return
        gesture.last_position = pos
        self._track_movement(gesture, pos)
        task = self._gesture_task(gesture)
        if task is None:
            return
        world = self.panzoom.map_to_world(pos)
        if gesture.state == LINKING:
            self.renderer.update_preview(world)
        elif gesture.state == DRAGGING_TASK and gesture.moved:
            self.model.move_task(task.id, world - gesture.press_offset)

    def _pointer_up(self, event: PointerEvent) -> None:
        gesture = self._active_gesture(event)
        if gesture is None:
            return
        if gesture.state == PANNING:
            delta = QPointF(event.pos) - gesture.last_position
            self.panzoom.apply_pan_delta(delta.x(), delta.y())
            self._set_gesture(None)
            return
        pos = QPointF(event.pos)
        self._track_movement(gesture, pos)
        task = self._gesture_task(gesture)
        if task is None:
            return
        world = self.panzoom.map_to_world(pos)
        if gesture.state == LINKING:
            self.renderer.clear_preview()
            self._set_gesture(None)
            if not gesture.moved:
                self.selection.click(task.id, event.shift)
                return
            self._finish_link(task, world)
            return
        if gesture.moved:
            self.model.move_task(task.id, world - gesture.press_offset)
        self._set_gesture(None)
        if gesture.moved:
            self.task_moved.emit(task)
        else:
            self.selection.click(task.id, event.shift)

    def _pointer_cancel(self, event: PointerEvent) -> None:
        gesture = self._active_gesture(event)
        if gesture is None:
            return
        self._discard(gesture)

    def _discard(self, gesture: Gesture) -> None:
        if gesture.state == LINKING:
            self.renderer.clear_preview()
        elif gesture.state == DRAGGING_TASK and gesture.moved and gesture.origin_pos is not None:
            self.model.move_task(gesture.task_id, gesture.origin_pos)
        self._set_gesture(None)

    def _finish_link(self, source: Task, world: QPointF) -> None:
        target = self.model.task_at(world)
        if target is None or target.id == source.id:
            logger.debug("Link from %r released without a target", source.name)
            return
        if self.model.find_dependency(source.id, target.id) is not None:
            logger.debug("Link %r -> %r already exists", source.name, target.name)
            return
        dependency = self.model.add_dependency(source.id, target.id)
        if dependency is None:
            return
        self.new_dependency.emit()
