from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Literal, Sequence

from umplot.series import Series
from umplot.transform import Bounds, CoordinateTransform, Rect, ScreenPoint, compute_bounds

if TYPE_CHECKING:
    from umplot_core.core.events import InputFrame


LOGGER = logging.getLogger(__name__)

ViewportState = Literal["idle", "dragging_zoom"]
ZoomOutcome = Literal["noop", "reset", "zoom"]


@dataclass
class ZoomGesture:
    anchor: ScreenPoint
    width: float = 0.0
    height: float = 0.0
    visible: bool = True

    @property
    def rect(self) -> Rect:
        return Rect(self.anchor.x, self.anchor.y, self.width, self.height)


class ViewportController:
    """Owns the session transform and mutates it from pan/zoom/resize input.

    Zoom drags toward the bottom-right zoom into the dragged region; drags with
    a negative extent reset to the full-data view.
    """

    def __init__(self, series: Sequence[Series], client_rect: Rect) -> None:
        self._series = tuple(series)
        self._client_rect = client_rect
        self._transform = CoordinateTransform()
        self._gesture: ZoomGesture | None = None
        self.on_reset()

    @property
    def transform(self) -> CoordinateTransform:
        return self._transform

    @property
    def client_rect(self) -> Rect:
        return self._client_rect

    @property
    def gesture(self) -> ZoomGesture | None:
        return self._gesture

    @property
    def state(self) -> ViewportState:
        return "idle" if self._gesture is None else "dragging_zoom"

    def data_bounds(self) -> Bounds:
        return compute_bounds(self._series)

    def visible_bounds(self) -> Bounds:
        return self._transform.visible_bounds(self._client_rect)

    def on_reset(self) -> None:
        bounds = self.data_bounds()
        if bounds.is_empty:
            LOGGER.debug("no finite samples; fitting empty data view")
        self._transform.fit_to_bounds(self._client_rect, bounds)

    def on_resize(self, old_rect: Rect, new_rect: Rect) -> None:
        visible = self._transform.visible_bounds(old_rect)
        self._client_rect = new_rect
        self._transform.fit_to_bounds(new_rect, visible)

    def on_zoom_gesture_start(self, press_point: ScreenPoint) -> bool:
        if not self._client_rect.contains(press_point):
            return False
        self._gesture = ZoomGesture(anchor=press_point)
        return True

    def on_zoom_gesture_update(self, current_point: ScreenPoint) -> None:
        gesture = self._gesture
        if gesture is None:
            return
        gesture.width = current_point.x - gesture.anchor.x
        gesture.height = current_point.y - gesture.anchor.y

    def on_zoom_gesture_end(self, final_rect: Rect | None = None) -> ZoomOutcome:
        rect = final_rect
        if rect is None:
            rect = self._gesture.rect if self._gesture is not None else Rect(0.0, 0.0, 0.0, 0.0)
        self._gesture = None

        if rect.width == 0 and rect.height == 0:
            return "noop"
        if rect.width < 0 or rect.height < 0:
            self.on_reset()
            return "reset"
        if rect.width == 0 or rect.height == 0:
            return "noop"
        target = self._transform.visible_bounds(rect.normalized())
        self._transform.fit_to_bounds(self._client_rect, target)
        return "zoom"

    def on_pan(self, delta: ScreenPoint, pointer: ScreenPoint | None = None) -> bool:
        if pointer is not None and not self._client_rect.contains(pointer):
            return False
        if delta.x == 0 and delta.y == 0:
            return False
        self._transform.pan(delta)
        return True

    def apply_input(self, frame: "InputFrame") -> None:
        """Dispatch one sampled input frame: zoom press, hold, release, then pan."""
        pointer = ScreenPoint(*frame.pointer)
        if frame.zoom.pressed:
            self.on_zoom_gesture_start(pointer)
        if frame.zoom.held and self._gesture is not None:
            self.on_zoom_gesture_update(pointer)
        if frame.zoom.released and self._gesture is not None:
            self.on_zoom_gesture_end()
        if frame.pan.held:
            self.on_pan(ScreenPoint(*frame.delta), pointer)
