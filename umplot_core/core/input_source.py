from __future__ import annotations

from collections import deque
import logging
from typing import Iterable, Protocol

from .events import BUTTON_LEFT, BUTTON_RIGHT, ButtonEdges, InputEvent, InputFrame


LOGGER = logging.getLogger(__name__)


class InputSource(Protocol):
    def sample(self) -> InputFrame:
        ...

    def should_close(self) -> bool:
        ...


class EventInputSource:
    """Folds pushed window events into one InputFrame per sample.

    The left button drives zoom gestures and the right button drives panning.
    Events are expected from the thread that runs the frame loop.
    """

    def __init__(self, zoom_button: int = BUTTON_LEFT, pan_button: int = BUTTON_RIGHT) -> None:
        if zoom_button == pan_button:
            raise ValueError("zoom and pan must use different buttons")
        self._zoom_button = zoom_button
        self._pan_button = pan_button
        self._pending: deque[InputEvent] = deque()
        self._pointer = (0.0, 0.0)
        self._down: set[int] = set()
        self._close_requested = False

    def push_event(self, event: InputEvent) -> None:
        self._pending.append(event)

    def push_events(self, events: Iterable[InputEvent]) -> None:
        self._pending.extend(events)

    def should_close(self) -> bool:
        return self._close_requested

    def sample(self) -> InputFrame:
        start = self._pointer
        pressed: set[int] = set()
        released: set[int] = set()
        resized_to: tuple[int, int] | None = None

        while self._pending:
            event = self._pending.popleft()
            if event.x is not None and event.y is not None:
                self._pointer = (float(event.x), float(event.y))
            if event.event_type == "pointer_move":
                continue
            if event.event_type == "pointer_down":
                if event.button is not None and event.button not in self._down:
                    self._down.add(event.button)
                    pressed.add(event.button)
            elif event.event_type == "pointer_up":
                if event.button is not None and event.button in self._down:
                    self._down.discard(event.button)
                    released.add(event.button)
            elif event.event_type == "resize":
                if event.width is None or event.height is None or event.width <= 0 or event.height <= 0:
                    LOGGER.warning("ignoring resize event with invalid size: %r", event)
                    continue
                resized_to = (int(event.width), int(event.height))
            elif event.event_type == "close":
                self._close_requested = True
            else:
                LOGGER.warning("ignoring unsupported input event type: %s", event.event_type)

        delta = (self._pointer[0] - start[0], self._pointer[1] - start[1])
        return InputFrame(
            pointer=self._pointer,
            delta=delta,
            zoom=self._edges(self._zoom_button, pressed, released),
            pan=self._edges(self._pan_button, pressed, released),
            resized_to=resized_to,
            close_requested=self._close_requested,
        )

    def _edges(self, button: int, pressed: set[int], released: set[int]) -> ButtonEdges:
        return ButtonEdges(
            pressed=button in pressed,
            held=button in self._down,
            released=button in released,
        )


class ScriptedInputSource:
    """Replays a fixed sequence of frames, then asks the loop to stop."""

    def __init__(self, frames: Iterable[InputFrame]) -> None:
        self._frames: deque[InputFrame] = deque(frames)
        self._last_pointer = (0.0, 0.0)
        self.sampled = 0

    def should_close(self) -> bool:
        return not self._frames

    def sample(self) -> InputFrame:
        self.sampled += 1
        if not self._frames:
            return InputFrame(pointer=self._last_pointer)
        frame = self._frames.popleft()
        self._last_pointer = frame.pointer
        return frame
