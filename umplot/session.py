from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable

from umplot.config import PlotData, SessionConfig
from umplot.layout import compute_client_rect
from umplot.raster import RasterBackend
from umplot.render import RenderBackend, RenderCoordinator
from umplot.transform import Rect
from umplot.viewport import ViewportController
from umplot_core.core import FrameRateController, InputFrame, InputSource, ScriptedInputSource
from umplot_core.targets import HeadlessTarget, RenderTarget, build_display_frame


LOGGER = logging.getLogger(__name__)

STATUS_OK = 0
STATUS_FAILURE = 1
DEFAULT_HEADLESS_FRAMES = 1


@dataclass(frozen=True)
class SessionResult:
    frames_presented: int
    stopped_by_close: bool


class Session:
    """One interactive plotting session over a read-only PlotData snapshot.

    The session owns its backend, target, input source and viewport for its
    lifetime. Use it as a context manager: the target is started on entry and
    stopped on exit, and the backend is released on every exit path.
    """

    def __init__(
        self,
        plot_data: PlotData,
        *,
        target: RenderTarget | None = None,
        input_source: InputSource | None = None,
        backend: RenderBackend | None = None,
        config: SessionConfig | None = None,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config if config is not None else SessionConfig()
        self.plot_data = plot_data
        self.target = target if target is not None else HeadlessTarget()
        if input_source is None:
            frames = self.config.max_frames or DEFAULT_HEADLESS_FRAMES
            input_source = ScriptedInputSource(InputFrame() for _ in range(frames))
        self.input_source = input_source
        self.backend = backend if backend is not None else RasterBackend(self.config.width, self.config.height)
        self.window_size = (self.config.width, self.config.height)
        try:
            self.renderer = RenderCoordinator(self.backend, plot_data, background=self.config.background)
            self.controller = ViewportController(plot_data.series, self._client_rect_for(*self.window_size))
        except Exception:
            self._release_backend()
            raise
        self.pacer = FrameRateController(self.config.target_fps)
        self._clock = clock
        self._sleep = sleep
        self._target_started = False
        self._closed = False
        self.frames_presented = 0

    def __enter__(self) -> "Session":
        try:
            self.target.start()
        except Exception:
            self._release_backend()
            raise
        self._target_started = True
        LOGGER.debug("session %r started at %dx%d", self.config.title, *self.window_size)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._target_started:
                self._target_started = False
                self.target.stop()
        finally:
            self._release_backend()
        LOGGER.debug("session %r closed after %d frames", self.config.title, self.frames_presented)

    def run(self) -> SessionResult:
        if not self._target_started:
            raise RuntimeError("session must be entered before run()")
        max_frames = self.config.max_frames
        while max_frames is None or self.frames_presented < max_frames:
            if not self.step():
                return SessionResult(frames_presented=self.frames_presented, stopped_by_close=True)
        return SessionResult(frames_presented=self.frames_presented, stopped_by_close=False)

    def step(self) -> bool:
        """Run one frame; returns False once termination was requested."""
        self.target.pump_events()
        if self._should_terminate():
            return False
        started = self._clock()
        frame = self.input_source.sample()
        if frame.close_requested:
            return False
        if frame.resized_to is not None:
            self._handle_resize(*frame.resized_to)
        self.controller.apply_input(frame)

        rgba = self.renderer.render(self.controller.transform, self.controller.client_rect, self.controller.gesture)
        index = self.pacer.begin_frame()
        self.target.present_frame(build_display_frame(rgba, index))
        self.frames_presented += 1

        delay = self.pacer.compute_sleep(started, self._clock())
        if delay > 0:
            self._sleep(delay)
        return True

    def _should_terminate(self) -> bool:
        return self.input_source.should_close() or self.target.should_close()

    def _handle_resize(self, width: int, height: int) -> None:
        if (width, height) == self.window_size:
            return
        LOGGER.debug("window resized to %dx%d", width, height)
        old_rect = self.controller.client_rect
        self.backend.resize(width, height)
        self.window_size = (width, height)
        self.controller.on_resize(old_rect, self._client_rect_for(width, height))

    def _client_rect_for(self, width: int, height: int) -> Rect:
        return compute_client_rect(width, height, self.plot_data, self.backend.measure_text)

    def _release_backend(self) -> None:
        close = getattr(self.backend, "close", None)
        if close is not None:
            close()


def run_interactive_session(
    plot_data: PlotData,
    *,
    target: RenderTarget | None = None,
    input_source: InputSource | None = None,
    config: SessionConfig | None = None,
) -> int:
    """Run a blocking session until termination; returns a process-style status."""
    try:
        if config is None:
            config = SessionConfig.from_env()
        with Session(plot_data, target=target, input_source=input_source, config=config) as session:
            result = session.run()
    except Exception:  # noqa: BLE001
        LOGGER.exception("plot session failed")
        return STATUS_FAILURE
    LOGGER.info(
        "session complete: frames=%d stopped_by_close=%s",
        result.frames_presented,
        result.stopped_by_close,
    )
    return STATUS_OK
