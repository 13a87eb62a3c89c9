from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from .base import DisplayFrame, RenderTarget


LOGGER = logging.getLogger(__name__)


class ImageSequenceTarget(RenderTarget):
    """Writes presented frames as PNG files.

    With `last_only` the target keeps the newest frame in memory and writes a
    single file when stopped.
    """

    def __init__(self, path: str | Path, *, last_only: bool = False) -> None:
        self._path = Path(path)
        self._last_only = last_only
        self._pending: DisplayFrame | None = None
        self._started = False
        self.written: list[Path] = []

    def start(self) -> None:
        target_dir = self._path if not self._last_only else self._path.parent
        target_dir.mkdir(parents=True, exist_ok=True)
        self._started = True

    def present_frame(self, frame: DisplayFrame) -> None:
        if not self._started:
            raise RuntimeError("image sequence target not started")
        if self._last_only:
            self._pending = frame
            return
        self._write(frame, self._path / f"frame_{frame.index:05d}.png")

    def stop(self) -> None:
        if self._last_only and self._pending is not None:
            self._write(self._pending, self._path)
            self._pending = None
        self._started = False

    def _write(self, frame: DisplayFrame, path: Path) -> None:
        image = Image.fromarray(frame.rgba.numpy())
        image.save(path)
        self.written.append(path)
        LOGGER.debug("wrote frame %d to %s", frame.index, path)
