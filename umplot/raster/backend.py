from __future__ import annotations

import logging
import math

import numpy as np

from umplot.color import WHITE, Color
from umplot.raster.canvas import ClipBox, fill, fill_rect, new_canvas
from umplot.raster.draw_lines import draw_segment
from umplot.raster.draw_markers import draw_circle
from umplot.raster.draw_text import DEFAULT_FONT_FAMILY, FontCache, draw_text, text_size
from umplot.transform import Rect, ScreenPoint


LOGGER = logging.getLogger(__name__)


class RasterBackend:
    """Software backend drawing into a numpy RGBA canvas.

    Drawing happens between `begin_frame` and `end_frame`; `end_frame` returns
    a snapshot of the finished frame so the canvas can be reused.
    """

    def __init__(self, width: int, height: int, *, font_family: str = DEFAULT_FONT_FAMILY) -> None:
        self._canvas = new_canvas(width, height, WHITE.as_rgba())
        self._fonts = FontCache(font_family)
        self._clip: ClipBox | None = None
        self._in_frame = False
        self._closed = False

    @property
    def width(self) -> int:
        return int(self._canvas.shape[1])

    @property
    def height(self) -> int:
        return int(self._canvas.shape[0])

    @property
    def canvas(self) -> np.ndarray:
        return self._canvas

    def resize(self, width: int, height: int) -> None:
        if self._in_frame:
            raise RuntimeError("cannot resize inside a frame")
        if (width, height) == (self.width, self.height):
            return
        LOGGER.debug("resizing raster canvas to %dx%d", width, height)
        self._canvas = new_canvas(width, height, WHITE.as_rgba())

    def begin_frame(self) -> None:
        self._ensure_open()
        if self._in_frame:
            raise RuntimeError("begin_frame called twice without end_frame")
        self._in_frame = True
        self._clip = None

    def end_frame(self) -> np.ndarray:
        self._ensure_drawing()
        self._in_frame = False
        self._clip = None
        return self._canvas.copy()

    def clear(self, color: Color) -> None:
        self._ensure_drawing()
        fill(self._canvas, color.as_rgba())

    def set_clip(self, rect: Rect | None) -> None:
        self._ensure_drawing()
        if rect is None:
            self._clip = None
            return
        r = rect.normalized()
        self._clip = (
            int(math.floor(r.x)),
            int(math.floor(r.y)),
            int(math.ceil(r.right)),
            int(math.ceil(r.bottom)),
        )

    def draw_line(self, p1: ScreenPoint, p2: ScreenPoint, width: float, color: Color) -> None:
        self._ensure_drawing()
        draw_segment(
            self._canvas,
            p1.x,
            p1.y,
            p2.x,
            p2.y,
            color.as_rgba(),
            width=max(1, int(round(width))),
            clip=self._clip,
        )

    def draw_circle(self, center: ScreenPoint, radius: float, color: Color) -> None:
        self._ensure_drawing()
        draw_circle(self._canvas, center.x, center.y, radius, color.as_rgba(), clip=self._clip)

    def draw_rectangle_outline(self, rect: Rect, thickness: float, color: Color) -> None:
        self._ensure_drawing()
        r = rect.normalized()
        t = max(1, int(round(thickness)))
        x0 = int(round(r.x))
        y0 = int(round(r.y))
        x1 = int(round(r.right)) - 1
        y1 = int(round(r.bottom)) - 1
        if x1 < x0 or y1 < y0:
            return
        rgba = color.as_rgba()
        fill_rect(self._canvas, x0, y0, x1, y0 + t - 1, rgba, self._clip)
        fill_rect(self._canvas, x0, y1 - t + 1, x1, y1, rgba, self._clip)
        fill_rect(self._canvas, x0, y0, x0 + t - 1, y1, rgba, self._clip)
        fill_rect(self._canvas, x1 - t + 1, y0, x1, y1, rgba, self._clip)

    def draw_text(self, text: str, position: ScreenPoint, size: float, color: Color, rotate_deg: int = 0) -> None:
        self._ensure_drawing()
        draw_text(
            self._canvas,
            int(round(position.x)),
            int(round(position.y)),
            text,
            color.as_rgba(),
            self._fonts,
            font_size_px=size,
            rotate_deg=rotate_deg,
            clip=self._clip,
        )

    def measure_text(self, text: str, size: float) -> int:
        self._ensure_open()
        return text_size(text, self._fonts, font_size_px=size)[0]

    def close(self) -> None:
        if self._closed:
            return
        self._fonts.close()
        self._in_frame = False
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("raster backend is closed")

    def _ensure_drawing(self) -> None:
        self._ensure_open()
        if not self._in_frame:
            raise RuntimeError("draw call outside begin_frame/end_frame")
