from __future__ import annotations

from typing import Any, Protocol

import numpy as np

from umplot.color import BLACK, GRAY, WHITE, Color
from umplot.config import PlotData
from umplot.grid import GridLayout, GridPlanner
from umplot.layout import (
    GRAPH_TITLE_SPACING,
    LEGEND_GAP,
    LEGEND_MARGIN,
    LEGEND_MARKER_SIZE,
    LEGEND_ROW_SPACING,
    legend_label,
    legend_origin,
)
from umplot.series import Series
from umplot.transform import CoordinateTransform, Rect, ScreenPoint
from umplot.viewport import ZoomGesture


BORDER_THICKNESS = 1
ZOOM_OVERLAY_THICKNESS = 1


class RenderBackend(Protocol):
    def begin_frame(self) -> None:
        ...

    def end_frame(self) -> Any:
        ...

    def clear(self, color: Color) -> None:
        ...

    def draw_line(self, p1: ScreenPoint, p2: ScreenPoint, width: float, color: Color) -> None:
        ...

    def draw_circle(self, center: ScreenPoint, radius: float, color: Color) -> None:
        ...

    def draw_rectangle_outline(self, rect: Rect, thickness: float, color: Color) -> None:
        ...

    def draw_text(self, text: str, position: ScreenPoint, size: float, color: Color, rotate_deg: int = 0) -> None:
        ...

    def measure_text(self, text: str, size: float) -> int:
        ...

    def set_clip(self, rect: Rect | None) -> None:
        ...

    def resize(self, width: int, height: int) -> None:
        ...


class RenderCoordinator:
    """Draws one frame of a plot in a fixed phase order.

    clear, border, grid, series, titles, legend, zoom overlay. Series are the
    only phase drawn under a clip.
    """

    def __init__(self, backend: RenderBackend, plot_data: PlotData, *, background: Color = WHITE) -> None:
        self.backend = backend
        self.plot_data = plot_data
        self.background = background
        self.grid_planner = GridPlanner(plot_data.grid.x_num_lines, plot_data.grid.y_num_lines)

    def render(
        self,
        transform: CoordinateTransform,
        client_rect: Rect,
        gesture: ZoomGesture | None = None,
    ) -> Any:
        backend = self.backend
        backend.begin_frame()
        backend.clear(self.background)
        backend.draw_rectangle_outline(client_rect, BORDER_THICKNESS, BLACK)

        layout = self.grid_planner.plan(transform, client_rect)
        label_width = self._draw_grid(layout, client_rect)

        backend.set_clip(client_rect)
        for series in self.plot_data.series:
            self._draw_series(series, transform)
        backend.set_clip(None)

        self._draw_titles(client_rect, label_width)
        self._draw_legend(client_rect)

        if gesture is not None and gesture.visible:
            backend.draw_rectangle_outline(gesture.rect.normalized(), ZOOM_OVERLAY_THICKNESS, GRAY)
        return backend.end_frame()

    def _draw_grid(self, layout: GridLayout | None, rect: Rect) -> int:
        """Draw grid lines and labels; returns the widest y label drawn."""
        if layout is None:
            return 0
        grid = self.plot_data.grid
        backend = self.backend
        if grid.visible:
            for tick in layout.x_ticks:
                backend.draw_line(ScreenPoint(tick.screen, rect.y), ScreenPoint(tick.screen, rect.bottom), 1, grid.color)
            for tick in layout.y_ticks:
                backend.draw_line(ScreenPoint(rect.x, tick.screen), ScreenPoint(rect.right, tick.screen), 1, grid.color)

        widest = 0
        if grid.labelled:
            size = grid.font_size
            for tick in layout.x_ticks:
                w = backend.measure_text(tick.label, size)
                backend.draw_text(tick.label, ScreenPoint(tick.screen - w / 2.0, rect.bottom + size), size, grid.color)
            for tick in layout.y_ticks:
                w = backend.measure_text(tick.label, size)
                widest = max(widest, w)
                backend.draw_text(tick.label, ScreenPoint(rect.x - w - size, tick.screen - size / 2.0), size, grid.color)
        return widest

    def _draw_series(self, series: Series, transform: CoordinateTransform) -> None:
        if len(series) == 0:
            return
        sx, sy = transform.to_screen_arrays(series.x, series.y)
        finite = np.isfinite(sx) & np.isfinite(sy)
        style = series.style
        backend = self.backend
        if style.kind == "scatter":
            for x, y in zip(sx[finite], sy[finite]):
                backend.draw_circle(ScreenPoint(float(x), float(y)), style.width, style.color)
            return
        # A non-finite sample breaks the line instead of being skipped over.
        for i in range(sx.size - 1):
            if finite[i] and finite[i + 1]:
                backend.draw_line(
                    ScreenPoint(float(sx[i]), float(sy[i])),
                    ScreenPoint(float(sx[i + 1]), float(sy[i + 1])),
                    style.width,
                    style.color,
                )

    def _draw_titles(self, rect: Rect, label_width: int) -> None:
        titles = self.plot_data.titles
        grid = self.plot_data.grid
        backend = self.backend
        size = titles.font_size
        center_x = rect.x + rect.width / 2.0
        if titles.graph:
            w = backend.measure_text(titles.graph, size)
            backend.draw_text(titles.graph, ScreenPoint(center_x - w / 2.0, rect.y - GRAPH_TITLE_SPACING * size), size, titles.color)
        if titles.x:
            w = backend.measure_text(titles.x, size)
            y = rect.bottom + 2.5 * grid.font_size
            backend.draw_text(titles.x, ScreenPoint(center_x - w / 2.0, y), size, titles.color)
        if titles.y:
            w = backend.measure_text(titles.y, size)
            x = max(0.0, rect.x - label_width - 2 * grid.font_size - size)
            y = rect.y + rect.height / 2.0 - w / 2.0
            backend.draw_text(titles.y, ScreenPoint(x, y), size, titles.color, rotate_deg=90)

    def _draw_legend(self, rect: Rect) -> None:
        legend = self.plot_data.legend
        if not legend.visible or not self.plot_data.series:
            return
        backend = self.backend
        origin = legend_origin(rect)
        size = legend.font_size
        row_height = LEGEND_ROW_SPACING * size
        for i, series in enumerate(self.plot_data.series):
            top = origin.y + LEGEND_MARGIN + i * row_height
            mid = top + size / 2.0
            style = series.style
            if style.kind == "scatter":
                radius = max(2.0, min(style.width, LEGEND_MARKER_SIZE / 2.0))
                backend.draw_circle(ScreenPoint(origin.x + LEGEND_MARKER_SIZE / 2.0, mid), radius, style.color)
            else:
                backend.draw_line(
                    ScreenPoint(origin.x, mid),
                    ScreenPoint(origin.x + LEGEND_MARKER_SIZE, mid),
                    style.width,
                    style.color,
                )
            backend.draw_text(
                legend_label(i, series),
                ScreenPoint(origin.x + LEGEND_MARKER_SIZE + LEGEND_GAP, top),
                size,
                legend.color,
            )
