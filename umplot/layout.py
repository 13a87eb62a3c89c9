from __future__ import annotations

from typing import Callable

from umplot.config import PlotData
from umplot.series import Series
from umplot.transform import Rect, ScreenPoint


MeasureText = Callable[[str, float], int]

CLIENT_LEFT_FRACTION = 0.15
CLIENT_TOP_FRACTION = 0.05
CLIENT_WIDTH_FRACTION = 0.80
CLIENT_HEIGHT_FRACTION = 0.80
GRAPH_TITLE_SPACING = 1.5

LEGEND_MARGIN = 10
LEGEND_MARKER_SIZE = 20
LEGEND_GAP = 6
LEGEND_ROW_SPACING = 1.5


def legend_label(index: int, series: Series) -> str:
    return series.name or f"Series {index + 1}"


def compute_client_rect(window_w: int, window_h: int, plot_data: PlotData, measure_text: MeasureText) -> Rect:
    """Pixel region for plotted content inside a window of the given size.

    The base margins leave room for tick labels and axis titles; a graph title
    and a visible legend each take space away from the client rect.
    """
    x = CLIENT_LEFT_FRACTION * window_w
    y = CLIENT_TOP_FRACTION * window_h
    width = CLIENT_WIDTH_FRACTION * window_w
    height = CLIENT_HEIGHT_FRACTION * window_h

    titles = plot_data.titles
    if titles.graph:
        shift = GRAPH_TITLE_SPACING * titles.font_size
        y += shift
        height -= shift

    width -= legend_band_width(window_w, plot_data, measure_text)
    return Rect(x, y, max(1.0, width), max(1.0, height))


def legend_band_width(window_w: int, plot_data: PlotData, measure_text: MeasureText) -> float:
    legend = plot_data.legend
    if not legend.visible or not plot_data.series:
        return 0.0
    widest = max(measure_text(legend_label(i, s), legend.font_size) for i, s in enumerate(plot_data.series))
    band = 2 * LEGEND_MARGIN + LEGEND_MARKER_SIZE + LEGEND_GAP + widest
    return float(min(band, window_w / 2.0))


def legend_origin(client_rect: Rect) -> ScreenPoint:
    return ScreenPoint(client_rect.right + LEGEND_MARGIN, client_rect.y)
