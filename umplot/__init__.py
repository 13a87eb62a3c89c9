from umplot.color import Color
from umplot.config import GridConfig, LegendConfig, PlotData, SessionConfig, TitlesConfig
from umplot.errors import PlotDataError
from umplot.grid import GridPlanner
from umplot.loader import load_plot_file
from umplot.series import Point, Series, Style
from umplot.session import Session, run_interactive_session
from umplot.transform import Bounds, CoordinateTransform, Rect, ScreenPoint
from umplot.viewport import ViewportController

__all__ = [
    "Bounds",
    "Color",
    "CoordinateTransform",
    "GridConfig",
    "GridPlanner",
    "LegendConfig",
    "PlotData",
    "PlotDataError",
    "Point",
    "Rect",
    "ScreenPoint",
    "Series",
    "Session",
    "SessionConfig",
    "Style",
    "TitlesConfig",
    "ViewportController",
    "load_plot_file",
    "run_interactive_session",
]
