from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Mapping

from umplot.color import BLACK, Color, LIGHT_GRAY, WHITE
from umplot.errors import PlotDataError
from umplot.series import Series


DEFAULT_WINDOW_SIZE = (640, 480)
DEFAULT_WINDOW_TITLE = "UmPlot"
DEFAULT_TARGET_FPS = 60


@dataclass(frozen=True)
class GridConfig:
    x_num_lines: int = 10
    y_num_lines: int = 10
    color: Color = LIGHT_GRAY
    visible: bool = True
    labelled: bool = True
    font_size: int = 12

    def __post_init__(self) -> None:
        if self.font_size <= 0:
            raise PlotDataError("grid font_size must be > 0")


@dataclass(frozen=True)
class TitlesConfig:
    graph: str = ""
    x: str = ""
    y: str = ""
    color: Color = BLACK
    font_size: int = 16

    def __post_init__(self) -> None:
        if self.font_size <= 0:
            raise PlotDataError("titles font_size must be > 0")


@dataclass(frozen=True)
class LegendConfig:
    visible: bool = True
    color: Color = BLACK
    font_size: int = 12

    def __post_init__(self) -> None:
        if self.font_size <= 0:
            raise PlotDataError("legend font_size must be > 0")


@dataclass(frozen=True)
class PlotData:
    """Read-only snapshot handed to a session; never mutated by the session."""

    series: tuple[Series, ...] = ()
    grid: GridConfig = field(default_factory=GridConfig)
    titles: TitlesConfig = field(default_factory=TitlesConfig)
    legend: LegendConfig = field(default_factory=LegendConfig)

    def __post_init__(self) -> None:
        items = tuple(self.series)
        for item in items:
            if not isinstance(item, Series):
                raise PlotDataError(f"series entries must be Series, got {type(item)!r}")
        object.__setattr__(self, "series", items)


@dataclass(frozen=True)
class SessionConfig:
    width: int = DEFAULT_WINDOW_SIZE[0]
    height: int = DEFAULT_WINDOW_SIZE[1]
    title: str = DEFAULT_WINDOW_TITLE
    target_fps: int = DEFAULT_TARGET_FPS
    background: Color = WHITE
    max_frames: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        if self.target_fps <= 0:
            raise ValueError("target_fps must be > 0")
        if self.max_frames is not None and self.max_frames <= 0:
            raise ValueError("max_frames must be > 0")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> "SessionConfig":
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for key, attr in (
            ("UMPLOT_WIDTH", "width"),
            ("UMPLOT_HEIGHT", "height"),
            ("UMPLOT_FPS", "target_fps"),
            ("UMPLOT_MAX_FRAMES", "max_frames"),
        ):
            raw = env.get(key, "").strip()
            if not raw:
                continue
            try:
                values[attr] = int(raw)
            except ValueError as exc:
                raise ValueError(f"{key} must be an integer, got {raw!r}") from exc
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]
