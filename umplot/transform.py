from __future__ import annotations

from dataclasses import dataclass, replace
import math
import sys
from typing import Iterable

import numpy as np

from umplot.series import Point, Series


FLOAT_MAX = sys.float_info.max


@dataclass(frozen=True)
class ScreenPoint:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Pixel rectangle; width/height may be negative while a drag is in progress."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, point: ScreenPoint) -> bool:
        return self.x <= point.x < self.x + self.width and self.y <= point.y < self.y + self.height

    def normalized(self) -> "Rect":
        x, y, w, h = self.x, self.y, self.width, self.height
        if w < 0:
            x += w
            w = -w
        if h < 0:
            y += h
            h = -h
        return Rect(x, y, w, h)

    def bottom_left(self) -> ScreenPoint:
        return ScreenPoint(self.x, self.y + self.height)

    def top_right(self) -> ScreenPoint:
        return ScreenPoint(self.x + self.width, self.y)


@dataclass(frozen=True)
class Bounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def empty(cls) -> "Bounds":
        return cls(min_x=FLOAT_MAX, min_y=FLOAT_MAX, max_x=-FLOAT_MAX, max_y=-FLOAT_MAX)

    @property
    def is_empty(self) -> bool:
        # x_scale is never negative, so only the empty sentinel has inverted x.
        # Inverted y is legitimate: a degenerate y axis falls back to a positive scale.
        return self.min_x > self.max_x

    @property
    def min_corner(self) -> Point:
        return Point(self.min_x, self.min_y)

    @property
    def max_corner(self) -> Point:
        return Point(self.max_x, self.max_y)


def compute_bounds(series: Iterable[Series]) -> Bounds:
    """Data extent over the finite samples of every series.

    Returns the empty sentinel when no series holds a finite sample.
    """
    out = Bounds.empty()
    min_x, min_y, max_x, max_y = out.min_x, out.min_y, out.max_x, out.max_y
    for item in series:
        mask = item.finite_mask()
        if not np.any(mask):
            continue
        xs = item.x[mask]
        ys = item.y[mask]
        min_x = min(min_x, float(np.min(xs)))
        max_x = max(max_x, float(np.max(xs)))
        min_y = min(min_y, float(np.min(ys)))
        max_y = max(max_y, float(np.max(ys)))
    return Bounds(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)


@dataclass
class CoordinateTransform:
    """Affine graph<->screen mapping: screen = scale * (graph - offset) per axis."""

    dx: float = 0.0
    dy: float = 0.0
    x_scale: float = 1.0
    y_scale: float = -1.0

    def __post_init__(self) -> None:
        if not _usable_scale(self.x_scale) or not _usable_scale(self.y_scale):
            raise ValueError("x_scale and y_scale must be finite and non-zero")

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.dx, self.dy, self.x_scale, self.y_scale)

    def copy(self) -> "CoordinateTransform":
        return replace(self)

    def to_screen(self, point: Point) -> ScreenPoint:
        return ScreenPoint(self.x_scale * (point.x - self.dx), self.y_scale * (point.y - self.dy))

    def to_graph(self, point: ScreenPoint) -> Point:
        return Point(point.x / self.x_scale + self.dx, point.y / self.y_scale + self.dy)

    def to_screen_arrays(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        sx = self.x_scale * (np.asarray(xs, dtype=np.float64) - self.dx)
        sy = self.y_scale * (np.asarray(ys, dtype=np.float64) - self.dy)
        return sx, sy

    def visible_bounds(self, rect: Rect) -> Bounds:
        lo = self.to_graph(rect.bottom_left())
        hi = self.to_graph(rect.top_right())
        return Bounds(min_x=lo.x, min_y=lo.y, max_x=hi.x, max_y=hi.y)

    def fit_to_bounds(self, client_rect: Rect, bounds: Bounds) -> None:
        """Map `bounds` onto `client_rect`, y flipped so max_y lands on the top edge.

        An axis with zero extent gets a scale of 1.0 instead of dividing by zero,
        so a single point or a constant series still yields a usable view. Empty
        bounds are fitted as the single point at the origin.
        """
        if bounds.is_empty:
            bounds = Bounds(0.0, 0.0, 0.0, 0.0)
        x_scale = client_rect.width / (bounds.max_x - bounds.min_x) if bounds.max_x > bounds.min_x else 1.0
        y_scale = -client_rect.height / (bounds.max_y - bounds.min_y) if bounds.max_y > bounds.min_y else 1.0
        if not _usable_scale(x_scale):
            x_scale = 1.0
        if not _usable_scale(y_scale):
            y_scale = 1.0
        self.x_scale = x_scale
        self.y_scale = y_scale
        self.dx = bounds.min_x - client_rect.x / x_scale
        self.dy = bounds.max_y - client_rect.y / y_scale

    def pan(self, delta: ScreenPoint) -> None:
        self.dx -= delta.x / self.x_scale
        self.dy -= delta.y / self.y_scale


def _usable_scale(value: float) -> bool:
    return value != 0.0 and math.isfinite(value)
