from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Literal, overload

import numpy as np

from umplot.adapters import normalize_xy
from umplot.color import BLUE, Color, coerce_color
from umplot.errors import PlotDataError


StyleKind = Literal["line", "scatter"]
STYLE_KINDS: tuple[str, ...] = ("line", "scatter")


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Style:
    kind: StyleKind = "line"
    color: Color = BLUE
    width: float = 1.0

    def __post_init__(self) -> None:
        if self.kind not in STYLE_KINDS:
            raise PlotDataError(f"unsupported style kind: {self.kind!r}")
        if not np.isfinite(self.width) or self.width <= 0:
            raise PlotDataError("style width must be > 0")


@dataclass(frozen=True, eq=False)
class Series:
    """Ordered samples in graph space plus how to draw them.

    Samples live in two read-only float64 arrays so projection can stay
    vectorized; indexing and iteration still yield `Point` values.
    """

    x: np.ndarray
    y: np.ndarray
    style: Style = field(default_factory=Style)
    name: str = ""

    def __post_init__(self) -> None:
        x = np.array(self.x, dtype=np.float64, copy=True)
        y = np.array(self.y, dtype=np.float64, copy=True)
        if x.ndim != 1 or y.ndim != 1:
            raise PlotDataError("series samples must be 1-D")
        if x.shape != y.shape:
            raise PlotDataError(f"x and y length mismatch: {x.size} != {y.size}")
        x.flags.writeable = False
        y.flags.writeable = False
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    @classmethod
    def from_xy(
        cls,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        name: str = "",
        kind: StyleKind = "line",
        color: Any = BLUE,
        width: float = 1.0,
    ) -> "Series":
        xs, ys = normalize_xy(y, x=x, data=data)
        style = Style(kind=kind, color=coerce_color(color), width=float(width))
        return cls(x=xs, y=ys, style=style, name=name)

    @classmethod
    def from_points(cls, points: Any, *, name: str = "", style: Style | None = None) -> "Series":
        pairs = [(p.x, p.y) if isinstance(p, Point) else tuple(p) for p in points]
        for pair in pairs:
            if len(pair) != 2:
                raise PlotDataError(f"point must have two coordinates: {pair!r}")
        xs = np.asarray([p[0] for p in pairs], dtype=np.float64)
        ys = np.asarray([p[1] for p in pairs], dtype=np.float64)
        return cls(x=xs, y=ys, style=style or Style(), name=name)

    def __len__(self) -> int:
        return int(self.x.size)

    @overload
    def __getitem__(self, index: int) -> Point: ...

    @overload
    def __getitem__(self, index: slice) -> list[Point]: ...

    def __getitem__(self, index: int | slice) -> Point | list[Point]:
        if isinstance(index, slice):
            return [Point(float(px), float(py)) for px, py in zip(self.x[index], self.y[index])]
        return Point(float(self.x[index]), float(self.y[index]))

    def __iter__(self) -> Iterator[Point]:
        for px, py in zip(self.x.tolist(), self.y.tolist()):
            yield Point(px, py)

    def finite_mask(self) -> np.ndarray:
        return np.isfinite(self.x) & np.isfinite(self.y)
