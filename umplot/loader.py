from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from umplot.adapters import normalize_xy
from umplot.color import coerce_color
from umplot.config import GridConfig, LegendConfig, PlotData, TitlesConfig
from umplot.errors import PlotDataError
from umplot.series import Series, Style


LOGGER = logging.getLogger(__name__)

_SERIES_KEYS = frozenset({"name", "kind", "color", "width", "x", "y", "points"})
_GRID_KEYS = frozenset({"x_num_lines", "y_num_lines", "color", "visible", "labelled", "font_size"})
_TITLES_KEYS = frozenset({"graph", "x", "y", "color", "font_size"})
_LEGEND_KEYS = frozenset({"visible", "color", "font_size"})


def load_plot_file(path: str | Path) -> PlotData:
    """Read a JSON plot description from disk."""
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise PlotDataError(f"plot file not found: {p}") from exc
    except json.JSONDecodeError as exc:
        raise PlotDataError(f"invalid JSON in {p}: {exc}") from exc
    LOGGER.debug("loaded plot file %s", p)
    return plot_data_from_dict(raw)


def plot_data_from_dict(raw: Any) -> PlotData:
    if not isinstance(raw, Mapping):
        raise PlotDataError("plot description must be a JSON object")
    unknown = set(raw) - {"series", "grid", "titles", "legend"}
    if unknown:
        raise PlotDataError(f"unknown plot keys: {sorted(unknown)}")

    series_raw = raw.get("series", [])
    if not isinstance(series_raw, list):
        raise PlotDataError("series must be a list")
    series = tuple(_series_from_dict(i, item) for i, item in enumerate(series_raw))

    return PlotData(
        series=series,
        grid=_section(GridConfig, raw.get("grid"), _GRID_KEYS, "grid"),
        titles=_section(TitlesConfig, raw.get("titles"), _TITLES_KEYS, "titles"),
        legend=_section(LegendConfig, raw.get("legend"), _LEGEND_KEYS, "legend"),
    )


def _series_from_dict(index: int, item: Any) -> Series:
    if not isinstance(item, Mapping):
        raise PlotDataError(f"series[{index}] must be an object")
    unknown = set(item) - _SERIES_KEYS
    if unknown:
        raise PlotDataError(f"series[{index}] has unknown keys: {sorted(unknown)}")

    style_kwargs: dict[str, Any] = {}
    if "kind" in item:
        style_kwargs["kind"] = item["kind"]
    if "color" in item:
        style_kwargs["color"] = coerce_color(item["color"])
    if "width" in item:
        style_kwargs["width"] = _number(item["width"], f"series[{index}].width")
    style = Style(**style_kwargs)
    name = str(item.get("name", ""))

    if "points" in item:
        if "x" in item or "y" in item:
            raise PlotDataError(f"series[{index}] uses both points and x/y")
        if not isinstance(item["points"], list):
            raise PlotDataError(f"series[{index}].points must be a list")
        try:
            return Series.from_points(item["points"], name=name, style=style)
        except PlotDataError:
            raise
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"series[{index}] has malformed points") from exc
    if "y" not in item:
        raise PlotDataError(f"series[{index}] needs y values or points")
    xs, ys = normalize_xy(item["y"], x=item.get("x"))
    return Series(x=xs, y=ys, style=style, name=name)


def _section(cls: type, raw: Any, allowed: frozenset[str], label: str) -> Any:
    if raw is None:
        return cls()
    if not isinstance(raw, Mapping):
        raise PlotDataError(f"{label} must be an object")
    unknown = set(raw) - allowed
    if unknown:
        raise PlotDataError(f"{label} has unknown keys: {sorted(unknown)}")
    kwargs = dict(raw)
    if "color" in kwargs:
        kwargs["color"] = coerce_color(kwargs["color"])
    for key, value in kwargs.items():
        if key in ("visible", "labelled") and not isinstance(value, bool):
            raise PlotDataError(f"{label}.{key} must be a boolean")
        if key in ("x_num_lines", "y_num_lines", "font_size") and (isinstance(value, bool) or not isinstance(value, int)):
            raise PlotDataError(f"{label}.{key} must be an integer")
        if key in ("graph", "x", "y") and not isinstance(value, str):
            raise PlotDataError(f"{label}.{key} must be a string")
    return cls(**kwargs)


def _number(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PlotDataError(f"{label} must be a number")
    return float(value)
