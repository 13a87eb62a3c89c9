from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import torch

from umplot.errors import PlotDataError


try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_xy(y: Any = None, *, x: Any = None, data: Any = None) -> tuple[np.ndarray, np.ndarray]:
    """Coerce sample columns into two aligned float64 arrays.

    `y` and `x` may be sequences, numpy arrays, torch tensors, pandas Series,
    or column names of the pandas DataFrame passed as `data`. Without `x` the
    sample index is used. None entries become NaN. Empty input is allowed.
    """
    if data is not None:
        y, x = _frame_columns(data, y, x)
    if y is None:
        raise PlotDataError("y input is required")
    ys = to_float_array(y, "y")
    xs = np.arange(ys.size, dtype=np.float64) if x is None else to_float_array(x, "x")
    if xs.shape != ys.shape:
        raise PlotDataError(f"x and y length mismatch: {xs.size} != {ys.size}")
    return xs, ys


def to_float_array(values: Any, label: str) -> np.ndarray:
    if isinstance(values, torch.Tensor):
        arr = values.detach().cpu().to(torch.float64).numpy()
    elif pd is not None and isinstance(values, pd.Series):
        arr = values.to_numpy()
    elif isinstance(values, np.ndarray):
        arr = values
    elif isinstance(values, Sequence) and not isinstance(values, (str, bytes, bytearray)):
        arr = np.asarray(list(values), dtype=object)
    else:
        raise PlotDataError(f"unsupported {label} input type: {type(values).__name__}")

    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if arr.dtype.kind in "iufb":
        return arr.astype(np.float64)

    out = np.empty(arr.size, dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        try:
            out[i] = np.nan if raw is None else float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} has a non-numeric value at index {i}: {raw!r}") from exc
    return out


def _frame_columns(frame: Any, y: Any, x: Any) -> tuple[Any, Any]:
    if pd is None:
        raise PlotDataError("pandas is required when using `data=`")
    if not isinstance(frame, pd.DataFrame):
        raise PlotDataError("`data` must be a pandas DataFrame")
    if y is None:
        numeric = [name for name in frame.columns if pd.api.types.is_numeric_dtype(frame[name])]
        if len(numeric) != 1:
            raise PlotDataError("without y, data must have exactly one numeric column")
        y = numeric[0]
    return _column(frame, y), _column(frame, x)


def _column(frame: Any, key: Any) -> Any:
    if not isinstance(key, str):
        return key
    if key not in frame.columns:
        raise PlotDataError(f"column not found: {key}")
    return frame[key]
