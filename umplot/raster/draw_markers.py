from __future__ import annotations

import math

import numpy as np

from umplot.raster.canvas import RGBA, ClipBox, blend_into, resolve_clip


def draw_circle(
    dst: np.ndarray,
    cx: float,
    cy: float,
    radius: float,
    color: RGBA,
    clip: ClipBox | None = None,
) -> None:
    """Filled disc centered at (cx, cy); a radius below one pixel still marks the center."""
    if not (math.isfinite(cx) and math.isfinite(cy) and math.isfinite(radius)):
        return
    r = max(0.5, float(radius))
    x0, y0, x1, y1 = resolve_clip(dst, clip)
    left = max(x0, int(math.floor(cx - r)))
    right = min(x1, int(math.ceil(cx + r)) + 1)
    top = max(y0, int(math.floor(cy - r)))
    bottom = min(y1, int(math.ceil(cy + r)) + 1)
    if left >= right or top >= bottom:
        return

    yy, xx = np.mgrid[top:bottom, left:right]
    mask = (xx - cx) ** 2 + (yy - cy) ** 2 <= r * r
    if not mask.any():
        return
    patch = dst[top:bottom, left:right]
    blend_into(patch, color, coverage=mask.astype(np.float32))
