from __future__ import annotations

import math

import numpy as np

from umplot.raster.canvas import RGBA, ClipBox, fill_rect, resolve_clip


def draw_segment(
    dst: np.ndarray,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    color: RGBA,
    width: int = 1,
    clip: ClipBox | None = None,
) -> None:
    """Rasterize one segment with a square brush, clipped to `clip`.

    Segments with non-finite endpoints are skipped. The segment is cut to the
    brush-expanded clip box first so far off-screen endpoints stay cheap.
    """
    if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
        return
    width = max(1, int(width))
    box = resolve_clip(dst, clip)
    if box[0] >= box[2] or box[1] >= box[3]:
        return
    radius = width // 2
    clipped = clip_segment(x0, y0, x1, y1, (box[0] - radius - 1, box[1] - radius - 1, box[2] + radius + 1, box[3] + radius + 1))
    if clipped is None:
        return
    ix0, iy0, ix1, iy1 = (int(round(v)) for v in clipped)

    if iy0 == iy1 or ix0 == ix1:
        fill_rect(dst, ix0 - radius, iy0 - radius, ix1 + radius, iy1 + radius, color, box)
        return
    _bresenham(dst, ix0, iy0, ix1, iy1, color, radius, box)


def clip_segment(
    x0: float, y0: float, x1: float, y1: float, box: ClipBox
) -> tuple[float, float, float, float] | None:
    """Liang-Barsky clip against an (exclusive-max) box; None when fully outside."""
    bx0, by0, bx1, by1 = box
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in (
        (-dx, x0 - bx0),
        (dx, (bx1 - 1) - x0),
        (-dy, y0 - by0),
        (dy, (by1 - 1) - y0),
    ):
        if p == 0:
            if q < 0:
                return None
            continue
        r = q / p
        if p < 0:
            if r > t1:
                return None
            t0 = max(t0, r)
        else:
            if r < t0:
                return None
            t1 = min(t1, r)
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)


def _bresenham(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, radius: int, box: ClipBox) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        fill_rect(dst, x0 - radius, y0 - radius, x0 + radius, y0 + radius, color, box)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
