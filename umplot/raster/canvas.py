from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]
# x0, y0, x1, y1 with exclusive upper bounds.
ClipBox = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width and height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def fill(dst: np.ndarray, color: RGBA) -> None:
    dst[:, :] = np.asarray(color, dtype=np.uint8)


def resolve_clip(dst: np.ndarray, clip: ClipBox | None) -> ClipBox:
    h, w = dst.shape[0], dst.shape[1]
    if clip is None:
        return (0, 0, w, h)
    x0, y0, x1, y1 = clip
    return (max(0, x0), max(0, y0), min(w, x1), min(h, y1))


def blend_into(view: np.ndarray, color: RGBA, coverage: np.ndarray | None = None) -> None:
    """Source-over blend of a flat color into `view` (..., 4), optionally weighted per pixel."""
    a = color[3] / 255.0
    if coverage is None and a >= 1.0:
        view[..., :3] = np.asarray(color[:3], dtype=np.uint8)
        view[..., 3] = 255
        return
    alpha = np.float32(a) if coverage is None else (coverage.astype(np.float32) * np.float32(a))[..., None]
    src = np.asarray(color[:3], dtype=np.float32)
    view[..., :3] = (src * alpha + view[..., :3].astype(np.float32) * (1.0 - alpha)).astype(np.uint8)
    view[..., 3] = 255


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, clip: ClipBox | None = None) -> None:
    """Fill the inclusive pixel box spanned by (x0, y0) and (x1, y1)."""
    cx0, cy0, cx1, cy1 = resolve_clip(dst, clip)
    left = max(cx0, min(x0, x1))
    right = min(cx1 - 1, max(x0, x1))
    top = max(cy0, min(y0, y1))
    bottom = min(cy1 - 1, max(y0, y1))
    if left > right or top > bottom:
        return
    blend_into(dst[top : bottom + 1, left : right + 1], color)
