from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from umplot.raster.canvas import RGBA, ClipBox, blend_into, resolve_clip


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "DejaVu Sans"
FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "liberation sans",
    "helvetica",
    "arial",
    "freesans",
)
MAX_CACHED_MASKS = 512

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


class FontCache:
    """Loaded fonts and rendered glyph masks, owned by one rendering backend.

    `close()` drops every handle; the cache reloads lazily if used again.
    """

    def __init__(self, font_family: str = DEFAULT_FONT_FAMILY) -> None:
        self.font_family = font_family
        self._font_path: Path | None = None
        self._path_resolved = False
        self._fonts: dict[int, Font] = {}
        self._masks: dict[tuple[str, int], np.ndarray] = {}

    def font(self, font_size_px: float) -> Font:
        size = max(1, int(round(font_size_px)))
        font = self._fonts.get(size)
        if font is None:
            font = self._load(size)
            self._fonts[size] = font
        return font

    def mask(self, text: str, font_size_px: float) -> np.ndarray:
        size = max(1, int(round(font_size_px)))
        key = (text, size)
        mask = self._masks.get(key)
        if mask is None:
            mask = _render_mask(text, self.font(size))
            if len(self._masks) >= MAX_CACHED_MASKS:
                self._masks.clear()
            self._masks[key] = mask
        return mask

    def close(self) -> None:
        self._fonts.clear()
        self._masks.clear()

    def _load(self, size: int) -> Font:
        if not self._path_resolved:
            self._font_path = _resolve_font_path(self.font_family)
            self._path_resolved = True
            if self._font_path is None:
                LOGGER.info("no TrueType font matching %r; using the Pillow default font", self.font_family)
        if self._font_path is not None:
            try:
                return ImageFont.truetype(str(self._font_path), size=size)
            except OSError:
                LOGGER.warning("failed to load font %s; using the Pillow default font", self._font_path)
        return ImageFont.load_default(size=size)


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    fonts: FontCache,
    *,
    font_size_px: float,
    rotate_deg: int = 0,
    clip: ClipBox | None = None,
) -> None:
    """Blend `text` with its (rotated) bounding box's top-left corner at (x, y)."""
    if not text:
        return
    mask = _rotate_mask(fonts.mask(text, font_size_px), rotate_deg=rotate_deg)
    _blend_mask(dst, int(x), int(y), mask, color, clip)


def text_size(
    text: str,
    fonts: FontCache,
    *,
    font_size_px: float,
    rotate_deg: int = 0,
) -> tuple[int, int]:
    font = fonts.font(font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    w = max(0, int(right - left))
    h = max(1, int(bottom - top))
    turns = _normalize_quarter_turns(rotate_deg)
    if turns % 2 == 1:
        return (h, w)
    return (w, h)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA, clip: ClipBox | None) -> None:
    h, w = mask.shape
    if h <= 0 or w <= 0:
        return
    cx0, cy0, cx1, cy1 = resolve_clip(dst, clip)
    x0 = max(cx0, x)
    y0 = max(cy0, y)
    x1 = min(cx1, x + w)
    y1 = min(cy1, y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    if not np.any(cov > 0):
        return
    blend_into(dst[y0:y1, x0:x1], color, coverage=cov)


def _render_mask(text: str, font: Font) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("C:/Windows/Fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if stem == p or (p in stem and "bold" not in stem and "oblique" not in stem and "mono" not in stem):
                return path
    return None


def _normalize_quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4


def _rotate_mask(mask: np.ndarray, *, rotate_deg: int) -> np.ndarray:
    turns = _normalize_quarter_turns(rotate_deg)
    if turns == 0:
        return mask
    return np.rot90(mask, k=turns)
