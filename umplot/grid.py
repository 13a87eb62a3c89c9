from __future__ import annotations

from dataclasses import dataclass
import math

from umplot.transform import CoordinateTransform, Rect


@dataclass(frozen=True)
class GridPlan:
    step: float
    first_tick: float


@dataclass(frozen=True)
class Tick:
    value: float
    screen: float
    label: str


@dataclass(frozen=True)
class GridLayout:
    x_plan: GridPlan
    y_plan: GridPlan
    x_ticks: tuple[Tick, ...]
    y_ticks: tuple[Tick, ...]


def grid_step(span: float, num_lines: int) -> float:
    """Largest power of ten not above span/N, doubled until span/step <= 2N.

    The doubling yields 1, 2, 4, 8 x 10^k steps rather than the 1-2-5 series.
    """
    if num_lines <= 0:
        raise ValueError("num_lines must be > 0")
    if not math.isfinite(span) or span <= 0:
        raise ValueError("span must be finite and > 0")
    step = 10.0 ** math.floor(math.log10(span / num_lines))
    while span / step > 2.0 * num_lines:
        step *= 2.0
    return step


def plan_axis(span: float, num_lines: int, min_visible: float) -> GridPlan | None:
    if num_lines <= 0 or not math.isfinite(span) or span <= 0 or not math.isfinite(min_visible):
        return None
    step = grid_step(span, num_lines)
    first_tick = math.ceil(min_visible / step) * step
    if not math.isfinite(first_tick):
        return None
    return GridPlan(step=step, first_tick=first_tick)


def format_tick_label(value: float, step: float) -> str:
    return f"{value:.4f}" if step <= 0.01 else f"{value:.2f}"


class GridPlanner:
    """Derives per-axis tick layout from the current transform and client rect."""

    def __init__(self, x_num_lines: int, y_num_lines: int) -> None:
        self.x_num_lines = int(x_num_lines)
        self.y_num_lines = int(y_num_lines)

    @property
    def enabled(self) -> bool:
        return self.x_num_lines > 0 and self.y_num_lines > 0

    def plan(self, transform: CoordinateTransform, client_rect: Rect) -> GridLayout | None:
        if not self.enabled:
            return None
        x_span = client_rect.width / abs(transform.x_scale)
        y_span = client_rect.height / abs(transform.y_scale)
        visible = transform.visible_bounds(client_rect)
        x_min = min(visible.min_x, visible.max_x)
        y_min = min(visible.min_y, visible.max_y)
        x_plan = plan_axis(x_span, self.x_num_lines, x_min)
        y_plan = plan_axis(y_span, self.y_num_lines, y_min)
        if x_plan is None or y_plan is None:
            return None

        x_ticks = _axis_ticks(
            x_plan, transform.x_scale, transform.dx, client_rect.x, client_rect.right, tick_limit(self.x_num_lines)
        )
        y_ticks = _axis_ticks(
            y_plan, transform.y_scale, transform.dy, client_rect.y, client_rect.bottom, tick_limit(self.y_num_lines)
        )
        return GridLayout(x_plan=x_plan, y_plan=y_plan, x_ticks=x_ticks, y_ticks=y_ticks)


def tick_limit(num_lines: int) -> int:
    """Most ticks a plan can place across its span: span/step <= 2N gives at most 2N + 1."""
    return 2 * max(0, int(num_lines)) + 2


def _axis_ticks(
    plan: GridPlan, scale: float, offset: float, lo: float, hi: float, limit: int
) -> tuple[Tick, ...]:
    # Ticks start at the visible minimum and walk toward the far edge of the rect.
    out: list[Tick] = []
    for i in range(limit):
        value = plan.first_tick + i * plan.step
        screen = scale * (value - offset)
        if (scale > 0 and screen >= hi) or (scale < 0 and screen <= lo):
            break
        out.append(Tick(value=value, screen=screen, label=format_tick_label(value, plan.step)))
    return tuple(out)
