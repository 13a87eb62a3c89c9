from __future__ import annotations

import math
import unittest

from umplot.grid import GridPlanner, format_tick_label, grid_step, plan_axis, tick_limit
from umplot.transform import Bounds, CoordinateTransform, Rect


class GridStepTests(unittest.TestCase):
    def test_step_for_span_237_and_five_lines(self) -> None:
        self.assertEqual(grid_step(237.0, 5), 40.0)

    def test_step_is_power_of_ten_when_already_dense_enough(self) -> None:
        self.assertEqual(grid_step(100.0, 10), 10.0)
        self.assertAlmostEqual(grid_step(0.5, 5), 0.1)

    def test_step_keeps_line_count_within_bounds(self) -> None:
        for span in (0.003, 0.75, 1.0, 9.99, 42.0, 237.0, 1234.5, 9.8e6):
            for n in (1, 3, 5, 10, 20):
                step = grid_step(span, n)
                self.assertLessEqual(span / step, 2 * n + 1e-9, (span, n, step))
                self.assertGreaterEqual(span / step, n - 1e-9, (span, n, step))
                self.assertGreater(step, 0.0)

    def test_step_rejects_invalid_arguments(self) -> None:
        with self.assertRaises(ValueError):
            grid_step(10.0, 0)
        with self.assertRaises(ValueError):
            grid_step(0.0, 5)
        with self.assertRaises(ValueError):
            grid_step(math.nan, 5)

    def test_first_tick_is_smallest_multiple_at_or_above_min(self) -> None:
        plan = plan_axis(237.0, 5, -13.0)
        self.assertEqual(plan.step, 40.0)
        self.assertEqual(plan.first_tick, 0.0)
        self.assertEqual(plan_axis(237.0, 5, 40.0).first_tick, 40.0)
        self.assertEqual(plan_axis(237.0, 5, 41.0).first_tick, 80.0)

    def test_plan_axis_without_lines_is_none(self) -> None:
        self.assertIsNone(plan_axis(10.0, 0, 0.0))

    def test_tick_limit_covers_twice_the_line_count(self) -> None:
        self.assertEqual(tick_limit(5), 12)
        self.assertEqual(tick_limit(0), 2)

    def test_label_precision_follows_step(self) -> None:
        self.assertEqual(format_tick_label(1.5, 0.5), "1.50")
        self.assertEqual(format_tick_label(0.0125, 0.005), "0.0125")
        self.assertEqual(format_tick_label(0.02, 0.01), "0.0200")


class GridPlannerTests(unittest.TestCase):
    def _fitted(self, rect: Rect, bounds: Bounds) -> CoordinateTransform:
        t = CoordinateTransform()
        t.fit_to_bounds(rect, bounds)
        return t

    def test_ticks_lie_inside_client_rect(self) -> None:
        rect = Rect(96.0, 24.0, 512.0, 384.0)
        t = self._fitted(rect, Bounds(-3.3, -1.1, 17.9, 2.4))
        layout = GridPlanner(10, 8).plan(t, rect)
        self.assertIsNotNone(layout)
        self.assertTrue(layout.x_ticks)
        self.assertTrue(layout.y_ticks)
        for tick in layout.x_ticks:
            self.assertGreaterEqual(tick.screen, rect.x - 1e-9)
            self.assertLess(tick.screen, rect.right)
        for tick in layout.y_ticks:
            self.assertGreater(tick.screen, rect.y)
            self.assertLessEqual(tick.screen, rect.bottom + 1e-9)

    def test_ticks_are_evenly_spaced_multiples_of_step(self) -> None:
        rect = Rect(0.0, 0.0, 800.0, 600.0)
        t = self._fitted(rect, Bounds(0.0, 0.0, 237.0, 50.0))
        layout = GridPlanner(5, 5).plan(t, rect)
        values = [tick.value for tick in layout.x_ticks]
        self.assertEqual(layout.x_plan.step, 40.0)
        self.assertEqual(values, [0.0, 40.0, 80.0, 120.0, 160.0, 200.0])
        self.assertEqual(layout.x_ticks[1].label, "40.00")

    def test_zero_lines_on_either_axis_disables_grid(self) -> None:
        rect = Rect(0.0, 0.0, 100.0, 100.0)
        t = self._fitted(rect, Bounds(0.0, 0.0, 1.0, 1.0))
        self.assertIsNone(GridPlanner(0, 5).plan(t, rect))
        self.assertIsNone(GridPlanner(5, -1).plan(t, rect))
        self.assertFalse(GridPlanner(5, 0).enabled)

    def test_grid_survives_degenerate_axis(self) -> None:
        rect = Rect(0.0, 0.0, 200.0, 100.0)
        t = self._fitted(rect, Bounds(0.0, 3.0, 10.0, 3.0))
        layout = GridPlanner(5, 5).plan(t, rect)
        self.assertIsNotNone(layout)
        for tick in layout.y_ticks:
            self.assertGreaterEqual(tick.screen, rect.y - 1e-9)
            self.assertLess(tick.screen, rect.bottom)

    def test_dense_grid_spans_the_whole_client_rect(self) -> None:
        rect = Rect(0.0, 0.0, 2000.0, 600.0)
        # 1600 graph units across 2000 px; 800 lines gives a step of 1.
        t = CoordinateTransform(dx=0.0, dy=600.0, x_scale=1.25, y_scale=-1.0)
        layout = GridPlanner(800, 5).plan(t, rect)
        self.assertEqual(layout.x_plan.step, 1.0)
        self.assertEqual(len(layout.x_ticks), 1600)
        self.assertEqual(layout.x_ticks[-1].value, 1599.0)
        self.assertGreaterEqual(layout.x_ticks[-1].screen, rect.right - 1.25 - 1e-9)
        self.assertEqual([tick.value for tick in layout.y_ticks], [0.0, 100.0, 200.0, 300.0, 400.0, 500.0])


if __name__ == "__main__":
    unittest.main()
