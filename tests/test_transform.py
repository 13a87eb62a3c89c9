from __future__ import annotations

import math
import unittest

import numpy as np

from umplot.series import Point, Series
from umplot.transform import FLOAT_MAX, Bounds, CoordinateTransform, Rect, ScreenPoint, compute_bounds


def _series(points, **kwargs) -> Series:
    return Series.from_points(points, **kwargs)


class CoordinateTransformTests(unittest.TestCase):
    def test_to_screen_and_back_is_identity_for_valid_transform(self) -> None:
        t = CoordinateTransform(dx=3.5, dy=-2.0, x_scale=12.0, y_scale=-7.5)
        for p in (Point(0.0, 0.0), Point(-4.25, 9.0), Point(1e6, -1e-3), Point(-3.7e12, 8.1e11)):
            back = t.to_graph(t.to_screen(p))
            self.assertTrue(math.isclose(back.x, p.x, rel_tol=1e-9, abs_tol=1e-12), (back, p))
            self.assertTrue(math.isclose(back.y, p.y, rel_tol=1e-9, abs_tol=1e-12), (back, p))

    def test_round_trip_holds_for_tiny_scales(self) -> None:
        t = CoordinateTransform(dx=2.5e9, dy=-1.0e9, x_scale=3e-7, y_scale=-4e-7)
        for p in (Point(2.5e9, -1.0e9), Point(7.25e9, 3.3e9)):
            back = t.to_graph(t.to_screen(p))
            self.assertTrue(math.isclose(back.x, p.x, rel_tol=1e-9), (back, p))
            self.assertTrue(math.isclose(back.y, p.y, rel_tol=1e-9), (back, p))

    def test_to_screen_applies_offset_then_scale(self) -> None:
        t = CoordinateTransform(dx=1.0, dy=2.0, x_scale=10.0, y_scale=-5.0)
        self.assertEqual(t.to_screen(Point(3.0, 4.0)), ScreenPoint(20.0, -10.0))

    def test_rejects_zero_or_non_finite_scale(self) -> None:
        with self.assertRaises(ValueError):
            CoordinateTransform(x_scale=0.0)
        with self.assertRaises(ValueError):
            CoordinateTransform(y_scale=math.inf)

    def test_fit_three_point_series_into_800x600(self) -> None:
        t = CoordinateTransform()
        rect = Rect(0.0, 0.0, 800.0, 600.0)
        bounds = compute_bounds([_series([(0, 0), (10, 5), (20, 0)])])
        t.fit_to_bounds(rect, bounds)
        self.assertEqual(t.as_tuple(), (0.0, 5.0, 40.0, -120.0))
        self.assertEqual(t.to_screen(Point(10.0, 5.0)), ScreenPoint(400.0, 0.0))
        self.assertEqual(t.to_screen(Point(0.0, 0.0)), ScreenPoint(0.0, 600.0))
        self.assertEqual(t.to_screen(Point(20.0, 0.0)), ScreenPoint(800.0, 600.0))

    def test_fit_maps_bounds_corners_to_rect_corners(self) -> None:
        t = CoordinateTransform()
        rect = Rect(96.0, 24.0, 512.0, 384.0)
        t.fit_to_bounds(rect, Bounds(-3.0, 10.0, 7.0, 30.0))
        bl = t.to_screen(Point(-3.0, 10.0))
        tr = t.to_screen(Point(7.0, 30.0))
        self.assertAlmostEqual(bl.x, rect.x)
        self.assertAlmostEqual(bl.y, rect.bottom)
        self.assertAlmostEqual(tr.x, rect.right)
        self.assertAlmostEqual(tr.y, rect.y)

    def test_fit_degenerate_axis_falls_back_to_unit_scale(self) -> None:
        t = CoordinateTransform()
        t.fit_to_bounds(Rect(0.0, 0.0, 100.0, 100.0), Bounds(2.0, 3.0, 2.0, 3.0))
        self.assertEqual(t.x_scale, 1.0)
        self.assertEqual(t.y_scale, 1.0)
        for value in t.as_tuple():
            self.assertTrue(math.isfinite(value))

    def test_fit_constant_series_keeps_x_scale(self) -> None:
        t = CoordinateTransform()
        t.fit_to_bounds(Rect(0.0, 0.0, 100.0, 50.0), Bounds(0.0, 4.0, 10.0, 4.0))
        self.assertEqual(t.x_scale, 10.0)
        self.assertEqual(t.y_scale, 1.0)

    def test_fit_empty_bounds_is_finite(self) -> None:
        t = CoordinateTransform()
        t.fit_to_bounds(Rect(10.0, 10.0, 100.0, 100.0), Bounds.empty())
        for value in t.as_tuple():
            self.assertTrue(math.isfinite(value))

    def test_visible_bounds_of_fitted_rect_matches_bounds(self) -> None:
        t = CoordinateTransform()
        rect = Rect(50.0, 20.0, 400.0, 300.0)
        t.fit_to_bounds(rect, Bounds(-1.0, -2.0, 3.0, 6.0))
        visible = t.visible_bounds(rect)
        self.assertAlmostEqual(visible.min_x, -1.0)
        self.assertAlmostEqual(visible.min_y, -2.0)
        self.assertAlmostEqual(visible.max_x, 3.0)
        self.assertAlmostEqual(visible.max_y, 6.0)

    def test_pan_moves_content_with_pointer(self) -> None:
        t = CoordinateTransform(dx=0.0, dy=5.0, x_scale=40.0, y_scale=-120.0)
        p = Point(10.0, 5.0)
        before = t.to_screen(p)
        t.pan(ScreenPoint(13.0, -7.0))
        after = t.to_screen(p)
        self.assertAlmostEqual(after.x - before.x, 13.0)
        self.assertAlmostEqual(after.y - before.y, -7.0)

    def test_copy_is_independent(self) -> None:
        t = CoordinateTransform(dx=1.0)
        c = t.copy()
        c.pan(ScreenPoint(10.0, 0.0))
        self.assertEqual(t.dx, 1.0)
        self.assertNotEqual(c.dx, 1.0)

    def test_to_screen_arrays_matches_scalar_projection(self) -> None:
        t = CoordinateTransform(dx=2.0, dy=1.0, x_scale=3.0, y_scale=-4.0)
        xs = np.asarray([0.0, 1.0, 5.0])
        ys = np.asarray([2.0, -1.0, 0.5])
        sx, sy = t.to_screen_arrays(xs, ys)
        for i in range(xs.size):
            expected = t.to_screen(Point(float(xs[i]), float(ys[i])))
            self.assertAlmostEqual(float(sx[i]), expected.x)
            self.assertAlmostEqual(float(sy[i]), expected.y)


class BoundsTests(unittest.TestCase):
    def test_compute_bounds_spans_all_series(self) -> None:
        bounds = compute_bounds([_series([(0, 1), (4, -2)]), _series([(-3, 7)])])
        self.assertEqual(bounds, Bounds(-3.0, -2.0, 4.0, 7.0))

    def test_compute_bounds_ignores_non_finite_samples(self) -> None:
        s = Series(x=np.asarray([0.0, np.nan, 2.0]), y=np.asarray([1.0, 5.0, np.inf]))
        self.assertEqual(compute_bounds([s]), Bounds(0.0, 1.0, 0.0, 1.0))

    def test_compute_bounds_of_nothing_is_empty_sentinel(self) -> None:
        bounds = compute_bounds([Series(x=np.asarray([]), y=np.asarray([]))])
        self.assertTrue(bounds.is_empty)
        self.assertEqual(bounds.min_x, FLOAT_MAX)
        self.assertEqual(bounds.max_x, -FLOAT_MAX)

    def test_single_point_bounds_are_not_empty(self) -> None:
        self.assertFalse(compute_bounds([_series([(1, 1)])]).is_empty)


class RectTests(unittest.TestCase):
    def test_contains_is_half_open(self) -> None:
        r = Rect(10.0, 10.0, 20.0, 20.0)
        self.assertTrue(r.contains(ScreenPoint(10.0, 10.0)))
        self.assertTrue(r.contains(ScreenPoint(29.9, 29.9)))
        self.assertFalse(r.contains(ScreenPoint(30.0, 15.0)))
        self.assertFalse(r.contains(ScreenPoint(15.0, 9.9)))

    def test_normalized_flips_negative_extents(self) -> None:
        self.assertEqual(Rect(50.0, 40.0, -20.0, -10.0).normalized(), Rect(30.0, 30.0, 20.0, 10.0))


if __name__ == "__main__":
    unittest.main()
