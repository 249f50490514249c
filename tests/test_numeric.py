from __future__ import annotations

import unittest

from pjsketch import (
    CanvasPoint,
    bezier_point,
    bezier_tangent,
    constrain,
    curve_point,
    curve_tangent,
    dist,
    lerp,
    map_range,
    px,
    rel,
)


class ScalarHelperTests(unittest.TestCase):
    def test_dist(self) -> None:
        self.assertEqual(dist(0, 0, 3, 4), 5.0)

    def test_lerp_and_constrain(self) -> None:
        self.assertEqual(lerp(10, 20, 0.25), 12.5)
        self.assertEqual(lerp(10, 20, 1.5), 25.0)
        self.assertEqual(constrain(15, 0, 10), 10)
        self.assertEqual(constrain(-1, 0, 10), 0)

    def test_map_range_does_not_clamp(self) -> None:
        self.assertEqual(map_range(5, 0, 10, 100, 200), 150.0)
        self.assertEqual(map_range(20, 0, 10, 0, 1), 2.0)
        with self.assertRaises(ValueError):
            map_range(1, 3, 3, 0, 1)


class CurveEvaluationTests(unittest.TestCase):
    def test_bezier_point_endpoints_and_middle(self) -> None:
        self.assertEqual(bezier_point(0.0, 10.0, 20.0, 30.0, 0.0), 0.0)
        self.assertEqual(bezier_point(0.0, 10.0, 20.0, 30.0, 1.0), 30.0)
        self.assertAlmostEqual(bezier_point(0.0, 10.0, 20.0, 30.0, 0.5), 15.0)

    def test_bezier_tangent_matches_control_direction(self) -> None:
        self.assertAlmostEqual(bezier_tangent(0.0, 10.0, 20.0, 30.0, 0.0), 30.0)
        self.assertAlmostEqual(bezier_tangent(0.0, 0.0, 30.0, 30.0, 1.0), 0.0)
        self.assertAlmostEqual(bezier_tangent(0.0, 10.0, 20.0, 30.0, 0.5), 30.0)

    def test_curve_point_spans_middle_points(self) -> None:
        self.assertAlmostEqual(curve_point(0.0, 10.0, 20.0, 30.0, 0.0), 10.0)
        self.assertAlmostEqual(curve_point(0.0, 10.0, 20.0, 30.0, 1.0), 20.0)
        self.assertAlmostEqual(curve_point(0.0, 10.0, 20.0, 30.0, 0.5), 15.0)

    def test_curve_tangent_on_uniform_spacing(self) -> None:
        self.assertAlmostEqual(curve_tangent(0.0, 10.0, 20.0, 30.0, 0.0), 10.0)
        self.assertAlmostEqual(curve_tangent(0.0, 10.0, 20.0, 30.0, 0.7), 10.0)

    def test_points_and_tuples_evaluate_per_axis(self) -> None:
        got = bezier_point((0, 0), (10, 5), (20, 5), (30, 0), 0.5)
        self.assertAlmostEqual(got[0], 15.0)
        self.assertAlmostEqual(got[1], 3.75)
        point = curve_point(CanvasPoint(0, 0), CanvasPoint(10, 0), CanvasPoint(20, 10), CanvasPoint(30, 10), 0.0)
        self.assertIsInstance(point, CanvasPoint)
        self.assertEqual(point.x.resolve(100.0), 10.0)

    def test_canvas_values_stay_symbolic(self) -> None:
        value = bezier_point(px(0), rel(0.1), rel(0.2), rel(0.3), 1.0)
        self.assertAlmostEqual(value.resolve(200.0), 60.0)


if __name__ == "__main__":
    unittest.main()
