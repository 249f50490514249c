from __future__ import annotations

import math
import unittest

from pjsketch import (
    pop_matrix,
    print_matrix,
    push_matrix,
    radians,
    rect,
    rel,
    reset_matrix,
    rotate,
    scale,
    translate,
)
from pjsketch_core.core.instructions import Content, evaluate_frame
from pjsketch_core.render.recording import FillOp, RecordingSurface, StrokeOp
from pjsketch_core.render.transform import AffineTransform


def _walk(*items: object) -> RecordingSurface:
    surface = RecordingSurface(width=200, height=100)
    result = evaluate_frame(Content.of(*items), surface)
    if result.error is not None:
        raise result.error
    return surface


class TransformStackTests(unittest.TestCase):
    def test_push_translate_pop_restores_transform(self) -> None:
        for prior in ((), (translate(5, 5),), (rotate(30), scale(2))):
            before = _walk(*prior).transform
            after = _walk(*prior, push_matrix(), translate(10, 10), pop_matrix()).transform
            self.assertEqual(after, before)

    def test_translations_accumulate(self) -> None:
        surface = _walk(translate(5, 5), translate(10, 10))
        self.assertEqual(surface.transform, AffineTransform.translation(15, 15))

    def test_relative_translation_uses_canvas_size(self) -> None:
        surface = _walk(translate(rel(0.5), rel(0.5)))
        self.assertEqual(surface.transform, AffineTransform.translation(100, 50))

    def test_nested_push_pop(self) -> None:
        surface = _walk(
            translate(1, 0),
            push_matrix(),
            translate(2, 0),
            push_matrix(),
            translate(4, 0),
            pop_matrix(),
            rect(0, 0, 1, 1),
            pop_matrix(),
            rect(0, 0, 1, 1),
        )
        fills = surface.ops_of(FillOp)
        self.assertEqual(fills[0].path.commands[0].x, 3.0)
        self.assertEqual(fills[1].path.commands[0].x, 1.0)

    def test_pop_on_empty_stack_resets_to_identity(self) -> None:
        surface = _walk(translate(7, 7), pop_matrix())
        self.assertTrue(surface.transform.is_identity)

    def test_reset_matrix(self) -> None:
        self.assertTrue(_walk(scale(3), rotate(10), reset_matrix()).transform.is_identity)

    def test_rotate_takes_degrees_or_angles(self) -> None:
        surface = _walk(rotate(90), rect(10, 0, 1, 1))
        x, y = surface.ops_of(FillOp)[0].path.commands[0].x, surface.ops_of(FillOp)[0].path.commands[0].y
        self.assertAlmostEqual(x, 0.0)
        self.assertAlmostEqual(y, 10.0)
        self.assertEqual(_walk(rotate(radians(math.pi / 2))).transform, _walk(rotate(90)).transform)

    def test_scale_applies_to_geometry_and_stroke_width(self) -> None:
        surface = _walk(scale(2), rect(1, 1, 2, 2))
        self.assertEqual(surface.ops_of(FillOp)[0].path.bounds(), (2.0, 2.0, 6.0, 6.0))
        self.assertEqual(surface.ops_of(StrokeOp)[0].style.width, 2.0)

    def test_non_uniform_scale(self) -> None:
        surface = _walk(scale(2, 3), rect(1, 1, 1, 1))
        self.assertEqual(surface.ops_of(FillOp)[0].path.bounds(), (2.0, 3.0, 4.0, 6.0))

    def test_translate_then_rotate_rotates_about_translated_origin(self) -> None:
        surface = _walk(translate(50, 50), rotate(180), rect(10, 0, 1, 1))
        start = surface.ops_of(FillOp)[0].path.commands[0]
        self.assertAlmostEqual(start.x, 40.0)
        self.assertAlmostEqual(start.y, 50.0)

    def test_print_matrix_logs_current_transform(self) -> None:
        with self.assertLogs("pjsketch.transform", level="INFO") as captured:
            _walk(translate(3, 4), print_matrix())
        self.assertIn("matrix [1 0 3 | 0 1 4]", captured.output[0])

    def test_frames_start_from_identity(self) -> None:
        surface = _walk(translate(10, 10))
        surface.begin_frame()
        self.assertTrue(surface.transform.is_identity)
        self.assertEqual(surface.operations, [])


if __name__ == "__main__":
    unittest.main()
