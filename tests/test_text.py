from __future__ import annotations

import unittest

from pjsketch import (
    BOTTOM,
    CENTER,
    RIGHT,
    TOP,
    FontDesign,
    UnsupportedOperationError,
    create_font,
    fill,
    rel,
    render_operations,
    text,
    text_align,
    text_ascent,
    text_descent,
    text_font,
    text_leading,
    text_size,
    text_width,
)
from pjsketch.typography import first_baseline
from pjsketch_core.core.instructions import Content
from pjsketch_core.core.state import VerticalAlign
from pjsketch_core.render.recording import TextOp
from pjsketch_core.render.surface import TextMetrics


def _text_ops(*items: object, width: float = 200, height: float = 200) -> list[TextOp]:
    ops, result = render_operations(Content.of(text_size(10), *items), width, height)
    if result.error is not None:
        raise result.error
    return [op for op in ops if isinstance(op, TextOp)]


class TextPlacementTests(unittest.TestCase):
    def test_default_alignment_is_left_baseline(self) -> None:
        (op,) = _text_ops(text("hi", 10, 50))
        self.assertEqual(op.text, "hi")
        self.assertEqual(op.origin, (10.0, 50.0))
        self.assertEqual(op.font.size, 10.0)

    def test_horizontal_alignment_uses_measured_width(self) -> None:
        # "hi" measures 0.6 * 10 * 2 = 12 on the recording surface.
        (centered,) = _text_ops(text_align(CENTER), text("hi", 10, 50))
        self.assertAlmostEqual(centered.origin[0], 4.0)
        (right,) = _text_ops(text_align(RIGHT), text("hi", 10, 50))
        self.assertAlmostEqual(right.origin[0], -2.0)

    def test_vertical_alignment(self) -> None:
        (top,) = _text_ops(text_align(RIGHT, TOP), text("hi", 10, 50))
        self.assertAlmostEqual(top.origin[1], 58.0)
        (bottom,) = _text_ops(text_align(RIGHT, BOTTOM), text("hi", 10, 50))
        self.assertAlmostEqual(bottom.origin[1], 48.0)
        (middle,) = _text_ops(text_align(RIGHT, CENTER), text("hi", 10, 50))
        self.assertAlmostEqual(middle.origin[1], 53.0)

    def test_multiline_text_stacks_downward(self) -> None:
        ops = _text_ops(text("a\nbb", 0, 20))
        self.assertEqual([op.text for op in ops], ["a", "bb"])
        self.assertEqual([op.origin[1] for op in ops], [20.0, 30.0])

    def test_first_baseline_for_blocks(self) -> None:
        metrics = TextMetrics(width=0.0, ascent=8.0, descent=2.0)
        self.assertEqual(first_baseline(VerticalAlign.CENTER, 100.0, metrics, line_count=2), 98.0)
        self.assertEqual(first_baseline(VerticalAlign.BOTTOM, 100.0, metrics, line_count=2), 88.0)

    def test_at_keyword_and_relative_coordinates(self) -> None:
        (op,) = _text_ops(text("x", at=(rel(0.5), 40)), width=100)
        self.assertEqual(op.origin, (50.0, 40.0))

    def test_text_uses_fill_color(self) -> None:
        (op,) = _text_ops(fill(1, 2, 3), text("x", 0, 0))
        self.assertEqual(op.color.to_rgba_u8(), (1, 2, 3, 255))

    def test_non_string_values_are_formatted(self) -> None:
        (op,) = _text_ops(text(42, 0, 0))
        self.assertEqual(op.text, "42")

    def test_bad_arguments(self) -> None:
        with self.assertRaises(TypeError):
            text("x", 1, 2, 3)
        with self.assertRaises(TypeError):
            text("x", size=(10, 10))
        with self.assertRaises(TypeError):
            text("x", 1, at=(1, 1))


class TextBoxTests(unittest.TestCase):
    def test_words_wrap_inside_box(self) -> None:
        ops = _text_ops(text_align(RIGHT, BOTTOM), text("aa bb cc", 0, 0, 40, 100))
        self.assertEqual([op.text for op in ops], ["aa bb", "cc"])
        self.assertEqual([op.origin for op in ops], [(0.0, 8.0), (0.0, 18.0)])

    def test_lines_below_the_box_are_clipped(self) -> None:
        ops = _text_ops(text("aa bb cc", at=(0, 0), size=(40, 15)))
        self.assertEqual([op.text for op in ops], ["aa bb"])


class FontTests(unittest.TestCase):
    def test_text_font_sets_design_and_size(self) -> None:
        (op,) = _text_ops(text_font(create_font("serif"), 20), text("x", 0, 0))
        self.assertIs(op.font.design, FontDesign.SERIF)
        self.assertEqual(op.font.size, 20.0)

    def test_unknown_design_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            create_font("gothic")

    def test_metrics_are_published(self) -> None:
        _, result = render_operations(
            Content.of(text_size(10), text_width("abc").publish(), text_ascent().publish(), text_descent().publish()),
            100,
            100,
        )
        self.assertAlmostEqual(result.observed["text_width"], 18.0)
        self.assertAlmostEqual(result.observed["text_ascent"], 8.0)
        self.assertAlmostEqual(result.observed["text_descent"], 2.0)

    def test_text_leading_is_unsupported(self) -> None:
        with self.assertRaises(UnsupportedOperationError):
            text_leading(4)


if __name__ == "__main__":
    unittest.main()
