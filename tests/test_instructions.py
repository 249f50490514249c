from __future__ import annotations

import unittest

from pjsketch_core.core.instructions import Action, Content, DelayedValue, Draw, content, evaluate_frame, perform
from pjsketch_core.core.state import GameValues
from pjsketch_core.render.recording import RecordingSurface


def _record(log: list[str], name: str) -> Action:
    return Action(lambda values: log.append(name), label=name)


class ContentTests(unittest.TestCase):
    def test_flattens_nested_items_in_order(self) -> None:
        log: list[str] = []
        nested = Content.of(_record(log, "b"), [_record(log, "c"), (_record(log, "d"),)])
        frame = Content.of(_record(log, "a"), nested, None, (x for x in [_record(log, "e")]))
        self.assertEqual(len(frame), 5)
        result = evaluate_frame(frame, RecordingSurface())
        self.assertTrue(result.ok)
        self.assertEqual(log, ["a", "b", "c", "d", "e"])

    def test_callables_run_at_their_point_in_the_walk(self) -> None:
        log: list[str] = []
        frame = Content.of(_record(log, "first"), lambda: log.append("side effect"), lambda: _record(log, "returned"))
        self.assertEqual(log, [])
        evaluate_frame(frame, RecordingSurface())
        self.assertEqual(log, ["first", "side effect", "returned"])

    def test_callable_returning_other_values_fails_the_frame(self) -> None:
        result = evaluate_frame(Content.of(lambda: 42), RecordingSurface())
        self.assertIsInstance(result.error, TypeError)

    def test_strings_and_unknown_items_are_rejected(self) -> None:
        with self.assertRaises(TypeError):
            Content.of("rect")
        with self.assertRaises(TypeError):
            Content.of(3.5)

    def test_addition_concatenates(self) -> None:
        log: list[str] = []
        frame = [_record(log, "a")] + Content.of(_record(log, "b"))
        frame = frame + _record(log, "c")
        evaluate_frame(frame, RecordingSurface())
        self.assertEqual(log, ["a", "b", "c"])

    def test_content_decorator_collects_generator_items(self) -> None:
        log: list[str] = []

        @content
        def scene(count: int):
            for index in range(count):
                yield _record(log, f"item{index}")

        frame = scene(3)
        self.assertIsInstance(frame, Content)
        self.assertEqual([i.label for i in frame.resolve()], ["item0", "item1", "item2"])

    def test_perform_defers_side_effect(self) -> None:
        log: list[str] = []
        action = perform(lambda: log.append("ran"))
        self.assertEqual(log, [])
        evaluate_frame(Content.of(action), RecordingSurface())
        self.assertEqual(log, ["ran"])


class EvaluateFrameTests(unittest.TestCase):
    def test_error_aborts_only_the_rest_of_the_frame(self) -> None:
        log: list[str] = []

        def explode(values: GameValues) -> None:
            raise RuntimeError("boom")

        frame = Content.of(_record(log, "a"), Action(explode, label="explode"), _record(log, "never"))
        with self.assertLogs("pjsketch_core.core.instructions", level="ERROR") as captured:
            result = evaluate_frame(frame, RecordingSurface())
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, RuntimeError)
        self.assertEqual(result.failed_index, 1)
        self.assertEqual(result.failed_label, "explode")
        self.assertEqual(result.instructions_run, 1)
        self.assertEqual(log, ["a"])
        self.assertIn("explode", captured.output[0])

    def test_draw_receives_surface_size_and_state(self) -> None:
        seen: list[object] = []
        surface = RecordingSurface(width=30, height=40)
        values = GameValues(stroke_weight=3.0)
        draw = Draw(lambda s, size, v: seen.extend([s, size.width, size.height, v.stroke_weight]))
        evaluate_frame(Content.of(draw), surface, values)
        self.assertEqual(seen, [surface, 30.0, 40.0, 3.0])


class DelayedValueTests(unittest.TestCase):
    def test_publish_lands_in_frame_result(self) -> None:
        width = DelayedValue(lambda surface, size, values: size.width, name="width")
        result = evaluate_frame(Content.of(width.publish(), width.map(lambda w: w / 2).publish("half")), RecordingSurface(width=80))
        self.assertEqual(result.observed, {"width": 80.0, "half": 40.0})

    def test_send_calls_back_during_the_walk(self) -> None:
        received: list[float] = []
        height = DelayedValue(lambda surface, size, values: size.height)
        evaluate_frame(Content.of(height.send(received.append)), RecordingSurface(height=25))
        self.assertEqual(received, [25.0])


if __name__ == "__main__":
    unittest.main()
