from __future__ import annotations

from pathlib import Path
import tempfile
import textwrap
import threading
import unittest

from pjsketch import (
    CanvasValues,
    Content,
    Game,
    fill,
    frame_rate,
    loop,
    no_loop,
    no_stroke,
    perform,
    rect,
)
from pjsketch_core.core.color import WHITE
from pjsketch_core.core.config import SketchConfig
from pjsketch_core.core.events import InputEvent
from pjsketch_core.core.runtime import SketchRuntime, load_game
from pjsketch_core.render.recording import FillOp, RecordingSurface, StrokeOp


class _RecordingGame(Game):
    def __init__(self) -> None:
        self.setup_calls = 0
        self.calls: list[str] = []
        self.snapshots: list[CanvasValues] = []
        self.frames = 0

    def setup(self) -> None:
        self.setup_calls += 1

    def draw(self, values: CanvasValues) -> Content:
        self.frames += 1
        self.snapshots.append(values)
        return Content.of(rect(0, 0, 10, 10))

    def mouse_pressed(self, values: CanvasValues) -> None:
        self.calls.append("pressed")

    def mouse_released(self, values: CanvasValues) -> None:
        self.calls.append("released")

    def mouse_clicked(self, values: CanvasValues) -> None:
        self.calls.append("clicked")

    def mouse_moved(self, values: CanvasValues) -> None:
        self.calls.append("moved")

    def mouse_dragged(self, values: CanvasValues) -> None:
        self.calls.append("dragged")

    def mouse_over(self, values: CanvasValues) -> None:
        self.calls.append("over")

    def mouse_out(self, values: CanvasValues) -> None:
        self.calls.append("out")

    def key_pressed(self, values: CanvasValues) -> None:
        self.calls.append(f"key:{values.key_text}")

    def key_released(self, values: CanvasValues) -> None:
        self.calls.append("key_up")


class _ContentGame(Game):
    def __init__(self, *frames: Content) -> None:
        self._frames = list(frames)
        self.index = 0

    def draw(self, values: CanvasValues) -> Content:
        frame = self._frames[min(self.index, len(self._frames) - 1)]
        self.index += 1
        return frame


class _FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def _runtime(game: Game, **config: object) -> tuple[SketchRuntime, RecordingSurface, _FakeClock]:
    clock = _FakeClock()
    surface = RecordingSurface(width=100, height=50)
    runtime = SketchRuntime(game, surface, SketchConfig(**config), clock=clock, sleep=clock.sleep)
    return runtime, surface, clock


class SketchRuntimeTests(unittest.TestCase):
    def test_tick_runs_setup_once_and_paints(self) -> None:
        game = _RecordingGame()
        runtime, surface, _ = _runtime(game)
        first = runtime.tick(0.0)
        runtime.tick(0.016)
        self.assertTrue(first.ok)
        self.assertEqual(game.setup_calls, 1)
        self.assertEqual(runtime.frame_count, 2)
        self.assertEqual([type(op) for op in surface.operations], [FillOp, StrokeOp])

    def test_snapshot_reports_canvas_and_frame_time(self) -> None:
        game = _RecordingGame()
        runtime, _, _ = _runtime(game)
        runtime.tick(0.25)
        snapshot = game.snapshots[-1]
        self.assertEqual((snapshot.width, snapshot.height), (100.0, 50.0))
        self.assertEqual(snapshot.frame_time, 0.25)

    def test_each_frame_starts_with_fresh_draw_state(self) -> None:
        game = _ContentGame(
            Content.of(fill(255, 0, 0), no_stroke(), rect(0, 0, 1, 1)),
            Content.of(rect(0, 0, 1, 1)),
        )
        runtime, surface, _ = _runtime(game)
        runtime.tick(0.0)
        self.assertEqual([type(op) for op in surface.operations], [FillOp])
        runtime.tick(0.0)
        self.assertEqual([type(op) for op in surface.operations], [FillOp, StrokeOp])
        self.assertEqual(surface.operations[0].color, WHITE)

    def test_frame_rate_change_is_posted_after_the_walk(self) -> None:
        seen: list[float] = []
        holder: dict[str, SketchRuntime] = {}
        game = _ContentGame(
            Content.of(frame_rate(10), perform(lambda: seen.append(holder["runtime"].frame_rate.target_fps)))
        )
        runtime, _, _ = _runtime(game, target_fps=60.0)
        holder["runtime"] = runtime
        runtime.tick(0.0)
        self.assertEqual(seen, [60.0])
        self.assertEqual(runtime.frame_rate.target_fps, 10)

    def test_no_loop_stops_run_after_current_frame(self) -> None:
        game = _ContentGame(Content.of(no_loop(), rect(0, 0, 1, 1)))
        runtime, _, _ = _runtime(game)
        rendered = runtime.run(max_frames=5)
        self.assertEqual(rendered, 1)
        self.assertTrue(runtime.frame_rate.paused)

    def test_loop_resumes_at_default_rate(self) -> None:
        game = _ContentGame(Content.of(no_loop()), Content.of(loop()))
        runtime, _, _ = _runtime(game)
        runtime.tick(0.0)
        self.assertTrue(runtime.frame_rate.paused)
        runtime.tick(0.0)
        self.assertEqual(runtime.frame_rate.target_fps, 120.0)

    def test_negative_frame_rate_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            frame_rate(-1)

    def test_run_sleeps_to_target_cadence(self) -> None:
        game = _RecordingGame()
        runtime, _, clock = _runtime(game, target_fps=20.0)
        self.assertEqual(runtime.run(max_frames=3), 3)
        self.assertEqual(len(clock.sleeps), 3)
        for slept in clock.sleeps:
            self.assertAlmostEqual(slept, 0.05)
        self.assertAlmostEqual(game.snapshots[-1].frame_time, 0.05)

    def test_run_rejects_non_positive_frame_count(self) -> None:
        runtime, _, _ = _runtime(_RecordingGame())
        with self.assertRaises(ValueError):
            runtime.run(max_frames=0)

    def test_should_continue_stops_run(self) -> None:
        runtime, _, _ = _runtime(_RecordingGame())
        self.assertEqual(runtime.run(should_continue=lambda: runtime.frame_count < 2), 2)

    def test_failing_frame_does_not_stop_the_runtime(self) -> None:
        def explode() -> None:
            raise RuntimeError("boom")

        game = _ContentGame(Content.of(perform(explode), rect(0, 0, 1, 1)), Content.of(rect(0, 0, 1, 1)))
        runtime, surface, _ = _runtime(game)
        with self.assertLogs("pjsketch_core.core.instructions", level="ERROR"):
            result = runtime.tick(0.0)
        self.assertIsInstance(result.error, RuntimeError)
        self.assertIs(runtime.last_error, result.error)
        self.assertEqual(surface.operations, [])
        second = runtime.tick(0.0)
        self.assertTrue(second.ok)
        self.assertEqual(len(surface.operations), 2)

    def test_draw_raising_is_reported(self) -> None:
        class Broken(Game):
            def draw(self, values: CanvasValues) -> Content:
                raise KeyError("missing")

        runtime, _, _ = _runtime(Broken())
        with self.assertLogs("pjsketch_core.core.runtime", level="ERROR"):
            result = runtime.tick(0.0)
        self.assertEqual(result.failed_label, "draw")
        self.assertIsInstance(runtime.last_error, KeyError)

    def test_background_thread_renders_until_stopped(self) -> None:
        drawn = threading.Event()

        class Signalling(Game):
            def draw(self, values: CanvasValues) -> Content:
                drawn.set()
                return Content()

        runtime = SketchRuntime(
            Signalling(),
            RecordingSurface(width=10, height=10),
            SketchConfig(target_fps=120.0),
        )
        runtime.start()
        try:
            self.assertTrue(drawn.wait(timeout=2.0))
        finally:
            runtime.stop()
        self.assertGreaterEqual(runtime.frame_count, 1)


class InputDispatchTests(unittest.TestCase):
    def test_press_and_release_dispatch_in_order(self) -> None:
        game = _RecordingGame()
        runtime, _, _ = _runtime(game)
        runtime.push_input(InputEvent("pointer_down", x=5, y=6, button="left"))
        runtime.push_input(InputEvent("pointer_move", x=7, y=8))
        runtime.push_input(InputEvent("pointer_up", x=7, y=8, button="left"))
        runtime.push_input(InputEvent("pointer_move", x=9, y=9))
        runtime.tick(0.0)
        self.assertEqual(game.calls, ["pressed", "dragged", "clicked", "released", "moved"])
        snapshot = game.snapshots[-1]
        self.assertEqual((snapshot.mouse_x, snapshot.mouse_y), (9.0, 9.0))
        self.assertFalse(snapshot.mouse_is_pressed)

    def test_previous_mouse_is_last_frame_position(self) -> None:
        game = _RecordingGame()
        runtime, _, _ = _runtime(game)
        runtime.push_input(InputEvent("pointer_move", x=10, y=20))
        runtime.tick(0.0)
        runtime.push_input(InputEvent("pointer_move", x=30, y=40))
        runtime.tick(0.0)
        snapshot = game.snapshots[-1]
        self.assertEqual((snapshot.pmouse_x, snapshot.pmouse_y), (10.0, 20.0))
        self.assertEqual((snapshot.mouse_x, snapshot.mouse_y), (30.0, 40.0))

    def test_keys_enter_and_leave(self) -> None:
        game = _RecordingGame()
        runtime, _, _ = _runtime(game)
        runtime.push_input(InputEvent("pointer_enter", x=1, y=1))
        runtime.push_input(InputEvent("key_down", key="a", key_code=0))
        runtime.tick(0.0)
        self.assertTrue(game.snapshots[-1].key_is_pressed)
        self.assertEqual(game.snapshots[-1].key, 0)
        runtime.push_input(InputEvent("key_up", key="a", key_code=0))
        runtime.push_input(InputEvent("pointer_leave"))
        runtime.tick(0.0)
        self.assertEqual(game.calls, ["over", "key:a", "key_up", "out"])
        self.assertFalse(game.snapshots[-1].key_is_pressed)

    def test_failing_callback_is_contained(self) -> None:
        class Grumpy(_RecordingGame):
            def mouse_pressed(self, values: CanvasValues) -> None:
                raise ValueError("no")

        game = Grumpy()
        runtime, _, _ = _runtime(game)
        runtime.push_input(InputEvent("pointer_down", x=1, y=1))
        with self.assertLogs("pjsketch_core.core.runtime", level="ERROR"):
            result = runtime.tick(0.0)
        self.assertTrue(result.ok)
        self.assertIsInstance(runtime.last_error, ValueError)
        self.assertTrue(game.snapshots[-1].mouse_is_pressed)


class LoadGameTests(unittest.TestCase):
    def test_loads_class_from_sketch_dir(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            Path(tmp, "sketch.py").write_text(
                textwrap.dedent(
                    """
                    from pjsketch import Content, Game, rect

                    class Sketch(Game):
                        def draw(self, values):
                            return Content.of(rect(0, 0, 1, 1))
                    """
                )
            )
            game = load_game(tmp, "sketch:Sketch")
        self.assertIsInstance(game, Game)

    def test_bad_entrypoints(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            Path(tmp, "sketch.py").write_text("VALUE = 1\n")
            with self.assertRaises(ValueError):
                load_game(tmp, "sketch")
            with self.assertRaises(ValueError):
                load_game(tmp, "missing:Sketch")
            with self.assertRaises(ValueError):
                load_game(tmp, "sketch:Nope")
            with self.assertRaises(ValueError):
                load_game(tmp, "sketch:VALUE")


if __name__ == "__main__":
    unittest.main()
