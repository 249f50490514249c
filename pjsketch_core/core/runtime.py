from __future__ import annotations

from dataclasses import dataclass
import importlib.util
import logging
from pathlib import Path
import queue
import threading
import time
from typing import Callable, Optional

from pjsketch_core.render.recording import PaintOp, RecordingSurface
from pjsketch_core.render.surface import RenderSurface

from .config import SketchConfig
from .events import InputEvent, MouseButton
from .frame_rate_controller import FrameRateController
from .instructions import Content, FrameResult, evaluate_frame
from .state import GameValues

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CanvasValues:
    """Read-only per-frame snapshot of time, pointer and keyboard state."""

    frame_time: float = 0.0
    mouse_x: float = 0.0
    mouse_y: float = 0.0
    pmouse_x: float = 0.0
    pmouse_y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    mouse_is_pressed: bool = False
    mouse_button: Optional[MouseButton] = None
    key: Optional[int] = None
    key_text: Optional[str] = None
    special_key: Optional[str] = None
    key_is_pressed: bool = False


class Game:
    """Base class for sketches. Override ``draw``; every input callback defaults to a no-op."""

    def setup(self) -> None:
        pass

    def draw(self, values: CanvasValues) -> Content:
        return Content()

    def mouse_clicked(self, values: CanvasValues) -> None:
        pass

    def mouse_pressed(self, values: CanvasValues) -> None:
        pass

    def mouse_released(self, values: CanvasValues) -> None:
        pass

    def mouse_moved(self, values: CanvasValues) -> None:
        pass

    def mouse_dragged(self, values: CanvasValues) -> None:
        pass

    def mouse_over(self, values: CanvasValues) -> None:
        pass

    def mouse_out(self, values: CanvasValues) -> None:
        pass

    def key_pressed(self, values: CanvasValues) -> None:
        pass

    def key_released(self, values: CanvasValues) -> None:
        pass


class SketchRuntime:
    """Drives a ``Game``: input dispatch, one fresh draw state per frame, frame cadence."""

    def __init__(
        self,
        game: Game,
        surface: RenderSurface,
        config: SketchConfig | None = None,
        *,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._game = game
        self._surface = surface
        self._config = config or SketchConfig()
        self._clock = clock
        self._sleep = sleep
        self.frame_rate = FrameRateController(target_fps=self._config.target_fps)
        self._input_queue: "queue.SimpleQueue[InputEvent]" = queue.SimpleQueue()
        self._posted: list[Callable[[], None]] = []
        self._setup_done = False
        self._frame_count = 0
        self._last_error: Exception | None = None
        self._last_result: FrameResult | None = None
        self._running = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._mouse = (0.0, 0.0)
        self._pmouse = (0.0, 0.0)
        self._mouse_is_pressed = False
        self._mouse_button: Optional[MouseButton] = None
        self._key: Optional[int] = None
        self._key_text: Optional[str] = None
        self._special_key: Optional[str] = None
        self._key_is_pressed = False
        self._frame_time = 0.0

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    @property
    def last_result(self) -> FrameResult | None:
        return self._last_result

    @property
    def surface(self) -> RenderSurface:
        return self._surface

    def canvas_values(self) -> CanvasValues:
        size = self._surface.size
        return CanvasValues(
            frame_time=self._frame_time,
            mouse_x=self._mouse[0],
            mouse_y=self._mouse[1],
            pmouse_x=self._pmouse[0],
            pmouse_y=self._pmouse[1],
            width=size.width,
            height=size.height,
            mouse_is_pressed=self._mouse_is_pressed,
            mouse_button=self._mouse_button,
            key=self._key,
            key_text=self._key_text,
            special_key=self._special_key,
            key_is_pressed=self._key_is_pressed,
        )

    def push_input(self, event: InputEvent) -> None:
        self._input_queue.put(event)

    def setup(self) -> None:
        if self._setup_done:
            return
        self._game.setup()
        self._setup_done = True

    def tick(self, dt: float) -> FrameResult:
        """Render one frame; errors are logged and kept, never raised."""
        self.setup()
        self._frame_time = max(0.0, dt)
        self._drain_inputs()
        values = GameValues.fresh(self.frame_rate, post=self._posted.append, compat=self._config.compat)
        self._surface.begin_frame()
        try:
            frame_content = Content.of(self._game.draw(self.canvas_values()))
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("draw() raised before any instruction ran")
            result = FrameResult(instructions_run=0, error=exc, failed_label="draw")
        else:
            result = evaluate_frame(frame_content, self._surface, values)
        if result.error is not None:
            self._last_error = result.error
        self._flush_posted()
        self._pmouse = self._mouse
        self._frame_count += 1
        self._last_result = result
        return result

    def run(self, max_frames: int | None = None, should_continue: Callable[[], bool] | None = None) -> int:
        """Render frames on this thread until ``max_frames``, ``no_loop`` or ``should_continue`` stops it."""
        if max_frames is not None and max_frames <= 0:
            raise ValueError("max_frames must be > 0")
        rendered = 0
        last = self._clock()
        while max_frames is None or rendered < max_frames:
            if should_continue is not None and not should_continue():
                break
            started = self._clock()
            self.tick(started - last if rendered else 0.0)
            last = started
            rendered += 1
            if self.frame_rate.paused:
                LOGGER.info("loop paused after frame %d", self._frame_count)
                break
            self._sleep(self.frame_rate.compute_sleep(started, self._clock()))
        return rendered

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._running.set()
        self._thread = threading.Thread(target=self._run, name="pjsketch-main", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._running.clear()
        if self._thread:
            self._thread.join(timeout=1.0)

    def _run(self) -> None:
        last = self._clock()
        while self._running.is_set():
            if self.frame_rate.paused:
                self._drain_inputs()
                self._sleep(0.05)
                last = self._clock()
                continue
            started = self._clock()
            self.tick(started - last)
            last = started
            self._sleep(self.frame_rate.compute_sleep(started, self._clock()))

    def _flush_posted(self) -> None:
        posted, self._posted = self._posted, []
        for callback in posted:
            try:
                callback()
            except Exception as exc:  # noqa: BLE001
                self._last_error = exc
                LOGGER.exception("posted callback failed")

    def _drain_inputs(self) -> None:
        while True:
            try:
                event = self._input_queue.get_nowait()
            except queue.Empty:
                break
            self._apply_input(event)

    def _apply_input(self, event: InputEvent) -> None:
        if event.x is not None and event.y is not None:
            self._mouse = (float(event.x), float(event.y))
        kind = event.event_type
        callbacks: tuple[Callable[[CanvasValues], None], ...]
        if kind == "pointer_move":
            callbacks = (self._game.mouse_dragged,) if self._mouse_is_pressed else (self._game.mouse_moved,)
        elif kind == "pointer_drag":
            if event.button == "right":
                self._mouse_button = "right"
            callbacks = (self._game.mouse_dragged,)
        elif kind == "pointer_down":
            self._mouse_is_pressed = True
            self._mouse_button = event.button or "left"
            callbacks = (self._game.mouse_pressed,)
        elif kind == "pointer_up":
            self._mouse_is_pressed = False
            self._mouse_button = "right" if event.button == "right" else None
            callbacks = (self._game.mouse_clicked, self._game.mouse_released)
        elif kind == "pointer_enter":
            callbacks = (self._game.mouse_over,)
        elif kind == "pointer_leave":
            callbacks = (self._game.mouse_out,)
        elif kind == "key_down":
            self._key = event.key_code
            self._key_text = event.key
            self._special_key = event.special_key
            self._key_is_pressed = True
            callbacks = (self._game.key_pressed,)
        elif kind == "key_up":
            self._key_is_pressed = False
            callbacks = (self._game.key_released,)
        else:
            raise ValueError(f"unsupported input event type: {kind!r}")
        snapshot = self.canvas_values()
        for callback in callbacks:
            try:
                callback(snapshot)
            except Exception as exc:  # noqa: BLE001
                self._last_error = exc
                LOGGER.exception("input callback %s failed", getattr(callback, "__name__", callback))


def render_operations(
    frame_content: Content,
    width: float,
    height: float,
    values: GameValues | None = None,
) -> tuple[list[PaintOp], FrameResult]:
    """Evaluate one frame against a fresh recording surface and return what it painted."""
    surface = RecordingSurface(width=width, height=height)
    result = evaluate_frame(frame_content, surface, values)
    return list(surface.operations), result


def load_game(sketch_dir: str | Path, entrypoint: str) -> Game:
    """Import ``module:symbol`` from ``sketch_dir``; classes are instantiated with no arguments."""
    module_name, symbol_name = _parse_entrypoint(entrypoint)
    module = _load_module_from_sketch_dir(Path(sketch_dir), module_name)
    target = getattr(module, symbol_name, None)
    if target is None:
        raise ValueError(f"entrypoint symbol not found: {entrypoint}")
    game = target() if isinstance(target, type) else target
    if not callable(getattr(game, "draw", None)):
        raise ValueError(f"entrypoint {entrypoint} has no draw(values) method")
    return game


def _parse_entrypoint(entrypoint: str) -> tuple[str, str]:
    if ":" not in entrypoint:
        raise ValueError("entrypoint must use `module:symbol` format")
    module_name, symbol_name = entrypoint.split(":", 1)
    module_name = module_name.strip()
    symbol_name = symbol_name.strip()
    if not module_name or not symbol_name:
        raise ValueError("entrypoint must include non-empty module and symbol")
    return module_name, symbol_name


def _load_module_from_sketch_dir(sketch_dir: Path, module_name: str):
    module_path = sketch_dir.joinpath(*module_name.split(".")).with_suffix(".py")
    if not module_path.exists():
        raise ValueError(f"entrypoint module file not found: {module_name}")
    unique_name = f"pjsketch_sketch_{abs(hash((str(sketch_dir), module_name)))}"
    spec = importlib.util.spec_from_file_location(unique_name, module_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"unable to load entrypoint module: {module_name}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
