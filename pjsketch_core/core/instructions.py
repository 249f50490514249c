from __future__ import annotations

from dataclasses import dataclass, field
import functools
import logging
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, Iterator, TypeVar, Union

from .state import GameValues
from .values import Size

if TYPE_CHECKING:
    from pjsketch_core.render.surface import RenderSurface

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Action:
    """Mutates the frame's draw state; never paints."""

    mutate: Callable[[GameValues], None]
    label: str = "action"

    def run(self, surface: RenderSurface, size: Size, values: GameValues) -> None:
        self.mutate(values)


@dataclass(frozen=True)
class Draw:
    """Paints onto the surface using the current draw state."""

    paint: Callable[[RenderSurface, Size, GameValues], None]
    label: str = "draw"

    def run(self, surface: RenderSurface, size: Size, values: GameValues) -> None:
        self.paint(surface, size, values)


Instruction = Union[Action, Draw]
Producer = Callable[[], Instruction]


def _constant(instruction: Instruction) -> Producer:
    return lambda: instruction


def _deferred_call(fn: Callable[[], Any]) -> Producer:
    def produce() -> Instruction:
        result = fn()
        if result is None:
            return Action(_noop, label=f"call:{getattr(fn, '__name__', 'callable')}")
        if isinstance(result, (Action, Draw)):
            return result
        raise TypeError(f"content callable returned {type(result).__name__}, expected an instruction or None")

    return produce


def _noop(values: GameValues) -> None:
    return None


class Content:
    """Ordered sequence of instruction producers for one frame.

    Items accepted by ``add``: instructions, other ``Content``, iterables of items, and
    zero-argument callables. A callable runs when the walk reaches it; it may return an
    instruction to evaluate or ``None`` when it only has side effects.
    """

    __slots__ = ("_producers",)

    def __init__(self, producers: Iterable[Producer] = ()) -> None:
        self._producers: list[Producer] = list(producers)

    @classmethod
    def of(cls, *items: object) -> Content:
        content = cls()
        for item in items:
            content.add(item)
        return content

    def add(self, item: object) -> Content:
        if item is None:
            return self
        if isinstance(item, (Action, Draw)):
            self._producers.append(_constant(item))
        elif isinstance(item, Content):
            self._producers.extend(item._producers)
        elif callable(item):
            self._producers.append(_deferred_call(item))
        elif isinstance(item, (str, bytes)):
            raise TypeError("strings are not drawable content; use text(...)")
        elif isinstance(item, Iterable):
            for sub in item:
                self.add(sub)
        else:
            raise TypeError(f"cannot add {type(item).__name__} to content")
        return self

    @property
    def producers(self) -> tuple[Producer, ...]:
        return tuple(self._producers)

    def resolve(self) -> list[Instruction]:
        return [producer() for producer in self._producers]

    def __add__(self, other: object) -> Content:
        return Content(self._producers).add(other)

    def __radd__(self, other: object) -> Content:
        return Content.of(other, self)

    def __len__(self) -> int:
        return len(self._producers)

    def __iter__(self) -> Iterator[Producer]:
        return iter(self._producers)

    def __repr__(self) -> str:
        return f"Content({len(self._producers)} producers)"


def content(fn: Callable[..., object]) -> Callable[..., Content]:
    """Turn a function that yields or returns content items into one returning ``Content``."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Content:
        return Content.of(fn(*args, **kwargs))

    return wrapper


def perform(fn: Callable[[], None], label: str | None = None) -> Action:
    """Run ``fn`` as a side effect at this point of the walk."""
    return Action(lambda values: fn(), label=label or f"perform:{getattr(fn, '__name__', 'callable')}")


@dataclass(frozen=True)
class DelayedValue(Generic[T]):
    """A quantity only known while a frame is being painted (surface size, text metrics...)."""

    obtain: Callable[[RenderSurface, Size, GameValues], T]
    name: str = "value"

    def send(self, callback: Callable[[T], None]) -> Draw:
        def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
            callback(self.obtain(surface, size, values))

        return Draw(paint, label=f"send:{self.name}")

    def publish(self, key: str | None = None) -> Draw:
        """Record the value in the frame result under ``key``."""
        name = key or self.name

        def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
            values.observed[name] = self.obtain(surface, size, values)

        return Draw(paint, label=f"publish:{name}")

    def map(self, fn: Callable[[T], U]) -> DelayedValue[U]:
        return DelayedValue(lambda surface, size, values: fn(self.obtain(surface, size, values)), name=self.name)


@dataclass(frozen=True)
class FrameResult:
    instructions_run: int
    observed: dict[str, object] = field(default_factory=dict)
    error: Exception | None = None
    failed_index: int | None = None
    failed_label: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def evaluate_frame(
    frame_content: Content,
    surface: RenderSurface,
    values: GameValues | None = None,
) -> FrameResult:
    """Walk ``frame_content`` once, in order, against ``surface``.

    An exception aborts the rest of this frame only; it is logged with the failing
    instruction and returned in the result.
    """
    values = GameValues() if values is None else values
    size = surface.size
    ran = 0
    for index, producer in enumerate(frame_content.producers):
        instruction: object = None
        try:
            instruction = producer()
            if not isinstance(instruction, (Action, Draw)):
                raise TypeError(f"producer returned {type(instruction).__name__}, expected an instruction")
            instruction.run(surface, size, values)
        except Exception as exc:  # noqa: BLE001
            label = getattr(instruction, "label", "<producer>")
            LOGGER.exception("frame aborted at instruction %d (%s): %s", index, label, values.describe())
            return FrameResult(
                instructions_run=ran,
                observed=dict(values.observed),
                error=exc,
                failed_index=index,
                failed_label=label,
            )
        ran += 1
    return FrameResult(instructions_run=ran, observed=dict(values.observed))
