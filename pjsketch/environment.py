from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Protocol

from pjsketch_core.core.instructions import Action, DelayedValue
from pjsketch_core.core.state import GameValues
from pjsketch_core.render.images import ImageAsset, find_resource, load_image, warn_missing

LOGGER = logging.getLogger(__name__)

SOUND_EXTENSIONS = (".wav", ".mp3", ".ogg", ".aiff", ".m4a")
LOOP_FPS = 120.0


class SoundPlayer(Protocol):
    def play(self) -> None:
        ...

    def pause(self) -> None:
        ...


SoundBackend = Callable[[Path], SoundPlayer]

_sound_backend: SoundBackend | None = None
_asset_dirs: tuple[Path, ...] = (Path("."),)


def set_sound_backend(backend: SoundBackend | None) -> None:
    """Install the factory ``get_sound`` uses to open sound files; None disables sound."""
    global _sound_backend
    _sound_backend = backend


def set_asset_dirs(*dirs: str | Path) -> None:
    """Directories searched by ``get_image`` and ``get_sound`` when none are given."""
    global _asset_dirs
    _asset_dirs = tuple(Path(d) for d in dirs) or (Path("."),)


def canvas_width() -> DelayedValue[float]:
    return DelayedValue(lambda surface, size, values: size.width, name="width")


def canvas_height() -> DelayedValue[float]:
    return DelayedValue(lambda surface, size, values: size.height, name="height")


def frame_rate(rate: float) -> Action:
    """Ask the host loop for ``rate`` frames per second from the next frame on.

    The change goes through the host scheduler, so the current frame finishes at the
    old rate. ``0`` pauses the loop.
    """
    rate = float(rate)
    if rate < 0:
        raise ValueError("frame rate must be >= 0")

    def mutate(values: GameValues) -> None:
        controller = values.frame_rate
        values.schedule(lambda: controller.set_target_fps(rate))

    return Action(mutate, label="frame_rate")


def no_loop() -> Action:
    return frame_rate(0)


def loop() -> Action:
    return frame_rate(LOOP_FPS)


def get_image(name: str, *search_dirs: str | Path) -> ImageAsset | None:
    dirs = tuple(Path(d) for d in search_dirs) or _asset_dirs
    return load_image(name, dirs)


def get_sound(
    name: str,
    *search_dirs: str | Path,
    backend: SoundBackend | None = None,
) -> SoundPlayer | None:
    """Open a sound file with the installed backend; None when it cannot be played."""
    dirs = tuple(Path(d) for d in search_dirs) or _asset_dirs
    path = find_resource(name, dirs, SOUND_EXTENSIONS)
    if path is None:
        warn_missing(f"sound not found: {name}")
        return None
    opener = backend or _sound_backend
    if opener is None:
        LOGGER.warning("no sound backend installed; %s will stay silent", path)
        return None
    try:
        return opener(path)
    except OSError as exc:
        warn_missing(f"sound could not be opened: {path} ({exc})")
        return None


def play_sound(sound: SoundPlayer | None) -> Action:
    def mutate(values: GameValues) -> None:
        if sound is None:
            LOGGER.warning("attempted to play a missing sound")
            return
        sound.play()

    return Action(mutate, label="play_sound")


def pause_sound(sound: SoundPlayer | None) -> Action:
    def mutate(values: GameValues) -> None:
        if sound is not None:
            sound.pause()

    return Action(mutate, label="pause_sound")
