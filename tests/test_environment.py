from __future__ import annotations

from pathlib import Path
import tempfile
import unittest
import warnings

import numpy as np
from PIL import Image

from pjsketch import (
    ImageAsset,
    ResourceNotFoundWarning,
    canvas_height,
    canvas_width,
    get_image,
    get_sound,
    pause_sound,
    play_sound,
    render_operations,
    set_asset_dirs,
    set_sound_backend,
)
from pjsketch_core.core.instructions import Content


class _FakePlayer:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.events: list[str] = []

    def play(self) -> None:
        self.events.append("play")

    def pause(self) -> None:
        self.events.append("pause")


def _failing_backend(path: Path) -> _FakePlayer:
    raise OSError("unsupported codec")


class EnvironmentTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)
        self.addCleanup(set_sound_backend, None)
        self.addCleanup(set_asset_dirs)

    def test_canvas_size_values(self) -> None:
        _, result = render_operations(Content.of(canvas_width().publish(), canvas_height().publish()), 320, 240)
        self.assertEqual(result.observed, {"width": 320.0, "height": 240.0})

    def test_get_image_loads_from_asset_dirs(self) -> None:
        Image.fromarray(np.zeros((3, 5, 4), dtype=np.uint8)).save(self.dir / "tile.png")
        set_asset_dirs(self.dir)
        image = get_image("tile")
        self.assertIsInstance(image, ImageAsset)
        self.assertEqual((image.width, image.height), (5, 3))
        self.assertIsNotNone(get_image("tile.png", self.dir))

    def test_missing_image_warns_and_returns_none(self) -> None:
        with self.assertLogs("pjsketch_core.render.images", level="WARNING"):
            with self.assertWarns(ResourceNotFoundWarning):
                self.assertIsNone(get_image("nothing", self.dir))

    def test_undecodable_image_warns(self) -> None:
        (self.dir / "broken.png").write_bytes(b"not a png")
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            self.assertIsNone(get_image("broken.png", self.dir))
        self.assertTrue(any(issubclass(w.category, ResourceNotFoundWarning) for w in caught))

    def test_get_sound_uses_backend(self) -> None:
        (self.dir / "beep.wav").write_bytes(b"RIFF")
        set_sound_backend(_FakePlayer)
        sound = get_sound("beep", self.dir)
        self.assertIsInstance(sound, _FakePlayer)
        self.assertEqual(sound.path, self.dir / "beep.wav")
        render_operations(Content.of(play_sound(sound), pause_sound(sound)), 10, 10)
        self.assertEqual(sound.events, ["play", "pause"])

    def test_explicit_backend_overrides_installed_one(self) -> None:
        (self.dir / "beep.wav").write_bytes(b"RIFF")
        created: list[Path] = []

        def backend(path: Path) -> _FakePlayer:
            created.append(path)
            return _FakePlayer(path)

        get_sound("beep.wav", self.dir, backend=backend)
        self.assertEqual(created, [self.dir / "beep.wav"])

    def test_missing_sound_warns_and_returns_none(self) -> None:
        set_sound_backend(_FakePlayer)
        with self.assertWarns(ResourceNotFoundWarning):
            self.assertIsNone(get_sound("silence", self.dir))

    def test_sound_without_backend_is_silent(self) -> None:
        (self.dir / "beep.wav").write_bytes(b"RIFF")
        with self.assertLogs("pjsketch.environment", level="WARNING"):
            self.assertIsNone(get_sound("beep", self.dir))

    def test_backend_failure_warns(self) -> None:
        (self.dir / "beep.wav").write_bytes(b"RIFF")
        with self.assertWarns(ResourceNotFoundWarning):
            self.assertIsNone(get_sound("beep", self.dir, backend=_failing_backend))

    def test_playing_missing_sound_is_a_logged_no_op(self) -> None:
        with self.assertLogs("pjsketch.environment", level="WARNING"):
            _, result = render_operations(Content.of(play_sound(None), pause_sound(None)), 10, 10)
        self.assertTrue(result.ok)


if __name__ == "__main__":
    unittest.main()
