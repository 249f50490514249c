from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import warnings

import numpy as np
from PIL import Image, UnidentifiedImageError

from pjsketch_core.core.errors import ResourceNotFoundWarning

LOGGER = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp")


@dataclass(frozen=True)
class ImageAsset:
    """Decoded RGBA image held as a PIL image."""

    name: str
    image: Image.Image

    @classmethod
    def from_array(cls, name: str, rgba: np.ndarray) -> ImageAsset:
        arr = np.asarray(rgba, dtype=np.uint8)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError("image array must have shape (H, W, 4)")
        return cls(name=name, image=Image.fromarray(arr))

    @property
    def width(self) -> int:
        return int(self.image.width)

    @property
    def height(self) -> int:
        return int(self.image.height)


def load_image(name: str, search_dirs: tuple[Path, ...] = (Path("."),)) -> ImageAsset | None:
    """Load ``name`` from the first search directory that has it.

    Missing or undecodable files produce a ``ResourceNotFoundWarning`` and ``None``.
    """
    path = find_resource(name, search_dirs, IMAGE_EXTENSIONS)
    if path is None:
        warn_missing(f"image not found: {name}")
        return None
    try:
        with Image.open(path) as raw:
            image = raw.convert("RGBA")
    except (OSError, UnidentifiedImageError) as exc:
        warn_missing(f"image could not be decoded: {path} ({exc})")
        return None
    return ImageAsset(name=name, image=image)


def find_resource(name: str, search_dirs: tuple[Path, ...], extensions: tuple[str, ...]) -> Path | None:
    for base in search_dirs:
        candidate = Path(base) / name
        if candidate.is_file():
            return candidate
        if candidate.suffix:
            continue
        for ext in extensions:
            with_ext = candidate.with_suffix(ext)
            if with_ext.is_file():
                return with_ext
    return None


def warn_missing(message: str) -> None:
    LOGGER.warning(message)
    warnings.warn(message, ResourceNotFoundWarning, stacklevel=3)
