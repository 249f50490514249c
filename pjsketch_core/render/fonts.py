from __future__ import annotations

from enum import Enum
from functools import lru_cache
import logging
from pathlib import Path

from PIL import ImageFont

LOGGER = logging.getLogger(__name__)


class FontDesign(str, Enum):
    DEFAULT = "default"
    SERIF = "serif"
    ROUNDED = "rounded"
    MONOSPACED = "monospaced"


def design_patterns(design: FontDesign) -> tuple[str, ...]:
    """File-name patterns tried, in order, when looking up a system font for ``design``."""
    if design is FontDesign.DEFAULT:
        return ("helvetica", "arial", "dejavusans", "liberationsans", "notosans")
    if design is FontDesign.SERIF:
        return ("times", "georgia", "dejavuserif", "liberationserif", "notoserif")
    if design is FontDesign.ROUNDED:
        return ("sfprorounded", "arialrounded", "varelaround", "nunito", "dejavusans")
    if design is FontDesign.MONOSPACED:
        return ("menlo", "monaco", "couriernew", "dejavusansmono", "liberationmono")
    raise ValueError(f"unsupported font design: {design!r}")


_FONT_DIRS = (
    Path.home() / "Library/Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


@lru_cache(maxsize=1)
def _system_font_candidates() -> tuple[Path, ...]:
    candidates: list[Path] = []
    for base in _FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))
    return tuple(candidates)


def resolve_font_path(design: FontDesign, family: str = "") -> str:
    """Return a font file for ``family`` or ``design``; empty string when none is installed."""
    wanted = family.strip().lower().replace(" ", "")
    patterns = ((wanted,) if wanted else ()) + design_patterns(design)
    candidates = _system_font_candidates()
    for pattern in patterns:
        for path in candidates:
            name = path.name.lower().replace(" ", "")
            stem = path.stem.lower().replace(" ", "")
            if pattern in name or pattern in stem:
                return str(path)
    if candidates:
        return str(candidates[0])
    return ""


@lru_cache(maxsize=64)
def load_font(font_path: str, size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(size_px)))
    if not font_path:
        LOGGER.debug("no system font found; using PIL default font at %spx", size)
        return _load_default(size)
    try:
        return ImageFont.truetype(font_path, size=size)
    except OSError:
        LOGGER.warning("failed to load font %s; using PIL default font", font_path)
        return _load_default(size)


def _load_default(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    return ImageFont.load_default(size=size)


def font_metrics(font: ImageFont.FreeTypeFont | ImageFont.ImageFont, size_px: float) -> tuple[float, float]:
    """Ascent and descent in pixels, both positive."""
    try:
        ascent, descent = font.getmetrics()
        return float(max(1, ascent)), float(max(0, descent))
    except AttributeError:
        return max(1.0, size_px * 0.8), max(0.0, size_px * 0.2)


def text_advance(font: ImageFont.FreeTypeFont | ImageFont.ImageFont, text: str) -> float:
    if not text:
        return 0.0
    try:
        return float(font.getlength(text))
    except AttributeError:
        left, _, right, _ = font.getbbox(text)
        return float(max(0, right - left))
