from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import tomllib

from .errors import ConfigError
from .state import CompatFlags

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAME = "sketch.toml"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class SketchConfig:
    width: int = 400
    height: int = 400
    target_fps: float = 60.0
    background: tuple[int, int, int, int] = (255, 255, 255, 255)
    font_family: str = ""
    log_level: str = "INFO"
    entrypoint: str = "sketch:Sketch"
    asset_dirs: tuple[str, ...] = (".",)
    legacy_arc_stretch: bool = True
    radius_by_height: bool = False

    @property
    def compat(self) -> CompatFlags:
        return CompatFlags(legacy_arc_stretch=self.legacy_arc_stretch, radius_by_height=self.radius_by_height)


def load_config(sketch_dir: str | Path) -> SketchConfig:
    """Read ``sketch.toml`` from ``sketch_dir``; a missing file yields the defaults."""
    config_path = Path(sketch_dir) / CONFIG_FILENAME
    if not config_path.exists():
        LOGGER.debug("no %s in %s; using defaults", CONFIG_FILENAME, sketch_dir)
        return SketchConfig()
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{config_path}: {exc}") from exc
    return parse_config(raw)


def parse_config(raw: dict[str, object]) -> SketchConfig:
    canvas = raw.get("canvas", {})
    if not isinstance(canvas, dict):
        raise ConfigError("[canvas] must be a table")
    compat = raw.get("compat", {})
    if not isinstance(compat, dict):
        raise ConfigError("[compat] must be a table")
    defaults = SketchConfig()
    log_level = _coerce_str(raw.get("log_level", defaults.log_level), "log_level").upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
    entrypoint = _coerce_str(raw.get("entrypoint", defaults.entrypoint), "entrypoint")
    if ":" not in entrypoint:
        raise ConfigError("entrypoint must use `module:symbol` format")
    return SketchConfig(
        width=_coerce_positive_int(canvas.get("width", defaults.width), "canvas.width"),
        height=_coerce_positive_int(canvas.get("height", defaults.height), "canvas.height"),
        target_fps=_coerce_fps(canvas.get("target_fps", defaults.target_fps), "canvas.target_fps"),
        background=_coerce_rgba(canvas.get("background", list(defaults.background)), "canvas.background"),
        font_family=_coerce_str(canvas.get("font_family", defaults.font_family), "canvas.font_family"),
        log_level=log_level,
        entrypoint=entrypoint,
        asset_dirs=tuple(_coerce_string_list(raw.get("asset_dirs", list(defaults.asset_dirs)), "asset_dirs")),
        legacy_arc_stretch=_coerce_bool(compat.get("legacy_arc_stretch", True), "compat.legacy_arc_stretch"),
        radius_by_height=_coerce_bool(compat.get("radius_by_height", False), "compat.radius_by_height"),
    )


def _coerce_str(value: object, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{field_name} must be a string")
    return value


def _coerce_bool(value: object, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{field_name} must be true or false")
    return value


def _coerce_positive_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{field_name} must be an integer > 0")
    return value


def _coerce_fps(value: object, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ConfigError(f"{field_name} must be a number >= 0")
    return float(value)


def _coerce_rgba(value: object, field_name: str) -> tuple[int, int, int, int]:
    if not isinstance(value, list) or len(value) not in (3, 4):
        raise ConfigError(f"{field_name} must be a list of 3 or 4 integers")
    out: list[int] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int) or not 0 <= item <= 255:
            raise ConfigError(f"{field_name} entries must be integers in 0..255")
        out.append(item)
    if len(out) == 3:
        out.append(255)
    return (out[0], out[1], out[2], out[3])


def _coerce_string_list(value: object, field_name: str) -> list[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{field_name} must be a list")
    out: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"{field_name} entries must be strings")
        out.append(item)
    return out
