from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pjsketch_core.core import SketchConfig, load_config
from pjsketch_core.core.runtime import SketchRuntime, load_game
from pjsketch_core.render.raster import RasterSurface
from pjsketch_core.render.recording import FillOp, ImageOp, PaintOp, RecordingSurface, StrokeOp, TextOp

from pjsketch.environment import set_asset_dirs

LOGGER = logging.getLogger("pjsketch")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="pjsketch")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a sketch folder (sketch.toml + entrypoint) to a PNG, headless.")
    render.add_argument("sketch_dir", type=Path)
    render.add_argument("--frames", type=int, default=1, help="Frames to run before saving the last one.")
    render.add_argument("--out", type=Path, default=Path("frame.png"))
    render.add_argument("--width", type=int, default=None, help="Override canvas.width from sketch.toml.")
    render.add_argument("--height", type=int, default=None, help="Override canvas.height from sketch.toml.")
    render.add_argument("--log-level", default=None)

    ops = sub.add_parser("ops", help="Print the paint operations recorded for one frame of a sketch.")
    ops.add_argument("sketch_dir", type=Path)
    ops.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    config = load_config(args.sketch_dir)
    _configure_logging(args.log_level or config.log_level)
    set_asset_dirs(*(args.sketch_dir / d for d in config.asset_dirs))
    game = load_game(args.sketch_dir, config.entrypoint)

    if args.command == "render":
        if args.frames <= 0:
            raise ValueError("--frames must be > 0")
        width, height = _resolve_dimensions(config, args.width, args.height)
        surface = RasterSurface(width=width, height=height, clear_color=config.background, font_family=config.font_family)
        runtime = SketchRuntime(game, surface, config, sleep=lambda _: None)
        rendered = runtime.run(max_frames=args.frames)
        surface.to_image().save(args.out)
        print(f"render complete: frames={rendered} out={args.out} last_error={runtime.last_error!r}")
        return 0 if runtime.last_error is None else 1

    if args.command == "ops":
        surface = RecordingSurface(width=config.width, height=config.height)
        result = SketchRuntime(game, surface, config).tick(0.0)
        for index, op in enumerate(surface.operations):
            print(f"{index:4d} {_describe(op)}")
        if not result.ok:
            print(f"frame aborted at instruction {result.failed_index} ({result.failed_label}): {result.error!r}")
            return 1
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _resolve_dimensions(config: SketchConfig, width: int | None, height: int | None) -> tuple[int, int]:
    if width is not None and width <= 0:
        raise ValueError("width must be > 0")
    if height is not None and height <= 0:
        raise ValueError("height must be > 0")
    return (width or config.width, height or config.height)


def _describe(op: PaintOp) -> str:
    if isinstance(op, FillOp):
        return f"fill   rgba={op.color.to_rgba_u8()} bounds={_bounds(op.path.bounds())}"
    if isinstance(op, StrokeOp):
        return f"stroke rgba={op.color.to_rgba_u8()} width={op.style.width:g} bounds={_bounds(op.path.bounds())}"
    if isinstance(op, ImageOp):
        x, y, w, h = op.rect
        return f"image  {op.image_name} rect=({x:g}, {y:g}, {w:g}, {h:g})"
    if isinstance(op, TextOp):
        return f"text   {op.text!r} at=({op.origin[0]:g}, {op.origin[1]:g}) size={op.font.size:g}"
    raise ValueError(f"unsupported paint operation: {op!r}")


def _bounds(bounds: tuple[float, float, float, float] | None) -> str:
    if bounds is None:
        return "empty"
    return "({:.1f}, {:.1f}, {:.1f}, {:.1f})".format(*bounds)


if __name__ == "__main__":
    raise SystemExit(main())
