from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math

import numpy as np
import torch
from PIL import Image, ImageDraw

from pjsketch_core.core.color import Color
from pjsketch_core.core.values import Size

from .fonts import font_metrics, load_font, resolve_font_path, text_advance
from .images import ImageAsset
from .path import Path, Polyline
from .surface import FontRequest, StrokeStyle, TextMetrics
from .transform import AffineTransform

LOGGER = logging.getLogger(__name__)


@dataclass
class RasterSurface:
    """Torch-first RGBA surface: paths are rasterized to PIL masks and blended in torch."""

    width: int
    height: int
    clear_color: tuple[int, int, int, int] = (255, 255, 255, 255)
    font_family: str = ""
    transform: AffineTransform = field(default_factory=AffineTransform)
    _frame: torch.Tensor = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("frame dimensions must be > 0")
        self.clear()

    @property
    def size(self) -> Size:
        return Size(float(self.width), float(self.height))

    def clear(self, color: tuple[int, int, int, int] | None = None) -> None:
        rgba = self.clear_color if color is None else color
        self._frame = torch.zeros((self.height, self.width, 4), dtype=torch.uint8)
        self._frame[:, :, 0] = rgba[0]
        self._frame[:, :, 1] = rgba[1]
        self._frame[:, :, 2] = rgba[2]
        self._frame[:, :, 3] = rgba[3]
        self.transform = AffineTransform()

    def begin_frame(self) -> None:
        self.clear()

    def concat(self, transform: AffineTransform) -> None:
        self.transform = transform.then(self.transform)

    def fill_path(self, path: Path, color: Color) -> None:
        polylines = path.transformed(self.transform).flatten()
        mask = Image.new("L", (self.width, self.height), 0)
        draw = ImageDraw.Draw(mask)
        drew = False
        for poly in polylines:
            if len(poly.points) < 3:
                continue
            draw.polygon([(float(x), float(y)) for x, y in poly.points], fill=255)
            drew = True
        if drew:
            self._blend_mask(_mask_tensor(mask), color.to_rgba_u8())

    def stroke_path(self, path: Path, color: Color, style: StrokeStyle) -> None:
        width_px = style.width * self.transform.line_scale()
        if width_px <= 0:
            return
        polylines = path.transformed(self.transform).flatten()
        mask = Image.new("L", (self.width, self.height), 0)
        draw = ImageDraw.Draw(mask)
        for poly in polylines:
            _stroke_polyline(draw, poly, width_px, style)
        self._blend_mask(_mask_tensor(mask), color.to_rgba_u8())

    def draw_image(self, image: ImageAsset, x: float, y: float, width: float, height: float) -> None:
        if image.width <= 0 or image.height <= 0 or width == 0 or height == 0:
            return
        placement = AffineTransform(
            a=width / image.width,
            d=height / image.height,
            tx=x,
            ty=y,
        )
        self._composite_affine(image.image.convert("RGBA"), placement.then(self.transform))

    def draw_text(self, text: str, x: float, y: float, font: FontRequest, color: Color) -> None:
        if not text:
            return
        scale = max(1e-6, self.transform.line_scale())
        pil_font = load_font(resolve_font_path(font.design, font.family or self.font_family), font.size * scale)
        ascent, descent = font_metrics(pil_font, font.size * scale)
        advance = text_advance(pil_font, text)
        w = max(1, int(math.ceil(advance)) + 2)
        h = max(1, int(math.ceil(ascent + descent)) + 2)
        mask = Image.new("L", (w, h), 0)
        ImageDraw.Draw(mask).text((0, 0), text, fill=255, font=pil_font)
        r, g, b, a = color.to_rgba_u8()
        alpha = (np.asarray(mask, dtype=np.float32) * (a / 255.0)).astype(np.uint8)
        rgba = np.zeros((h, w, 4), dtype=np.uint8)
        rgba[:, :, 0] = r
        rgba[:, :, 1] = g
        rgba[:, :, 2] = b
        rgba[:, :, 3] = alpha
        placement = AffineTransform(a=1.0 / scale, d=1.0 / scale, tx=x, ty=y - ascent / scale)
        self._composite_affine(Image.fromarray(rgba), placement.then(self.transform))

    def measure_text(self, text: str, font: FontRequest) -> TextMetrics:
        pil_font = load_font(resolve_font_path(font.design, font.family or self.font_family), font.size)
        ascent, descent = font_metrics(pil_font, font.size)
        return TextMetrics(width=text_advance(pil_font, text), ascent=ascent, descent=descent)

    def snapshot(self) -> torch.Tensor:
        return self._frame.clone()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.snapshot().cpu().numpy())

    def _composite_affine(self, source: Image.Image, to_device: AffineTransform) -> None:
        try:
            inverse = to_device.inverted()
        except ValueError:
            LOGGER.debug("skipping raster placement with a singular transform")
            return
        warped = source.transform(
            (self.width, self.height),
            Image.Transform.AFFINE,
            data=(inverse.a, inverse.c, inverse.tx, inverse.b, inverse.d, inverse.ty),
            resample=Image.Resampling.BILINEAR,
            fillcolor=(0, 0, 0, 0),
        )
        src = torch.from_numpy(np.asarray(warped, dtype=np.uint8).copy()).to(torch.float32)
        src_alpha = src[:, :, 3:4] / 255.0
        if not bool((src_alpha > 0).any()):
            return
        dst = self._frame[:, :, :3].to(torch.float32)
        out = torch.clamp(src[:, :, :3] * src_alpha + dst * (1.0 - src_alpha), 0, 255).to(torch.uint8)
        self._frame[:, :, :3] = out
        covered = src_alpha.squeeze(-1) > 0
        self._frame[:, :, 3] = torch.where(covered, torch.full_like(self._frame[:, :, 3], 255), self._frame[:, :, 3])

    def _blend_mask(self, mask: torch.Tensor, color: tuple[int, int, int, int]) -> None:
        if not bool(mask.any()):
            return
        alpha = color[3] / 255.0
        if alpha <= 0:
            return
        dst = self._frame[:, :, :3].to(torch.float32)
        src = torch.tensor(color[:3], dtype=torch.float32).view(1, 1, 3)
        blended = torch.clamp(src * alpha + dst * (1.0 - alpha), 0, 255).to(torch.uint8)
        self._frame[:, :, :3] = torch.where(mask.unsqueeze(-1), blended, self._frame[:, :, :3])
        self._frame[:, :, 3] = torch.where(mask, torch.full_like(self._frame[:, :, 3], 255), self._frame[:, :, 3])


def _mask_tensor(mask: Image.Image) -> torch.Tensor:
    return torch.from_numpy(np.asarray(mask, dtype=np.uint8) > 127)


def _stroke_polyline(draw: ImageDraw.ImageDraw, poly: Polyline, width_px: float, style: StrokeStyle) -> None:
    points = [(float(x), float(y)) for x, y in poly.points]
    if not points:
        return
    if poly.closed and len(points) > 1:
        points.append(points[0])
    half = width_px / 2.0
    if not poly.closed and style.cap == "square" and len(points) > 1:
        points[0] = _extend(points[1], points[0], half)
        points[-1] = _extend(points[-2], points[-1], half)
    line_width = max(1, int(round(width_px)))
    if len(points) == 1:
        x, y = points[0]
        if style.cap != "butt":
            draw.ellipse((x - half, y - half, x + half, y + half), fill=255)
        return
    draw.line(points, fill=255, width=line_width, joint="curve" if style.join == "round" else None)
    if not poly.closed and style.cap == "round" and width_px > 1:
        for x, y in (points[0], points[-1]):
            draw.ellipse((x - half, y - half, x + half, y + half), fill=255)


def _extend(origin: tuple[float, float], end: tuple[float, float], amount: float) -> tuple[float, float]:
    dx = end[0] - origin[0]
    dy = end[1] - origin[1]
    length = math.hypot(dx, dy)
    if length == 0:
        return end
    return (end[0] + dx / length * amount, end[1] + dy / length * amount)
