from __future__ import annotations

import math

from pjsketch import (
    CENTER,
    CanvasValues,
    Game,
    background,
    canvas_width,
    content,
    ellipse,
    ellipse_mode,
    fill,
    line,
    no_stroke,
    pop_matrix,
    push_matrix,
    rel,
    rotate,
    stroke,
    stroke_weight,
    text,
    text_align,
    text_size,
    translate,
)


class Sketch(Game):
    """Three moons circling a planet; clicking reverses the orbit."""

    def setup(self) -> None:
        self.angle = 0.0
        self.direction = 1.0
        self.width_seen = 0.0

    def mouse_clicked(self, values: CanvasValues) -> None:
        self.direction = -self.direction

    @content
    def draw(self, values: CanvasValues):
        self.angle += 90.0 * self.direction * max(values.frame_time, 1.0 / 30.0)
        yield background(20, 24, 32)
        yield ellipse_mode(CENTER)
        yield push_matrix()
        yield translate(rel(0.5), rel(0.5))
        yield no_stroke()
        yield fill(240, 180, 60)
        yield ellipse(0, 0, 48, 48)
        for index in range(3):
            yield push_matrix()
            yield rotate(self.angle * (index + 1) + index * 120)
            yield stroke(90, 100, 120)
            yield stroke_weight(1)
            yield line(0, 0, 40 + 25 * index, 0)
            yield no_stroke()
            yield fill(120 + 50 * index, 160, 220)
            yield ellipse(40 + 25 * index, 0, 12, 12)
            yield pop_matrix()
        yield pop_matrix()
        yield canvas_width().send(self._remember_width)
        yield fill(230)
        yield text_size(12)
        yield text_align(CENTER)
        yield text(f"angle {math.fmod(self.angle, 360.0):.0f}", rel(0.5), 20)

    def _remember_width(self, width: float) -> None:
        self.width_seen = width
