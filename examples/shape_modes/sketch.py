from __future__ import annotations

from pjsketch import (
    CENTER,
    CLOSE,
    CORNERS,
    QUAD_STRIP,
    TRIANGLE_FAN,
    CanvasValues,
    Content,
    Game,
    arc,
    background,
    begin_shape,
    bezier,
    curve,
    curve_vertex,
    end_shape,
    fill,
    no_fill,
    no_loop,
    rect,
    rect_mode,
    stroke,
    stroke_weight,
    vertex,
)


class Sketch(Game):
    """A static sheet of the primitive and begin_shape modes; renders once."""

    def draw(self, values: CanvasValues) -> Content:
        frame = Content.of(no_loop(), background(250), stroke(30), stroke_weight(2))
        frame += [fill(200, 80, 80), rect(20, 20, 80, 50, 8)]
        frame += [rect_mode(CORNERS), fill(80, 160, 200), rect(120, 20, 200, 70)]
        frame += [rect_mode(CENTER), fill(120, 200, 120), rect(260, 45, 60, 50)]
        frame += [fill(240, 200, 80), arc(340, 45, 60, 40, 0, 270)]
        frame += [
            fill(180, 120, 220),
            begin_shape(TRIANGLE_FAN),
            vertex(70, 160),
            vertex(20, 120),
            vertex(120, 120),
            vertex(120, 200),
            vertex(20, 200),
            end_shape(),
        ]
        frame += [
            fill(160, 200, 240),
            begin_shape(QUAD_STRIP),
            *(vertex(150 + 30 * i, 120 + 80 * (i % 2)) for i in range(6)),
            end_shape(CLOSE),
        ]
        frame += [no_fill(), bezier(20, 280, 60, 220, 140, 220, 180, 280)]
        frame += [
            begin_shape(),
            curve_vertex(220, 280),
            curve_vertex(240, 230),
            curve_vertex(300, 260),
            curve_vertex(360, 230),
            curve_vertex(380, 280),
            end_shape(),
        ]
        frame += curve(200, 300, 220, 210, 380, 210, 400, 300)
        return frame
