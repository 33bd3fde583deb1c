#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/rasterizer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math

from .canvas import Canvas


def draw_line_dda(canvas: Canvas, p1, p2, color_idx: int = 0):
    """Draws a line between two (x, y) canvas points with the DDA algorithm."""
    x1, y1 = p1
    x2, y2 = p2
    dx = x2 - x1
    dy = y2 - y1

    step = max(abs(dx), abs(dy))
    if step < 1:
        canvas.set_pixel(int(round(x1)), int(round(y1)), color_idx)
        return
    # Skip absurdly long lines from far-off geometry
    if step > 4 * (canvas.w + canvas.h):
        return

    x_inc = dx / step
    y_inc = dy / step
    cx, cy = float(x1), float(y1)
    for _ in range(int(step) + 1):
        canvas.set_pixel(int(round(cx)), int(round(cy)), color_idx)
        cx += x_inc; cy += y_inc


def draw_circle(canvas: Canvas, center, radius: float, color_idx: int = 0):
    """Circle outline, one dot per unit of arc length (at least 12)."""
    cx, cy = center
    if radius <= 0:
        canvas.set_pixel(int(round(cx)), int(round(cy)), color_idx)
        return
    # Same bound as the line length guard in draw_line_dda
    steps = max(12, min(int(2 * math.pi * radius), 4 * (canvas.w + canvas.h)))
    for k in range(steps):
        a = 2 * math.pi * k / steps
        canvas.set_pixel(int(round(cx + radius * math.cos(a))),
                         int(round(cy + radius * math.sin(a))), color_idx)


def draw_rect(canvas: Canvas, p_min, p_max, color_idx: int = 0):
    x0, y0 = p_min
    x1, y1 = p_max
    corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    for i in range(4):
        draw_line_dda(canvas, corners[i], corners[(i + 1) % 4], color_idx)


def draw_heading_marker(canvas: Canvas, center, heading: float, size: float = 6.0,
                        color_idx: int = 0):
    """Player marker: a quarter-circle arc facing `heading` plus a pointer line."""
    cx, cy = center
    steps = max(6, int(size * 2))
    for k in range(steps + 1):
        a = heading - math.pi / 4 + (math.pi / 2) * k / steps
        canvas.set_pixel(int(round(cx + size * math.cos(a))),
                         int(round(cy + size * math.sin(a))), color_idx)
    draw_line_dda(canvas, center,
                  (cx + size * 1.5 * math.cos(heading), cy + size * 1.5 * math.sin(heading)),
                  color_idx)
