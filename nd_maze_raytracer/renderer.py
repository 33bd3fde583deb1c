#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/renderer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses
import logging
import time
from typing import NamedTuple, Optional

from .camera import Camera
from .canvas import Canvas, render_cell_ascii, render_cell_braille
from .config import RenderConfig
from .math_utils import Vector
from .rasterizer import draw_circle, draw_heading_marker, draw_line_dda, draw_rect
from .ray import Ray
from .scene import Hit, Scene

LOGGER = logging.getLogger(__name__)

# Darkest to brightest; index 0 is reserved for misses
SHADE_RAMP = " .:-=+*#%@"

# Terminal cells are roughly twice as tall as they are wide
TERMINAL_CELL_ASPECT = 0.5


def cast_ray(origin: Vector, direction: Vector, scene: Scene) -> Optional[Hit]:
    """Nearest hit from `origin` along `direction` (normalised here, must be non-zero)."""
    return scene.find_first_hit(Ray.towards(origin, direction))


class Sample(NamedTuple):
    """One traced screen block."""
    ray: Ray
    hit: Optional[Hit]

    def facing(self) -> float:
        """|normal . direction| at the hit point, 0 for a miss."""
        if self.hit is None:
            return 0.0
        point = self.hit.point(self.ray)
        normal = self.hit.primitive.get_normal_at(point)
        return abs(normal.dot(self.ray.direction))


class Frame:
    """Grid of samples, row-major, row 0 at the top of the screen."""
    __slots__ = ('columns', 'rows', 'samples')

    def __init__(self, columns: int, rows: int, samples):
        self.columns = columns
        self.rows = rows
        self.samples = samples

    def __iter__(self):
        return iter(self.samples)

    def sample(self, col: int, row: int) -> Sample:
        return self.samples[row][col]

    def hit_count(self) -> int:
        return sum(1 for row in self.samples for s in row if s.hit is not None)


def shade_char(facing: float) -> str:
    """Density character for a hit; never blank so hits stay visible."""
    top = len(SHADE_RAMP) - 1
    return SHADE_RAMP[max(1, min(top, 1 + int(facing * (top - 1) + 0.5)))]


class Renderer:
    """
    Ray-casting renderer.

    trace_frame() is pure: it reads the scene and camera and returns a
    Frame. render() draws that frame plus the top-down map into a curses
    screen and does NOT refresh it, so the caller can add a HUD first.
    """

    def __init__(self):
        self.valid_pairs = None
        self.bg_pair = 0

    def init_colors(self, config, obj_rgb=None, bg_rgb=None, fog_rgb=None):
        """Initialize curses color pairs.  Call once after curses.wrapper init."""
        from .color import init_colors
        self.valid_pairs, self.bg_pair = init_colors(config, obj_rgb, bg_rgb, fog_rgb)

    @staticmethod
    def trace_frame(scene: Scene, camera: Camera, columns: int, rows: int,
                    fov: float, cell_aspect: float = 1.0) -> Frame:
        """
        Cast one ray through the centre of each of columns x rows blocks.

        `fov` is the vertical field of view in radians; `cell_aspect` is the
        width/height ratio of a single block.
        """
        aspect = (columns * cell_aspect) / rows
        samples = []
        for j in range(rows):
            v = 1 - ((j + 0.5) / rows) * 2
            row = []
            for i in range(columns):
                u = ((i + 0.5) / columns) * 2 - 1
                ray = camera.ray_through(u, v, fov, aspect)
                row.append(Sample(ray, scene.find_first_hit(ray)))
            samples.append(row)
        return Frame(columns, rows, samples)

    def render(self, stdscr, scene: Scene, camera: Camera, config: RenderConfig):
        """
        Render one frame to the curses screen.

        Layout: row 0 is left for the caller's HUD; below it the left pane
        holds the first-person view and the right pane the top-down map.
        """
        if self.valid_pairs is None:
            self.valid_pairs = [0] * config.fog_model.palette_size

        th, tw = stdscr.getmaxyx()
        rows = th - 2
        view_cols = (tw - 1) * 3 // 5
        map_cols = (tw - 1) - view_cols - 1
        if rows <= 0 or view_cols <= 0:
            return

        start = time.perf_counter()
        frame = self.trace_frame(scene, camera, view_cols, rows, config.fov,
                                 TERMINAL_CELL_ASPECT)
        LOGGER.debug("traced %dx%d blocks in %.1fms (%d hits)", view_cols, rows,
                     (time.perf_counter() - start) * 1000, frame.hit_count())

        stdscr.erase()
        if config.use_color and self.bg_pair:
            try:
                stdscr.bkgd(' ', curses.color_pair(self.bg_pair))
            except curses.error:
                pass

        self._draw_view(stdscr, frame, config, top=1, left=0)
        if map_cols > 0:
            canvas = self.draw_map(scene, camera, config, map_cols * 2, rows * 4)
            self._draw_canvas(stdscr, canvas, config, top=1, left=view_cols + 1)

    def _attr(self, config, color_idx):
        if not (config.use_color and self.valid_pairs) or color_idx is None \
                or color_idx >= len(self.valid_pairs):
            return curses.A_NORMAL
        pair = self.valid_pairs[color_idx]
        # Pair 0 needs no color_pair() call, which fails before start_color()
        return curses.color_pair(pair) if pair else curses.A_NORMAL

    def _draw_view(self, stdscr, frame: Frame, config: RenderConfig, top: int, left: int):
        fog_model = config.fog_model
        for y, row in enumerate(frame):
            for x, sample in enumerate(row):
                if sample.hit is None:
                    continue
                c_idx = fog_model.get_color_index(sample.hit.distance) if config.use_fog else 0
                try:
                    stdscr.addstr(top + y, left + x, shade_char(sample.facing()),
                                  self._attr(config, c_idx))
                except curses.error:
                    pass

    @staticmethod
    def draw_map(scene: Scene, camera: Camera, config: RenderConfig,
                 width: int, height: int) -> Canvas:
        """
        Top-down projection onto axes 0 and 1, centred on the camera.
        The primitive straight ahead is drawn in the object colour, the
        rest in the fog colour.
        """
        canvas = Canvas(width, height)
        scale = config.map_scale
        cam_x, cam_y = camera.position[0], camera.position[1]

        def to_canvas(x, y):
            return ((x - cam_x) / scale + width / 2, (y - cam_y) / scale + height / 2)

        target = scene.find_first_hit(camera.forward_ray())
        dim_idx = config.fog_model.z2_base

        for obj in scene.live_objects():
            c_idx = 0 if target is not None and target.primitive is obj else dim_idx
            footprint = obj.map_footprint((0, 1))
            kind = footprint[0]
            if kind == 'circle':
                _, x, y, r = footprint
                draw_circle(canvas, to_canvas(x, y), r / scale, c_idx)
            elif kind == 'rect':
                _, x0, y0, x1, y1 = footprint
                draw_rect(canvas, to_canvas(x0, y0), to_canvas(x1, y1), c_idx)
            elif kind == 'segment':
                _, x0, y0, x1, y1 = footprint
                draw_line_dda(canvas, to_canvas(x0, y0), to_canvas(x1, y1), c_idx)

        draw_heading_marker(canvas, (width / 2, height / 2), camera.heading(), 6.0, 0)
        return canvas

    def _draw_canvas(self, stdscr, canvas: Canvas, config: RenderConfig, top: int, left: int):
        render_cell = render_cell_braille if config.use_braille else render_cell_ascii
        for y, x, mask, c_idx in canvas.cells():
            try:
                stdscr.addstr(top + y, left + x, render_cell(mask), self._attr(config, c_idx))
            except curses.error:
                pass
