#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses
import logging
import math
import random
import time

from .camera import Camera
from .color import parse_hex_color
from .config import GameConfig, RenderConfig, SpawnConfig
from .controls import apply_action, build_key_bindings
from .errors import RaytracerError
from .math_utils import Vector
from .renderer import Renderer
from .scene import default_scene, load_scene_file

LOGGER = logging.getLogger(__name__)

KEY_NAMES = {
    curses.KEY_UP: 'UP',
    curses.KEY_DOWN: 'DOWN',
    curses.KEY_LEFT: 'LEFT',
    curses.KEY_RIGHT: 'RIGHT',
}

START_POSITION = (200.0, 200.0)


def build_render_config(args) -> RenderConfig:
    """RenderConfig from terminal detection plus CLI overrides."""
    config = RenderConfig.detect_terminal()
    if args.no_color:
        config.use_color = False
    if args.ascii:
        config.use_braille = False
    if args.no_fog:
        config.use_fog = False
    config.fov = math.radians(args.fov)
    config.block_size = max(1, args.block_size)
    config.fog_start = args.fog_start
    config.fog_end = args.fog_end
    config.fog_exp = args.fog_exp
    config.far_plane = args.far_plane
    config.gradient_steps = max(6, min(30, args.gradient_steps))
    config.map_scale = args.map_scale
    # Re-initialise fog model after parameter changes
    config.init_fog()
    return config


def build_game_config(args) -> GameConfig:
    return GameConfig(
        dimension=args.dimension,
        move_step=args.move_step,
        rotate_step=args.rotate_step,
        spawn=SpawnConfig(probability=args.respawn),
    )


def build_scene(args, game_config: GameConfig):
    """Load --scene if given; on any scene error fall back to the default maze."""
    rng = random.Random(args.seed)
    dim = game_config.dimension
    if args.scene:
        try:
            return load_scene_file(args.scene, dim, config=game_config, rng=rng)
        except (OSError, RaytracerError) as e:
            LOGGER.warning("could not load scene %r, using default layout: %s", args.scene, e)
    return default_scene(dim, config=game_config, rng=rng)


def build_camera(dimension: int) -> Camera:
    coords = list(START_POSITION[:dimension]) + [0.0] * max(0, dimension - len(START_POSITION))
    return Camera(Vector(coords))


class DemoApp:
    """
    Interactive session: one Scene and one Camera owned by the loop.

    Each key press is handled to completion (camera move, capture, ...)
    and the frame is re-traced before the next key is read.
    """

    def __init__(self, stdscr, args):
        self.stdscr = stdscr
        self.running = True

        curses.curs_set(0)
        stdscr.keypad(True)

        self.config = build_render_config(args)
        self.game_config = build_game_config(args)
        self.bindings = build_key_bindings(self.game_config.dimension,
                                           move_step=self.game_config.move_step,
                                           rotate_step=self.game_config.rotate_step)

        renderer = Renderer()
        renderer.init_colors(self.config,
                             parse_hex_color(args.obj_color),
                             parse_hex_color(args.bg_color),
                             parse_hex_color(args.fog_color))
        self.renderer = renderer

        self.scene = build_scene(args, self.game_config)
        self.camera = build_camera(self.game_config.dimension)

        self.score = 0
        self.last_delta = 0
        self.frame_ms = 0.0

    @staticmethod
    def key_name(key: int):
        if key in KEY_NAMES:
            return KEY_NAMES[key]
        if 0 <= key < 256:
            return chr(key)
        return None

    def capture(self):
        delta = self.scene.perform_capture_at(self.camera.position)
        self.score += delta
        self.last_delta = delta

    def look_at_nearest(self):
        target = self.scene.nearest_live(self.camera.position)
        if target is None:
            return
        try:
            self.camera.look_at(target.anchor(self.camera.position))
        except ValueError:
            LOGGER.info("already at %r, not re-aligning", target)

    def handle_input(self):
        key = self.stdscr.getch()
        if key == -1:
            return
        name = self.key_name(key)
        config = self.config

        if name == 'q':
            self.running = False
        elif name == ' ':
            self.capture()
        elif name == 'l':
            self.look_at_nearest()
        elif name == 'C':
            config.use_color = not config.use_color
        elif name == 'B':
            config.use_braille = not config.use_braille
        elif name == 'G':
            config.use_fog = not config.use_fog
        elif name in self.bindings:
            apply_action(self.camera, self.bindings[name])

    def draw(self):
        start = time.perf_counter()
        self.renderer.render(self.stdscr, self.scene, self.camera, self.config)
        self.frame_ms = (time.perf_counter() - start) * 1000

        _th, tw = self.stdscr.getmaxyx()
        hdr = (f" D:{self.game_config.dimension}"
               f" | SCORE:{self.score} ({self.last_delta:+d})"
               f" | CAPTURED:{self.scene.capture_count}"
               f" | LIVE:{len(self.scene.live_objects())}"
               f" | {self.frame_ms:.1f}ms ")
        try:
            self.stdscr.addstr(0, 0, hdr.center(tw - 1, '='), curses.A_BOLD)
        except curses.error:
            pass
        self.stdscr.refresh()

    def run(self):
        self.draw()
        while self.running:
            self.handle_input()
            if self.running:
                self.draw()


def main(stdscr, args):
    """Entry point called from curses.wrapper."""
    app = DemoApp(stdscr, args)
    app.run()


def snapshot(args):
    """Trace one frame without a terminal and save it as a PNG."""
    from .snapshot import write_png

    config = build_render_config(args)
    game_config = build_game_config(args)
    scene = build_scene(args, game_config)
    camera = build_camera(game_config.dimension)

    columns = max(1, args.width // config.block_size)
    rows = max(1, args.height // config.block_size)
    frame = Renderer.trace_frame(scene, camera, columns, rows, config.fov)
    return write_png(frame, config, args.snapshot,
                     obj_rgb=parse_hex_color(args.obj_color),
                     fog_rgb=parse_hex_color(args.fog_color),
                     bg_rgb=parse_hex_color(args.bg_color))
