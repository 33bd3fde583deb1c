#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/color.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses
import logging

LOGGER = logging.getLogger(__name__)

DEFAULT_OBJ_RGB = (255, 0, 255)
DEFAULT_FOG_RGB = (90, 10, 90)
DEFAULT_BG_RGB = (0, 0, 0)


def parse_hex_color(hex_str):
    """
    Parse a hex color string to an (r, g, b) tuple.
    Accepts: '#RRGGBB' or 'RRGGBB' (case-insensitive).
    Returns: (r, g, b) tuple with values 0-255, or None on failure.
    """
    if hex_str is None:
        return None
    val = str(hex_str).strip().lstrip('#')
    if len(val) != 6:
        return None
    try:
        return (int(val[0:2], 16), int(val[2:4], 16), int(val[4:6], 16))
    except ValueError:
        return None


# The 6x6x6 xterm colour cube occupies indices 16-231
_CUBE_VALUES = [0, 95, 135, 175, 215, 255]

_ANSI8 = [
    (0, 0, 0), (128, 0, 0), (0, 128, 0), (128, 128, 0),
    (0, 0, 128), (128, 0, 128), (0, 128, 128), (192, 192, 192),
]


def _dist_sq(a, b):
    return sum((x - y) ** 2 for x, y in zip(a, b))


def _rgb_to_nearest_xterm(rgb):
    """Nearest xterm-256 index, searching the colour cube and grey ramp."""
    cube = [min(range(6), key=lambda i: abs(v - _CUBE_VALUES[i])) for v in rgb]
    cube_idx = 16 + cube[0] * 36 + cube[1] * 6 + cube[2]
    cube_dist = _dist_sq(rgb, [_CUBE_VALUES[i] for i in cube])

    gray_step = max(0, min(23, (sum(rgb) // 3 - 8 + 5) // 10))
    gv = 8 + gray_step * 10
    gray_dist = _dist_sq(rgb, (gv, gv, gv))

    return 232 + gray_step if gray_dist < cube_dist else cube_idx


def _rgb_to_nearest_ansi8(rgb):
    return min(range(8), key=lambda i: _dist_sq(rgb, _ANSI8[i]))


def build_rgb_gradient(color_a, color_b, steps):
    """Interpolate `steps` colours from color_a to color_b in RGB space."""
    palette = []
    for i in range(steps):
        t = i / float(steps - 1) if steps > 1 else 0.0
        palette.append(tuple(int(round(a + (b - a) * t)) for a, b in zip(color_a, color_b)))
    return palette


def build_palette(fog_model, obj_rgb=None, fog_rgb=None, bg_rgb=None):
    """
    Three-zone palette matching the fog model: object -> fog, fog ->
    background, then flat background for the far field.
    """
    obj_rgb = obj_rgb or DEFAULT_OBJ_RGB
    bg_rgb = bg_rgb or DEFAULT_BG_RGB
    fog_rgb = fog_rgb or DEFAULT_FOG_RGB
    z1, z2, z3 = fog_model.get_zone_counts()
    return (build_rgb_gradient(obj_rgb, fog_rgb, z1) +
            build_rgb_gradient(fog_rgb, bg_rgb, z2) +
            [bg_rgb] * z3)


def shade_rgb(rgb, factor: float):
    """Scale an (r, g, b) colour by a brightness factor in [0, 1]."""
    factor = max(0.0, min(1.0, factor))
    return tuple(int(round(c * factor)) for c in rgb)


def init_colors(config, obj_rgb=None, bg_rgb=None, fog_rgb=None):
    """
    Initialise curses colour pairs for the palette.

    Colour mode cascade:
      1. True colour - can_change_color(): exact RGB in slots 16+
      2. xterm-256   - nearest xterm-256 index
      3. 8-colour    - nearest basic ANSI colour
      4. Mono        - pair 0 everywhere
    Returns the list of pair ids (one per palette step) and the bg pair id.
    """
    fog_model = config.fog_model
    steps = fog_model.palette_size
    if not config.use_color:
        return [0] * steps, 0

    try:
        if not curses.has_colors():
            return [0] * steps, 0
        curses.start_color()

        use_default_bg = False
        try:
            curses.use_default_colors()
            use_default_bg = True
        except curses.error:
            pass

        bg_rgb = bg_rgb or DEFAULT_BG_RGB
        palette = build_palette(fog_model, obj_rgb, fog_rgb, bg_rgb)
        num_colors = getattr(curses, 'COLORS', 8)

        if curses.can_change_color() and num_colors >= 256:
            fg_slots = []
            for i, (r, g, b) in enumerate(palette):
                slot = 16 + i
                try:
                    curses.init_color(slot, r * 1000 // 255, g * 1000 // 255, b * 1000 // 255)
                    fg_slots.append(slot)
                except curses.error:
                    fg_slots.append(_rgb_to_nearest_xterm((r, g, b)))
            bg_slot = _rgb_to_nearest_xterm(bg_rgb)
        elif num_colors >= 256:
            fg_slots = [_rgb_to_nearest_xterm(rgb) for rgb in palette]
            bg_slot = _rgb_to_nearest_xterm(bg_rgb)
        elif num_colors >= 8:
            fg_slots = [_rgb_to_nearest_ansi8(rgb) for rgb in palette]
            bg_slot = _rgb_to_nearest_ansi8(bg_rgb)
        else:
            return [0] * steps, 0

        if bg_rgb == (0, 0, 0) and use_default_bg:
            bg_slot = -1

        valid_pairs = []
        for i, slot in enumerate(fg_slots):
            try:
                curses.init_pair(i + 1, slot, bg_slot)
                valid_pairs.append(i + 1)
            except curses.error:
                valid_pairs.append(0)

        bg_pair = 0
        try:
            curses.init_pair(steps + 1, 7 if bg_slot != 7 else 0, bg_slot)
            bg_pair = steps + 1
        except curses.error:
            pass
        return valid_pairs, bg_pair

    except curses.error as e:
        LOGGER.warning("colour setup failed, falling back to mono: %s", e)
        return [0] * steps, 0
