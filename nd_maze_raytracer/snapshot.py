#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/snapshot.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging

from PIL import Image

from .color import DEFAULT_BG_RGB, build_palette, shade_rgb
from .config import RenderConfig
from .renderer import Frame

LOGGER = logging.getLogger(__name__)

# Share of a block's brightness that does not depend on surface facing
AMBIENT = 0.35


def frame_to_image(frame: Frame, config: RenderConfig,
                   obj_rgb=None, fog_rgb=None, bg_rgb=None) -> Image.Image:
    """
    Paint each traced block as a block_size x block_size square: the fog
    palette colour for its hit distance, dimmed by how squarely the ray
    meets the surface. Misses get the background colour.
    """
    bg_rgb = bg_rgb or DEFAULT_BG_RGB
    palette = build_palette(config.fog_model, obj_rgb, fog_rgb, bg_rgb)
    size = config.block_size
    im = Image.new("RGB", (frame.columns * size, frame.rows * size), bg_rgb)

    for y, row in enumerate(frame):
        for x, sample in enumerate(row):
            if sample.hit is None:
                continue
            c_idx = config.fog_model.get_color_index(sample.hit.distance) if config.use_fog else 0
            brightness = AMBIENT + (1.0 - AMBIENT) * sample.facing()
            color = shade_rgb(palette[c_idx], brightness)
            im.paste(color, (x * size, y * size, (x + 1) * size, (y + 1) * size))
    return im


def write_png(frame: Frame, config: RenderConfig, path: str, **colors):
    im = frame_to_image(frame, config, **colors)
    im.save(path)
    LOGGER.info("wrote %dx%d snapshot to %s", im.width, im.height, path)
    return path
