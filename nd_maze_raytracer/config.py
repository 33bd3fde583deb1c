#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/config.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .fog import FogModel


@dataclass
class RenderConfig:
    """Configuration for the ray-casting pipeline and terminal output."""
    use_color: bool = True
    use_braille: bool = True
    use_fog: bool = True
    fov: float = math.pi / 3     # vertical field of view (radians)
    block_size: int = 10         # pixels per traced block in PNG snapshots
    fog_start: float = 20.0
    fog_end: float = 250.0
    fog_exp: float = 0.6
    far_plane: float = 510.0
    gradient_steps: int = 12
    map_scale: float = 1.0       # world units per braille dot on the top-down map

    # Instance of the FogModel computed from these settings
    fog_model: Optional[FogModel] = field(init=False, repr=False, default=None)

    def __post_init__(self):
        self.init_fog()

    def init_fog(self):
        """Update the internal fog model based on current settings."""
        self.fog_model = FogModel(
            gradient_steps=self.gradient_steps,
            fog_start=self.fog_start,
            fog_end=self.fog_end,
            far_plane=self.far_plane,
            fog_exp=self.fog_exp
        )

    @classmethod
    def detect_terminal(cls) -> 'RenderConfig':
        """
        Autodetect terminal capabilities and return a default config.
        Checks TERM and LANG environment variables.
        """
        term = os.environ.get('TERM', '').lower()
        lang = os.environ.get('LANG', '').lower()

        is_dumb = term in ('dumb', 'unknown')
        is_linux_console = term == 'linux'
        supports_utf8 = 'utf-8' in lang or 'utf8' in lang

        return cls(
            use_color=not is_dumb,
            # Linux console font often lacks braille, so default off there
            use_braille=supports_utf8 and not is_linux_console,
        )


@dataclass
class SpawnConfig:
    """
    Replacement spheres spawned after a capture.

    probability == 0 disables respawning. The first three axes draw from
    `bounds`; any further axis draws from +/- extra_axis_range * skew, where
    skew grows logistically with the number of captures so new targets
    wander further into the extra dimensions as the game goes on.
    """
    probability: float = 0.0
    radius_range: Tuple[float, float] = (20.0, 60.0)
    bounds: Tuple[float, float] = (0.0, 500.0)
    extra_axis_range: float = 200.0
    skew_midpoint: float = 5.0
    skew_rate: float = 0.8

    def skew(self, capture_count: int) -> float:
        return 1.0 / (1.0 + math.exp(-self.skew_rate * (capture_count - self.skew_midpoint)))


@dataclass
class GameConfig:
    """Movement, scoring and scene-size settings for one session."""
    dimension: int = 3
    move_step: float = 5.0
    rotate_step: float = 0.1
    capture_reward: int = 20
    capture_penalty: int = 5
    spawn: SpawnConfig = field(default_factory=SpawnConfig)

    def __post_init__(self):
        if self.dimension < 2:
            raise ValueError(f"dimension must be at least 2, got {self.dimension}")
