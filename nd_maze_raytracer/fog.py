#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/fog.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

class FogModel:
    """
    Maps hit distance along a ray to a palette index.

    The palette is split into three zones:
      Zone 1: object colour -> fog colour   (fog_start .. fog_end)
      Zone 2: fog colour -> background      (fog_end .. far_plane)
      Zone 3: background                    (beyond far_plane)
    """
    __slots__ = ('gradient_steps', 'fog_start', 'fog_end', 'far_plane', 'fog_exp',
                 'z1_count', 'z2_count', 'z3_count',
                 'z1_max_idx', 'z2_base', 'z2_max_idx', 'last_idx',
                 'zone1_range', 'zone2_range')

    def __init__(self, gradient_steps: int, fog_start: float, fog_end: float,
                 far_plane: float, fog_exp: float):
        self.gradient_steps = gradient_steps
        self.fog_start = fog_start
        self.fog_end = fog_end
        self.far_plane = far_plane
        self.fog_exp = fog_exp

        self._compute_zones()

        self.zone1_range = self.fog_end - self.fog_start
        self.zone2_range = self.far_plane - self.fog_end
        if self.zone1_range <= 0: self.zone1_range = 1.0
        if self.zone2_range <= 0: self.zone2_range = 1.0

    def _compute_zones(self):
        """Determines how many gradient steps are allocated to each zone."""
        total = self.gradient_steps
        self.z1_count = max(2, total // 3)
        self.z2_count = max(2, total // 3)
        self.z3_count = max(2, total - self.z1_count - self.z2_count)

        self.z1_max_idx = self.z1_count - 1
        self.z2_base = self.z1_count
        self.z2_max_idx = self.z2_count - 1
        self.last_idx = self.z1_count + self.z2_count + self.z3_count - 1

    @property
    def palette_size(self) -> int:
        return self.z1_count + self.z2_count + self.z3_count

    def get_zone_counts(self):
        """Returns tuple (z1_count, z2_count, z3_count) for gradient generation."""
        return (self.z1_count, self.z2_count, self.z3_count)

    def get_color_index(self, distance: float) -> int:
        if distance <= self.fog_start:
            return 0

        if distance <= self.fog_end:
            rel = ((distance - self.fog_start) / self.zone1_range) ** self.fog_exp
            return min(int(rel * self.z1_max_idx), self.z1_max_idx)

        if distance <= self.far_plane:
            rel = ((distance - self.fog_end) / self.zone2_range) ** self.fog_exp
            return self.z2_base + min(int(rel * self.z2_max_idx), self.z2_max_idx)

        return self.last_idx
