#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/ray.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math

from .math_utils import Vector, _check_dim


class Ray:
    """
    Half-line in N dimensions: origin + t * direction, t >= 0.

    The direction is expected to be unit length. It is not normalised here;
    distances returned by primitives are only true distances when the caller
    passed a unit direction.
    """
    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Vector, direction: Vector):
        _check_dim(len(origin), len(direction), "ray direction")
        self.origin = origin
        self.direction = direction

    @classmethod
    def towards(cls, origin: Vector, direction: Vector) -> 'Ray':
        """Build a ray with the direction normalised."""
        if direction.norm() == 0:
            raise ValueError("ray direction must be non-zero")
        return cls(origin, direction.normalize())

    def __repr__(self):
        return f"Ray({self.origin!r}, {self.direction!r})"

    @property
    def dimension(self) -> int:
        return len(self.origin)

    def point_at(self, t: float) -> Vector:
        return self.origin + self.direction * t

    def translate(self, offset: Vector) -> 'Ray':
        return Ray(self.origin + offset, self.direction)

    def heading(self, axes=(0, 1)) -> float:
        """Azimuth of the direction in the plane spanned by `axes`."""
        a, b = axes
        return math.atan2(self.direction[b], self.direction[a])

    def project_2d(self, axes=(0, 1)) -> 'Ray2D':
        a, b = axes
        return Ray2D((self.origin[a], self.origin[b]),
                     (self.direction[a], self.direction[b]))


class Ray2D:
    """
    Ray restricted to one coordinate plane.

    `direction` keeps the planar components of the N-D direction unscaled,
    so a parameter t solved against it is also the N-D ray parameter.
    """
    __slots__ = ('origin', 'direction')

    def __init__(self, origin, direction):
        self.origin = (float(origin[0]), float(origin[1]))
        self.direction = (float(direction[0]), float(direction[1]))

    def __repr__(self):
        return f"Ray2D({self.origin}, {self.direction})"

    @property
    def angle(self) -> float:
        return math.atan2(self.direction[1], self.direction[0])

    @property
    def planar_length(self) -> float:
        return math.hypot(self.direction[0], self.direction[1])

    def translate(self, offset) -> 'Ray2D':
        return Ray2D((self.origin[0] + offset[0], self.origin[1] + offset[1]),
                     self.direction)
