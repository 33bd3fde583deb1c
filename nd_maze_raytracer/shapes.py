#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/shapes.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math

from .math_utils import Vector, _check_dim
from .ray import Ray

# Below this the 2-D ray is treated as parallel to a wall
PARALLEL_EPSILON = 1e-12


class Primitive:
    """
    Common interface of every solid in a scene.

    Public queries check the `removed` flag first, so a captured primitive
    behaves as if it were not in the scene: it is never hit, contains no
    point and has no boundary. Subclasses implement the underscored
    versions and never look at the flag themselves.
    """
    kind = 'primitive'

    def __init__(self, dimension: int):
        self.dimension = dimension
        self.removed = False

    @property
    def is_alive(self) -> bool:
        return not self.removed

    def capture(self):
        self.removed = True

    def distance_along_ray(self, ray: Ray) -> float:
        """
        Parameter t of the first forward intersection, or math.inf.
        Boxes and walls lying wholly behind the origin report a negative
        value instead; callers treat anything negative as a miss.
        """
        if self.removed:
            return math.inf
        _check_dim(self.dimension, ray.dimension, "ray")
        return self._distance_along_ray(ray)

    def contains_point(self, point: Vector) -> bool:
        if self.removed:
            return False
        _check_dim(self.dimension, len(point), "point")
        return self._contains_point(point)

    def get_distance_to_boundary(self, point: Vector) -> float:
        """Signed distance: negative inside, positive outside."""
        if self.removed:
            return math.inf
        _check_dim(self.dimension, len(point), "point")
        return self._distance_to_boundary(point)

    def get_normal_at(self, point: Vector) -> Vector:
        _check_dim(self.dimension, len(point), "point")
        return self._normal_at(point)

    def field_strength(self, point: Vector, sharpness: int = 8) -> float:
        """Smooth falloff amplitude at `point`; zero unless overridden."""
        return 0.0

    def anchor(self, reference: Vector) -> Vector:
        """Representative point to aim at, seen from `reference`."""
        raise NotImplementedError("anchor() must be implemented by subclasses.")

    def map_footprint(self, axes=(0, 1)):
        """Outline in the (axes[0], axes[1]) plane as a (kind, *params) tuple."""
        raise NotImplementedError("map_footprint() must be implemented by subclasses.")

    def describe(self) -> dict:
        """Inverse of scene.primitive_from_descriptor."""
        raise NotImplementedError("describe() must be implemented by subclasses.")

    def _distance_along_ray(self, ray):
        raise NotImplementedError("_distance_along_ray() must be implemented by subclasses.")

    def _contains_point(self, point):
        raise NotImplementedError("_contains_point() must be implemented by subclasses.")

    def _distance_to_boundary(self, point):
        raise NotImplementedError("_distance_to_boundary() must be implemented by subclasses.")

    def _normal_at(self, point):
        raise NotImplementedError("_normal_at() must be implemented by subclasses.")


class Sphere(Primitive):
    """N-ball given by centre and radius."""
    kind = 'sphere'

    def __init__(self, center: Vector, radius: float):
        super().__init__(len(center))
        self.center = center
        self.radius = float(radius)

    def __repr__(self):
        return f"Sphere({self.center!r}, r={self.radius:.2f})"

    def _distance_along_ray(self, ray):
        oc = self.center - ray.origin
        b = ray.direction.dot(oc)
        # Reduced discriminant; valid because the direction is unit length
        delta = b * b - (oc.dot(oc) - self.radius * self.radius)
        if delta < 0:
            return math.inf
        sqrt_delta = math.sqrt(delta)
        candidates = [t for t in (b - sqrt_delta, b + sqrt_delta) if t >= 0]
        if not candidates:
            return math.inf
        return min(candidates)

    def _contains_point(self, point):
        d = point - self.center
        return d.dot(d) < self.radius * self.radius

    def _distance_to_boundary(self, point):
        return (point - self.center).norm() - self.radius

    def _normal_at(self, point):
        return (point - self.center).normalize()

    def field_strength(self, point, sharpness=8):
        if self.removed or self.radius <= 0:
            return 0.0
        d = point - self.center
        return (1.0 / (1.0 + d.dot(d) / self.radius ** 2)) ** sharpness

    def anchor(self, reference):
        return self.center

    def map_footprint(self, axes=(0, 1)):
        a, b = axes
        return ('circle', self.center[a], self.center[b], self.radius)

    def describe(self):
        return {'type': self.kind, 'center': list(self.center),
                'radius': self.radius}


class Hypercube(Primitive):
    """Axis-aligned box: [origin_i, origin_i + extents_i] on every axis."""
    kind = 'hypercube'

    def __init__(self, origin: Vector, extents: Vector):
        _check_dim(len(origin), len(extents), "extents")
        super().__init__(len(origin))
        self.origin = origin
        self.extents = extents

    def __repr__(self):
        return f"Hypercube({self.origin!r}, {self.extents!r})"

    @property
    def far_corner(self) -> Vector:
        return self.origin + self.extents

    def _bounds(self):
        for lo, ext in zip(self.origin, self.extents):
            yield min(lo, lo + ext), max(lo, lo + ext)

    def _distance_along_ray(self, ray):
        t_min = -math.inf
        t_max = math.inf
        for (lo, hi), o, d in zip(self._bounds(), ray.origin, ray.direction):
            if d == 0.0:
                # Parallel to this slab: either always inside it or never
                if o < lo or o > hi:
                    return math.inf
                continue
            t1 = (lo - o) / d
            t2 = (hi - o) / d
            if t1 > t2:
                t1, t2 = t2, t1
            t_min = max(t_min, t1)
            t_max = min(t_max, t2)

        if t_min > t_max:
            return math.inf
        if t_min >= 0:
            return t_min
        # Origin inside the box gives the exit face; a box wholly behind
        # the origin gives a negative t_max
        return t_max

    def _contains_point(self, point):
        return all(lo <= p <= hi for (lo, hi), p in zip(self._bounds(), point))

    def _distance_to_boundary(self, point):
        # Box signed distance field, same formulation as the tesseract SDF
        q = [abs(p - (lo + hi) / 2) - (hi - lo) / 2
             for (lo, hi), p in zip(self._bounds(), point)]
        outside = math.sqrt(sum(max(x, 0.0) ** 2 for x in q))
        inside = min(max(q), 0.0)
        return outside + inside

    def _normal_at(self, point):
        best_axis, best_sign, best_gap = 0, -1.0, math.inf
        for axis, ((lo, hi), p) in enumerate(zip(self._bounds(), point)):
            for face, sign in ((lo, -1.0), (hi, 1.0)):
                gap = abs(p - face)
                if gap < best_gap:
                    best_axis, best_sign, best_gap = axis, sign, gap
        return Vector.basis(best_axis, self.dimension) * best_sign

    def anchor(self, reference):
        return self.origin + self.extents * 0.5

    def map_footprint(self, axes=(0, 1)):
        bounds = list(self._bounds())
        (x0, x1), (y0, y1) = bounds[axes[0]], bounds[axes[1]]
        return ('rect', x0, y0, x1, y1)

    def describe(self):
        return {'type': self.kind, 'origin': list(self.origin),
                'extents': list(self.extents)}


class Wall(Primitive):
    """
    Line segment in one coordinate plane, extruded along every other axis.

    A ray is tested against it through its projection onto that plane, so
    the wall behaves as infinitely tall. The returned parameter is the N-D
    ray parameter, obtained by solving the planar intersection against the
    unscaled planar part of the direction.
    """
    kind = 'wall'

    def __init__(self, start, end, dimension: int = 3, axes=(0, 1)):
        if len(start) != 2 or len(end) != 2:
            raise ValueError("wall endpoints must be 2-D points")
        a, b = axes
        if a == b or not (0 <= a < dimension and 0 <= b < dimension):
            raise ValueError(f"wall axes {axes} invalid for dimension {dimension}")
        super().__init__(dimension)
        self.start = (float(start[0]), float(start[1]))
        self.end = (float(end[0]), float(end[1]))
        self.axes = (a, b)

    def __repr__(self):
        return f"Wall({self.start}, {self.end}, axes={self.axes})"

    def _distance_along_ray(self, ray):
        ray2d = ray.project_2d(self.axes)
        dx, dy = ray2d.direction
        if ray2d.planar_length <= PARALLEL_EPSILON:
            return math.inf

        # Move the ray origin to (0, 0)
        ox, oy = ray2d.origin
        px, py = self.start[0] - ox, self.start[1] - oy
        ex, ey = self.end[0] - self.start[0], self.end[1] - self.start[1]

        # Solve t * d = p + s * e
        denom = dx * ey - dy * ex
        if abs(denom) <= PARALLEL_EPSILON:
            return math.inf
        t = (px * ey - py * ex) / denom
        s = (px * dy - py * dx) / denom
        if s < 0.0 or s > 1.0:
            return math.inf
        # Negative t means the wall is behind; the sign is kept for callers
        return t

    def _contains_point(self, point):
        return False

    def _planar(self, point):
        return point[self.axes[0]], point[self.axes[1]]

    def _closest_on_segment(self, x, y):
        sx, sy = self.start
        ex, ey = self.end[0] - sx, self.end[1] - sy
        length_sq = ex * ex + ey * ey
        if length_sq == 0.0:
            return sx, sy
        s = max(0.0, min(1.0, ((x - sx) * ex + (y - sy) * ey) / length_sq))
        return sx + s * ex, sy + s * ey

    def _distance_to_boundary(self, point):
        x, y = self._planar(point)
        cx, cy = self._closest_on_segment(x, y)
        return math.hypot(x - cx, y - cy)

    def _normal_at(self, point):
        ex, ey = self.end[0] - self.start[0], self.end[1] - self.start[1]
        nx, ny = ey, -ex
        x, y = self._planar(point)
        # Face the side the point is on
        if (x - self.start[0]) * nx + (y - self.start[1]) * ny < 0:
            nx, ny = -nx, -ny
        comps = [0.0] * self.dimension
        comps[self.axes[0]] = nx
        comps[self.axes[1]] = ny
        return Vector(comps).normalize()

    def anchor(self, reference):
        # Segment midpoint, at the reference's height on every other axis
        comps = list(reference)
        comps[self.axes[0]] = (self.start[0] + self.end[0]) / 2
        comps[self.axes[1]] = (self.start[1] + self.end[1]) / 2
        return Vector(comps)

    def map_footprint(self, axes=(0, 1)):
        if tuple(axes) == self.axes:
            return ('segment', self.start[0], self.start[1], self.end[0], self.end[1])
        if tuple(axes) == self.axes[::-1]:
            return ('segment', self.start[1], self.start[0], self.end[1], self.end[0])
        return ('none',)

    def describe(self):
        return {'type': self.kind, 'start': list(self.start),
                'end': list(self.end), 'axes': list(self.axes)}
