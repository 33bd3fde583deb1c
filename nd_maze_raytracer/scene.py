#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/scene.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import json
import logging
import math
import random
from typing import NamedTuple, Optional

from .config import GameConfig
from .errors import RaytracerError, SceneDescriptionError
from .math_utils import Vector, _check_dim
from .ray import Ray
from .shapes import Hypercube, Primitive, Sphere, Wall

LOGGER = logging.getLogger(__name__)


class Hit(NamedTuple):
    """Nearest primitive along a ray and the ray parameter where it is met."""
    primitive: Primitive
    distance: float

    def point(self, ray: Ray) -> Vector:
        return ray.point_at(self.distance)


def _effective_distance(distance: float) -> float:
    # Negative ("behind") and infinite results both sort after every real hit
    if distance < 0 or math.isinf(distance) or math.isnan(distance):
        return math.inf
    return distance


class Scene:
    """
    Ordered collection of primitives sharing one dimension.

    Captured primitives stay in `objects` with their `removed` flag set;
    every query skips them. Insertion order only matters as the tie-break
    between exactly equal hit distances.
    """

    def __init__(self, dimension: int, objects=None, config: Optional[GameConfig] = None,
                 rng: Optional[random.Random] = None):
        self.dimension = dimension
        self.config = config if config is not None else GameConfig(dimension=dimension)
        self.rng = rng if rng is not None else random.Random()
        self.objects = []
        self.capture_count = 0
        for obj in objects or ():
            self.add(obj)

    def add(self, primitive: Primitive):
        """Append a primitive; it must live in the scene's dimension."""
        _check_dim(self.dimension, primitive.dimension, "primitive")
        self.objects.append(primitive)
        return primitive

    def clear(self):
        """Remove all objects from the scene."""
        self.objects.clear()
        self.capture_count = 0

    def live_objects(self):
        return [obj for obj in self.objects if obj.is_alive]

    def find_first_hit(self, ray: Ray) -> Optional[Hit]:
        """Nearest live primitive with a non-negative, finite ray parameter."""
        best = None
        best_distance = math.inf
        for obj in self.objects:
            distance = _effective_distance(obj.distance_along_ray(ray))
            # Strict comparison keeps the earliest of equal distances
            if distance < best_distance:
                best, best_distance = obj, distance
        if best is None:
            return None
        return Hit(best, best_distance)

    def nearest_live(self, point: Vector) -> Optional[Primitive]:
        """Live primitive whose anchor is closest to `point`."""
        live = self.live_objects()
        if not live:
            return None
        return min(live, key=lambda obj: (obj.anchor(point) - point).norm())

    def amplitude_at(self, point: Vector) -> int:
        """Number of live primitives containing `point`."""
        return sum(1 for obj in self.objects if obj.contains_point(point))

    def field_amplitude_at(self, point: Vector, sharpness: int = 8) -> float:
        """
        Smooth counterpart of amplitude_at, summing each live primitive's
        field_strength. Only spheres radiate a field.
        """
        return math.fsum(obj.field_strength(point, sharpness) for obj in self.objects)

    def perform_capture_at(self, point: Vector) -> int:
        """
        Capture every live primitive containing `point`.

        Returns the score delta: capture_reward per captured primitive, or
        -capture_penalty if nothing was there.
        """
        cfg = self.config
        captured = [obj for obj in self.objects if obj.contains_point(point)]
        if not captured:
            LOGGER.info("capture missed at %r", point)
            return -cfg.capture_penalty

        for obj in captured:
            obj.capture()
            self.capture_count += 1
            LOGGER.info("captured %r (total %d)", obj, self.capture_count)
            if cfg.spawn.probability > 0 and self.rng.random() < cfg.spawn.probability:
                self.spawn_sphere()
        return cfg.capture_reward * len(captured)

    def spawn_sphere(self) -> Sphere:
        """Add a randomly placed sphere using the spawn settings."""
        spawn = self.config.spawn
        lo, hi = spawn.bounds
        extra = spawn.extra_axis_range * spawn.skew(self.capture_count)
        coords = []
        for axis in range(self.dimension):
            if axis < 3:
                coords.append(self.rng.uniform(lo, hi))
            else:
                coords.append(self.rng.uniform(-extra, extra))
        radius = self.rng.uniform(*spawn.radius_range)
        sphere = self.add(Sphere(Vector(coords), radius))
        LOGGER.info("spawned %r", sphere)
        return sphere

    @classmethod
    def from_descriptors(cls, descriptors, dimension: int, **kwargs) -> 'Scene':
        return cls(dimension,
                   [primitive_from_descriptor(d, dimension) for d in descriptors],
                   **kwargs)

    def to_descriptors(self):
        return [obj.describe() for obj in self.live_objects()]


def _vector(desc, key, dimension):
    try:
        values = desc[key]
    except KeyError:
        raise SceneDescriptionError(f"{desc.get('type')} descriptor is missing '{key}'") from None
    vec = Vector(values)
    _check_dim(dimension, len(vec), f"{desc.get('type')} '{key}'")
    return vec


def primitive_from_descriptor(desc: dict, dimension: int) -> Primitive:
    """
    Build a primitive from a plain dict, e.g.
      {"type": "sphere", "center": [400, 100, 0], "radius": 50}
      {"type": "hypercube", "origin": [...], "extents": [...]}
      {"type": "wall", "start": [10, 10], "end": [10, 100], "axes": [0, 1]}
    Vectors must have exactly `dimension` components.
    """
    if not isinstance(desc, dict):
        raise SceneDescriptionError(f"descriptor must be a mapping, got {type(desc).__name__}")
    kind = desc.get('type')
    try:
        if kind == 'sphere':
            return Sphere(_vector(desc, 'center', dimension), float(desc['radius']))
        if kind == 'hypercube':
            return Hypercube(_vector(desc, 'origin', dimension),
                             _vector(desc, 'extents', dimension))
        if kind == 'wall':
            return Wall(desc['start'], desc['end'], dimension,
                        tuple(desc.get('axes', (0, 1))))
    except RaytracerError:
        raise
    except KeyError as e:
        raise SceneDescriptionError(f"{kind} descriptor is missing {e}") from None
    except (TypeError, ValueError) as e:
        raise SceneDescriptionError(f"bad {kind} descriptor: {e}") from e
    raise SceneDescriptionError(f"unknown primitive type {kind!r}")


def load_scene_file(path, dimension: int, **kwargs) -> Scene:
    """Read a JSON list of primitive descriptors."""
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SceneDescriptionError(f"{path}: {e}") from e
    if isinstance(data, dict):
        data = data.get('primitives', [])
    if not isinstance(data, list):
        raise SceneDescriptionError(f"{path}: expected a list of primitives")
    scene = Scene.from_descriptors(data, dimension, **kwargs)
    LOGGER.info("loaded %d primitives from %s", len(scene.objects), path)
    return scene


def default_descriptors(dimension: int):
    """
    Three walls and two spheres, lifted into `dimension` with zeros on the
    extra axes; from four dimensions on, a hypercube straddling the 3-D
    slice is added.
    """
    pad = [0.0] * (dimension - 2)
    descriptors = [
        {'type': 'wall', 'start': [10, 10], 'end': [10, 100]},
        {'type': 'wall', 'start': [50, 10], 'end': [50, 100]},
        {'type': 'wall', 'start': [10, 10], 'end': [50, 10]},
        {'type': 'sphere', 'center': [400, 100] + pad, 'radius': 50},
        {'type': 'sphere', 'center': [400, 300] + pad, 'radius': 80},
    ]
    if dimension >= 4:
        descriptors.append({'type': 'hypercube',
                            'origin': [250, 380] + [-30.0] * (dimension - 2),
                            'extents': [60, 60] + [60.0] * (dimension - 2)})
    return descriptors


def default_scene(dimension: int, **kwargs) -> Scene:
    return Scene.from_descriptors(default_descriptors(dimension), dimension, **kwargs)
