#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/__init__.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from .errors import (RaytracerError, DimensionMismatchError, SingularMatrixError,
                     NonOrthogonalMatrixError, SceneDescriptionError,
                     ControlConfigurationError, InsufficientRotationBindingsError)
from .math_utils import Vector, Matrix, orthonormalize
from .ray import Ray, Ray2D
from .shapes import Primitive, Sphere, Hypercube, Wall
from .config import RenderConfig, GameConfig, SpawnConfig
from .scene import Scene, Hit, primitive_from_descriptor, load_scene_file, default_scene
from .camera import Camera
from .controls import Action, build_key_bindings, apply_action, rotation_planes
from .fog import FogModel
from .renderer import Renderer, Frame, Sample, cast_ray
