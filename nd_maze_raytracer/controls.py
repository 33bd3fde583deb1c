#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/controls.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from itertools import combinations
from typing import NamedTuple

from .camera import Camera
from .errors import ControlConfigurationError, InsufficientRotationBindingsError

# (positive key, negative key) per camera axis: forward, right, up, extra...
DEFAULT_TRANSLATE_KEYS = [
    ('UP', 'DOWN'),
    ('p', 'o'),
    ('i', 'u'),
    ('y', 't'),
    ('r', 'e'),
]

# (positive key, negative key) per entry of rotation_planes(N), in order.
# The first two are always yaw (0,1) and pitch (0,2).
DEFAULT_ROTATE_KEYS = [
    ('RIGHT', 'LEFT'),
    ('m', 'n'),
    ('k', 'j'),
    ('h', 'g'),
    ('b', 'v'),
    ('f', 'd'),
    ('s', 'a'),
    ('x', 'z'),
    ('.', ','),
    (']', '['),
]


class Action(NamedTuple):
    """One bound camera movement: kind is 'translate' or 'rotate'."""
    kind: str
    axis_i: int
    axis_j: int
    amount: float


def rotation_planes(dimension: int):
    """Every unordered pair of axes, one rotation generator each."""
    return list(combinations(range(dimension), 2))


def build_key_bindings(dimension: int, translate_keys=None, rotate_keys=None,
                       move_step: float = 5.0, rotate_step: float = 0.1):
    """
    Map keys to camera actions for an N-dimensional camera.

    Needs one translate pair per axis and one rotate pair per axis pair,
    N * (N - 1) / 2 in total. Short key lists are a hard error; extra pairs
    are ignored.
    """
    translate_keys = list(DEFAULT_TRANSLATE_KEYS if translate_keys is None else translate_keys)
    rotate_keys = list(DEFAULT_ROTATE_KEYS if rotate_keys is None else rotate_keys)

    if len(translate_keys) < dimension:
        raise ControlConfigurationError(
            f"dimension {dimension} needs {dimension} translate key pairs, "
            f"only {len(translate_keys)} supplied")
    planes = rotation_planes(dimension)
    if len(rotate_keys) < len(planes):
        raise InsufficientRotationBindingsError(dimension, len(planes), len(rotate_keys))

    bindings = {}

    def bind(key, action):
        if key in bindings:
            raise ControlConfigurationError(f"key {key!r} bound twice")
        bindings[key] = action

    for axis, (plus, minus) in zip(range(dimension), translate_keys):
        bind(plus, Action('translate', axis, axis, move_step))
        bind(minus, Action('translate', axis, axis, -move_step))

    for (i, j), (plus, minus) in zip(planes, rotate_keys):
        bind(plus, Action('rotate', i, j, rotate_step))
        bind(minus, Action('rotate', i, j, -rotate_step))

    return bindings


def apply_action(camera: Camera, action: Action):
    if action.kind == 'translate':
        camera.translate_along_axis(action.axis_i, action.amount)
    elif action.kind == 'rotate':
        camera.apply_rotation(action.axis_i, action.axis_j, action.amount)
    else:
        raise ValueError(f"unknown action kind {action.kind!r}")
