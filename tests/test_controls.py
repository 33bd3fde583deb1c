import math

import pytest

from nd_maze_raytracer.camera import Camera
from nd_maze_raytracer.controls import (DEFAULT_ROTATE_KEYS, Action, apply_action,
                                        build_key_bindings, rotation_planes)
from nd_maze_raytracer.errors import (ControlConfigurationError,
                                      InsufficientRotationBindingsError)
from nd_maze_raytracer.math_utils import Vector


@pytest.mark.parametrize("n, planes", [(2, 1), (3, 3), (4, 6), (5, 10)])
def test_rotation_planes(n, planes):
    result = rotation_planes(n)
    assert len(result) == planes
    assert result[0] == (0, 1)
    assert all(i < j for i, j in result)


@pytest.mark.parametrize("n", [2, 3, 4, 5])
def test_defaults_cover_every_degree_of_freedom(n):
    bindings = build_key_bindings(n)
    assert len(bindings) == 2 * (n + n * (n - 1) // 2)
    moved = {a.axis_i for a in bindings.values() if a.kind == 'translate'}
    turned = {(a.axis_i, a.axis_j) for a in bindings.values() if a.kind == 'rotate'}
    assert moved == set(range(n))
    assert turned == set(rotation_planes(n))


def test_default_keys():
    bindings = build_key_bindings(3, move_step=2.0, rotate_step=0.25)
    assert bindings['UP'] == Action('translate', 0, 0, 2.0)
    assert bindings['DOWN'] == Action('translate', 0, 0, -2.0)
    assert bindings['RIGHT'] == Action('rotate', 0, 1, 0.25)
    assert bindings['LEFT'] == Action('rotate', 0, 1, -0.25)
    assert bindings['m'] == Action('rotate', 0, 2, 0.25)


def test_too_few_rotation_pairs():
    with pytest.raises(InsufficientRotationBindingsError) as info:
        build_key_bindings(4, rotate_keys=DEFAULT_ROTATE_KEYS[:3])
    assert info.value.required == 6
    assert info.value.supplied == 3
    assert isinstance(info.value, ControlConfigurationError)


def test_defaults_stop_at_five_dimensions():
    with pytest.raises(ControlConfigurationError):
        build_key_bindings(6)


def test_too_few_translate_pairs():
    with pytest.raises(ControlConfigurationError):
        build_key_bindings(3, translate_keys=[('w', 's')])


def test_key_bound_twice():
    with pytest.raises(ControlConfigurationError):
        build_key_bindings(2, translate_keys=[('w', 's'), ('w', 'x')])


def test_apply_actions():
    bindings = build_key_bindings(3, move_step=5.0, rotate_step=math.pi / 2)
    cam = Camera(Vector.zero(3))
    apply_action(cam, bindings['RIGHT'])
    apply_action(cam, bindings['UP'])
    assert cam.position[1] == pytest.approx(5.0)
    assert cam.position[0] == pytest.approx(0.0, abs=1e-12)


def test_unknown_action_kind():
    with pytest.raises(ValueError):
        apply_action(Camera(Vector.zero(3)), Action('teleport', 0, 0, 1.0))
