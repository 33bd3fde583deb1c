import json
import math
import random

import pytest

from nd_maze_raytracer.config import GameConfig, SpawnConfig
from nd_maze_raytracer.errors import DimensionMismatchError, SceneDescriptionError
from nd_maze_raytracer.math_utils import Vector
from nd_maze_raytracer.ray import Ray
from nd_maze_raytracer.renderer import cast_ray
from nd_maze_raytracer.scene import (Scene, default_descriptors, default_scene,
                                     load_scene_file, primitive_from_descriptor)
from nd_maze_raytracer.shapes import Hypercube, Sphere, Wall

ORIGIN = Vector([0, 0, 0])
ALONG_X = Ray(ORIGIN, Vector([1, 0, 0]))


def three_primitive_scene(**kwargs):
    return Scene(3, [
        Sphere(Vector([10, 0, 0]), 2),
        Hypercube(Vector([20, -3, -3]), Vector([6, 6, 6])),
        Wall((40, -50), (40, 50), 3),
    ], **kwargs)


class TestFirstHit:
    def test_nearest_primitive_wins(self):
        scene = three_primitive_scene()
        hit = scene.find_first_hit(ALONG_X)
        assert isinstance(hit.primitive, Sphere)
        assert hit.distance == 8.0
        assert hit.point(ALONG_X) == Vector([8, 0, 0])

    def test_order_of_insertion_does_not_matter(self):
        scene = three_primitive_scene()
        scene.objects.reverse()
        assert isinstance(scene.find_first_hit(ALONG_X).primitive, Sphere)

    def test_empty_scene(self):
        assert Scene(3).find_first_hit(ALONG_X) is None

    def test_all_removed(self):
        scene = three_primitive_scene()
        for obj in scene.objects:
            obj.capture()
        assert scene.find_first_hit(ALONG_X) is None

    def test_captured_primitive_is_skipped(self):
        scene = three_primitive_scene()
        scene.objects[0].capture()
        hit = scene.find_first_hit(ALONG_X)
        assert isinstance(hit.primitive, Hypercube)
        assert hit.distance == pytest.approx(20.0)

    def test_negative_distances_are_misses(self):
        scene = Scene(3, [Hypercube(Vector([-10, -1, -1]), Vector([2, 2, 2])),
                          Wall((-5, -5), (-5, 5), 3)])
        assert scene.find_first_hit(ALONG_X) is None

    def test_exact_tie_is_deterministic(self):
        a = Sphere(Vector([0, 5, 0]), 1)
        b = Sphere(Vector([0, 5, 0]), 1)
        scene = Scene(3, [a, b])
        r = Ray(ORIGIN, Vector([0, 1, 0]))
        first = scene.find_first_hit(r)
        second = scene.find_first_hit(r)
        assert first.distance == 4.0
        assert first.primitive is a
        assert second.primitive is first.primitive

    def test_cast_ray_normalises_direction(self):
        scene = three_primitive_scene()
        hit = cast_ray(ORIGIN, Vector([5, 0, 0]), scene)
        assert hit.distance == pytest.approx(8.0)


class TestAmplitude:
    def test_counts_overlapping_solids(self):
        scene = Scene(2, [Sphere(Vector([0, 0]), 2), Sphere(Vector([1, 0]), 2),
                          Hypercube(Vector([0, 0]), Vector([5, 5]))])
        assert scene.amplitude_at(Vector([0.5, 0.5])) == 3
        assert scene.amplitude_at(Vector([4, 4])) == 1
        assert scene.amplitude_at(Vector([-5, -5])) == 0

    def test_removed_do_not_count(self):
        scene = Scene(2, [Sphere(Vector([0, 0]), 2), Sphere(Vector([1, 0]), 2)])
        scene.objects[0].capture()
        assert scene.amplitude_at(Vector([0.5, 0])) == 1

    def test_field_amplitude(self):
        scene = Scene(3, [Sphere(Vector([0, 0, 0]), 1), Sphere(Vector([100, 0, 0]), 1),
                          Wall((5, 0), (5, 1), 3)])
        assert scene.field_amplitude_at(ORIGIN) == pytest.approx(1.0, abs=1e-12)


class TestCapture:
    def test_capture_one_of_three(self):
        scene = three_primitive_scene()
        delta = scene.perform_capture_at(Vector([10, 0, 0]))
        assert delta == 20
        assert scene.objects[0].removed
        assert not scene.objects[1].removed
        assert scene.capture_count == 1

    def test_capture_miss_penalty(self):
        scene = three_primitive_scene()
        assert scene.perform_capture_at(Vector([0, 30, 0])) == -5
        assert not any(obj.removed for obj in scene.objects)

    def test_capture_overlap_rewards_each(self):
        scene = Scene(3, [Sphere(Vector([0, 0, 0]), 2), Sphere(Vector([1, 0, 0]), 2)])
        assert scene.perform_capture_at(Vector([0.5, 0, 0])) == 40
        assert scene.live_objects() == []

    def test_captured_target_cannot_be_captured_twice(self):
        scene = three_primitive_scene()
        scene.perform_capture_at(Vector([10, 0, 0]))
        assert scene.perform_capture_at(Vector([10, 0, 0])) == -5

    def test_custom_scoring(self):
        config = GameConfig(dimension=3, capture_reward=7, capture_penalty=2)
        scene = three_primitive_scene(config=config)
        assert scene.perform_capture_at(Vector([23, 0, 0])) == 7
        assert scene.perform_capture_at(Vector([0, 30, 0])) == -2

    def test_respawn(self):
        spawn = SpawnConfig(probability=1.0, radius_range=(5, 10), bounds=(0, 100),
                            extra_axis_range=50.0)
        scene = Scene(5, [Sphere(Vector([0, 0, 0, 0, 0]), 1)],
                      config=GameConfig(dimension=5, spawn=spawn), rng=random.Random(3))
        scene.perform_capture_at(Vector.zero(5))
        assert len(scene.objects) == 2
        new = scene.objects[1]
        assert isinstance(new, Sphere) and new.is_alive
        assert 5 <= new.radius <= 10
        assert all(0 <= c <= 100 for c in list(new.center)[:3])
        extra = 50.0 * spawn.skew(1)
        assert all(-extra <= c <= extra for c in list(new.center)[3:])

    def test_no_respawn_by_default(self):
        scene = three_primitive_scene()
        scene.perform_capture_at(Vector([10, 0, 0]))
        assert len(scene.objects) == 3


def test_skew_is_logistic():
    spawn = SpawnConfig(skew_midpoint=4, skew_rate=1.0)
    assert spawn.skew(4) == pytest.approx(0.5)
    values = [spawn.skew(n) for n in range(10)]
    assert values == sorted(values)
    assert 0 < values[0] < values[-1] < 1


def test_nearest_live():
    scene = three_primitive_scene()
    assert scene.nearest_live(Vector([0, 0, 0])) is scene.objects[0]
    scene.objects[0].capture()
    assert scene.nearest_live(Vector([0, 0, 0])) is scene.objects[1]
    assert Scene(3).nearest_live(ORIGIN) is None


def test_add_checks_dimension():
    with pytest.raises(DimensionMismatchError):
        Scene(4).add(Sphere(Vector([1, 2, 3]), 1))


class TestDescriptors:
    def test_round_trip(self):
        scene = three_primitive_scene()
        rebuilt = Scene.from_descriptors(scene.to_descriptors(), 3)
        assert [type(o) for o in rebuilt.objects] == [Sphere, Hypercube, Wall]
        assert rebuilt.find_first_hit(ALONG_X).distance == 8.0

    def test_wrong_dimension_is_an_error(self):
        with pytest.raises(DimensionMismatchError):
            primitive_from_descriptor({'type': 'sphere', 'center': [1, 2], 'radius': 1}, 3)

    def test_unknown_type(self):
        with pytest.raises(SceneDescriptionError):
            primitive_from_descriptor({'type': 'torus'}, 3)

    def test_missing_field(self):
        with pytest.raises(SceneDescriptionError):
            primitive_from_descriptor({'type': 'sphere', 'center': [1, 2, 3]}, 3)
        with pytest.raises(SceneDescriptionError):
            primitive_from_descriptor({'type': 'hypercube', 'origin': [1, 2, 3]}, 3)

    def test_bad_values(self):
        with pytest.raises(SceneDescriptionError):
            primitive_from_descriptor({'type': 'sphere', 'center': ['a', 2, 3], 'radius': 1}, 3)
        with pytest.raises(SceneDescriptionError):
            primitive_from_descriptor([1, 2, 3], 3)

    def test_load_scene_file(self, tmp_path):
        path = tmp_path / "maze.json"
        path.write_text(json.dumps({'primitives': default_descriptors(4)}))
        scene = load_scene_file(str(path), 4)
        assert len(scene.objects) == 6
        assert scene.dimension == 4

    def test_load_scene_file_bad_json(self, tmp_path):
        path = tmp_path / "maze.json"
        path.write_text("[{")
        with pytest.raises(SceneDescriptionError):
            load_scene_file(str(path), 3)

    @pytest.mark.parametrize("n, count", [(2, 5), (3, 5), (4, 6), (5, 6)])
    def test_default_scene(self, n, count):
        scene = default_scene(n)
        assert len(scene.objects) == count
        assert all(obj.dimension == n for obj in scene.objects)

    def test_default_scene_is_visible_from_start(self):
        scene = default_scene(3)
        r = Ray(Vector([200, 200, 0]), Vector([1, -0.5, 0]).normalize())
        hit = scene.find_first_hit(r)
        assert isinstance(hit.primitive, Sphere)
        assert not math.isinf(hit.distance)


def test_cast_ray_rejects_zero_direction():
    with pytest.raises(ValueError):
        cast_ray(ORIGIN, Vector.zero(3), three_primitive_scene())


def test_load_scene_file_not_utf8(tmp_path):
    path = tmp_path / "maze.json"
    path.write_bytes(b'["\xff"]')
    with pytest.raises(SceneDescriptionError):
        load_scene_file(str(path), 3)
