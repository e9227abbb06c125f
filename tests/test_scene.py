"""Unit tests for scene storage and traversal.

Tests cover:
- Scene construction and ordering
- First-hit traversal (list order wins, not distance)
- Nearest-hit traversal
- Reference scene preset
"""

import pytest

from spheretrace.core.integrator import T_MAX, T_MIN
from spheretrace.core.ray import Ray
from spheretrace.core.vector import Vec3
from spheretrace.geometry.hittable import MISS, HitResult, Hittable
from spheretrace.geometry.sphere import Sphere
from spheretrace.scene.presets import REFERENCE_SPHERES, reference_camera, reference_scene
from spheretrace.scene.world import Scene, TraversalMode

NEAR = Sphere(Vec3(0.0, 0.0, -2.0), 0.5)
FAR = Sphere(Vec3(0.0, 0.0, -5.0), 0.5)
DOWN_Z = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))


class CountingHittable(Hittable):
    """Hittable wrapper that records how often it was tested."""

    def __init__(self, inner: Hittable) -> None:
        self.inner = inner
        self.calls = 0

    def hit(self, ray, t_min, t_max) -> HitResult:
        self.calls += 1
        return self.inner.hit(ray, t_min, t_max)


class TestSceneStorage:
    """Tests for Scene construction."""

    def test_empty_scene_misses(self):
        """Test an empty scene never reports a hit."""
        assert Scene().hit(DOWN_Z, T_MIN, T_MAX) is MISS

    def test_preserves_insertion_order(self):
        """Test objects are kept in the order they were added."""
        scene = Scene([FAR])
        scene.add(NEAR)
        assert scene.objects == (FAR, NEAR)
        assert list(scene) == [FAR, NEAR]
        assert len(scene) == 2

    def test_rejects_non_hittable(self):
        """Test only Hittable objects can be added."""
        with pytest.raises(TypeError, match="Hittable"):
            Scene([object()])

    def test_default_mode_is_first_hit(self):
        """Test scenes default to first-hit traversal."""
        assert Scene().mode is TraversalMode.FIRST_HIT


class TestFirstHitTraversal:
    """Tests for first-hit (list order) traversal."""

    def test_list_order_beats_distance(self):
        """Test the first object in the list wins even when it is farther."""
        scene = Scene([FAR, NEAR])
        rec = scene.hit(DOWN_Z, T_MIN, T_MAX)
        assert abs(rec.t - 4.5) < 1e-12

    def test_near_first_reports_near(self):
        """Test swapping the order changes the result."""
        scene = Scene([NEAR, FAR])
        rec = scene.hit(DOWN_Z, T_MIN, T_MAX)
        assert abs(rec.t - 1.5) < 1e-12

    def test_stops_at_first_hit(self):
        """Test objects after the first hit are never tested."""
        first = CountingHittable(FAR)
        second = CountingHittable(NEAR)
        scene = Scene([first, second])

        scene.hit(DOWN_Z, T_MIN, T_MAX)

        assert first.calls == 1
        assert second.calls == 0

    def test_skips_missed_objects(self):
        """Test objects that miss are passed over."""
        off_axis = Sphere(Vec3(10.0, 0.0, -2.0), 0.5)
        scene = Scene([off_axis, FAR])
        rec = scene.hit(DOWN_Z, T_MIN, T_MAX)
        assert abs(rec.t - 4.5) < 1e-12

    def test_off_axis_spheres_miss(self):
        """Test a ray missing every sphere returns MISS."""
        scene = Scene(
            [Sphere(Vec3(3.0, 0.0, -2.0), 0.5), Sphere(Vec3(0.0, 3.0, -2.0), 0.5)]
        )
        assert not scene.hit(DOWN_Z, T_MIN, T_MAX).hit


class TestNearestHitTraversal:
    """Tests for nearest-hit traversal."""

    def test_nearest_regardless_of_order(self):
        """Test the closest object wins in either order."""
        for objects in ([FAR, NEAR], [NEAR, FAR]):
            scene = Scene(objects, mode=TraversalMode.NEAREST_HIT)
            rec = scene.hit(DOWN_Z, T_MIN, T_MAX)
            assert abs(rec.t - 1.5) < 1e-12

    def test_hit_nearest_method(self):
        """Test hit_nearest works independently of the scene mode."""
        scene = Scene([FAR, NEAR])
        assert abs(scene.hit_nearest(DOWN_Z, T_MIN, T_MAX).t - 1.5) < 1e-12
        assert abs(scene.hit_first(DOWN_Z, T_MIN, T_MAX).t - 4.5) < 1e-12

    def test_nearest_miss(self):
        """Test nearest-hit traversal misses when nothing is in range."""
        scene = Scene([FAR, NEAR], mode=TraversalMode.NEAREST_HIT)
        assert not scene.hit(DOWN_Z, T_MIN, 1.0).hit

    def test_scene_can_nest(self):
        """Test a Scene is itself Hittable and can be an element of another."""
        inner = Scene([NEAR])
        outer = Scene([inner, FAR])
        assert abs(outer.hit(DOWN_Z, T_MIN, T_MAX).t - 1.5) < 1e-12


class TestReferenceScene:
    """Tests for the reference scene preset."""

    def test_four_spheres_in_order(self):
        """Test the preset holds the four reference spheres, ground last."""
        scene = reference_scene()
        assert len(scene) == 4
        for sphere, (center, radius) in zip(scene, REFERENCE_SPHERES):
            assert sphere.center == Vec3(*center)
            assert sphere.radius == radius
        assert scene.objects[-1].radius == 100.0

    def test_mode_argument(self):
        """Test the preset honors the requested traversal mode."""
        assert reference_scene(TraversalMode.NEAREST_HIT).mode is TraversalMode.NEAREST_HIT

    def test_each_call_builds_new_scene(self):
        """Test presets are independent objects."""
        assert reference_scene() is not reference_scene()

    def test_reference_camera(self):
        """Test the reference camera vectors."""
        camera = reference_camera()
        assert camera.origin == Vec3(0.0, 0.0, 0.0)
        assert camera.lower_left_corner == Vec3(-2.0, -1.0, -1.0)
        assert camera.horizontal == Vec3(4.0, 0.0, 0.0)
        assert camera.vertical == Vec3(0.0, 2.0, 0.0)
