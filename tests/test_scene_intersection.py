"""Unit tests for scene-level intersection.

Tests cover:
- SceneHitRecord miss record
- Closest hit selection across spheres
- Exclusive t_min and t_max bounds
- Rays starting inside a sphere
- Empty scene behavior
"""

import math

import taichi as ti

from src.whitted.scene.manager import SphereInfo

WHITE = (255.0, 255.0, 255.0)


def _closest(scene, origin, direction, t_min=1.0, t_max=math.inf):
    """Run closest_intersection in a kernel and return (hit, t, sphere_index)."""
    from src.whitted.scene.intersection import closest_intersection, vec3

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    index = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def test_kernel(scene: ti.template(), o: vec3, d: vec3, t_lo: ti.f32, t_hi: ti.f32):
        rec = closest_intersection(scene, o, d, t_lo, t_hi)
        hit[None] = rec.hit
        t_val[None] = rec.t
        index[None] = rec.sphere_index

    test_kernel(scene, vec3(*origin), vec3(*direction), t_min, t_max)
    return hit[None], t_val[None], index[None]


class TestSceneHitRecordBasics:
    """Tests for SceneHitRecord dataclass."""

    def test_miss_record_has_negative_index(self):
        """Test that miss records have sphere_index = -1."""
        from src.whitted.scene.intersection import _make_miss_record

        result_hit = ti.field(dtype=ti.i32, shape=())
        result_index = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            rec = _make_miss_record()
            result_hit[None] = rec.hit
            result_index[None] = rec.sphere_index

        test_kernel()
        assert result_hit[None] == 0
        assert result_index[None] == -1


class TestClosestHit:
    """Tests for closest hit selection with multiple spheres."""

    def test_closest_of_two_spheres(self, make_scene):
        """Test that the nearer sphere wins regardless of scene order."""
        scene = make_scene(
            spheres=[
                SphereInfo(center=(0.0, 0.0, 10.0), radius=1.0, color=WHITE),
                SphereInfo(center=(0.0, 0.0, 5.0), radius=1.0, color=WHITE),
            ]
        )

        hit, t, index = _closest(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0))

        assert hit == 1
        assert abs(t - 4.0) < 1e-5
        assert index == 1

    def test_single_sphere_index(self, make_scene):
        """Test that the hit reports the sphere's position in scene order."""
        scene = make_scene(
            spheres=[
                SphereInfo(center=(5.0, 0.0, 5.0), radius=1.0, color=WHITE),
                SphereInfo(center=(0.0, 0.0, 5.0), radius=1.0, color=WHITE),
                SphereInfo(center=(-5.0, 0.0, 5.0), radius=1.0, color=WHITE),
            ]
        )

        hit, _, index = _closest(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0))

        assert hit == 1
        assert index == 1

    def test_miss_all_spheres(self, make_scene):
        """Test a ray passing between spheres."""
        scene = make_scene(
            spheres=[
                SphereInfo(center=(3.0, 0.0, 5.0), radius=1.0, color=WHITE),
                SphereInfo(center=(-3.0, 0.0, 5.0), radius=1.0, color=WHITE),
            ]
        )

        hit, _, index = _closest(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0))

        assert hit == 0
        assert index == -1


class TestRangeBounds:
    """Tests for t_min and t_max bounds."""

    def test_t_max_excludes_farther_hits(self, make_scene):
        """Test that hits at or beyond t_max are ignored."""
        scene = make_scene(
            spheres=[SphereInfo(center=(0.0, 0.0, 5.0), radius=1.0, color=WHITE)]
        )

        hit, _, _ = _closest(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), t_min=0.0, t_max=3.5)

        assert hit == 0

    def test_t_min_skips_near_root(self, make_scene):
        """Test that a near root below t_min falls through to the far root."""
        scene = make_scene(
            spheres=[SphereInfo(center=(0.0, 0.0, 5.0), radius=1.0, color=WHITE)]
        )

        hit, t, _ = _closest(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), t_min=4.5)

        assert hit == 1
        assert abs(t - 6.0) < 1e-5

    def test_ray_from_inside_finds_far_side(self, make_scene):
        """Test that a ray starting inside a sphere hits its far wall."""
        scene = make_scene(
            spheres=[SphereInfo(center=(0.0, 0.0, 0.0), radius=2.0, color=WHITE)]
        )

        hit, t, index = _closest(scene, (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), t_min=1e-3)

        assert hit == 1
        assert abs(t - 2.0) < 1e-5
        assert index == 0

    def test_sphere_behind_origin_is_ignored(self, make_scene):
        """Test that spheres behind the ray do not register."""
        scene = make_scene(
            spheres=[SphereInfo(center=(0.0, 0.0, -5.0), radius=1.0, color=WHITE)]
        )

        hit, _, _ = _closest(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), t_min=1e-3)

        assert hit == 0


class TestEmptyScene:
    """Tests for empty scene behavior."""

    def test_empty_scene_misses(self, make_scene):
        """Test that every ray misses an empty scene."""
        scene = make_scene()

        hit, _, index = _closest(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0))

        assert hit == 0
        assert index == -1
