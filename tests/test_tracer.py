"""Unit tests for recursive ray tracing.

Tests cover:
- Background color for rays that escape the scene
- Local color (sphere color scaled by light intensity)
- Linear blending of local and reflected color
- Recursion budget and evaluation counts
- The reference red sphere scenario
- Repeated single-ray tracing on one scene
"""

import math

import pytest

from src.whitted.core.tracer import TraceResult, trace
from src.whitted.scene.lights import LightInfo
from src.whitted.scene.manager import SphereInfo

RED = (255.0, 0.0, 0.0)
BLUE = (0.0, 0.0, 255.0)


def _assert_color(actual, expected, tol=1e-3):
    for a, e in zip(actual, expected):
        assert a == pytest.approx(e, abs=tol)


def _mirror_pair(make_scene, reflective_a=1.0, reflective_b=1.0):
    """Two spheres facing each other along Z, lit only by ambient light."""
    return make_scene(
        spheres=[
            SphereInfo(center=(0.0, 0.0, 5.0), radius=1.0, color=RED, reflective=reflective_a),
            SphereInfo(center=(0.0, 0.0, -5.0), radius=1.0, color=BLUE, reflective=reflective_b),
        ],
        lights=[LightInfo.ambient(1.0)],
    )


class TestBackground:
    """Tests for rays that hit nothing."""

    @pytest.mark.parametrize("depth", [0, 1, 2, 3])
    def test_miss_returns_background(self, make_scene, depth):
        """Test that a miss returns the background after one evaluation."""
        scene = make_scene(lights=[LightInfo.ambient(1.0)], background_color=(10.0, 20.0, 30.0))

        result = trace(scene, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), recursion_depth=depth)

        assert isinstance(result, TraceResult)
        _assert_color(result.color, (10.0, 20.0, 30.0))
        assert result.evaluations == 1

    def test_hit_before_t_min_is_ignored(self, make_scene):
        """Test that primary rays only see spheres beyond t_min."""
        scene = make_scene(
            spheres=[SphereInfo(center=(0.0, 0.0, 0.5), radius=0.25, color=RED)],
            lights=[LightInfo.ambient(1.0)],
            background_color=(0.0, 255.0, 0.0),
        )

        result = trace(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), t_min=1.0)

        _assert_color(result.color, (0.0, 255.0, 0.0))


class TestLocalColor:
    """Tests for non-reflective surfaces."""

    @pytest.mark.parametrize("direction", [(0.0, 0.0, 1.0), (0.1, 0.1, 1.0)])
    def test_color_scaled_by_intensity(self, make_scene, direction):
        """Test that the local color is the sphere color times the intensity."""
        scene = make_scene(
            spheres=[SphereInfo(center=(0.0, 0.0, 5.0), radius=1.0, color=(100.0, 50.0, 20.0))],
            lights=[LightInfo.ambient(0.5)],
        )

        result = trace(scene, (0.0, 0.0, 0.0), direction)

        _assert_color(result.color, (50.0, 25.0, 10.0))
        assert result.evaluations == 1

    def test_color_is_not_clamped(self, make_scene):
        """Test that intensities above 1 push channels past 255."""
        scene = make_scene(
            spheres=[SphereInfo(center=(0.0, 0.0, 5.0), radius=1.0, color=RED)],
            lights=[LightInfo.ambient(1.5)],
        )

        result = trace(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0))

        _assert_color(result.color, (382.5, 0.0, 0.0))


class TestReflection:
    """Tests for mirror reflection and the recursion budget."""

    @pytest.mark.parametrize("reflective", [0.25, 0.5, 0.8])
    def test_linear_blend(self, make_scene, reflective):
        """Test local * (1 - r) + reflected * r."""
        scene = _mirror_pair(make_scene, reflective_a=reflective, reflective_b=0.0)

        result = trace(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), recursion_depth=3)

        _assert_color(result.color, (255.0 * (1.0 - reflective), 0.0, 255.0 * reflective))
        assert result.evaluations == 2

    def test_zero_depth_disables_reflection(self, make_scene):
        """Test that a budget of 0 returns the local color only."""
        scene = _mirror_pair(make_scene, reflective_a=0.5, reflective_b=0.0)

        result = trace(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), recursion_depth=0)

        _assert_color(result.color, RED)
        assert result.evaluations == 1

    def test_negative_depth_behaves_like_zero(self, make_scene):
        """Test that a negative budget also disables reflection."""
        scene = _mirror_pair(make_scene, reflective_a=0.5, reflective_b=0.0)

        result = trace(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), recursion_depth=-2)

        _assert_color(result.color, RED)
        assert result.evaluations == 1

    @pytest.mark.parametrize("depth", [0, 1, 2, 3, 4, 7])
    def test_facing_mirrors_terminate(self, make_scene, depth):
        """Test that two perfect mirrors stop after depth + 1 evaluations."""
        scene = _mirror_pair(make_scene)

        result = trace(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), recursion_depth=depth)

        assert result.evaluations == depth + 1
        # With r = 1 only the last level's local color survives
        expected = RED if depth % 2 == 0 else BLUE
        _assert_color(result.color, expected)
        assert all(math.isfinite(c) for c in result.color)

    def test_reflection_escapes_to_background(self, make_scene):
        """Test that a reflected ray that misses folds in the background."""
        scene = make_scene(
            spheres=[SphereInfo(center=(0.0, 0.0, 5.0), radius=1.0, color=RED, reflective=0.5)],
            lights=[LightInfo.ambient(1.0)],
            background_color=(0.0, 100.0, 0.0),
        )

        result = trace(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), recursion_depth=1)

        _assert_color(result.color, (127.5, 50.0, 0.0))
        assert result.evaluations == 2


class TestReferenceScenario:
    """The single red sphere lit by ambient and point lights."""

    def test_red_sphere_intensity(self, make_scene):
        """Test the exact color of the center ray.

        The ray (0, 0, 1) grazes the top of the sphere at (0, 0, 3), where the
        normal is (0, 1, 0). The point light contributes 0.6 / sqrt(14) of
        diffuse light and no highlight, since R . V < 0.
        """
        scene = make_scene(
            spheres=[
                SphereInfo(
                    center=(0.0, -1.0, 3.0),
                    radius=1.0,
                    color=RED,
                    specular=500.0,
                    reflective=0.0,
                )
            ],
            lights=[LightInfo.ambient(0.2), LightInfo.point(0.6, (2.0, 1.0, 0.0))],
        )

        result = trace(
            scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), t_min=1.0, t_max=math.inf, recursion_depth=3
        )

        intensity = 0.2 + 0.6 / math.sqrt(14.0)
        _assert_color(result.color, (255.0 * intensity, 0.0, 0.0), tol=1e-2)
        assert result.evaluations == 1


class TestRepeatedCalls:
    """Tests for tracing many single rays from Python."""

    def test_many_calls_reuse_outputs(self, make_scene):
        """Test that hundreds of trace() calls on one scene stay stable."""
        scene = make_scene(
            spheres=[SphereInfo(center=(0.0, 0.0, 3.0), radius=1.0, color=RED)],
            lights=[LightInfo.ambient(0.5)],
            background_color=BLUE,
        )

        for i in range(700):
            hit = trace(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
            miss = trace(scene, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
            if i % 100 == 0:
                _assert_color(hit.color, (127.5, 0.0, 0.0))
                _assert_color(miss.color, BLUE)

        _assert_color(hit.color, (127.5, 0.0, 0.0))
        assert hit.evaluations == 1
        _assert_color(miss.color, BLUE)
