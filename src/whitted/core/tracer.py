"""Recursive ray tracing with mirror reflection.

For a ray and a recursion budget, the traced color is defined recursively:

    miss                          -> background color
    hit, budget <= 0 or r <= 0    -> local
    hit otherwise                 -> local * (1 - r) + trace(reflected) * r

where local = sphere color * light intensity at the hit point and r is the
sphere's reflective coefficient. The reflected ray starts at the hit point,
mirrors the view direction about the normal, uses (epsilon, inf) as its range
and budget - 1.

Taichi functions cannot recurse, so the recursion is unrolled into a loop of
at most budget + 1 levels. Each level adds its local color scaled by the
product of the reflective weights above it, in the same order the recursive
definition blends them.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.tracer import trace
    >>> from src.whitted.scene.default_scene import create_default_scene
    >>>
    >>> scene, _ = create_default_scene()
    >>> result = trace(scene, origin=(0, 0, 0), direction=(0, 0, 1))
    >>> result.color, result.evaluations
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.whitted.core.config import EPSILON, MAX_REFLECTION_DEPTH, PRIMARY_T_MIN
from src.whitted.core.lighting import compute_lighting
from src.whitted.core.ray import make_ray, ray_at, reflect_ray
from src.whitted.geometry.sphere import sphere_normal
from src.whitted.scene.intersection import closest_intersection

# Type alias for 3D vectors
vec3 = tm.vec3

# Secondary rays are unbounded above
T_MAX = math.inf


@ti.func
def trace_ray_counted(
    scene: ti.template(),
    origin: vec3,
    direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
    recursion_depth: ti.i32,
    epsilon: ti.f32,
):
    """Trace a ray and report how many trace levels were evaluated.

    Args:
        scene: The Scene to trace against.
        origin: The starting point of the ray.
        direction: The direction vector of the ray (need not be normalized).
        t_min: Exclusive lower bound on the primary ray parameter.
        t_max: Exclusive upper bound on the primary ray parameter.
        recursion_depth: Remaining reflection budget. Values <= 0 disable
            reflection.
        epsilon: Self-intersection offset for shadow and reflection rays.

    Returns:
        Tuple of (color, evaluations) where color is RGB in the 0-255 range
        (unclamped) and evaluations is the number of levels traced, between
        1 and max(recursion_depth, 0) + 1.
    """
    color = vec3(0.0, 0.0, 0.0)

    # Product of reflective coefficients of the surfaces above this level
    weight = 1.0

    ray = make_ray(origin, direction)
    range_min = t_min
    range_max = t_max

    evaluations = 0
    active = 1

    for level in range(ti.max(recursion_depth, 0) + 1):
        if active == 1:
            evaluations += 1
            record = closest_intersection(scene, ray.origin, ray.direction, range_min, range_max)

            if record.hit == 0:
                color += weight * scene.get_background()
                active = 0
            else:
                sphere = scene.get_sphere(record.sphere_index)
                point = ray_at(ray, record.t)
                normal = sphere_normal(sphere, point)
                view = -ray.direction

                intensity = compute_lighting(scene, point, normal, view, sphere.specular, epsilon)
                local_color = sphere.color * intensity

                remaining = recursion_depth - level
                if remaining <= 0 or sphere.reflective <= 0.0:
                    color += weight * local_color
                    active = 0
                else:
                    color += weight * (1.0 - sphere.reflective) * local_color
                    weight *= sphere.reflective

                    ray = make_ray(point, reflect_ray(view, normal))
                    range_min = epsilon
                    range_max = T_MAX

    return color, evaluations


@ti.func
def trace_ray(
    scene: ti.template(),
    origin: vec3,
    direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
    recursion_depth: ti.i32,
    epsilon: ti.f32,
) -> vec3:
    """Trace a ray through the scene and return its color.

    See trace_ray_counted() for the arguments.

    Returns:
        RGB color in the 0-255 range, not yet clamped.
    """
    color, _ = trace_ray_counted(
        scene, origin, direction, t_min, t_max, recursion_depth, epsilon
    )
    return color


@ti.kernel
def _trace_single_ray(
    scene: ti.template(),
    origin: vec3,
    direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
    recursion_depth: ti.i32,
    epsilon: ti.f32,
    color_out: ti.template(),
    evaluations_out: ti.template(),
):
    """Trace one ray and store its color and evaluation count."""
    color, evaluations = trace_ray_counted(
        scene, origin, direction, t_min, t_max, recursion_depth, epsilon
    )
    color_out[None] = color
    evaluations_out[None] = evaluations


# Output slots shared by every trace() call, allocated on first use
_trace_outputs = None


def _get_trace_outputs():
    """Return the (color, evaluations) 0-D fields shared by trace() calls."""
    global _trace_outputs
    if _trace_outputs is None:
        _trace_outputs = (
            ti.Vector.field(3, dtype=ti.f32, shape=()),
            ti.field(dtype=ti.i32, shape=()),
        )
    return _trace_outputs


@dataclass(frozen=True)
class TraceResult:
    """Result of tracing a single ray from Python.

    Attributes:
        color: RGB color in the 0-255 range, not clamped.
        evaluations: Number of trace levels evaluated (primary hit plus
            reflection bounces, or 1 for a primary miss).
    """

    color: tuple[float, float, float]
    evaluations: int


def trace(
    scene,
    origin: Sequence[float],
    direction: Sequence[float],
    t_min: float = PRIMARY_T_MIN,
    t_max: float = T_MAX,
    recursion_depth: int = MAX_REFLECTION_DEPTH,
    epsilon: float = EPSILON,
) -> TraceResult:
    """Trace a single ray from Python.

    This is meant for testing and inspecting individual rays. For full frames,
    use Renderer, which traces all pixels in one parallel kernel.

    Args:
        scene: The Scene to trace against.
        origin: Ray origin (x, y, z).
        direction: Ray direction (x, y, z), need not be normalized.
        t_min: Exclusive lower bound on the ray parameter.
        t_max: Exclusive upper bound on the ray parameter.
        recursion_depth: Reflection budget.
        epsilon: Self-intersection offset for secondary rays.

    Returns:
        A TraceResult with the color and the number of evaluated levels.
    """
    color_out, evaluations_out = _get_trace_outputs()

    _trace_single_ray(
        scene,
        vec3(origin[0], origin[1], origin[2]),
        vec3(direction[0], direction[1], direction[2]),
        t_min,
        t_max,
        recursion_depth,
        epsilon,
        color_out,
        evaluations_out,
    )

    color = color_out[None]
    return TraceResult(
        color=(float(color[0]), float(color[1]), float(color[2])),
        evaluations=int(evaluations_out[None]),
    )
