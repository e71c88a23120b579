"""Scene-level nearest-hit search.

Scans every sphere of a Scene and keeps the smallest intersection parameter
strictly inside (t_min, t_max). There is no acceleration structure.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.intersection import closest_intersection
    >>> # Inside a kernel taking `scene: ti.template()`:
    >>> #     rec = closest_intersection(scene, origin, direction, 1.0, math.inf)
    >>> #     if rec.hit == 1: sphere = scene.get_sphere(rec.sphere_index)
"""

import taichi as ti
import taichi.math as tm

from src.whitted.geometry.sphere import intersect_ray_sphere

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class SceneHitRecord:
    """Record of the closest ray-scene intersection.

    Attributes:
        hit: 1 if some sphere was hit inside the range, 0 otherwise.
        t: The ray parameter of the closest hit. Only valid if hit == 1.
        sphere_index: Index of the hit sphere in scene order, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    sphere_index: ti.i32


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(hit=0, t=0.0, sphere_index=-1)


@ti.func
def closest_intersection(
    scene: ti.template(),
    ray_origin: vec3,
    ray_direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
) -> SceneHitRecord:
    """Find the closest sphere hit by a ray within a parametric range.

    Both roots of every sphere are tested, so rays starting inside a sphere
    find its far side.

    Args:
        scene: The Scene to search.
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        t_min: Exclusive lower bound on the ray parameter.
        t_max: Exclusive upper bound on the ray parameter.

    Returns:
        A SceneHitRecord for the closest hit, or a miss record.
    """
    closest_t = t_max
    result = _make_miss_record()

    for i in range(scene.sphere_count):
        sphere = scene.get_sphere(i)
        t_near, t_far = intersect_ray_sphere(ray_origin, ray_direction, sphere)

        if t_near > t_min and t_near < t_max and t_near < closest_t:
            closest_t = t_near
            result = SceneHitRecord(hit=1, t=t_near, sphere_index=i)

        if t_far > t_min and t_far < t_max and t_far < closest_t:
            closest_t = t_far
            result = SceneHitRecord(hit=1, t=t_far, sphere_index=i)

    return result
