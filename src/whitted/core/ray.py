"""Ray data structure and mirror reflection for the sphere ray tracer.

This module provides the Ray dataclass, its evaluation helpers and the
reflection formula shared by lighting and tracing. Vectors double as
positions, directions and RGB colors (channels in the 0-255 range). All
helpers are Taichi functions so they can be called from inside kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, 1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Not required to be
            unit length; the tracer parametrizes points as origin + t * direction.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


@ti.func
def reflect_ray(v: vec3, normal: vec3) -> vec3:
    """Mirror a vector about a normal.

    Unlike the incident-style reflect used by path tracers, ``v`` points away
    from the surface (toward a light or the viewer) and so does the result:

        R = 2 * N * (N . v) - v

    Args:
        v: The vector to mirror, pointing away from the surface.
        normal: The surface normal (should be normalized).

    Returns:
        The mirrored vector, with the same length as v.
    """
    return 2.0 * normal * tm.dot(normal, v) - v
