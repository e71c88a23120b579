"""Sphere primitive and ray-sphere intersection solver.

Substituting the ray P = O + t * D into the implicit sphere |P - C|^2 = r^2
gives the quadratic

    a * t^2 + b * t + c = 0
    a = D . D,  b = 2 * (O - C) . D,  c = (O - C) . (O - C) - r^2

The solver returns both roots. A negative discriminant is not an error: both
roots are reported as +inf so that any range test against them fails.

Roots are computed with the robust form of the quadratic formula from Ray
Tracing Gems, which avoids catastrophic cancellation when b^2 is close to
4ac (grazing rays, very large spheres such as a ground plane).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.geometry.sphere import Sphere, intersect_ray_sphere
    >>> # Use intersect_ray_sphere within a Taichi kernel
"""

import math

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Root reported for rays that miss the sphere
NO_INTERSECTION = math.inf


@ti.dataclass
class Sphere:
    """A shaded sphere.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
        color: Surface color as RGB in the 0-255 range (vec3).
        specular: Shininess exponent, or -1 for no specular highlight.
        reflective: Fraction of light mirror-reflected, in [0, 1].
    """

    center: vec3
    radius: ti.f32
    color: vec3
    specular: ti.f32
    reflective: ti.f32


@ti.func
def _solve_quadratic_robust(h: ti.f32, a: ti.f32, c: ti.f32, sqrt_d: ti.f32):
    """Solve a*t^2 + 2*h*t + c = 0 given the root of its discriminant.

    Args:
        h: Half of the linear coefficient.
        a: Quadratic coefficient.
        c: Constant term.
        sqrt_d: Square root of the reduced discriminant (h^2 - a*c).

    Returns:
        Tuple of (t_near, t_far) where t_near <= t_far.
    """
    # q = -(h + sign(h) * sqrt(discriminant)) never subtracts nearly equal values
    sign_h = ti.select(h < 0.0, -1.0, 1.0)
    q = -(h + sign_h * sqrt_d)

    t0 = 0.0
    t1 = 0.0

    if ti.abs(q) < 1e-10:
        # Degenerate sphere (radius near zero with origin on the center)
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        temp = t0
        t0 = t1
        t1 = temp

    return t0, t1


@ti.func
def intersect_ray_sphere(origin: vec3, direction: vec3, sphere: Sphere):
    """Compute both parametric distances where a ray crosses a sphere.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector of the ray (need not be normalized).
        sphere: The sphere to intersect.

    Returns:
        Tuple of (t_near, t_far) with t_near <= t_far. Both are +inf when
        the ray's line misses the sphere.
    """
    oc = origin - sphere.center

    # Half-b formulation: b = 2h, discriminant b^2 - 4ac = 4 * (h^2 - ac)
    a = tm.dot(direction, direction)
    h = tm.dot(oc, direction)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius

    discriminant = h * h - a * c

    t_near = NO_INTERSECTION
    t_far = NO_INTERSECTION

    if discriminant >= 0.0:
        t0, t1 = _solve_quadratic_robust(h, a, c, ti.sqrt(discriminant))
        t_near = t0
        t_far = t1

    return t_near, t_far


@ti.func
def sphere_normal(sphere: Sphere, point: vec3) -> vec3:
    """Outward unit normal of a sphere at a surface point."""
    return tm.normalize(point - sphere.center)
