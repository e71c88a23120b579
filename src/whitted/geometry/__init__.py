"""Geometry module for the sphere primitive.

Components:
    sphere: Sphere record and the ray-sphere intersection solver

Intersection routines are Taichi functions (@ti.func) so they can run inside
the per-pixel render kernel. The solver follows the pattern:
    t_near, t_far = intersect_ray_sphere(ray_origin, ray_direction, sphere)
"""

from .sphere import NO_INTERSECTION, Sphere, intersect_ray_sphere, sphere_normal

__all__ = [
    "Sphere",
    "intersect_ray_sphere",
    "sphere_normal",
    "NO_INTERSECTION",
]
