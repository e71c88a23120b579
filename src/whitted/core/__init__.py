"""Core rendering module.

Components:
    ray: Ray data structure and mirror reflection
    config: Render tunables (epsilon, reflection depth, viewport)
    lighting: Ambient/diffuse/specular intensity with hard shadows
    tracer: Ray tracing with bounded mirror reflection
    renderer: Frame driver tracing one ray per pixel

All compute-intensive operations use Taichi kernels for GPU acceleration.
"""

from .config import EPSILON, MAX_REFLECTION_DEPTH, PRIMARY_T_MIN, RenderOptions
from .ray import Ray, make_ray, ray_at, reflect_ray, vec3

# Note: lighting, tracer and renderer are NOT imported here to avoid circular
# imports with the scene package. Import them directly when needed:
#   from src.whitted.core.tracer import trace
#   from src.whitted.core.renderer import Renderer

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "reflect_ray",
    "RenderOptions",
    "EPSILON",
    "MAX_REFLECTION_DEPTH",
    "PRIMARY_T_MIN",
]
