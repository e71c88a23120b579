"""Whitted-style sphere ray tracer built on Taichi.

This package renders scenes made of spheres and light sources by casting one
ray per pixel and evaluating intersection, Phong-style shading, hard shadows
and mirror reflection with a bounded recursion depth.

Subpackages:
    core: Vector helpers, render options, lighting, tracing and the frame driver
    geometry: Sphere records and the ray-sphere intersection solver
    scene: Light records, the immutable Scene and nearest-hit search
    camera: Camera placement/rotation and pixel-to-viewport mapping
    preview: Pixel sinks, PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
