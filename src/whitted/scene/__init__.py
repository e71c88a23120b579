"""Scene module for scene description and ray-scene queries.

Components:
    lights: Light tagged union (ambient, point, directional)
    manager: Immutable Scene holding spheres and lights in Taichi fields
    intersection: Nearest-hit search over the scene's spheres
    default_scene: The reference three-spheres-on-a-floor scene

Scene data is organized for efficient GPU access:
    - Structure-of-Arrays layout for sphere attributes
    - Light type tags stored next to intensity and vector payloads
    - Counts fixed at construction and folded into compiled kernels
"""

from .default_scene import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DefaultSceneParams,
    create_default_scene,
    default_lights,
    default_spheres,
)
from .intersection import SceneHitRecord, closest_intersection
from .lights import Light, LightInfo, LightType
from .manager import NO_SPECULAR, Scene, SceneConfig, SphereInfo

__all__ = [
    # Lights
    "Light",
    "LightInfo",
    "LightType",
    # Scene
    "Scene",
    "SceneConfig",
    "SphereInfo",
    "NO_SPECULAR",
    # Intersection
    "SceneHitRecord",
    "closest_intersection",
    # Reference scene
    "DefaultSceneParams",
    "create_default_scene",
    "default_spheres",
    "default_lights",
    "CANVAS_WIDTH",
    "CANVAS_HEIGHT",
]
