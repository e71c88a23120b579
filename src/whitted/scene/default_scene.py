"""Reference scene configuration.

This module provides a factory for the classic three-spheres-on-a-floor test
scene: a red, a blue and a green sphere resting above a huge yellow sphere
that acts as the ground, lit by one ambient, one point and one directional
light against a white background.

The coordinate system places the camera at the origin looking toward +Z,
with +Y up and +X to the right.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.default_scene import create_default_scene
    >>>
    >>> scene, camera = create_default_scene()
    >>> # Now render using the scene and camera
"""

from dataclasses import dataclass

from src.whitted.camera.camera import Camera
from src.whitted.scene.lights import LightInfo
from src.whitted.scene.manager import Scene, SphereInfo

# =============================================================================
# Scene Constants
# =============================================================================

# Canvas size used by the reference renders
CANVAS_WIDTH = 400
CANVAS_HEIGHT = 400

RED = (255.0, 0.0, 0.0)
GREEN = (0.0, 255.0, 0.0)
BLUE = (0.0, 0.0, 255.0)
YELLOW = (255.0, 255.0, 0.0)
WHITE = (255.0, 255.0, 255.0)


@dataclass
class DefaultSceneParams:
    """Tweakable parameters of the reference scene.

    Attributes:
        ambient_intensity: Intensity of the ambient light.
        point_intensity: Intensity of the point light.
        point_position: World position of the point light.
        directional_intensity: Intensity of the directional light.
        directional_direction: Direction toward the directional light.
        background_color: Color of rays that escape the scene.
        reflections: If False, every sphere is made non-reflective.
    """

    ambient_intensity: float = 0.2
    point_intensity: float = 0.6
    point_position: tuple[float, float, float] = (2.0, 1.0, 0.0)
    directional_intensity: float = 0.2
    directional_direction: tuple[float, float, float] = (1.0, 4.0, 4.0)
    background_color: tuple[float, float, float] = WHITE
    reflections: bool = True


def default_spheres(reflections: bool = True) -> list[SphereInfo]:
    """The four spheres of the reference scene, in scene order."""
    # (center, radius, color, specular, reflective)
    layout = [
        ((0.0, -1.0, 3.0), 1.0, RED, 500.0, 0.2),  # Shiny
        ((2.0, 0.0, 4.0), 1.0, BLUE, 500.0, 0.3),  # Shiny
        ((-2.0, 0.0, 4.0), 1.0, GREEN, 10.0, 0.4),  # Less shiny
        ((0.0, -5001.0, 0.0), 5000.0, YELLOW, 1000.0, 0.5),  # Very shiny floor
    ]
    return [
        SphereInfo(
            center=center,
            radius=radius,
            color=color,
            specular=specular,
            reflective=reflective if reflections else 0.0,
        )
        for center, radius, color, specular, reflective in layout
    ]


def default_lights(params: DefaultSceneParams | None = None) -> list[LightInfo]:
    """The three lights of the reference scene."""
    if params is None:
        params = DefaultSceneParams()
    return [
        LightInfo.ambient(params.ambient_intensity),
        LightInfo.point(params.point_intensity, params.point_position),
        LightInfo.directional(params.directional_intensity, params.directional_direction),
    ]


def create_default_scene(
    params: DefaultSceneParams | None = None,
) -> tuple[Scene, Camera]:
    """Create the reference scene and a camera at the origin.

    Args:
        params: Optional DefaultSceneParams. If None, uses defaults.

    Returns:
        A tuple of (Scene, Camera).
    """
    if params is None:
        params = DefaultSceneParams()

    scene = Scene(
        spheres=default_spheres(reflections=params.reflections),
        lights=default_lights(params),
        background_color=params.background_color,
    )
    return scene, Camera()
