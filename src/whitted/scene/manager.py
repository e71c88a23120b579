"""Immutable scene of spheres and lights.

The Scene validates its sphere and light descriptions once, at construction,
then uploads them into Taichi fields owned by the instance. Tracing kernels
receive the scene explicitly (as a ti.template() argument) and only read it;
there is no module-level scene state. To animate, build a new Scene per frame
(each new Scene triggers one kernel compilation, see Scene).

The scene also round-trips through plain dictionaries (SceneConfig) so it can
be stored as JSON or built from user input.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.lights import LightInfo
    >>> from src.whitted.scene.manager import Scene, SphereInfo
    >>> scene = Scene(
    ...     spheres=[SphereInfo(center=(0, -1, 3), radius=1, color=(255, 0, 0), specular=500)],
    ...     lights=[LightInfo.ambient(0.2), LightInfo.point(0.6, (2, 1, 0))],
    ...     background_color=(255, 255, 255),
    ... )
    >>> # Pass `scene` to kernels annotated with ti.template()
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import taichi as ti
import taichi.math as tm

from src.whitted.geometry.sphere import Sphere
from src.whitted.scene.lights import Light, LightInfo

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# Specular value meaning "no highlight"
NO_SPECULAR = -1.0

DEFAULT_BACKGROUND_COLOR = (255.0, 255.0, 255.0)


def _as_vector(value: Sequence[float], name: str) -> tuple[float, float, float]:
    """Convert a 3-component sequence to a tuple of floats."""
    if len(value) != 3:
        raise ValueError(f"{name} must have 3 components, got {value}")
    vector = (float(value[0]), float(value[1]), float(value[2]))
    if not all(math.isfinite(component) for component in vector):
        raise ValueError(f"{name} must be finite, got {vector}")
    return vector


@dataclass(frozen=True)
class SphereInfo:
    """Description of a sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere, must be positive.
        color: Surface color as RGB in the 0-255 range.
        specular: Shininess exponent (> 0), or -1 for a matte surface.
        reflective: Fraction of light mirror-reflected, in [0, 1].
    """

    center: tuple[float, float, float]
    radius: float
    color: tuple[float, float, float]
    specular: float = NO_SPECULAR
    reflective: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _as_vector(self.center, "center"))
        object.__setattr__(self, "color", _as_vector(self.color, "color"))
        for name in ("radius", "specular", "reflective"):
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise ValueError(f"Sphere {name} must be finite, got {value}")
            object.__setattr__(self, name, value)

        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        if self.specular != NO_SPECULAR and self.specular <= 0.0:
            raise ValueError(f"Sphere specular must be -1 or positive, got {self.specular}")
        if self.reflective < 0.0 or self.reflective > 1.0:
            raise ValueError(f"Sphere reflective must be in [0, 1], got {self.reflective}")
        for i, component in enumerate(self.color):
            if component < 0.0:
                raise ValueError(
                    f"Sphere color component {i} must be non-negative, got {component}"
                )

    def to_dict(self) -> dict[str, Any]:
        """Export the sphere to a plain dictionary."""
        return {
            "center": list(self.center),
            "radius": self.radius,
            "color": list(self.color),
            "specular": self.specular,
            "reflective": self.reflective,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SphereInfo":
        """Build a sphere from a dictionary produced by to_dict().

        "specular" and "reflective" are optional and default to a matte,
        non-reflective surface.

        Raises:
            ValueError: If center, radius or color is missing or a value is
                invalid.
        """
        for key in ("center", "radius", "color"):
            if key not in data:
                raise ValueError(f"Sphere is missing required key '{key}'")
        return cls(
            center=tuple(data["center"]),
            radius=data["radius"],
            color=tuple(data["color"]),
            specular=data.get("specular", NO_SPECULAR),
            reflective=data.get("reflective", 0.0),
        )


@dataclass
class SceneConfig:
    """Plain-data scene description for serialization.

    Attributes:
        spheres: List of sphere dictionaries.
        lights: List of light dictionaries (tagged by "type").
        background_color: RGB background color in the 0-255 range.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    background_color: list[float] = field(default_factory=lambda: list(DEFAULT_BACKGROUND_COLOR))


@ti.data_oriented
class Scene:
    """Read-only scene of spheres and lights stored in Taichi fields.

    Sphere data uses a Structure-of-Arrays layout, one field per attribute;
    lights are stored the same way with their type tag. Field sizes are fixed
    at construction.

    Kernels take the scene as a ti.template() argument, so each Scene
    instance compiles its own copy of every kernel it is passed to. Building
    a new Scene per frame therefore costs one kernel compilation per frame;
    re-rendering the same Scene reuses the compiled kernel.

    Attributes:
        sphere_count: Number of spheres (compile-time constant in kernels).
        light_count: Number of lights (compile-time constant in kernels).
    """

    def __init__(
        self,
        spheres: Sequence[SphereInfo],
        lights: Sequence[LightInfo],
        background_color: Sequence[float] = DEFAULT_BACKGROUND_COLOR,
    ) -> None:
        """Validate and upload a scene.

        Args:
            spheres: Spheres in scene order.
            lights: Lights in scene order.
            background_color: RGB color returned for rays that hit nothing.

        Raises:
            ValueError: If the background color is not a finite, non-negative
                RGB triple.
            TypeError: If a sphere or light is not a SphereInfo / LightInfo.
        """
        for sphere in spheres:
            if not isinstance(sphere, SphereInfo):
                raise TypeError(f"Expected SphereInfo, got {type(sphere).__name__}")
        for light in lights:
            if not isinstance(light, LightInfo):
                raise TypeError(f"Expected LightInfo, got {type(light).__name__}")

        background = _as_vector(background_color, "background_color")
        if min(background) < 0.0:
            raise ValueError(f"background_color must be non-negative, got {background}")

        self._spheres = tuple(spheres)
        self._lights = tuple(lights)
        self._background_color = background

        self.sphere_count = len(self._spheres)
        self.light_count = len(self._lights)

        # Taichi fields cannot be empty, keep at least one slot
        sphere_slots = max(self.sphere_count, 1)
        light_slots = max(self.light_count, 1)

        self.sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=sphere_slots)
        self.sphere_radii = ti.field(dtype=ti.f32, shape=sphere_slots)
        self.sphere_colors = ti.Vector.field(3, dtype=ti.f32, shape=sphere_slots)
        self.sphere_speculars = ti.field(dtype=ti.f32, shape=sphere_slots)
        self.sphere_reflectives = ti.field(dtype=ti.f32, shape=sphere_slots)

        self.light_kinds = ti.field(dtype=ti.i32, shape=light_slots)
        self.light_intensities = ti.field(dtype=ti.f32, shape=light_slots)
        self.light_vectors = ti.Vector.field(3, dtype=ti.f32, shape=light_slots)

        self.background = ti.Vector.field(3, dtype=ti.f32, shape=())

        for idx, sphere in enumerate(self._spheres):
            self.sphere_centers[idx] = sphere.center
            self.sphere_radii[idx] = sphere.radius
            self.sphere_colors[idx] = sphere.color
            self.sphere_speculars[idx] = sphere.specular
            self.sphere_reflectives[idx] = sphere.reflective

        for idx, light in enumerate(self._lights):
            self.light_kinds[idx] = int(light.kind)
            self.light_intensities[idx] = light.intensity
            self.light_vectors[idx] = light.vector

        self.background[None] = background

        logger.debug(
            "Scene uploaded: %d spheres, %d lights, background=%s",
            self.sphere_count,
            self.light_count,
            background,
        )

    # =========================================================================
    # Python-side accessors
    # =========================================================================

    @property
    def spheres(self) -> tuple[SphereInfo, ...]:
        """The spheres in scene order."""
        return self._spheres

    @property
    def lights(self) -> tuple[LightInfo, ...]:
        """The lights in scene order."""
        return self._lights

    @property
    def background_color(self) -> tuple[float, float, float]:
        """The background color as an RGB tuple."""
        return self._background_color

    # =========================================================================
    # Kernel-side accessors
    # =========================================================================

    @ti.func
    def get_sphere(self, index: ti.i32) -> Sphere:
        """Assemble the Sphere record at an index."""
        return Sphere(
            center=self.sphere_centers[index],
            radius=self.sphere_radii[index],
            color=self.sphere_colors[index],
            specular=self.sphere_speculars[index],
            reflective=self.sphere_reflectives[index],
        )

    @ti.func
    def get_light(self, index: ti.i32) -> Light:
        """Assemble the Light record at an index."""
        return Light(
            kind=self.light_kinds[index],
            intensity=self.light_intensities[index],
            vector=self.light_vectors[index],
        )

    @ti.func
    def get_background(self) -> vec3:
        """Color for rays that escape the scene."""
        return self.background[None]

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        return SceneConfig(
            spheres=[sphere.to_dict() for sphere in self._spheres],
            lights=[light.to_dict() for light in self._lights],
            background_color=list(self._background_color),
        )

    @classmethod
    def from_config(cls, config: SceneConfig) -> "Scene":
        """Build a scene from a configuration object.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        spheres = [SphereInfo.from_dict(data) for data in config.spheres]
        lights = [LightInfo.from_dict(data) for data in config.lights]
        return cls(spheres, lights, config.background_color)

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "spheres": config.spheres,
            "lights": config.lights,
            "background_color": config.background_color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scene":
        """Build a scene from a dictionary produced by to_dict()."""
        config = SceneConfig(
            spheres=data.get("spheres", []),
            lights=data.get("lights", []),
            background_color=data.get("background_color", list(DEFAULT_BACKGROUND_COLOR)),
        )
        return cls.from_config(config)

    def __repr__(self) -> str:
        return (
            f"Scene(spheres={self.sphere_count}, lights={self.light_count}, "
            f"background_color={self._background_color})"
        )
