"""Light sources as a tagged union.

A light is one of three variants sharing an intensity:

    AMBIENT      intensity only, lights every point unconditionally
    POINT        intensity + world position
    DIRECTIONAL  intensity + direction pointing toward the (infinitely far) light

Both the Python-side description (LightInfo) and the GPU-side record (Light)
carry the variant as an integer tag plus a single vector payload whose meaning
depends on the tag. The lighting evaluator dispatches on the tag.

Example:
    >>> from src.whitted.scene.lights import LightInfo
    >>> lights = [
    ...     LightInfo.ambient(0.2),
    ...     LightInfo.point(0.6, position=(2.0, 1.0, 0.0)),
    ...     LightInfo.directional(0.2, direction=(1.0, 4.0, 4.0)),
    ... ]
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3


class LightType(IntEnum):
    """Enumeration of light variants.

    The numeric values are the tags stored in GPU-side Light records.
    """

    AMBIENT = 0
    POINT = 1
    DIRECTIONAL = 2


@ti.dataclass
class Light:
    """GPU-side light record.

    Attributes:
        kind: The LightType tag.
        intensity: Scalar light intensity (non-negative).
        vector: Position for POINT lights, direction toward the light for
            DIRECTIONAL lights, unused for AMBIENT lights.
    """

    kind: ti.i32
    intensity: ti.f32
    vector: vec3


@dataclass(frozen=True)
class LightInfo:
    """Description of a light in the scene.

    Prefer the ambient(), point() and directional() constructors over
    building instances directly.

    Attributes:
        kind: The light variant.
        intensity: Scalar intensity, must be >= 0.
        vector: Position (POINT) or direction toward the light (DIRECTIONAL).
            Always (0, 0, 0) for AMBIENT lights.
    """

    kind: LightType
    intensity: float
    vector: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        try:
            kind = LightType(self.kind)
        except ValueError:
            raise ValueError(f"Unknown light type: {self.kind}") from None
        object.__setattr__(self, "kind", kind)

        intensity = float(self.intensity)
        if not math.isfinite(intensity):
            raise ValueError(f"Light intensity must be finite, got {intensity}")
        if intensity < 0.0:
            raise ValueError(f"Light intensity must be non-negative, got {self.intensity}")
        object.__setattr__(self, "intensity", intensity)

        if len(self.vector) != 3:
            raise ValueError(f"Light vector must have 3 components, got {self.vector}")
        vector = (float(self.vector[0]), float(self.vector[1]), float(self.vector[2]))
        if not all(math.isfinite(component) for component in vector):
            raise ValueError(f"Light vector must be finite, got {vector}")
        object.__setattr__(self, "vector", vector)

        if kind == LightType.DIRECTIONAL and vector == (0.0, 0.0, 0.0):
            raise ValueError("Directional light direction must be non-zero")

    @classmethod
    def ambient(cls, intensity: float) -> "LightInfo":
        """Create an ambient light."""
        return cls(LightType.AMBIENT, intensity)

    @classmethod
    def point(cls, intensity: float, position: tuple[float, float, float]) -> "LightInfo":
        """Create a point light at a world position."""
        return cls(LightType.POINT, intensity, position)

    @classmethod
    def directional(
        cls, intensity: float, direction: tuple[float, float, float]
    ) -> "LightInfo":
        """Create a directional light.

        Args:
            intensity: Scalar intensity.
            direction: Direction from the scene toward the light source (not
                the direction the light travels). Need not be normalized.
        """
        return cls(LightType.DIRECTIONAL, intensity, direction)

    def to_dict(self) -> dict[str, Any]:
        """Export the light to a plain dictionary."""
        data: dict[str, Any] = {
            "type": self.kind.name.lower(),
            "intensity": self.intensity,
        }
        if self.kind == LightType.POINT:
            data["position"] = list(self.vector)
        elif self.kind == LightType.DIRECTIONAL:
            data["direction"] = list(self.vector)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LightInfo":
        """Build a light from a dictionary produced by to_dict().

        Every light needs "type" and "intensity"; point lights also need
        "position" and directional lights "direction".

        Raises:
            ValueError: If the light type is unknown, a required key is
                missing or values are invalid.
        """
        if "type" not in data:
            raise ValueError("Light is missing required key 'type'")
        light_type = str(data["type"]).lower()
        vector_keys = {"ambient": None, "point": "position", "directional": "direction"}
        if light_type not in vector_keys:
            raise ValueError(f"Unknown light type: {light_type}")

        vector_key = vector_keys[light_type]
        for key in ("intensity", vector_key):
            if key is not None and key not in data:
                raise ValueError(f"{light_type.capitalize()} light is missing required key '{key}'")

        intensity = data["intensity"]
        if light_type == "ambient":
            return cls.ambient(intensity)
        if light_type == "point":
            return cls.point(intensity, tuple(data["position"]))
        return cls.directional(intensity, tuple(data["direction"]))
