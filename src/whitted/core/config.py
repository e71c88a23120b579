"""Render configuration.

Collects the tunables of a render pass in one dataclass: the self-intersection
epsilon used for shadow and reflection rays, the reflection recursion budget,
and the viewport that maps canvas pixels to camera-space ray directions.

Example:
    >>> from src.whitted.core.config import RenderOptions
    >>> options = RenderOptions(max_reflection_depth=5, epsilon=1e-3)
"""

import math
from dataclasses import asdict, dataclass
from typing import Any

# Offset used when casting shadow and reflection rays off a surface
EPSILON = 1e-3

# Number of mirror bounces traced after the primary hit
MAX_REFLECTION_DEPTH = 3

# Primary rays start at the projection plane (t = 1), not at the camera
PRIMARY_T_MIN = 1.0


@dataclass(frozen=True)
class RenderOptions:
    """Tunables for a render pass.

    Attributes:
        epsilon: Minimum ray parameter for shadow and reflection rays. Keeps
            secondary rays from re-hitting the surface they start on. Lower
            it when rendering with higher floating-point precision.
        max_reflection_depth: Recursion budget for mirror reflection.
            0 disables reflection entirely.
        viewport_width: Width of the viewport in world units.
        viewport_height: Height of the viewport in world units.
        projection_plane_distance: Distance from the camera to the viewport.
    """

    epsilon: float = EPSILON
    max_reflection_depth: int = MAX_REFLECTION_DEPTH
    viewport_width: float = 1.0
    viewport_height: float = 1.0
    projection_plane_distance: float = 1.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.epsilon) or self.epsilon <= 0.0:
            raise ValueError(f"epsilon must be positive and finite, got {self.epsilon}")
        if self.max_reflection_depth < 0:
            raise ValueError(
                f"max_reflection_depth must be non-negative, got {self.max_reflection_depth}"
            )
        for name in ("viewport_width", "viewport_height", "projection_plane_distance"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{name} must be positive and finite, got {value}")

    def to_dict(self) -> dict[str, Any]:
        """Export the options to a dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderOptions":
        """Build options from a dictionary, ignoring missing keys.

        Raises:
            ValueError: If a key is not a known option or a value is invalid.
        """
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown render options: {sorted(unknown)}")
        return cls(**data)
