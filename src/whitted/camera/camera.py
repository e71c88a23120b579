"""Camera placement and pixel-to-viewport mapping.

The camera sits at a world position and looks down +Z through a viewport of
viewport_width x viewport_height world units placed projection_plane_distance
in front of it. A canvas pixel (x, y), measured from the canvas center with
y pointing up, maps to the viewport point

    (x * Vw / Cw, y * Vh / Ch, d)

which is also the camera-space ray direction. The camera's rotation is then
applied to that direction. Rotations are applied about X first, then Y, then
Z, i.e. the world-space direction is Rz @ Ry @ Rx @ direction.

Example:
    >>> import math
    >>> from src.whitted.camera.camera import Camera
    >>> camera = Camera(position=(0.0, 0.0, 0.0), rotation_y=math.pi / 16)
    >>> matrix = camera.rotation_matrix()  # 3x3 NumPy array
"""

import math
from dataclasses import dataclass, replace

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

# Rotation step used by the interactive controls of the reference viewer
ROTATION_STEP = math.pi / 16


@dataclass(frozen=True)
class Camera:
    """A camera with a position and an XYZ rotation.

    Attributes:
        position: Camera position in world space (x, y, z).
        rotation_x: Rotation about the X axis in radians (pitch).
        rotation_y: Rotation about the Y axis in radians (yaw).
        rotation_z: Rotation about the Z axis in radians (roll).
    """

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation_x: float = 0.0
    rotation_y: float = 0.0
    rotation_z: float = 0.0

    def rotation_matrix(self) -> npt.NDArray[np.float64]:
        """Compute the 3x3 world-from-camera rotation matrix Rz @ Ry @ Rx."""
        cx, sx = math.cos(self.rotation_x), math.sin(self.rotation_x)
        cy, sy = math.cos(self.rotation_y), math.sin(self.rotation_y)
        cz, sz = math.cos(self.rotation_z), math.sin(self.rotation_z)

        rot_x = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]])
        rot_y = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
        rot_z = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]])

        return rot_z @ rot_y @ rot_x

    def rotated(self, axis: str, delta: float) -> "Camera":
        """Return a copy of the camera rotated by delta radians about an axis.

        Args:
            axis: One of "x", "y" or "z".
            delta: Angle to add, in radians.

        Raises:
            ValueError: If axis is not "x", "y" or "z".
        """
        if axis == "x":
            return replace(self, rotation_x=self.rotation_x + delta)
        if axis == "y":
            return replace(self, rotation_y=self.rotation_y + delta)
        if axis == "z":
            return replace(self, rotation_z=self.rotation_z + delta)
        raise ValueError(f"Unknown rotation axis: {axis}")


@ti.func
def canvas_to_viewport(
    x: ti.f32,
    y: ti.f32,
    canvas_width: ti.f32,
    canvas_height: ti.f32,
    viewport_width: ti.f32,
    viewport_height: ti.f32,
    projection_plane_distance: ti.f32,
) -> vec3:
    """Map centered canvas coordinates to a camera-space ray direction.

    Args:
        x: Horizontal canvas coordinate, 0 at the center, increasing right.
        y: Vertical canvas coordinate, 0 at the center, increasing up.
        canvas_width: Canvas width in pixels.
        canvas_height: Canvas height in pixels.
        viewport_width: Viewport width in world units.
        viewport_height: Viewport height in world units.
        projection_plane_distance: Distance from camera to viewport.

    Returns:
        The point on the viewport, which is the unrotated ray direction.
    """
    return vec3(
        x * viewport_width / canvas_width,
        y * viewport_height / canvas_height,
        projection_plane_distance,
    )
