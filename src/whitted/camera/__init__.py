"""Camera module for view and ray generation.

Components:
    camera: Camera position/rotation and canvas-to-viewport mapping

Camera responsibilities:
    - Map centered canvas coordinates (y up) to viewport points
    - Rotate camera-space directions into world space (Rz @ Ry @ Rx)
"""

from .camera import ROTATION_STEP, Camera, canvas_to_viewport

__all__ = [
    "Camera",
    "canvas_to_viewport",
    "ROTATION_STEP",
]
