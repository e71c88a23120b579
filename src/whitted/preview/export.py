"""Image export utilities for rendered frames.

Rendered colors are floating point RGB in the 0-255 range and may overshoot
it where several lights add up. Export clamps them (it does not normalize)
and rounds to 8-bit.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.whitted.preview.export import save_png
    >>> from src.whitted.core.renderer import Renderer
    >>>
    >>> renderer = Renderer(400, 400)
    >>> renderer.render(scene, camera)
    >>> save_png(renderer, "output.png")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from src.whitted.core.renderer import Renderer


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a float RGB image in the 0-255 range to uint8.

    NaN channels become 0, values are clamped to [0, 255] and rounded to the
    nearest integer.

    Args:
        image: Float image array of shape (H, W, 3).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    cleaned = np.nan_to_num(image.astype(np.float64), nan=0.0, posinf=255.0, neginf=0.0)
    return np.rint(np.clip(cleaned, 0.0, 255.0)).astype(np.uint8)


def save_png_from_array(image: npt.NDArray, filepath: str) -> None:
    """Save an RGB array as a PNG file.

    Args:
        image: Image array of shape (H, W, 3). uint8 arrays are written as-is,
            float arrays are converted with image_to_uint8() first.
        filepath: Output file path (should end in .png).
    """
    if image.dtype != np.uint8:
        image = image_to_uint8(image)

    pil_image = PILImage.fromarray(image)
    pil_image.save(filepath)


def save_png(renderer: Renderer, filepath: str) -> None:
    """Save the renderer's last frame as a PNG file.

    Args:
        renderer: The Renderer whose color buffer to save.
        filepath: Output file path (should end in .png).
    """
    save_png_from_array(renderer.get_image_numpy(), filepath)

