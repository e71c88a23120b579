"""Preview module for output and visualization.

Components:
    canvas: Pixel sinks (PixelSink protocol, NumPy-backed ImageCanvas)
    export: 8-bit conversion and PNG export
    display: Matplotlib-based preview

Example:
    >>> from src.whitted.preview import ImageCanvas, show_image
    >>> canvas = ImageCanvas(400, 400, output_path="output.png")
    >>> renderer.render_to(canvas, scene, camera)
    >>> show_image(canvas.pixels)
"""

from src.whitted.preview.canvas import ImageCanvas, Pixel, PixelSink
from src.whitted.preview.display import show_image
from src.whitted.preview.export import (
    image_to_uint8,
    save_png,
    save_png_from_array,
)

__all__ = [
    # Pixel sinks
    "PixelSink",
    "ImageCanvas",
    "Pixel",
    # Display functions
    "show_image",
    # Export functions
    "save_png",
    "save_png_from_array",
    "image_to_uint8",
]
