"""Pixel sinks that receive rendered frames.

The frame driver writes pixels through a small write-only interface:

    put_pixel(x, y, color)   one 8-bit RGB pixel in centered canvas coordinates
    present()                called once after every pixel of the frame

Centered canvas coordinates put (0, 0) in the middle of the canvas with y
pointing up; converting them to buffer rows and columns is the sink's job.

Example:
    >>> from src.whitted.preview.canvas import ImageCanvas
    >>> canvas = ImageCanvas(400, 400)
    >>> canvas.put_pixel(-200, 199, (255, 0, 0))  # top-left corner
    >>> canvas.pixels[0, 0]
    array([255,   0,   0], dtype=uint8)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

import numpy as np
import numpy.typing as npt

from src.whitted.preview.export import save_png_from_array

logger = logging.getLogger(__name__)

# 8-bit RGB color
Pixel = tuple[int, int, int]


class PixelSink(Protocol):
    """Write-only destination for rendered pixels."""

    width: int
    height: int

    def put_pixel(self, x: int, y: int, color: Pixel) -> None: ...

    def present(self) -> None: ...


class ImageCanvas:
    """Pixel sink backed by an 8-bit NumPy image.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        pixels: uint8 array of shape (height, width, 3), row 0 at the top.
        output_path: If set, present() writes the image there as a PNG.
        on_present: Optional callback receiving the pixel array on present().
        frames_presented: Number of times present() was called.
    """

    def __init__(
        self,
        width: int,
        height: int,
        output_path: str | Path | None = None,
        on_present: Callable[[npt.NDArray[np.uint8]], None] | None = None,
    ) -> None:
        """Create a black canvas.

        Raises:
            ValueError: If dimensions are not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.output_path = Path(output_path) if output_path is not None else None
        self.on_present = on_present
        self.pixels: npt.NDArray[np.uint8] = np.zeros((height, width, 3), dtype=np.uint8)
        self.frames_presented = 0

    def to_buffer_coordinates(self, x: int, y: int) -> tuple[int, int]:
        """Convert centered canvas coordinates to (row, column).

        Raises:
            IndexError: If the pixel lies outside the canvas.
        """
        column = x + self.width // 2
        row = self.height - 1 - (y + self.height // 2)
        if not (0 <= column < self.width and 0 <= row < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} canvas")
        return row, column

    def put_pixel(self, x: int, y: int, color: Pixel) -> None:
        """Write one pixel in centered canvas coordinates."""
        row, column = self.to_buffer_coordinates(x, y)
        self.pixels[row, column] = color

    def present(self) -> None:
        """Finish the frame: save it and/or hand it to the callback."""
        self.frames_presented += 1
        if self.output_path is not None:
            save_png_from_array(self.pixels, str(self.output_path))
            logger.info("Saved frame to %s", self.output_path)
        if self.on_present is not None:
            self.on_present(self.pixels)

    def __repr__(self) -> str:
        return f"ImageCanvas(width={self.width}, height={self.height})"
