"""Matplotlib-based preview display for rendered frames.

Example:
    >>> from src.whitted.core.renderer import Renderer
    >>> from src.whitted.preview.display import show_image
    >>>
    >>> image = Renderer(400, 400).render(scene, camera)
    >>> show_image(image, title="400x400")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from src.whitted.preview.export import image_to_uint8


def show_image(
    image: npt.NDArray,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display an RGB image as a Matplotlib figure.

    Args:
        image: Image of shape (H, W, 3), either uint8 or float in the
            0-255 range.
        title: Optional figure title.
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    if image.dtype != np.uint8:
        image = image_to_uint8(image)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(image)
    ax.axis("off")
    if title is not None:
        ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)

