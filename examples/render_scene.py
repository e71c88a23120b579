#!/usr/bin/env python3
"""Render the reference sphere scene.

This script demonstrates end-to-end rendering of the three-spheres-on-a-floor
scene: it builds the scene, places the camera, traces one ray per pixel and
writes the frame to a PNG file.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH           Image width in pixels (default: 400)
    --height HEIGHT         Image height in pixels (default: 400)
    --depth DEPTH           Reflection recursion depth (default: 3)
    --epsilon EPSILON       Shadow/reflection self-intersection offset (default: 0.001)
    --rotate-x STEPS        Pitch in steps of pi/16 (default: 0)
    --rotate-y STEPS        Yaw in steps of pi/16 (default: 0)
    --rotate-z STEPS        Roll in steps of pi/16 (default: 0)
    --no-reflections        Make every sphere non-reflective
    --output OUTPUT         Output file path (default: spheres.png)
    --show                  Open a Matplotlib preview after rendering
    --quiet                 Suppress progress output

Example:
    python -m examples.render_scene --width 256 --height 256 --rotate-y 1
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the reference sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels (default: 400)")
    parser.add_argument(
        "--height", type=int, default=400, help="Image height in pixels (default: 400)"
    )
    parser.add_argument(
        "--depth", type=int, default=3, help="Reflection recursion depth (default: 3)"
    )
    parser.add_argument(
        "--epsilon",
        type=float,
        default=1e-3,
        help="Shadow/reflection self-intersection offset (default: 0.001)",
    )
    for axis in ("x", "y", "z"):
        parser.add_argument(
            f"--rotate-{axis}",
            type=int,
            default=0,
            metavar="STEPS",
            help=f"Camera rotation about {axis.upper()} in steps of pi/16 (default: 0)",
        )
    parser.add_argument(
        "--no-reflections",
        action="store_true",
        help="Make every sphere non-reflective",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open a Matplotlib preview after rendering",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    width: int = 400,
    height: int = 400,
    depth: int = 3,
    epsilon: float = 1e-3,
    rotation_steps: tuple[int, int, int] = (0, 0, 0),
    reflections: bool = True,
    output_path: str = "spheres.png",
    show: bool = False,
    quiet: bool = False,
) -> Path:
    """Render the reference scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        depth: Reflection recursion depth.
        epsilon: Self-intersection offset for secondary rays.
        rotation_steps: Camera rotation about X, Y, Z in steps of pi/16.
        reflections: If False, all spheres are rendered matte.
        output_path: Output file path (PNG).
        show: If True, open a Matplotlib preview after saving.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.whitted.camera.camera import ROTATION_STEP
    from src.whitted.core.config import RenderOptions
    from src.whitted.core.renderer import Renderer
    from src.whitted.preview.canvas import ImageCanvas
    from src.whitted.scene.default_scene import DefaultSceneParams, create_default_scene

    if not quiet:
        print(f"Creating sphere scene ({width}x{height})...")

    scene, camera = create_default_scene(DefaultSceneParams(reflections=reflections))
    for axis, steps in zip(("x", "y", "z"), rotation_steps):
        if steps:
            camera = camera.rotated(axis, steps * ROTATION_STEP)

    options = RenderOptions(epsilon=epsilon, max_reflection_depth=depth)
    renderer = Renderer(width, height, options)

    output_file = Path(output_path)
    canvas = ImageCanvas(width, height, output_path=output_file)

    if not quiet:
        print(f"Rendering with reflection depth {depth}...")

    start_time = time.time()
    renderer.render_to(canvas, scene, camera)
    total_time = time.time() - start_time

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if show:
        from src.whitted.preview.display import show_image

        show_image(canvas.pixels, title=f"{width}x{height}, depth {depth}")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Initialize Taichi
    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        if not args.quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_scene(
            width=args.width,
            height=args.height,
            depth=args.depth,
            epsilon=args.epsilon,
            rotation_steps=(args.rotate_x, args.rotate_y, args.rotate_z),
            reflections=not args.no_reflections,
            output_path=args.output,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
