"""Frame driver: one traced ray per pixel.

The Renderer owns a float color buffer the size of the canvas and fills it
with a single parallel Taichi kernel. Every pixel is independent: it reads the
scene and writes only its own buffer slot, so the pixel loop needs no locking.

Canvas coordinates are centered with y pointing up: buffer cell (i, j) is
canvas pixel (i - W//2, j - H//2). Primary rays start at the camera position,
pass through the viewport point of their pixel (rotated by the camera), and
only count intersections beyond the viewport (t > 1).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.renderer import Renderer
    >>> from src.whitted.preview.canvas import ImageCanvas
    >>> from src.whitted.scene.default_scene import create_default_scene
    >>>
    >>> scene, camera = create_default_scene()
    >>> renderer = Renderer(400, 400)
    >>> canvas = ImageCanvas(400, 400, output_path="scene.png")
    >>> renderer.render_to(canvas, scene, camera)
"""

import logging
import time

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.whitted.camera.camera import Camera, canvas_to_viewport
from src.whitted.core.config import PRIMARY_T_MIN, RenderOptions
from src.whitted.core.tracer import T_MAX, trace_ray
from src.whitted.preview.canvas import PixelSink
from src.whitted.preview.export import image_to_uint8

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# Maximum supported canvas dimensions
MAX_IMAGE_WIDTH = 4096
MAX_IMAGE_HEIGHT = 4096


@ti.data_oriented
class Renderer:
    """Renders scenes into a fixed-size color buffer.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        options: Render tunables (epsilon, reflection depth, viewport).
    """

    def __init__(self, width: int, height: int, options: RenderOptions | None = None) -> None:
        """Allocate the color buffer.

        Args:
            width: Canvas width in pixels (max MAX_IMAGE_WIDTH).
            height: Canvas height in pixels (max MAX_IMAGE_HEIGHT).
            options: Render tunables. Defaults to RenderOptions().

        Raises:
            ValueError: If dimensions are not positive or exceed the maximum.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({width}x{height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )

        self._width = width
        self._height = height
        self.options = options if options is not None else RenderOptions()

        # Indexed (i, j) with i = column from the left, j = row from the bottom
        self._color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

    @property
    def width(self) -> int:
        """Get the canvas width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the canvas height."""
        return self._height

    @ti.kernel
    def _render_kernel(
        self,
        scene: ti.template(),
        origin: vec3,
        rotation: tm.mat3,
        viewport_width: ti.f32,
        viewport_height: ti.f32,
        projection_plane_distance: ti.f32,
        recursion_depth: ti.i32,
        epsilon: ti.f32,
    ):
        """Trace one primary ray per buffer cell."""
        for i, j in self._color_buffer:
            x = ti.cast(i - self._width // 2, ti.f32)
            y = ti.cast(j - self._height // 2, ti.f32)
            view_direction = canvas_to_viewport(
                x,
                y,
                ti.cast(self._width, ti.f32),
                ti.cast(self._height, ti.f32),
                viewport_width,
                viewport_height,
                projection_plane_distance,
            )
            direction = rotation @ view_direction
            self._color_buffer[i, j] = trace_ray(
                scene, origin, direction, PRIMARY_T_MIN, T_MAX, recursion_depth, epsilon
            )

    def render(self, scene, camera: Camera | None = None) -> npt.NDArray[np.float32]:
        """Render a frame.

        The kernel is compiled once per Scene instance and reused for every
        later frame of that scene, whatever the camera. Keep one Renderer
        across frames; an animation that builds a new Scene each frame pays
        one compilation per new Scene.

        Args:
            scene: The Scene to render. Read-only for the whole frame.
            camera: Camera position and rotation. Defaults to Camera().

        Returns:
            Float image of shape (height, width, 3), row 0 at the top, colors
            in the 0-255 range and not yet clamped.
        """
        if camera is None:
            camera = Camera()

        start_time = time.perf_counter()
        position = camera.position
        options = self.options

        self._render_kernel(
            scene,
            vec3(position[0], position[1], position[2]),
            ti.Matrix(camera.rotation_matrix().tolist()),
            options.viewport_width,
            options.viewport_height,
            options.projection_plane_distance,
            options.max_reflection_depth,
            options.epsilon,
        )

        image = self.get_image_numpy()
        logger.info(
            "Rendered %dx%d frame in %.3fs",
            self._width,
            self._height,
            time.perf_counter() - start_time,
        )
        return image

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the last rendered frame as a NumPy array.

        Returns:
            Float image of shape (height, width, 3), row 0 at the top.
        """
        # Transpose from (width, height, 3) to (height, width, 3), then put
        # the top row first
        image = np.transpose(self._color_buffer.to_numpy(), (1, 0, 2))
        return np.flipud(image).astype(np.float32)

    def render_to(self, sink: PixelSink, scene, camera: Camera | None = None) -> None:
        """Render a frame and write every pixel to a pixel sink.

        Pixels are written in centered canvas coordinates (y up) as 8-bit
        RGB tuples, then sink.present() is called once.

        Args:
            sink: Destination for the pixels.
            scene: The Scene to render.
            camera: Camera position and rotation. Defaults to Camera().
        """
        pixels = image_to_uint8(self.render(scene, camera))

        half_width = self._width // 2
        half_height = self._height // 2
        for row in range(self._height):
            y = self._height - 1 - row - half_height
            for column in range(self._width):
                r, g, b = pixels[row, column]
                sink.put_pixel(column - half_width, y, (int(r), int(g), int(b)))

        sink.present()

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return f"Renderer(width={self.width}, height={self.height}, options={self.options})"


def render_frame(
    scene,
    camera: Camera,
    sink: PixelSink,
    options: RenderOptions | None = None,
) -> None:
    """Render one frame of a scene into a pixel sink.

    The canvas size is taken from the sink's width and height attributes.

    Args:
        scene: The Scene to render.
        camera: Camera position and rotation.
        sink: Destination for the pixels.
        options: Render tunables. Defaults to RenderOptions().
    """
    renderer = Renderer(sink.width, sink.height, options)
    renderer.render_to(sink, scene, camera)
