"""Render driver: run the shading engine for every pixel of a scene.

render() uploads the scene into the Taichi storage fields, then launches a
kernel that casts one primary ray per pixel in parallel. Each pixel writes
only its own cell of the output array, so no synchronisation is needed.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from chibiray.core.render import render
    >>> from chibiray.scene.showcase import create_showcase_scene
    >>> image = render(create_showcase_scene(width=128, height=128))
    >>> image[64, 64]
"""

import logging
import time

import numpy as np
import taichi as ti

from chibiray.core.image import ImageBuffer
from chibiray.core.integrator import cast_ray
from chibiray.core.ray import create_prime_ray, vec3
from chibiray.core.vector import Color
from chibiray.scene.description import Scene
from chibiray.scene.manager import get_fov, get_image_height, get_image_width, upload_scene

_LOGGER: logging.Logger = logging.getLogger(__name__)


@ti.func
def _shade_pixel(x: ti.i32, y: ti.i32) -> vec3:
    ray = create_prime_ray(x, y, get_image_width(), get_image_height(), get_fov())
    return cast_ray(ray, 0)


@ti.kernel
def _render_kernel(output: ti.types.ndarray(dtype=ti.f32, ndim=3)):
    """Fill output[y, x, :] with the color of every pixel."""
    for y, x in ti.ndrange(output.shape[0], output.shape[1]):
        color = _shade_pixel(x, y)
        for c in ti.static(range(3)):
            output[y, x, c] = ti.cast(color[c], ti.f32)


@ti.kernel
def _render_pixel_kernel(x: ti.i32, y: ti.i32, output: ti.types.ndarray(dtype=ti.f32, ndim=1)):
    color = _shade_pixel(x, y)
    for c in ti.static(range(3)):
        output[c] = ti.cast(color[c], ti.f32)


def render(scene: Scene) -> ImageBuffer:
    """Render a scene.

    Args:
        scene: The scene to render.

    Returns:
        The rendered image, width x height pixels.

    Raises:
        RuntimeError: If the scene exceeds the Taichi storage capacity.
    """
    upload_scene(scene)

    output = np.zeros((scene.height, scene.width, 3), dtype=np.float32)
    start = time.perf_counter()
    _render_kernel(output)
    ti.sync()
    elapsed = time.perf_counter() - start

    _LOGGER.info("Rendered %dx%d image in %.3f s", scene.width, scene.height, elapsed)
    return ImageBuffer(output)


def render_pixel(scene: Scene, x: int, y: int) -> Color:
    """Render a single pixel of a scene.

    Args:
        scene: The scene to render.
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).

    Returns:
        The pixel color.

    Raises:
        ValueError: If (x, y) lies outside the image.
    """
    if not (0 <= x < scene.width and 0 <= y < scene.height):
        raise ValueError(f"Pixel ({x}, {y}) is outside a {scene.width}x{scene.height} image")

    upload_scene(scene)
    output = np.zeros(3, dtype=np.float32)
    _render_pixel_kernel(x, y, output)
    return Color(float(output[0]), float(output[1]), float(output[2]))
