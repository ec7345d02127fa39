"""Image export utilities for rendered images.

Supported formats:
    - PPM (ASCII P3, 8 bits per channel)
    - PNG (8-bit via Pillow)

Both formats store gamma encoded values; the gamma defaults to 2.2.

Example:
    >>> from chibiray.preview.export import save_image
    >>> image = render(scene)
    >>> save_image(image, "output.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from chibiray.core.image import ImageBuffer
from chibiray.preview.display import apply_gamma

_LOGGER: logging.Logger = logging.getLogger(__name__)


def image_to_uint8(image: ImageBuffer, gamma: float = 2.2) -> npt.NDArray[np.uint8]:
    """Convert a rendered image to 8 bits per channel.

    Channels are clamped to [0, 1], gamma encoded, scaled by 255 and
    truncated.

    Args:
        image: The rendered image.
        gamma: Gamma correction value (default 2.2).

    Returns:
        Array of shape (height, width, 3) with dtype uint8.
    """
    return (apply_gamma(image.to_numpy(), gamma) * 255.0).astype(np.uint8)


def save_ppm(image: ImageBuffer, filepath: str | Path, gamma: float = 2.2) -> None:
    """Save the image as an ASCII (P3) PPM file.

    Args:
        image: The rendered image.
        filepath: Output file path.
        gamma: Gamma correction value (default 2.2).
    """
    pixels = image_to_uint8(image, gamma).reshape(-1, 3)
    lines = [f"P3\n{image.width} {image.height} 255"]
    lines.extend(f"{r} {g} {b}" for r, g, b in pixels)
    Path(filepath).write_text("\n".join(lines) + "\n", encoding="ascii")
    _LOGGER.info("Saved PPM image to %s", filepath)


def save_png(image: ImageBuffer, filepath: str | Path, gamma: float = 2.2) -> None:
    """Save the image as an 8-bit RGB PNG file.

    Args:
        image: The rendered image.
        filepath: Output file path.
        gamma: Gamma correction value (default 2.2).
    """
    pil_image = PILImage.fromarray(image_to_uint8(image, gamma))
    pil_image.save(filepath)
    _LOGGER.info("Saved PNG image to %s", filepath)


def save_image(image: ImageBuffer, filepath: str | Path, gamma: float = 2.2) -> None:
    """Save the image, choosing the format from the file extension.

    Args:
        image: The rendered image.
        filepath: Output path ending in .ppm or .png.
        gamma: Gamma correction value (default 2.2).

    Raises:
        ValueError: If the extension is not supported.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".ppm":
        save_ppm(image, filepath, gamma)
    elif suffix == ".png":
        save_png(image, filepath, gamma)
    else:
        raise ValueError(f"Unsupported image format: {suffix or filepath}")
