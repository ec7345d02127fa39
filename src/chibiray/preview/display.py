"""Matplotlib-based preview display for rendered images.

Rendered images hold linear colors in [0, 1]. Before they are shown or
saved they are gamma encoded for a standard monitor.

Example:
    >>> from chibiray.preview.display import show_preview
    >>> image = render(scene)
    >>> show_preview(image)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from chibiray.core.image import ImageBuffer


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
) -> npt.NDArray[np.float32]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma value (default 2.2). 1.0 leaves the values unchanged.

    Returns:
        Gamma corrected image, clamped to [0, 1].

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma = {gamma} must be positive.")

    # Clamp before gamma to avoid NaN from negative values
    result = np.clip(image, 0.0, 1.0)
    if gamma != 1.0:
        result = np.power(result, 1.0 / gamma)

    return result.astype(np.float32)


def show_preview(
    image: ImageBuffer,
    *,
    gamma: float = 2.2,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: The rendered image.
        gamma: Gamma correction value (default 2.2).
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = apply_gamma(image.to_numpy(), gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {image.width}x{image.height}")

    plt.tight_layout()
    plt.show(block=block)
