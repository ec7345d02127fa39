"""Preview module for displaying and saving rendered images.

Components:
    display: Gamma correction and Matplotlib preview window
    export: PPM and PNG export
"""

from .display import apply_gamma, show_preview
from .export import image_to_uint8, save_image, save_png, save_ppm

__all__ = [
    "apply_gamma",
    "show_preview",
    "image_to_uint8",
    "save_image",
    "save_png",
    "save_ppm",
]
