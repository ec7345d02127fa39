"""Rendered image container.

An ImageBuffer wraps a float32 NumPy array of shape (height, width, 3) in
row-major order: row y, column x. Pixels are addressed as image[x, y] to
match screen coordinates, with (0, 0) the top-left pixel.

Example:
    >>> import numpy as np
    >>> from chibiray.core.image import ImageBuffer
    >>> image = ImageBuffer(np.zeros((2, 3, 3), dtype=np.float32))
    >>> image.width, image.height
    (3, 2)
    >>> image[2, 1]
    Color(red=0.0, green=0.0, blue=0.0)
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np
import numpy.typing as npt

from chibiray.core.vector import Color


class ImageBuffer:
    """A width x height grid of colors.

    The buffer holds a read-only float32 copy of the array it is given, so
    the caller's array is left untouched.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, data: npt.NDArray[np.float32]) -> None:
        """Wrap a rendered array.

        Args:
            data: Array of shape (height, width, 3).

        Raises:
            ValueError: If the array does not have shape (height, width, 3).
        """
        if data.ndim != 3 or data.shape[2] != 3:
            raise ValueError(f"Image data must have shape (height, width, 3), got {data.shape}")
        self._data = np.array(data, dtype=np.float32)
        self._data.flags.writeable = False

    @classmethod
    def black(cls, width: int, height: int) -> ImageBuffer:
        """Create an all-black image."""
        return cls(np.zeros((height, width, 3), dtype=np.float32))

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    def __getitem__(self, position: tuple[int, int]) -> Color:
        x, y = position
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} image")
        red, green, blue = self._data[y, x]
        return Color(float(red), float(green), float(blue))

    def pixels(self) -> Iterator[Color]:
        """Iterate over all pixels in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield self[x, y]

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Return a writable copy of the image as a (height, width, 3) array."""
        return self._data.copy()
