"""Vector, point and color value types for scene description.

These are plain Python value types used to describe scenes and to read back
rendered pixels. Kernel-side math uses Taichi vectors instead (see
``chibiray.core.ray``); every type here converts to a tuple with
``to_tuple()`` for uploading into Taichi fields.

Points and vectors are distinct types so that only meaningful combinations
are allowed:

    point - point  -> Vector3
    point + vector -> Point
    point + point  -> TypeError

Example:
    >>> from chibiray.core.vector import Point, Vector3, Color
    >>> offset = Point(1.0, 2.0, 3.0) - Point.zero()
    >>> offset.length()
    3.7416573867739413
    >>> (Color(0.8, 0.5, 0.2) * 2.0).clamp()
    Color(red=1.0, green=1.0, blue=0.4)
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector3:
    """A free vector in 3D space.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Vector3:
        """Return the zero vector."""
        return cls(0.0, 0.0, 0.0)

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, other: float | Vector3) -> Vector3:
        if isinstance(other, Vector3):
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vector3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: float) -> Vector3:
        return self.__mul__(other)

    def __truediv__(self, t: float) -> Vector3:
        return Vector3(self.x / t, self.y / t, self.z / t)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def norm(self) -> float:
        """Squared Euclidean length."""
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.norm())

    def normalize(self) -> Vector3:
        """Return the unit vector pointing the same way.

        The vector must not be zero-length; a zero vector raises
        ZeroDivisionError since it indicates a modeling bug.
        """
        return self / self.length()

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Point:
    """A position in world space.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
    """

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Point:
        """Return the world origin."""
        return cls(0.0, 0.0, 0.0)

    def __add__(self, other: Vector3) -> Point:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point | Vector3) -> Vector3 | Point:
        if isinstance(other, Point):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector3):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Color:
    """An RGB color.

    Channels are not restricted while colors are being accumulated; call
    clamp() to bring them into the displayable [0, 1] range.

    Attributes:
        red: Red channel.
        green: Green channel.
        blue: Blue channel.
    """

    red: float
    green: float
    blue: float

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __mul__(self, other: float | Color) -> Color:
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        if isinstance(other, (int, float)):
            return Color(self.red * other, self.green * other, self.blue * other)
        return NotImplemented

    def __rmul__(self, other: float) -> Color:
        return self.__mul__(other)

    def clamp(self) -> Color:
        """Clamp every channel to [0, 1]."""
        return Color(
            max(min(self.red, 1.0), 0.0),
            max(min(self.green, 1.0), 0.0),
            max(min(self.blue, 1.0), 0.0),
        )

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)
