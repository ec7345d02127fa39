"""Immutable scene description.

A Scene bundles everything a render needs: image size and field of view,
the ordered elements (spheres and planes, each with a material), the
ordered lights, and the tunables that control shadow bias and recursion.
All types are frozen dataclasses; the element and light sequences are
stored as tuples so a scene cannot change while it is being rendered.

Example:
    >>> from chibiray.core.vector import Color, Point, Vector3
    >>> from chibiray.materials import Diffuse, Material
    >>> from chibiray.scene.description import DirectionalLight, Scene, Sphere
    >>> white = Material(Color(1.0, 1.0, 1.0), albedo=0.18, surface=Diffuse())
    >>> scene = Scene(
    ...     width=320, height=240, fov=90.0,
    ...     elements=[Sphere(Point(0.0, 0.0, -5.0), 1.0, white)],
    ...     lights=[DirectionalLight(Vector3(0.0, -1.0, -1.0), Color(1.0, 1.0, 1.0), 1.0)],
    ...     shadow_bias=1e-13, max_recursion_depth=5,
    ... )
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from chibiray.core.vector import Color, Point, Vector3
from chibiray.materials.surface import Material

_LOGGER: logging.Logger = logging.getLogger(__name__)

# Upper bound for Scene.max_recursion_depth. The shading engine addresses
# every node of the recursion tree with a 32-bit path index.
MAX_RECURSION_DEPTH = 30

# Tolerance used when checking that a plane normal has unit length
_UNIT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Sphere:
    """A sphere element.

    Attributes:
        center: Center of the sphere.
        radius: Radius of the sphere (positive).
        material: Surface material.
    """

    center: Point
    radius: float
    material: Material

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius = {self.radius} must be positive.")


@dataclass(frozen=True)
class Plane:
    """A one-sided infinite plane element.

    The plane is visible from the side its normal points away from: a floor
    seen from above has a normal pointing down.

    Attributes:
        origin: Any point on the plane.
        normal: Plane normal, expected to be unit length.
        material: Surface material.
    """

    origin: Point
    normal: Vector3
    material: Material

    def __post_init__(self) -> None:
        length = self.normal.length()
        if length == 0.0:
            raise ValueError("Plane normal must not be the zero vector.")
        if abs(length - 1.0) > _UNIT_TOLERANCE:
            _LOGGER.warning("Plane normal %s is not unit length (%g)", self.normal, length)


@dataclass(frozen=True)
class DirectionalLight:
    """A light infinitely far away, shining along a fixed direction.

    Attributes:
        direction: Direction the light travels in (from the light toward
            the scene).
        color: Light color.
        intensity: Constant intensity at every point.
    """

    direction: Vector3
    color: Color
    intensity: float

    def __post_init__(self) -> None:
        if self.direction.length() == 0.0:
            raise ValueError("Directional light direction must not be the zero vector.")
        if self.intensity < 0.0:
            raise ValueError(f"Light intensity = {self.intensity} is negative.")


@dataclass(frozen=True)
class SphericalLight:
    """A point light radiating equally in every direction.

    Attributes:
        position: Position of the light.
        color: Light color.
        intensity: Emitted intensity; the intensity reaching a point falls
            off with the inverse square of its distance.
    """

    position: Point
    color: Color
    intensity: float

    def __post_init__(self) -> None:
        if self.intensity < 0.0:
            raise ValueError(f"Light intensity = {self.intensity} is negative.")


Element = Union[Sphere, Plane]
Light = Union[DirectionalLight, SphericalLight]


@dataclass(frozen=True)
class Scene:
    """A complete, immutable scene ready to render.

    The camera sits at the origin looking down -z.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees, in (0, 180).
        elements: Ordered scene elements. Order breaks exact distance ties.
        lights: Ordered light sources.
        shadow_bias: Offset along the surface normal applied to secondary
            ray origins to avoid self-intersection.
        max_recursion_depth: Rays cast at this depth or deeper return black.
    """

    width: int
    height: int
    fov: float
    elements: Sequence[Element] = ()
    lights: Sequence[Light] = ()
    shadow_bias: float = 1e-13
    max_recursion_depth: int = 10

    def __post_init__(self) -> None:
        # Freeze the sequences so the scene stays immutable
        object.__setattr__(self, "elements", tuple(self.elements))
        object.__setattr__(self, "lights", tuple(self.lights))

        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions ({self.width}x{self.height}) must be positive")
        if not 0.0 < self.fov < 180.0:
            raise ValueError(f"Field of view = {self.fov} is outside (0, 180) degrees.")
        if self.shadow_bias < 0.0:
            raise ValueError(f"Shadow bias = {self.shadow_bias} is negative.")
        if not 0 <= self.max_recursion_depth <= MAX_RECURSION_DEPTH:
            raise ValueError(
                f"Max recursion depth = {self.max_recursion_depth} is outside "
                f"[0, {MAX_RECURSION_DEPTH}]"
            )
        for element in self.elements:
            if not isinstance(element, (Sphere, Plane)):
                raise ValueError(f"Unknown element type: {element!r}")
        for light in self.lights:
            if not isinstance(light, (DirectionalLight, SphericalLight)):
                raise ValueError(f"Unknown light type: {light!r}")

    def with_size(self, width: int, height: int) -> Scene:
        """Return a copy of the scene rendered at a different resolution."""
        return dataclasses.replace(self, width=width, height=height)
