"""Surface types and materials.

A material pairs a base color and diffuse albedo with one of three surface
types, which select how the shading engine treats a hit:

    Diffuse:    direct lighting only
    Reflective: direct lighting blended with a mirror reflection
    Refractive: Fresnel-weighted reflection and transmission

Example:
    >>> from chibiray.core.vector import Color
    >>> from chibiray.materials.surface import Material, Reflective
    >>> mirror = Material(Color(1.0, 1.0, 1.0), albedo=0.18, surface=Reflective(0.5))
    >>> mirror.surface_type
    <SurfaceType.REFLECTIVE: 1>
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from chibiray.core.vector import Color


class SurfaceType(IntEnum):
    """Enumeration of surface types, used for dispatch inside kernels."""

    DIFFUSE = 0
    REFLECTIVE = 1
    REFRACTIVE = 2


@dataclass(frozen=True)
class Diffuse:
    """Matte surface lit only by direct light."""

    @property
    def surface_type(self) -> SurfaceType:
        return SurfaceType.DIFFUSE


@dataclass(frozen=True)
class Reflective:
    """Partially mirrored surface.

    Attributes:
        reflectivity: Fraction of the color taken from the mirror
            reflection, in [0, 1]. The rest comes from direct lighting.
    """

    reflectivity: float

    def __post_init__(self) -> None:
        if self.reflectivity < 0.0 or self.reflectivity > 1.0:
            raise ValueError(f"Reflectivity = {self.reflectivity} is outside [0, 1].")

    @property
    def surface_type(self) -> SurfaceType:
        return SurfaceType.REFLECTIVE


@dataclass(frozen=True)
class Refractive:
    """Transparent surface such as glass or water.

    Attributes:
        index: Refractive index of the material (outside is 1.0).
            Common values: Water=1.33, Glass=1.5, Diamond=2.4
        transparency: Scale applied to the combined reflected and
            transmitted color.
    """

    index: float
    transparency: float

    def __post_init__(self) -> None:
        if self.index <= 0.0:
            raise ValueError(f"Refractive index = {self.index} must be positive.")
        if self.transparency < 0.0:
            raise ValueError(f"Transparency = {self.transparency} is negative.")

    @property
    def surface_type(self) -> SurfaceType:
        return SurfaceType.REFRACTIVE


SurfaceKind = Union[Diffuse, Reflective, Refractive]


@dataclass(frozen=True)
class Material:
    """Surface appearance of a scene element.

    Attributes:
        color: Base color, multiplied into every lighting term.
        albedo: Diffuse reflectance in (0, 1].
        surface: The surface type and its parameters.
    """

    color: Color
    albedo: float
    surface: SurfaceKind

    def __post_init__(self) -> None:
        if self.albedo <= 0.0 or self.albedo > 1.0:
            raise ValueError(
                f"Albedo = {self.albedo} is outside (0, 1]. "
                "This would violate energy conservation."
            )
        for name, component in zip(("red", "green", "blue"), self.color.to_tuple()):
            if component < 0.0:
                raise ValueError(f"Color {name} component = {component} is negative.")
        if not isinstance(self.surface, (Diffuse, Reflective, Refractive)):
            raise ValueError(f"Unknown surface type: {self.surface!r}")

    @property
    def surface_type(self) -> SurfaceType:
        return self.surface.surface_type
