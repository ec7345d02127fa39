"""Materials module for surface types and the material registry.

Components:
    surface: Surface types (Diffuse, Reflective, Refractive) and Material
    registry: Taichi field storage for uploaded materials

Only the pure-Python surface types are imported here. Import the registry
directly from chibiray.materials.registry after Taichi has been initialized.
"""

from .surface import (
    Diffuse,
    Material,
    Reflective,
    Refractive,
    SurfaceKind,
    SurfaceType,
)

__all__ = [
    "SurfaceType",
    "SurfaceKind",
    "Diffuse",
    "Reflective",
    "Refractive",
    "Material",
]
