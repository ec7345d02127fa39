"""Scene module for scene description and kernel-side scene storage.

Components:
    description: Immutable Scene, elements and lights
    showcase: Ready-made demo scene
    intersection: Element storage and nearest-hit trace (Taichi fields)
    lights: Light storage and per-point light queries (Taichi fields)
    manager: Uploads a Scene into the Taichi fields

Only the pure-Python modules are imported here. The storage modules create
Taichi fields at import time; import them directly after ti.init().
"""

from .description import (
    MAX_RECURSION_DEPTH,
    DirectionalLight,
    Element,
    Light,
    Plane,
    Scene,
    Sphere,
    SphericalLight,
)
from .showcase import create_showcase_scene

__all__ = [
    "Scene",
    "Sphere",
    "Plane",
    "Element",
    "DirectionalLight",
    "SphericalLight",
    "Light",
    "MAX_RECURSION_DEPTH",
    "create_showcase_scene",
]
