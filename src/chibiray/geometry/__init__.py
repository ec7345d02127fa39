"""Geometry module for shape primitives.

This module provides the two primitives a scene can contain:

Components:
    sphere: Sphere primitive with geometric ray-sphere intersection
    plane: One-sided infinite plane

Each primitive exposes three Taichi functions:
    hit, distance = hit_<shape>(ray, shape)
    normal = <shape>_normal(shape, hit_point)
    uv = <shape>_texture_coords(shape, hit_point)
"""

from .plane import (
    PARALLEL_EPSILON,
    PlaneShape,
    hit_plane,
    plane_normal,
    plane_texture_coords,
)
from .sphere import (
    SphereShape,
    hit_sphere,
    sphere_normal,
    sphere_texture_coords,
)

__all__ = [
    "SphereShape",
    "hit_sphere",
    "sphere_normal",
    "sphere_texture_coords",
    "PlaneShape",
    "PARALLEL_EPSILON",
    "hit_plane",
    "plane_normal",
    "plane_texture_coords",
]
