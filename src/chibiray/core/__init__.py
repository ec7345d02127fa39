"""Core rendering module.

Components:
    vector: Vector3, Point and Color value types
    ray: Ray data structure, ray construction and Fresnel reflectance
    integrator: Whitted-style shading (diffuse, reflection, refraction)
    image: ImageBuffer holding a rendered image
    render: Render driver running the per-pixel kernel

All compute-intensive operations use Taichi kernels.
"""

from .ray import (
    Ray,
    TransmissionRay,
    create_prime_ray,
    create_reflection_ray,
    create_transmission_ray,
    fresnel,
    normalize,
    ray_at,
    reflect,
    vec2,
    vec3,
)
from .vector import Color, Point, Vector3

# Note: integrator and render are NOT imported here. They depend on the scene
# storage modules, which create Taichi fields at import time.

__all__ = [
    "Vector3",
    "Point",
    "Color",
    "Ray",
    "TransmissionRay",
    "ray_at",
    "vec2",
    "vec3",
    "normalize",
    "reflect",
    "create_prime_ray",
    "create_reflection_ray",
    "create_transmission_ray",
    "fresnel",
]
