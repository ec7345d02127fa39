"""One-sided infinite plane primitive.

A plane is defined by a point on it (origin) and a unit normal. The plane is
one-sided: a ray only hits it when the ray travels along the stored normal,
i.e. when it approaches from the side the normal does NOT point toward.
The surface normal reported at a hit is therefore the stored normal negated,
so that it faces back toward the incoming ray.

Ray-plane intersection:
    denom    = dot(normal, direction)      (must exceed PARALLEL_EPSILON)
    distance = dot(origin - ray.origin, normal) / denom   (must be > 0)

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from chibiray.geometry.plane import PlaneShape, hit_plane
    >>> # Floor at y = -2 seen from above: the stored normal points down
    >>> # plane = PlaneShape(origin=vec3(0, -2, 0), normal=vec3(0, -1, 0))
"""

import taichi as ti
import taichi.math as tm

from chibiray.core.ray import Ray, normalize, vec2, vec3

# Rays with dot(normal, direction) at or below this are parallel or facing away
PARALLEL_EPSILON = 1e-6


@ti.dataclass
class PlaneShape:
    """An infinite plane through origin with the given normal.

    Attributes:
        origin: Any point on the plane (vec3).
        normal: Unit normal (vec3), pointing away from the visible side.
    """

    origin: vec3
    normal: vec3


@ti.func
def hit_plane(ray: Ray, plane: PlaneShape):
    """Test for ray-plane intersection.

    Args:
        ray: The ray to test (unit direction).
        plane: The plane to test against.

    Returns:
        A tuple (hit, distance):
        - hit: 1 if the ray hits the visible side in front of its origin.
        - distance: Distance along the ray to the hit. Only valid if hit == 1.
    """
    denom = tm.dot(plane.normal, ray.direction)

    hit = 0
    distance = 0.0

    if denom > PARALLEL_EPSILON:
        v = plane.origin - ray.origin
        t = tm.dot(v, plane.normal) / denom
        if t > 0.0:
            hit = 1
            distance = t

    return hit, distance


@ti.func
def plane_normal(plane: PlaneShape, hit_point: vec3) -> vec3:
    """Surface normal facing the visible side (the stored normal negated)."""
    return -plane.normal


@ti.func
def plane_texture_coords(plane: PlaneShape, hit_point: vec3) -> vec2:
    """Planar texture coordinates in a basis derived from the normal.

    The x-axis is normal x (0, 0, 1), or normal x (0, 1, 0) when the normal
    is parallel to z. The y-axis is normal x x-axis. Coordinates are the
    projections of (hit_point - origin) onto both axes.
    """
    x_axis = tm.cross(plane.normal, vec3(0.0, 0.0, 1.0))
    if tm.length(x_axis) == 0.0:
        x_axis = tm.cross(plane.normal, vec3(0.0, 1.0, 0.0))
    x_axis = normalize(x_axis)
    y_axis = tm.cross(plane.normal, x_axis)
    hit_vec = hit_point - plane.origin
    return vec2(tm.dot(hit_vec, x_axis), tm.dot(hit_vec, y_axis))
