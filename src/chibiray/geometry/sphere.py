"""Sphere primitive with geometric ray-sphere intersection.

The intersection uses the geometric (projection) method: project the
sphere center onto the ray, measure the squared perpendicular distance
from the center to the ray, and compare it against the squared radius.
When the ray passes close enough, the two hit distances lie symmetrically
around the projected center:

    to_center = center - origin
    adj = dot(to_center, direction)
    d2  = dot(to_center, to_center) - adj^2
    thc = sqrt(radius^2 - d2)
    t0, t1 = adj - thc, adj + thc

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from chibiray.geometry.sphere import SphereShape, hit_sphere
    >>> # Inside a Taichi kernel:
    >>> # hit, distance = hit_sphere(ray, SphereShape(center=c, radius=1.0))
"""

import taichi as ti
import taichi.math as tm

from chibiray.core.ray import Ray, normalize, vec2, vec3


@ti.dataclass
class SphereShape:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f64


@ti.func
def hit_sphere(ray: Ray, sphere: SphereShape):
    """Test for ray-sphere intersection.

    Args:
        ray: The ray to test (unit direction).
        sphere: The sphere to test against.

    Returns:
        A tuple (hit, distance):
        - hit: 1 if the ray hits the sphere in front of its origin, else 0.
        - distance: The nearest non-negative root. When the origin is
          inside the sphere this is the far root. Only valid if hit == 1.
    """
    to_center = sphere.center - ray.origin
    adj = tm.dot(to_center, ray.direction)
    d2 = tm.dot(to_center, to_center) - adj * adj
    radius2 = sphere.radius * sphere.radius

    hit = 0
    distance = 0.0

    if d2 < radius2:
        thc = ti.sqrt(radius2 - d2)
        t0 = adj - thc
        t1 = adj + thc

        if t0 < 0.0 and t1 < 0.0:
            # Sphere is entirely behind the ray origin
            hit = 0
        elif t0 < 0.0:
            hit = 1
            distance = t1
        elif t1 < 0.0:
            hit = 1
            distance = t0
        else:
            hit = 1
            distance = ti.min(t0, t1)

    return hit, distance


@ti.func
def sphere_normal(sphere: SphereShape, hit_point: vec3) -> vec3:
    """Outward unit normal at a point on the sphere surface."""
    return normalize(hit_point - sphere.center)


@ti.func
def sphere_texture_coords(sphere: SphereShape, hit_point: vec3) -> vec2:
    """Spherical (longitude/latitude) texture coordinates.

    Returns:
        vec2(u, v) with u = 1 + atan2(z, x) / pi in [0, 2] and
        v = acos(y / radius) / pi in [0, 1].
    """
    hit_vec = hit_point - sphere.center
    cos_theta = tm.clamp(hit_vec.y / sphere.radius, -1.0, 1.0)
    u = 1.0 + ti.atan2(hit_vec.z, hit_vec.x) / tm.pi
    v = ti.acos(cos_theta) / tm.pi
    return vec2(u, v)
