"""Ray data structure, vector helpers and ray construction for Taichi kernels.

This module provides the Ray dataclass and the Taichi functions that build
every ray the tracer casts:

    - Primary rays from the camera through a pixel
    - Reflection rays about a surface normal
    - Transmission (refraction) rays following Snell's law
    - The Fresnel reflectance used to weight reflection against refraction

All geometry is double precision. Taichi must be initialized with
``default_fp=ti.f64`` so that literals and temporaries match.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from chibiray.core.ray import Ray, create_prime_ray, vec3
    >>> # Inside a Taichi kernel:
    >>> # ray = create_prime_ray(x, y, width, height, 90.0)
"""

import taichi as ti
import taichi.math as tm

# Double-precision vector types shared by every kernel module
vec3 = ti.types.vector(3, ti.f64)
vec2 = ti.types.vector(2, ti.f64)


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3). Unit length for every
            ray built by this module.
    """

    origin: vec3
    direction: vec3


@ti.dataclass
class TransmissionRay:
    """Result of building a transmission ray.

    Attributes:
        valid: 1 if a transmitted ray exists, 0 on total internal reflection.
        origin: Origin of the transmitted ray. Only meaningful if valid == 1.
        direction: Direction of the transmitted ray. Only meaningful if
            valid == 1.
    """

    valid: ti.i32
    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f64) -> vec3:
    """Compute the point along the ray at distance t."""
    return ray.origin + t * ray.direction


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    The vector must not be zero-length. A zero vector yields NaN
    components, which propagate into the final color.
    """
    return v / tm.length(v)


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Mirror an incident direction about a unit normal."""
    return incident - 2.0 * tm.dot(incident, normal) * normal


# =============================================================================
# Ray Construction
# =============================================================================


@ti.func
def create_prime_ray(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32, fov: ti.f64) -> Ray:
    """Build the primary ray through the center of pixel (x, y).

    The camera sits at the origin looking down -z. The sensor spans
    [-1, 1] vertically scaled by tan(fov / 2), and horizontally by the
    aspect ratio as well. Pixel (0, 0) is the top-left corner.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees.

    Returns:
        A unit-direction ray starting at the origin.
    """
    fov_adjustment = tm.tan(fov * tm.pi / 180.0 / 2.0)
    w = ti.cast(width, ti.f64)
    h = ti.cast(height, ti.f64)
    aspect_ratio = w / h
    sensor_x = (((ti.cast(x, ti.f64) + 0.5) / w) * 2.0 - 1.0) * aspect_ratio * fov_adjustment
    sensor_y = (1.0 - ((ti.cast(y, ti.f64) + 0.5) / h) * 2.0) * fov_adjustment
    direction = normalize(vec3(sensor_x, sensor_y, -1.0))
    return Ray(origin=vec3(0.0, 0.0, 0.0), direction=direction)


@ti.func
def create_reflection_ray(normal: vec3, incident: vec3, hit_point: vec3, bias: ti.f64) -> Ray:
    """Build the mirror reflection ray leaving a hit point.

    The origin is pushed off the surface along the normal by bias so that
    the new ray does not immediately hit the surface it leaves.

    Args:
        normal: Unit surface normal at the hit point.
        incident: Unit direction of the incoming ray.
        hit_point: The intersection point.
        bias: Offset distance along the normal.

    Returns:
        The reflected ray.
    """
    return Ray(origin=hit_point + normal * bias, direction=reflect(incident, normal))


@ti.func
def create_transmission_ray(
    normal: vec3,
    incident: vec3,
    hit_point: vec3,
    bias: ti.f64,
    index: ti.f64,
) -> TransmissionRay:
    """Build the refracted ray crossing a surface, following Snell's law.

    When the incident ray leaves the material (it travels along the normal)
    the normal is flipped and the two refractive indices are swapped. The
    discriminant k = 1 - eta^2 * (1 - cos_i^2) is negative exactly when the
    ray is totally internally reflected, in which case no ray exists.

    Args:
        normal: Unit surface normal at the hit point (as reported by the
            element, not corrected for orientation).
        incident: Unit direction of the incoming ray.
        hit_point: The intersection point.
        bias: Offset distance; the origin is pushed to the far side of the
            surface.
        index: Refractive index of the material (outside is 1.0).

    Returns:
        A TransmissionRay with valid == 0 on total internal reflection.
    """
    ref_n = normal
    eta_i = 1.0
    eta_t = index
    i_dot_n = tm.dot(incident, normal)
    if i_dot_n < 0.0:
        # Entering the surface
        i_dot_n = -i_dot_n
    else:
        # Leaving the surface
        ref_n = -normal
        eta_i = index
        eta_t = 1.0

    eta = eta_i / eta_t
    k = 1.0 - (eta * eta) * (1.0 - i_dot_n * i_dot_n)

    result = TransmissionRay(valid=0, origin=hit_point, direction=incident)
    if k >= 0.0:
        result.valid = 1
        result.origin = hit_point + ref_n * -bias
        result.direction = (incident + i_dot_n * ref_n) * eta - ref_n * ti.sqrt(k)
    return result


@ti.func
def fresnel(incident: vec3, normal: vec3, index: ti.f64) -> ti.f64:
    """Compute the Fresnel reflectance at a refractive boundary.

    Averages the s- and p-polarised reflectances from the Fresnel
    equations. The indices are swapped when the ray leaves the material.

    Args:
        incident: Unit direction of the incoming ray.
        normal: Unit surface normal.
        index: Refractive index of the material.

    Returns:
        The reflected fraction kr in [0, 1]. Exactly 1.0 on total internal
        reflection (sin of the transmitted angle exceeds 1).
    """
    i_dot_n = tm.dot(incident, normal)
    eta_i = 1.0
    eta_t = index
    if i_dot_n > 0.0:
        eta_i = index
        eta_t = 1.0

    sin_t = eta_i / eta_t * ti.sqrt(ti.max(1.0 - i_dot_n * i_dot_n, 0.0))

    kr = 1.0
    if sin_t <= 1.0:
        cos_t = ti.sqrt(ti.max(1.0 - sin_t * sin_t, 0.0))
        cos_i = ti.abs(i_dot_n)
        rs_denom = (eta_t * cos_i) + (eta_i * cos_t)
        rp_denom = (eta_i * cos_i) + (eta_t * cos_t)
        # Both denominators vanish only at grazing incidence with matched
        # indices; that case stays fully reflective.
        if rs_denom > 0.0 and rp_denom > 0.0:
            rs = ((eta_t * cos_i) - (eta_i * cos_t)) / rs_denom
            rp = ((eta_i * cos_i) - (eta_t * cos_t)) / rp_denom
            kr = tm.clamp((rs * rs + rp * rp) / 2.0, 0.0, 1.0)
    return kr
