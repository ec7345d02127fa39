"""Light storage and per-point light queries for Taichi kernels.

Two kinds of light are supported:

    - Directional: infinitely far away, constant intensity, shining along a
      fixed direction. Never attenuated by distance.
    - Spherical: a point light whose intensity falls off with the inverse
      square of the distance, I / (4 * pi * r^2).

Lights are stored in a Structure of Arrays layout. The kernel-side queries
(light_direction_from, light_intensity, light_distance, light_blocked_by)
describe the light as seen from a surface point. The diffuse shader uses
them to cast its shadow ray and weight the contribution.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from chibiray.scene.lights import add_directional_light, clear_lights
    >>> clear_lights()
    >>> add_directional_light((0.0, -1.0, -1.0), (1.0, 1.0, 1.0), 2.0)
    0
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from chibiray.core.ray import normalize, vec3


class LightKind(IntEnum):
    """Enumeration of light types, used for dispatch inside kernels."""

    DIRECTIONAL = 0
    SPHERICAL = 1


# Maximum number of lights supported in the scene
MAX_LIGHTS = 64

# Light storage: Structure of Arrays layout
# light_vectors holds the travel direction of a directional light or the
# position of a spherical light
light_kinds = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
light_vectors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
light_colors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f64, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_lights() -> None:
    """Remove all lights from the scene."""
    num_lights[None] = 0


def _add_light(
    kind: LightKind,
    vector: tuple[float, float, float],
    color: tuple[float, float, float],
    intensity: float,
) -> int:
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    if intensity < 0.0:
        raise ValueError(f"Light intensity = {intensity} is negative.")

    light_kinds[idx] = int(kind)
    light_vectors[idx] = list(vector)
    light_colors[idx] = list(color)
    light_intensities[idx] = intensity
    num_lights[None] = idx + 1
    return idx


def add_directional_light(
    direction: tuple[float, float, float],
    color: tuple[float, float, float],
    intensity: float,
) -> int:
    """Add a directional light.

    Args:
        direction: Direction the light travels in. Normalized in the kernel.
        color: RGB light color.
        intensity: Constant intensity (non-negative).

    Returns:
        The light index.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
        ValueError: If the intensity is negative.
    """
    return _add_light(LightKind.DIRECTIONAL, direction, color, intensity)


def add_spherical_light(
    position: tuple[float, float, float],
    color: tuple[float, float, float],
    intensity: float,
) -> int:
    """Add a spherical (point) light.

    Args:
        position: Position of the light.
        color: RGB light color.
        intensity: Emitted intensity (non-negative).

    Returns:
        The light index.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
        ValueError: If the intensity is negative.
    """
    return _add_light(LightKind.SPHERICAL, position, color, intensity)


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def get_light_color(index: ti.i32) -> vec3:
    return light_colors[index]


@ti.func
def light_direction_from(index: ti.i32, hit_point: vec3) -> vec3:
    """Unit direction from a surface point toward the light."""
    direction = vec3(0.0, 0.0, 0.0)
    if light_kinds[index] == int(LightKind.DIRECTIONAL):
        direction = normalize(-light_vectors[index])
    else:
        direction = normalize(light_vectors[index] - hit_point)
    return direction


@ti.func
def light_intensity(index: ti.i32, hit_point: vec3) -> ti.f64:
    """Intensity of the light arriving at a surface point."""
    intensity = light_intensities[index]
    if light_kinds[index] == int(LightKind.SPHERICAL):
        to_light = light_vectors[index] - hit_point
        intensity = intensity / (4.0 * tm.pi * tm.dot(to_light, to_light))
    return intensity


@ti.func
def light_distance(index: ti.i32, hit_point: vec3) -> ti.f64:
    """Distance from a surface point to the light.

    Infinite for directional lights, so any occluder casts a shadow.
    """
    distance = tm.inf
    if light_kinds[index] == int(LightKind.SPHERICAL):
        distance = tm.length(light_vectors[index] - hit_point)
    return distance


@ti.func
def light_blocked_by(index: ti.i32, hit_point: vec3, occluder_distance: ti.f64) -> ti.i32:
    """Whether an occluder at the given distance along the shadow ray blocks the light.

    A directional light is blocked by any occluder. A spherical light is
    blocked only by an occluder strictly nearer than the light.
    """
    blocked = 1
    if light_kinds[index] == int(LightKind.SPHERICAL):
        blocked = 0
        if occluder_distance < light_distance(index, hit_point):
            blocked = 1
    return blocked
