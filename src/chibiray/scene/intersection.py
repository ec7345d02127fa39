"""Scene element storage and nearest-hit search.

Elements (spheres and planes) are stored in Taichi fields in scene order.
trace() scans them linearly and returns the nearest hit; there is no
acceleration structure. Each element carries the ID of its material in the
material registry.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from chibiray.scene.intersection import add_sphere, clear_elements, trace
    >>> clear_elements()
    >>> add_sphere((0.0, 0.0, -5.0), 1.0, material_id=0)
    >>> # Use trace(ray) within a Taichi kernel
"""

from enum import IntEnum

import taichi as ti

from chibiray.core.ray import Ray, vec2, vec3
from chibiray.geometry.plane import (
    PlaneShape,
    hit_plane,
    plane_normal,
    plane_texture_coords,
)
from chibiray.geometry.sphere import (
    SphereShape,
    hit_sphere,
    sphere_normal,
    sphere_texture_coords,
)


class ElementKind(IntEnum):
    """Enumeration of element types, used for dispatch inside kernels."""

    SPHERE = 0
    PLANE = 1


@ti.dataclass
class Intersection:
    """Result of tracing a ray through the scene.

    Attributes:
        hit: 1 if the ray hit any element, 0 otherwise.
        distance: Distance along the ray to the nearest hit.
            Only valid if hit == 1.
        element_index: Index of the hit element in scene order.
            -1 on a miss.
    """

    hit: ti.i32
    distance: ti.f64
    element_index: ti.i32


# Maximum number of elements supported in the scene
MAX_ELEMENTS = 1024

# Element storage: Structure of Arrays layout
# element_positions holds the sphere center or the plane origin,
# element_normals the plane normal, element_radii the sphere radius
element_kinds = ti.field(dtype=ti.i32, shape=MAX_ELEMENTS)
element_positions = ti.Vector.field(3, dtype=ti.f64, shape=MAX_ELEMENTS)
element_normals = ti.Vector.field(3, dtype=ti.f64, shape=MAX_ELEMENTS)
element_radii = ti.field(dtype=ti.f64, shape=MAX_ELEMENTS)
element_material_ids = ti.field(dtype=ti.i32, shape=MAX_ELEMENTS)
num_elements = ti.field(dtype=ti.i32, shape=())


def clear_elements() -> None:
    """Clear all elements from the scene.

    Resets the element count to zero. The actual field data is not
    cleared but will be overwritten when new elements are added.
    """
    num_elements[None] = 0


def _next_element_index() -> int:
    idx = num_elements[None]
    if idx >= MAX_ELEMENTS:
        raise RuntimeError(f"Maximum number of elements ({MAX_ELEMENTS}) exceeded")
    return idx


def add_sphere(center: tuple[float, float, float], radius: float, material_id: int = 0) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (should be positive).
        material_id: The material ID to associate with this sphere.

    Returns:
        The element index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of elements is exceeded.
    """
    idx = _next_element_index()
    element_kinds[idx] = int(ElementKind.SPHERE)
    element_positions[idx] = list(center)
    element_normals[idx] = [0.0, 0.0, 0.0]
    element_radii[idx] = radius
    element_material_ids[idx] = material_id
    num_elements[None] = idx + 1
    return idx


def add_plane(
    origin: tuple[float, float, float],
    normal: tuple[float, float, float],
    material_id: int = 0,
) -> int:
    """Add a one-sided plane to the scene.

    Args:
        origin: Any point on the plane.
        normal: The unit plane normal, pointing away from the visible side.
        material_id: The material ID to associate with this plane.

    Returns:
        The element index of the added plane.

    Raises:
        RuntimeError: If the maximum number of elements is exceeded.
    """
    idx = _next_element_index()
    element_kinds[idx] = int(ElementKind.PLANE)
    element_positions[idx] = list(origin)
    element_normals[idx] = list(normal)
    element_radii[idx] = 0.0
    element_material_ids[idx] = material_id
    num_elements[None] = idx + 1
    return idx


def get_element_count() -> int:
    """Get the number of elements in the scene."""
    return int(num_elements[None])


@ti.func
def _sphere_at(index: ti.i32) -> SphereShape:
    return SphereShape(center=element_positions[index], radius=element_radii[index])


@ti.func
def _plane_at(index: ti.i32) -> PlaneShape:
    return PlaneShape(origin=element_positions[index], normal=element_normals[index])


@ti.func
def hit_element(ray: Ray, index: ti.i32):
    """Intersect a ray with a single element.

    Args:
        ray: The ray to test.
        index: The element index.

    Returns:
        A tuple (hit, distance) as reported by the element's primitive.
    """
    hit = 0
    distance = 0.0
    if element_kinds[index] == int(ElementKind.SPHERE):
        hit, distance = hit_sphere(ray, _sphere_at(index))
    else:
        hit, distance = hit_plane(ray, _plane_at(index))
    return hit, distance


@ti.func
def element_normal(index: ti.i32, hit_point: vec3) -> vec3:
    """Surface normal of an element at a hit point."""
    normal = vec3(0.0, 0.0, 0.0)
    if element_kinds[index] == int(ElementKind.SPHERE):
        normal = sphere_normal(_sphere_at(index), hit_point)
    else:
        normal = plane_normal(_plane_at(index), hit_point)
    return normal


@ti.func
def element_texture_coords(index: ti.i32, hit_point: vec3) -> vec2:
    """Texture coordinates of an element at a hit point."""
    uv = vec2(0.0, 0.0)
    if element_kinds[index] == int(ElementKind.SPHERE):
        uv = sphere_texture_coords(_sphere_at(index), hit_point)
    else:
        uv = plane_texture_coords(_plane_at(index), hit_point)
    return uv


@ti.func
def get_element_material_id(index: ti.i32) -> ti.i32:
    return element_material_ids[index]


@ti.func
def trace(ray: Ray) -> Intersection:
    """Find the nearest element hit by a ray.

    Tests every element in scene order and keeps the hit with the smallest
    distance. A later element only replaces the current hit when it is
    strictly nearer, so the first element wins an exact tie.

    Args:
        ray: The ray to trace.

    Returns:
        An Intersection; check its hit field before using the rest.
    """
    result = Intersection(hit=0, distance=0.0, element_index=-1)

    for i in range(num_elements[None]):
        hit, distance = hit_element(ray, i)
        if hit == 1:
            if result.hit == 0 or distance < result.distance:
                result = Intersection(hit=1, distance=distance, element_index=i)

    return result
