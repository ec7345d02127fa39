"""Upload a Scene description into the Taichi fields used by the kernels.

A render works from global Taichi fields: elements, materials and lights
each live in their own storage module, and the render settings (image size,
field of view, shadow bias, recursion limit) live here. upload_scene()
replaces all of them from an immutable Scene so that kernels never see a
half-updated scene.

Materials are registered in element order; an element's material ID is
the position of its material in the registry. Identical materials are
shared.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from chibiray.scene.manager import upload_scene
    >>> upload_scene(scene)
    >>> # Use get_shadow_bias() and friends within a Taichi kernel
"""

import logging

import taichi as ti

from chibiray.materials.registry import add_material, clear_materials
from chibiray.materials.surface import Material
from chibiray.scene.description import (
    DirectionalLight,
    Plane,
    Scene,
    Sphere,
    SphericalLight,
)
from chibiray.scene.intersection import add_plane, add_sphere, clear_elements
from chibiray.scene.lights import add_directional_light, add_spherical_light, clear_lights

_LOGGER: logging.Logger = logging.getLogger(__name__)

# Render settings for the scene currently uploaded
image_width = ti.field(dtype=ti.i32, shape=())
image_height = ti.field(dtype=ti.i32, shape=())
fov = ti.field(dtype=ti.f64, shape=())
shadow_bias = ti.field(dtype=ti.f64, shape=())
max_recursion_depth = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all elements, materials and lights."""
    clear_elements()
    clear_materials()
    clear_lights()


def upload_scene(scene: Scene) -> None:
    """Replace the kernel-side scene with the given description.

    Args:
        scene: The scene to upload.

    Raises:
        RuntimeError: If the scene exceeds the element, material or light
            capacity.
    """
    clear_scene()

    material_ids: dict[Material, int] = {}

    def material_id_for(material: Material) -> int:
        if material not in material_ids:
            material_ids[material] = add_material(material)
        return material_ids[material]

    for element in scene.elements:
        if isinstance(element, Sphere):
            add_sphere(element.center.to_tuple(), element.radius, material_id_for(element.material))
        elif isinstance(element, Plane):
            add_plane(
                element.origin.to_tuple(),
                element.normal.to_tuple(),
                material_id_for(element.material),
            )
        else:
            raise ValueError(f"Unknown element type: {element!r}")

    for light in scene.lights:
        if isinstance(light, DirectionalLight):
            add_directional_light(light.direction.to_tuple(), light.color.to_tuple(), light.intensity)
        elif isinstance(light, SphericalLight):
            add_spherical_light(light.position.to_tuple(), light.color.to_tuple(), light.intensity)
        else:
            raise ValueError(f"Unknown light type: {light!r}")

    image_width[None] = scene.width
    image_height[None] = scene.height
    fov[None] = scene.fov
    shadow_bias[None] = scene.shadow_bias
    max_recursion_depth[None] = scene.max_recursion_depth

    _LOGGER.debug(
        "Uploaded scene: %dx%d, %d elements, %d materials, %d lights",
        scene.width,
        scene.height,
        len(scene.elements),
        len(material_ids),
        len(scene.lights),
    )


@ti.func
def get_image_width() -> ti.i32:
    return image_width[None]


@ti.func
def get_image_height() -> ti.i32:
    return image_height[None]


@ti.func
def get_fov() -> ti.f64:
    return fov[None]


@ti.func
def get_shadow_bias() -> ti.f64:
    return shadow_bias[None]


@ti.func
def get_max_recursion_depth() -> ti.i32:
    return max_recursion_depth[None]
