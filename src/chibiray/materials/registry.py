"""Material registry stored in Taichi fields.

Materials are uploaded into Structure-of-Arrays fields indexed by material
ID so that kernels can look up the surface type and its parameters for any
hit element. Parameters that do not apply to a surface type are stored as
zero.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from chibiray.materials.registry import add_material, clear_materials
    >>> clear_materials()
    >>> material_id = add_material(material)
    >>> # Use get_material_surface(material_id) within a Taichi kernel
"""

import taichi as ti

from chibiray.core.ray import vec3
from chibiray.materials.surface import Material, Reflective, Refractive

# Maximum number of materials in the scene
MAX_MATERIALS = 1024

# Material storage: Structure of Arrays layout
material_colors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_MATERIALS)
material_albedos = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
material_surfaces = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
material_reflectivities = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
material_refractive_indices = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
material_transparencies = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material(material: Material) -> int:
    """Add a material to the registry.

    Args:
        material: The material to upload.

    Returns:
        The material ID of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    surface = material.surface
    reflectivity = surface.reflectivity if isinstance(surface, Reflective) else 0.0
    index = surface.index if isinstance(surface, Refractive) else 0.0
    transparency = surface.transparency if isinstance(surface, Refractive) else 0.0

    material_colors[idx] = list(material.color.to_tuple())
    material_albedos[idx] = material.albedo
    material_surfaces[idx] = int(material.surface_type)
    material_reflectivities[idx] = reflectivity
    material_refractive_indices[idx] = index
    material_transparencies[idx] = transparency
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of materials in the registry."""
    return int(num_materials[None])


@ti.func
def get_material_color(material_id: ti.i32) -> vec3:
    return material_colors[material_id]


@ti.func
def get_material_albedo(material_id: ti.i32) -> ti.f64:
    return material_albedos[material_id]


@ti.func
def get_material_surface(material_id: ti.i32) -> ti.i32:
    """Get the surface type of a material (see SurfaceType)."""
    return material_surfaces[material_id]


@ti.func
def get_material_reflectivity(material_id: ti.i32) -> ti.f64:
    return material_reflectivities[material_id]


@ti.func
def get_material_refractive_index(material_id: ti.i32) -> ti.f64:
    return material_refractive_indices[material_id]


@ti.func
def get_material_transparency(material_id: ti.i32) -> ti.f64:
    return material_transparencies[material_id]
