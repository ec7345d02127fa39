"""Whitted-style shading: direct diffuse lighting, reflection and refraction.

Every hit is shaded according to its material's surface type:

    Diffuse:     shade_diffuse
    Reflective:  shade_diffuse * (1 - r) + cast_ray(reflection) * r
    Refractive:  (cast_ray(reflection) * kr + cast_ray(transmission) * (1 - kr))
                 * transparency * color

Rays cast at or beyond the scene's recursion limit return black, and rays
that miss every element return the background color.

Taichi functions cannot recurse, so cast_ray evaluates the recursion tree
iteratively. With L levels left below the starting depth, each root-to-leaf
path is numbered by an L-bit path index, most significant bit first, one bit
per level: 0 follows the reflection ray, 1 the transmission ray. The paths
are walked in index order. A node at level k owns the block of 2^(L - k)
consecutive indices below it, and its local term (direct lighting, or the
background on a miss) is added only on the first path of its block, scaled
by the product of branch weights along the way. A node with no child on the
chosen side (a miss, a diffuse surface, the missing transmission branch of
a reflective surface, total internal reflection) ends its walk and the loop
jumps past the whole block that child would have owned. The summed result
equals the recursive definition.

Every walk starts again from the root and re-traces the nodes above it, so
a full tree costs about L * 2^L traces rather than the 2^L of a recursive
evaluation. Trees are pruned early by diffuse hits and misses, so scenes
with few refractive surfaces stay close to the linear cost.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from chibiray.core.integrator import cast_ray
    >>> # Inside a Taichi kernel, after upload_scene(scene):
    >>> # color = cast_ray(create_prime_ray(x, y, w, h, fov), 0)
"""

import taichi as ti
import taichi.math as tm

from chibiray.core.ray import (
    Ray,
    create_reflection_ray,
    create_transmission_ray,
    fresnel,
    ray_at,
    vec3,
)
from chibiray.materials.registry import (
    get_material_albedo,
    get_material_color,
    get_material_reflectivity,
    get_material_refractive_index,
    get_material_surface,
    get_material_transparency,
)
from chibiray.materials.surface import SurfaceType
from chibiray.scene.intersection import (
    element_normal,
    get_element_material_id,
    trace,
)
from chibiray.scene.lights import (
    get_light_color,
    light_blocked_by,
    light_direction_from,
    light_intensity,
    num_lights,
)
from chibiray.scene.manager import get_max_recursion_depth, get_shadow_bias

# Color returned for rays that escape the scene
BACKGROUND_COLOR = vec3(0.0, 0.0, 0.0)


# =============================================================================
# Direct Lighting
# =============================================================================


@ti.func
def shade_diffuse(element_index: ti.i32, hit_point: vec3, normal: vec3) -> vec3:
    """Direct Lambertian lighting at a hit point.

    Casts one shadow ray per light from the hit point, offset along the
    normal by the shadow bias. A light is blocked only by an element hit
    strictly nearer than the light itself.

    Args:
        element_index: Index of the element that was hit.
        hit_point: The intersection point.
        normal: Unit surface normal at the hit point.

    Returns:
        The summed light contribution, clamped to [0, 1] per channel.
    """
    material_id = get_element_material_id(element_index)
    material_color = get_material_color(material_id)
    reflected = get_material_albedo(material_id) / tm.pi
    shadow_origin = hit_point + normal * get_shadow_bias()

    color = vec3(0.0, 0.0, 0.0)
    for i in range(num_lights[None]):
        direction_to_light = light_direction_from(i, hit_point)
        shadow = trace(Ray(origin=shadow_origin, direction=direction_to_light))

        in_light = 1
        if shadow.hit == 1:
            if light_blocked_by(i, hit_point, shadow.distance) == 1:
                in_light = 0

        if in_light == 1:
            power = ti.max(tm.dot(normal, direction_to_light), 0.0) * light_intensity(i, hit_point)
            color += material_color * get_light_color(i) * power * reflected

    return tm.clamp(color, 0.0, 1.0)


# =============================================================================
# Ray Casting
# =============================================================================


@ti.func
def cast_ray(ray: Ray, depth: ti.i32) -> vec3:
    """Compute the color seen along a ray.

    Args:
        ray: The ray to cast (unit direction).
        depth: Recursion depth of this ray; primary rays use 0.

    Returns:
        The ray color. Black when depth is at or beyond the scene's
        maximum recursion depth.
    """
    bias = get_shadow_bias()
    levels = get_max_recursion_depth() - depth

    num_paths = 0
    if levels > 0:
        num_paths = 1 << levels

    color = vec3(0.0, 0.0, 0.0)
    path = 0
    while path < num_paths:
        current = ray
        throughput = vec3(1.0, 1.0, 1.0)
        level = 0
        next_path = path + 1
        walking = 1

        while walking == 1:
            if level >= levels:
                walking = 0
            else:
                # Indices owned by this node, and whether this is its first visit
                block = 1 << (levels - level)
                first_visit = (path & (block - 1)) == 0
                block_end = (path | (block - 1)) + 1
                half = block >> 1
                half_end = (path | (half - 1)) + 1
                branch = (path >> (levels - level - 1)) & 1

                hit = trace(current)
                if hit.hit == 0:
                    if first_visit:
                        color += throughput * BACKGROUND_COLOR
                    next_path = block_end
                    walking = 0
                else:
                    hit_point = ray_at(current, hit.distance)
                    normal = element_normal(hit.element_index, hit_point)
                    material_id = get_element_material_id(hit.element_index)
                    surface = get_material_surface(material_id)

                    if surface == int(SurfaceType.DIFFUSE):
                        if first_visit:
                            color += throughput * shade_diffuse(hit.element_index, hit_point, normal)
                        next_path = block_end
                        walking = 0
                    elif surface == int(SurfaceType.REFLECTIVE):
                        reflectivity = get_material_reflectivity(material_id)
                        if first_visit:
                            diffuse = shade_diffuse(hit.element_index, hit_point, normal)
                            color += throughput * diffuse * (1.0 - reflectivity)
                        if branch == 1:
                            next_path = half_end
                            walking = 0
                        else:
                            throughput *= reflectivity
                            current = create_reflection_ray(normal, current.direction, hit_point, bias)
                            level += 1
                    else:
                        index = get_material_refractive_index(material_id)
                        scale = get_material_transparency(material_id) * get_material_color(material_id)
                        kr = fresnel(current.direction, normal, index)
                        transmission = create_transmission_ray(normal, current.direction, hit_point, bias, index)
                        if kr >= 1.0 or transmission.valid == 0:
                            kr = 1.0
                            transmission.valid = 0

                        if branch == 0:
                            throughput *= kr * scale
                            current = create_reflection_ray(normal, current.direction, hit_point, bias)
                            level += 1
                        elif transmission.valid == 1:
                            throughput *= (1.0 - kr) * scale
                            current = Ray(origin=transmission.origin, direction=transmission.direction)
                            level += 1
                        else:
                            next_path = half_end
                            walking = 0

        path = next_path

    return color
