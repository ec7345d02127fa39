"""Showcase scene with every surface type and light type.

The scene holds three spheres (reflective, diffuse and refractive) above a
reflective floor, in front of a diffuse blue back wall. It is lit by two
spherical lights and one dim directional light.

Example:
    >>> from chibiray.scene.showcase import create_showcase_scene
    >>> scene = create_showcase_scene(width=256, height=256)
    >>> len(scene.elements), len(scene.lights)
    (5, 3)
"""

from chibiray.core.vector import Color, Point, Vector3
from chibiray.materials.surface import Diffuse, Material, Reflective, Refractive
from chibiray.scene.description import (
    DirectionalLight,
    Plane,
    Scene,
    Sphere,
    SphericalLight,
)

# Default showcase resolution
SHOWCASE_SIZE = 1024


def create_showcase_scene(
    width: int = SHOWCASE_SIZE,
    height: int = SHOWCASE_SIZE,
    max_recursion_depth: int = 10,
) -> Scene:
    """Create the showcase scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        max_recursion_depth: Recursion limit for reflection and refraction.

    Returns:
        The showcase Scene with a 90 degree field of view.
    """
    elements = [
        Sphere(
            center=Point(1.0, -1.0, -7.0),
            radius=1.0,
            material=Material(Color(0.8, 0.2, 0.4), albedo=0.6, surface=Reflective(0.9)),
        ),
        Sphere(
            center=Point(-2.0, 1.0, -10.0),
            radius=3.0,
            material=Material(Color(1.0, 0.4, 0.4), albedo=0.7, surface=Diffuse()),
        ),
        Sphere(
            center=Point(3.0, 2.0, -5.0),
            radius=2.0,
            material=Material(
                Color(0.4, 0.4, 0.8),
                albedo=0.5,
                surface=Refractive(index=2.0, transparency=0.9),
            ),
        ),
        # Floor, seen from above
        Plane(
            origin=Point(0.0, -2.0, -5.0),
            normal=Vector3(0.0, -1.0, 0.0),
            material=Material(Color(1.0, 1.0, 1.0), albedo=0.18, surface=Reflective(0.5)),
        ),
        # Back wall
        Plane(
            origin=Point(0.0, 0.0, -20.0),
            normal=Vector3(0.0, 0.0, -1.0),
            material=Material(Color(0.2, 0.3, 1.0), albedo=0.38, surface=Diffuse()),
        ),
    ]

    lights = [
        SphericalLight(position=Point(5.0, 10.0, -3.0), color=Color(1.0, 1.0, 1.0), intensity=16000.0),
        SphericalLight(position=Point(-3.0, 3.0, -5.0), color=Color(0.3, 0.3, 1.0), intensity=1000.0),
        DirectionalLight(direction=Vector3(0.0, -1.0, -1.0), color=Color(0.8, 0.8, 0.8), intensity=0.2),
    ]

    return Scene(
        width=width,
        height=height,
        fov=90.0,
        elements=elements,
        lights=lights,
        shadow_bias=1e-13,
        max_recursion_depth=max_recursion_depth,
    )
