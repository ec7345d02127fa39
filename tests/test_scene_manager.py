"""Tests for uploading a Scene into the Taichi storage fields.

Tests cover:
- Element, material and light counts after upload
- Shared materials
- Render settings readable in kernels
- Re-uploading replaces the previous scene
"""

import pytest
import taichi as ti

from chibiray.core.vector import Color, Point, Vector3
from chibiray.materials import Diffuse, Material, Reflective
from chibiray.scene import (
    DirectionalLight,
    Plane,
    Scene,
    Sphere,
    SphericalLight,
    create_showcase_scene,
)

RED = Material(Color(1.0, 0.0, 0.0), albedo=0.5, surface=Diffuse())
MIRROR = Material(Color(1.0, 1.0, 1.0), albedo=0.18, surface=Reflective(0.5))


class TestUploadScene:
    """Tests for upload_scene."""

    def test_counts(self):
        from chibiray.materials.registry import get_material_count
        from chibiray.scene.intersection import get_element_count
        from chibiray.scene.lights import get_light_count
        from chibiray.scene.manager import upload_scene

        upload_scene(create_showcase_scene(width=8, height=8))
        assert get_element_count() == 5
        assert get_material_count() == 5
        assert get_light_count() == 3

    def test_identical_materials_are_shared(self):
        from chibiray.materials.registry import get_material_count
        from chibiray.scene.intersection import element_material_ids
        from chibiray.scene.manager import upload_scene

        scene = Scene(
            width=4,
            height=4,
            fov=90.0,
            elements=[
                Sphere(Point(0.0, 0.0, -5.0), 1.0, RED),
                Plane(Point(0.0, -2.0, 0.0), Vector3(0.0, -1.0, 0.0), MIRROR),
                Sphere(Point(2.0, 0.0, -5.0), 1.0, RED),
            ],
        )
        upload_scene(scene)
        assert get_material_count() == 2
        assert [element_material_ids[i] for i in range(3)] == [0, 1, 0]

    def test_settings_readable_in_kernel(self):
        from chibiray.scene.manager import (
            get_fov,
            get_image_height,
            get_image_width,
            get_max_recursion_depth,
            get_shadow_bias,
            upload_scene,
        )

        upload_scene(Scene(width=32, height=18, fov=60.0, shadow_bias=1e-6, max_recursion_depth=7))

        ints = ti.field(dtype=ti.i32, shape=3)
        floats = ti.field(dtype=ti.f64, shape=2)

        @ti.kernel
        def test_kernel():
            ints[0] = get_image_width()
            ints[1] = get_image_height()
            ints[2] = get_max_recursion_depth()
            floats[0] = get_fov()
            floats[1] = get_shadow_bias()

        test_kernel()
        assert (ints[0], ints[1], ints[2]) == (32, 18, 7)
        assert floats[0] == pytest.approx(60.0)
        assert floats[1] == pytest.approx(1e-6)

    def test_reupload_replaces_scene(self):
        from chibiray.scene.intersection import get_element_count
        from chibiray.scene.lights import get_light_count
        from chibiray.scene.manager import upload_scene

        upload_scene(create_showcase_scene(width=8, height=8))
        upload_scene(
            Scene(
                width=4,
                height=4,
                fov=90.0,
                elements=[Sphere(Point(0.0, 0.0, -5.0), 1.0, RED)],
                lights=[SphericalLight(Point(0.0, 5.0, 0.0), Color(1.0, 1.0, 1.0), 10.0)],
            )
        )
        assert get_element_count() == 1
        assert get_light_count() == 1

    def test_too_many_lights(self, monkeypatch):
        from chibiray.scene import lights
        from chibiray.scene.manager import upload_scene

        monkeypatch.setattr(lights, "MAX_LIGHTS", 2)
        light = DirectionalLight(Vector3(0.0, -1.0, 0.0), Color(1.0, 1.0, 1.0), 1.0)
        with pytest.raises(RuntimeError, match="Maximum number of lights"):
            upload_scene(Scene(width=4, height=4, fov=90.0, lights=[light, light, light]))
