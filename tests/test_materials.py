"""Unit tests for surface types, materials and the material registry.

Tests cover:
- Surface type parameters and validation
- Material validation
- Uploading materials and reading them back in kernels
"""

import pytest
import taichi as ti

from chibiray.core.vector import Color
from chibiray.materials import (
    Diffuse,
    Material,
    Reflective,
    Refractive,
    SurfaceType,
)


class TestSurfaceTypes:
    """Tests for the surface type dataclasses."""

    def test_surface_type_tags(self):
        assert Diffuse().surface_type == SurfaceType.DIFFUSE
        assert Reflective(0.5).surface_type == SurfaceType.REFLECTIVE
        assert Refractive(index=1.5, transparency=1.0).surface_type == SurfaceType.REFRACTIVE

    @pytest.mark.parametrize("reflectivity", [-0.1, 1.1])
    def test_reflectivity_out_of_range(self, reflectivity):
        with pytest.raises(ValueError, match="Reflectivity"):
            Reflective(reflectivity)

    @pytest.mark.parametrize("reflectivity", [0.0, 1.0])
    def test_reflectivity_bounds_are_allowed(self, reflectivity):
        assert Reflective(reflectivity).reflectivity == reflectivity

    def test_refractive_index_must_be_positive(self):
        with pytest.raises(ValueError, match="Refractive index"):
            Refractive(index=0.0, transparency=1.0)

    def test_negative_transparency(self):
        with pytest.raises(ValueError, match="Transparency"):
            Refractive(index=1.5, transparency=-0.5)


class TestMaterial:
    """Tests for Material validation."""

    def test_surface_type_passthrough(self):
        material = Material(Color(1.0, 1.0, 1.0), albedo=0.18, surface=Reflective(0.5))
        assert material.surface_type == SurfaceType.REFLECTIVE

    @pytest.mark.parametrize("albedo", [0.0, -0.5, 1.5])
    def test_albedo_out_of_range(self, albedo):
        with pytest.raises(ValueError, match="Albedo"):
            Material(Color(1.0, 1.0, 1.0), albedo=albedo, surface=Diffuse())

    def test_negative_color(self):
        with pytest.raises(ValueError, match="green"):
            Material(Color(1.0, -0.1, 1.0), albedo=0.5, surface=Diffuse())

    def test_unknown_surface(self):
        with pytest.raises(ValueError, match="Unknown surface"):
            Material(Color(1.0, 1.0, 1.0), albedo=0.5, surface="mirror")

    def test_equal_materials_hash_equal(self):
        a = Material(Color(0.2, 0.3, 1.0), albedo=0.38, surface=Diffuse())
        b = Material(Color(0.2, 0.3, 1.0), albedo=0.38, surface=Diffuse())
        assert a == b
        assert hash(a) == hash(b)


class TestMaterialRegistry:
    """Tests for the Taichi-side material registry."""

    def test_add_material_assigns_sequential_ids(self):
        from chibiray.materials.registry import add_material, get_material_count

        assert get_material_count() == 0
        first = add_material(Material(Color(1.0, 0.0, 0.0), albedo=0.5, surface=Diffuse()))
        second = add_material(Material(Color(0.0, 1.0, 0.0), albedo=0.5, surface=Diffuse()))
        assert (first, second) == (0, 1)
        assert get_material_count() == 2

    def test_clear_materials(self):
        from chibiray.materials.registry import add_material, clear_materials, get_material_count

        add_material(Material(Color(1.0, 0.0, 0.0), albedo=0.5, surface=Diffuse()))
        clear_materials()
        assert get_material_count() == 0

    def test_properties_readable_in_kernel(self):
        from chibiray.materials.registry import (
            add_material,
            get_material_albedo,
            get_material_color,
            get_material_reflectivity,
            get_material_refractive_index,
            get_material_surface,
            get_material_transparency,
        )

        add_material(Material(Color(1.0, 1.0, 1.0), albedo=0.18, surface=Reflective(0.5)))
        glass_id = add_material(
            Material(Color(0.4, 0.4, 0.8), albedo=0.5, surface=Refractive(index=2.0, transparency=0.9))
        )

        color = ti.Vector.field(3, dtype=ti.f64, shape=())
        scalars = ti.field(dtype=ti.f64, shape=4)
        surface = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel(material_id: ti.i32):
            color[None] = get_material_color(material_id)
            scalars[0] = get_material_albedo(material_id)
            scalars[1] = get_material_reflectivity(material_id)
            scalars[2] = get_material_refractive_index(material_id)
            scalars[3] = get_material_transparency(material_id)
            surface[None] = get_material_surface(material_id)

        test_kernel(glass_id)
        c = color[None]
        assert (c[0], c[1], c[2]) == pytest.approx((0.4, 0.4, 0.8))
        assert scalars[0] == pytest.approx(0.5)
        assert scalars[1] == 0.0
        assert scalars[2] == pytest.approx(2.0)
        assert scalars[3] == pytest.approx(0.9)
        assert surface[None] == int(SurfaceType.REFRACTIVE)

        test_kernel(0)
        assert scalars[1] == pytest.approx(0.5)
        assert surface[None] == int(SurfaceType.REFLECTIVE)

    def test_capacity_exceeded(self, monkeypatch):
        from chibiray.materials import registry

        monkeypatch.setattr(registry, "MAX_MATERIALS", 2)
        material = Material(Color(1.0, 1.0, 1.0), albedo=0.5, surface=Diffuse())
        registry.add_material(material)
        registry.add_material(material)
        with pytest.raises(RuntimeError, match="Maximum number of materials"):
            registry.add_material(material)
