"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside
- Ray starting inside sphere (far root)
- Sphere behind the ray origin
- Ray missing sphere, including the tangent case
- Surface normals and texture coordinates
"""

import math

import pytest
import taichi as ti


def _hit(center, radius, origin, direction):
    """Run hit_sphere in a kernel and return (hit, distance)."""
    from chibiray.core.ray import Ray, vec3
    from chibiray.geometry.sphere import SphereShape, hit_sphere

    hit = ti.field(dtype=ti.i32, shape=())
    distance = ti.field(dtype=ti.f64, shape=())

    @ti.kernel
    def test_kernel(c: vec3, r: ti.f64, o: vec3, d: vec3):
        h, t = hit_sphere(Ray(origin=o, direction=d), SphereShape(center=c, radius=r))
        hit[None] = h
        distance[None] = t

    test_kernel(vec3(*center), radius, vec3(*origin), vec3(*direction))
    return hit[None], distance[None]


class TestSphereBasics:
    """Tests for the SphereShape dataclass."""

    def test_fields(self):
        from chibiray.geometry.sphere import SphereShape, vec3

        center_result = ti.Vector.field(3, dtype=ti.f64, shape=())
        radius_result = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            sphere = SphereShape(center=vec3(1.0, 2.0, 3.0), radius=0.5)
            center_result[None] = sphere.center
            radius_result[None] = sphere.radius

        test_kernel()
        c = center_result[None]
        assert (c[0], c[1], c[2]) == (1.0, 2.0, 3.0)
        assert radius_result[None] == 0.5


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_from_outside(self):
        """Distance is the center distance minus the radius."""
        hit, distance = _hit((0.0, 0.0, -5.0), 1.0, (0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 1
        assert distance == pytest.approx(4.0)

    def test_hit_off_center(self):
        hit, distance = _hit((0.0, 0.5, -5.0), 1.0, (0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 1
        assert distance == pytest.approx(5.0 - math.sqrt(0.75))

    def test_origin_inside_returns_far_root(self):
        hit, distance = _hit((0.0, 0.0, 0.0), 2.0, (0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 1
        assert distance == pytest.approx(2.0)

    def test_sphere_behind_origin(self):
        hit, _ = _hit((0.0, 0.0, 5.0), 1.0, (0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 0

    def test_miss(self):
        hit, _ = _hit((3.0, 0.0, -5.0), 1.0, (0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 0

    def test_tangent_ray_misses(self):
        """A ray grazing the sphere exactly does not count as a hit."""
        hit, _ = _hit((1.0, 0.0, -5.0), 1.0, (0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 0


class TestSphereSurface:
    """Tests for sphere normals and texture coordinates."""

    def test_normal_points_outward(self):
        from chibiray.geometry.sphere import SphereShape, sphere_normal, vec3

        result = ti.Vector.field(3, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            sphere = SphereShape(center=vec3(0.0, 0.0, -5.0), radius=1.0)
            result[None] = sphere_normal(sphere, vec3(0.0, 0.0, -4.0))

        test_kernel()
        n = result[None]
        assert n[0] == pytest.approx(0.0)
        assert n[1] == pytest.approx(0.0)
        assert n[2] == pytest.approx(1.0)

    @pytest.mark.parametrize(
        "point,expected",
        [
            ((1.0, 0.0, 0.0), (1.0, 0.5)),
            ((0.0, 0.0, 1.0), (1.5, 0.5)),
            ((0.0, 1.0, 0.0), (1.0, 0.0)),
            ((0.0, -1.0, 0.0), (1.0, 1.0)),
        ],
    )
    def test_texture_coords(self, point, expected):
        from chibiray.geometry.sphere import SphereShape, sphere_texture_coords, vec3

        result = ti.Vector.field(2, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel(p: vec3):
            sphere = SphereShape(center=vec3(0.0, 0.0, 0.0), radius=1.0)
            result[None] = sphere_texture_coords(sphere, p)

        test_kernel(vec3(*point))
        uv = result[None]
        assert uv[0] == pytest.approx(expected[0])
        assert uv[1] == pytest.approx(expected[1])
