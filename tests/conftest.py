"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. All kernel math is
    double precision, so the default float type is f64.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear elements, materials and lights before and after each test."""
    # Import here so that the storage fields are created after ti.init()
    from chibiray.scene.manager import clear_scene

    clear_scene()
    yield
    clear_scene()


@pytest.fixture
def white_diffuse():
    """A plain white diffuse material."""
    from chibiray.core.vector import Color
    from chibiray.materials import Diffuse, Material

    return Material(Color(1.0, 1.0, 1.0), albedo=1.0, surface=Diffuse())
