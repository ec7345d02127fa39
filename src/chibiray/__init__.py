"""Whitted-style ray tracer built on Taichi kernels.

chibiray renders a static scene of spheres, planes and lights into an RGB
pixel buffer using recursive ray tracing with hard shadows, mirror
reflection and Fresnel-weighted refraction.

Subpackages:
    core: Vector algebra, ray construction, shading engine and render driver
    geometry: Sphere and plane primitives with intersection queries
    materials: Surface types, materials and the material registry
    scene: Scene description, element storage, lights and scene upload
    preview: Image export and preview utilities

Taichi must be initialized with double precision before importing modules
that allocate fields:

    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from chibiray.core.render import render
"""

__version__ = "0.1.0"
