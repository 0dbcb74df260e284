"""Core rendering module.

Components:
    vector: vec3 helpers and unit-ball sampling
    ray: Ray data structure
    constants: Sampling defaults, intersection range and sky colors
    framebuffer: Packed 32-bit color target written by the renderer
    integrator: Path radiance estimator and sky background
    renderer: Parallel per-pixel frame renderer

The integrator and renderer are NOT imported here because they pull in the
scene, material and camera fields. Import them from pathtracer.core.integrator
and pathtracer.core.renderer directly.
"""

from .ray import Ray, make_ray, point_at_parameter
from .vector import (
    as_tuple,
    cross,
    dot,
    length,
    lerp,
    random_in_unit_sphere,
    reflect,
    squared_length,
    unit_vector,
    vec3,
)

__all__ = [
    "Ray",
    "make_ray",
    "point_at_parameter",
    "vec3",
    "dot",
    "cross",
    "length",
    "squared_length",
    "unit_vector",
    "lerp",
    "reflect",
    "random_in_unit_sphere",
    "as_tuple",
]
