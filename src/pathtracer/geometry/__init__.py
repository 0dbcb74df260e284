"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with analytic ray-sphere intersection

Intersection routines are Taichi functions (@ti.func) so they can be called
from the per-pixel render kernel. Each test returns a HitRecord whose hit
field tells whether the remaining fields are meaningful.
"""

from .sphere import HitRecord, Sphere, hit_sphere, make_miss

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_miss",
]
