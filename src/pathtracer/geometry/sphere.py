"""Sphere primitive with analytic ray-sphere intersection.

The intersection solves

    |o + t*d - c|^2 = r^2

which expands to the quadratic a*t^2 + 2*b*t + c' = 0 with

    a  = dot(d, d)
    b  = dot(o - c, d)        (half of the usual linear coefficient)
    c' = dot(o - c, o - c) - r^2

The smaller root is tried first so the nearest intersection inside the open
interval (t_min, t_max) wins; the larger root is only used when the smaller
one is rejected (for example when the ray starts inside the sphere).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti

from pathtracer.core.ray import Ray, point_at_parameter
from pathtracer.core.vector import dot, vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Record of a ray-sphere intersection.

    Attributes:
        hit: 1 if the ray intersected the sphere, 0 otherwise.
        t: The ray parameter of the intersection. Only valid if hit == 1.
        position: The intersection point. Only valid if hit == 1.
        normal: Unit surface normal pointing outward from the center through
            position, regardless of which side the ray came from.
            Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    position: vec3
    normal: vec3


@ti.func
def make_miss() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        position=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Test a ray against a sphere.

    Args:
        ray: The ray to test. The direction need not be normalized.
        sphere: The sphere to test against.
        t_min: Exclusive lower bound on accepted t (avoids self-intersection).
        t_max: Exclusive upper bound on accepted t (closest hit so far).

    Returns:
        A HitRecord; check the hit field before reading the others.
    """
    oc = ray.origin - sphere.center
    a = dot(ray.direction, ray.direction)
    b = dot(oc, ray.direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = b * b - a * c

    result = make_miss()

    if discriminant > 0.0:
        sqrt_d = ti.sqrt(discriminant)

        t = (-b - sqrt_d) / a
        valid = t_min < t < t_max

        if not valid:
            t = (-b + sqrt_d) / a
            valid = t_min < t < t_max

        if valid:
            position = point_at_parameter(ray, t)
            result = HitRecord(
                hit=1,
                t=t,
                position=position,
                normal=(position - sphere.center) / sphere.radius,
            )

    return result
