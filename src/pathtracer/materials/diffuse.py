"""Diffuse material implementation.

Scatter direction is found by picking a random point inside the unit sphere
tangent to the surface at the hit point:

    target    = position + normal + random_in_unit_sphere()
    scattered = Ray(position, target - position)

This approximates Lambertian reflectance (directions lean toward the normal)
without cosine-weighted hemisphere sampling.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.materials.diffuse import scatter_diffuse
    >>> # Use within a Taichi kernel:
    >>> # attenuation, scattered, did_scatter = scatter_diffuse(albedo, position, normal)
"""

import taichi as ti

from pathtracer.core.ray import make_ray
from pathtracer.core.vector import random_in_unit_sphere, vec3


@ti.func
def scatter_diffuse(albedo: vec3, position: vec3, normal: vec3):
    """Scatter a ray off a diffuse surface.

    Args:
        albedo: The diffuse reflectance color.
        position: The hit point.
        normal: The unit outward normal at the hit point.

    Returns:
        A tuple of (attenuation, scattered_ray, did_scatter). Diffuse surfaces
        always scatter, so did_scatter is 1.
    """
    target = position + normal + random_in_unit_sphere()
    scattered = make_ray(position, target - position)
    return albedo, scattered, 1
