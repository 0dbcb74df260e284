"""Metal (specular reflective) material implementation.

The unit incoming direction is mirrored about the surface normal

    R = I - 2(I . N)N

and then perturbed by ``fuzz * random_in_unit_sphere()``. A fuzz of 0 gives a
perfect mirror. When the perturbed direction ends up at or below the surface
(dot with the normal <= 0) the ray is absorbed and contributes no light.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.materials.metal import scatter_metal
    >>> # Use within a Taichi kernel:
    >>> # attenuation, scattered, did_scatter = scatter_metal(
    >>> #     albedo, fuzz, ray_in, position, normal
    >>> # )
"""

import taichi as ti

from pathtracer.core.ray import Ray, make_ray
from pathtracer.core.vector import dot, random_in_unit_sphere, reflect, unit_vector, vec3


@ti.func
def scatter_metal(albedo: vec3, fuzz: ti.f32, ray_in: Ray, position: vec3, normal: vec3):
    """Reflect a ray off a metal surface.

    Args:
        albedo: The reflective color.
        fuzz: Reflection roughness, expected in [0, 1].
        ray_in: The incoming ray.
        position: The hit point.
        normal: The unit outward normal at the hit point.

    Returns:
        A tuple of (attenuation, scattered_ray, did_scatter) where did_scatter
        is 0 when the fuzzed reflection points into the surface.
    """
    reflected = reflect(unit_vector(ray_in.direction), normal)
    scattered = make_ray(position, reflected + fuzz * random_in_unit_sphere())

    did_scatter = 0
    if dot(scattered.direction, normal) > 0.0:
        did_scatter = 1

    return albedo, scattered, did_scatter
