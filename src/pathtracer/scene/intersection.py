"""World storage and nearest-hit query.

Spheres live in Taichi fields (structure-of-arrays) together with the id of
the material attached to each one. The nearest-hit query is a brute-force
linear scan: each accepted hit shrinks the upper bound, and because the bound
test is strict the first sphere in scan order wins exact ties.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.scene.intersection import add_sphere, clear_world, hit_world
    >>> clear_world()
    >>> add_sphere((0.0, 0.0, -1.0), 0.5, material_id=0)
    >>> # Use hit_world within a Taichi kernel
"""

import taichi as ti

from pathtracer.core.ray import Ray
from pathtracer.core.vector import vec3
from pathtracer.geometry.sphere import Sphere, hit_sphere


@ti.dataclass
class WorldHitRecord:
    """Record of the nearest ray-world intersection.

    Attributes:
        hit: 1 if any sphere was hit within range, 0 otherwise.
        t: Ray parameter of the nearest hit. Only valid if hit == 1.
        position: The nearest hit point. Only valid if hit == 1.
        normal: Unit outward normal at the hit point. Only valid if hit == 1.
        material_id: Material of the sphere that was hit, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    position: vec3
    normal: vec3
    material_id: ti.i32


# Maximum number of spheres in the world
MAX_SPHERES = 1024

sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_world() -> None:
    """Remove all spheres from the world.

    Resets the sphere count to zero. The field data is overwritten when new
    spheres are added.
    """
    num_spheres[None] = 0


def add_sphere(center: tuple[float, float, float], radius: float, material_id: int = 0) -> int:
    """Append a sphere to the world.

    Scan order (and so tie-breaking) follows insertion order.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        material_id: The id of the material attached to the sphere.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = vec3(center[0], center[1], center[2])
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the world."""
    return int(num_spheres[None])


@ti.func
def hit_world(ray: Ray, t_min: ti.f32, t_max: ti.f32) -> WorldHitRecord:
    """Find the nearest sphere hit along a ray.

    Args:
        ray: The ray to test.
        t_min: Exclusive lower bound on accepted t.
        t_max: Exclusive upper bound on accepted t.

    Returns:
        A WorldHitRecord for the closest hit, or a miss record (hit == 0,
        material_id == -1) when nothing is hit within range.
    """
    closest_t = t_max
    result = WorldHitRecord(
        hit=0,
        t=0.0,
        position=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        material_id=-1,
    )

    for i in range(num_spheres[None]):
        sphere = Sphere(center=sphere_centers[i], radius=sphere_radii[i])
        rec = hit_sphere(ray, sphere, t_min, closest_t)
        if rec.hit == 1:
            closest_t = rec.t
            result = WorldHitRecord(
                hit=1,
                t=rec.t,
                position=rec.position,
                normal=rec.normal,
                material_id=sphere_material_ids[i],
            )

    return result
