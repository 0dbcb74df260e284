"""Unified material table and scatter dispatch.

Every material in the scene gets one id in a single table stored as Taichi
fields. The kind column selects which scatter function handles a hit:

    material_kinds[id]   -> MaterialKind (DIFFUSE or METAL)
    material_albedos[id] -> albedo (RGB)
    material_fuzz[id]    -> fuzz (metal only, 0 for diffuse)

Materials are registered from Python before rendering and are read-only
while a render kernel runs.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.materials.registry import add_diffuse_material, add_metal_material
    >>> ground = add_diffuse_material((0.8, 0.8, 0.0))
    >>> mirror = add_metal_material((0.8, 0.8, 0.8), fuzz=0.0)
"""

from enum import IntEnum

import taichi as ti

from pathtracer.core.ray import Ray, make_ray
from pathtracer.core.vector import vec3
from pathtracer.materials.diffuse import scatter_diffuse
from pathtracer.materials.metal import scatter_metal


class MaterialKind(IntEnum):
    """Enumeration of supported material kinds."""

    DIFFUSE = 0
    METAL = 1


# Maximum number of materials in the scene
MAX_MATERIALS = 256

material_kinds = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
material_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_fuzz = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def _validate_albedo(albedo: tuple[float, float, float]) -> None:
    if len(albedo) != 3:
        raise ValueError(f"Albedo must have 3 components, got {len(albedo)}")
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )


def _register(kind: MaterialKind, albedo: tuple[float, float, float], fuzz: float) -> int:
    _validate_albedo(albedo)

    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_kinds[idx] = int(kind)
    material_albedos[idx] = vec3(albedo[0], albedo[1], albedo[2])
    material_fuzz[idx] = fuzz
    num_materials[None] = idx + 1
    return idx


def add_diffuse_material(albedo: tuple[float, float, float]) -> int:
    """Register a diffuse material.

    Args:
        albedo: The diffuse reflectance color as (R, G, B), each in [0, 1].

    Returns:
        The material id.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If any albedo component is outside [0, 1].
    """
    return _register(MaterialKind.DIFFUSE, albedo, 0.0)


def add_metal_material(albedo: tuple[float, float, float], fuzz: float = 0.0) -> int:
    """Register a metal material.

    Args:
        albedo: The reflective color as (R, G, B), each in [0, 1].
        fuzz: Reflection roughness. Values outside [0, 1] are clamped.

    Returns:
        The material id.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If any albedo component is outside [0, 1].
    """
    return _register(MaterialKind.METAL, albedo, min(max(fuzz, 0.0), 1.0))


def get_material_count() -> int:
    """Get the number of registered materials."""
    return int(num_materials[None])


def get_material_params(material_id: int) -> tuple[MaterialKind, tuple[float, float, float], float]:
    """Read back a material's parameters (Python side).

    Args:
        material_id: The material id returned by add_*_material().

    Returns:
        Tuple of (kind, albedo, fuzz).

    Raises:
        ValueError: If material_id is not registered.
    """
    if material_id < 0 or material_id >= num_materials[None]:
        raise ValueError(f"Invalid material_id: {material_id}")
    albedo = material_albedos[material_id]
    return (
        MaterialKind(int(material_kinds[material_id])),
        (float(albedo[0]), float(albedo[1]), float(albedo[2])),
        float(material_fuzz[material_id]),
    )


@ti.func
def scatter(material_id: ti.i32, ray_in: Ray, position: vec3, normal: vec3):
    """Dispatch a hit to the scatter function of its material kind.

    Args:
        material_id: The id of the material that was hit.
        ray_in: The incoming ray.
        position: The hit point.
        normal: The unit outward normal at the hit point.

    Returns:
        A tuple of (attenuation, scattered_ray, did_scatter). did_scatter is 0
        when the ray is absorbed; attenuation and scattered_ray are then
        meaningless.
    """
    kind = material_kinds[material_id]
    albedo = material_albedos[material_id]

    attenuation = vec3(0.0, 0.0, 0.0)
    scattered = make_ray(position, normal)
    did_scatter = 0

    if kind == int(MaterialKind.DIFFUSE):
        attenuation, scattered, did_scatter = scatter_diffuse(albedo, position, normal)
    elif kind == int(MaterialKind.METAL):
        attenuation, scattered, did_scatter = scatter_metal(
            albedo, material_fuzz[material_id], ray_in, position, normal
        )

    return attenuation, scattered, did_scatter
