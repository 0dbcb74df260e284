"""Materials module for surface scattering.

Components:
    diffuse: Random-point-in-tangent-sphere diffuse reflection
    metal: Mirror reflection with optional fuzz
    registry: Unified material table and the scatter dispatcher

Each scatter function returns (attenuation, scattered_ray, did_scatter).
Absorption (did_scatter == 0) is a normal outcome that ends the path with
zero radiance, not an error.
"""

from .diffuse import scatter_diffuse
from .metal import scatter_metal
from .registry import (
    MAX_MATERIALS,
    MaterialKind,
    add_diffuse_material,
    add_metal_material,
    clear_materials,
    get_material_count,
    get_material_params,
    scatter,
)

__all__ = [
    "scatter_diffuse",
    "scatter_metal",
    "MaterialKind",
    "MAX_MATERIALS",
    "add_diffuse_material",
    "add_metal_material",
    "clear_materials",
    "get_material_count",
    "get_material_params",
    "scatter",
]
