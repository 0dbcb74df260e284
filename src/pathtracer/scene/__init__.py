"""Scene module: sphere storage, nearest-hit query and scene building.

Components:
    intersection: Sphere fields and the hit_world() nearest-hit query
    world: Python-side World builder with dict (JSON) import/export
    presets: Ready-made scenes returning (World, PinholeCamera)
"""

from .intersection import (
    MAX_SPHERES,
    WorldHitRecord,
    add_sphere,
    clear_world,
    get_sphere_count,
    hit_world,
)
from .presets import (
    SCENES,
    create_material_scene,
    create_single_sphere_scene,
    default_camera,
)
from .world import MaterialInfo, SphereInfo, World

__all__ = [
    "MAX_SPHERES",
    "WorldHitRecord",
    "add_sphere",
    "clear_world",
    "get_sphere_count",
    "hit_world",
    "MaterialInfo",
    "SphereInfo",
    "World",
    "SCENES",
    "create_material_scene",
    "create_single_sphere_scene",
    "default_camera",
]
