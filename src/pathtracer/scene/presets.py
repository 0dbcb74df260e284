"""Ready-made scenes.

Both scenes are viewed from the origin looking down -z with a 90 degree
vertical field of view:

- single sphere: one diffuse sphere of radius 0.5 at (0, 0, -1)
- material scene: a large yellow ground sphere, a diffuse red sphere in the
  centre, a rough gold metal sphere on the right (fuzz 1.0) and a slightly
  fuzzy silver metal sphere on the left (fuzz 0.3)

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.camera.pinhole import setup_camera
    >>> from pathtracer.scene.presets import create_material_scene
    >>>
    >>> world, camera = create_material_scene(aspect_ratio=2.0)
    >>> setup_camera(camera)
"""

from pathtracer.camera.pinhole import PinholeCamera
from pathtracer.scene.world import World

# Default view shared by the presets
DEFAULT_LOOKFROM = (0.0, 0.0, 0.0)
DEFAULT_LOOKAT = (0.0, 0.0, -1.0)
DEFAULT_VUP = (0.0, 1.0, 0.0)
DEFAULT_VFOV = 90.0


def default_camera(aspect_ratio: float = 2.0) -> PinholeCamera:
    """Camera at the origin looking down -z."""
    return PinholeCamera(
        lookfrom=DEFAULT_LOOKFROM,
        lookat=DEFAULT_LOOKAT,
        vup=DEFAULT_VUP,
        vfov=DEFAULT_VFOV,
        aspect_ratio=aspect_ratio,
    )


def create_single_sphere_scene(aspect_ratio: float = 2.0) -> tuple[World, PinholeCamera]:
    """Create a scene with one diffuse sphere in front of the camera.

    Args:
        aspect_ratio: Image width divided by height.

    Returns:
        Tuple of (World, PinholeCamera).
    """
    world = World()
    world.add_diffuse_sphere((0.0, 0.0, -1.0), 0.5, (0.5, 0.5, 0.5))
    return world, default_camera(aspect_ratio)


def create_material_scene(aspect_ratio: float = 2.0) -> tuple[World, PinholeCamera]:
    """Create the ground-plus-three-spheres material showcase.

    Args:
        aspect_ratio: Image width divided by height.

    Returns:
        Tuple of (World, PinholeCamera).
    """
    world = World()
    world.add_diffuse_sphere((0.0, -100.5, -1.0), 100.0, (0.8, 0.8, 0.0))
    world.add_diffuse_sphere((0.0, 0.0, -1.0), 0.5, (0.8, 0.3, 0.3))
    world.add_metal_sphere((1.0, 0.0, -1.0), 0.5, (0.8, 0.6, 0.2), fuzz=1.0)
    world.add_metal_sphere((-1.0, 0.0, -1.0), 0.5, (0.8, 0.8, 0.8), fuzz=0.3)
    return world, default_camera(aspect_ratio)


# Scene name -> factory, for command-line selection
SCENES = {
    "single": create_single_sphere_scene,
    "materials": create_material_scene,
}
