"""Python-side world builder.

The World mirrors what has been uploaded to the Taichi fields so that a scene
can be inspected, exported to a dict (for JSON scene files) and rebuilt from
one. Material ids are handed out by the material registry and spheres refer
to them by id; materials must therefore be added before the spheres that use
them.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.scene.world import World
    >>> world = World()
    >>> ground = world.add_diffuse_material((0.8, 0.8, 0.0))
    >>> world.add_sphere((0.0, -100.5, -1.0), 100.0, ground)
    0
    >>> world.add_metal_sphere((1.0, 0.0, -1.0), 0.5, (0.8, 0.6, 0.2), fuzz=1.0)
    (1, 1)
"""

from dataclasses import dataclass
from typing import Any

from pathtracer.materials.registry import (
    MaterialKind,
    add_diffuse_material,
    add_metal_material,
    clear_materials,
    get_material_count,
    get_material_params,
)
from pathtracer.scene.intersection import (
    add_sphere,
    clear_world,
    get_sphere_count,
)


@dataclass
class MaterialInfo:
    """A registered material.

    Attributes:
        material_id: Id in the material table.
        kind: DIFFUSE or METAL.
        albedo: Reflectance color.
        fuzz: Reflection roughness as stored (after clamping). 0 for diffuse.
    """

    material_id: int
    kind: MaterialKind
    albedo: tuple[float, float, float]
    fuzz: float = 0.0


@dataclass
class SphereInfo:
    """A sphere in the world.

    Attributes:
        sphere_index: Index in the sphere fields (scan order).
        center: Center point.
        radius: Radius.
        material_id: Material attached to the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


def _as_triple(value: Any, name: str) -> tuple[float, float, float]:
    if len(value) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(value)}")
    return (float(value[0]), float(value[1]), float(value[2]))


class World:
    """Builds and tracks the spheres and materials of a scene.

    Creating a World clears the global world and material fields; only one
    World is meaningful at a time.

    Attributes:
        materials: MaterialInfo for every registered material, indexed by id.
        spheres: SphereInfo for every sphere, in scan order.
    """

    def __init__(self) -> None:
        """Initialize an empty world."""
        self.materials: list[MaterialInfo] = []
        self.spheres: list[SphereInfo] = []
        self.clear()

    def clear(self) -> None:
        """Remove all spheres and materials."""
        clear_world()
        clear_materials()
        self.materials.clear()
        self.spheres.clear()

    # =========================================================================
    # Materials
    # =========================================================================

    def add_diffuse_material(self, albedo: tuple[float, float, float]) -> int:
        """Register a diffuse material.

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
            ValueError: If the albedo is invalid.
        """
        material_id = add_diffuse_material(_as_triple(albedo, "albedo"))
        kind, stored_albedo, _ = get_material_params(material_id)
        self.materials.append(MaterialInfo(material_id, kind, stored_albedo))
        return material_id

    def add_metal_material(self, albedo: tuple[float, float, float], fuzz: float = 0.0) -> int:
        """Register a metal material. Fuzz is clamped to [0, 1].

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
            ValueError: If the albedo is invalid.
        """
        material_id = add_metal_material(_as_triple(albedo, "albedo"), float(fuzz))
        kind, stored_albedo, stored_fuzz = get_material_params(material_id)
        self.materials.append(MaterialInfo(material_id, kind, stored_albedo, stored_fuzz))
        return material_id

    def get_material_count(self) -> int:
        """Get the number of registered materials."""
        return get_material_count()

    def get_material_info(self, material_id: int) -> MaterialInfo | None:
        """Get a material by id, or None if it does not exist."""
        if 0 <= material_id < len(self.materials):
            return self.materials[material_id]
        return None

    # =========================================================================
    # Spheres
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material_id: int,
    ) -> int:
        """Append a sphere using an existing material.

        Args:
            center: The center point as (x, y, z).
            radius: The radius (> 0).
            material_id: Id returned by add_*_material().

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the maximum number of spheres is exceeded.
            ValueError: If material_id is unknown or radius is not positive.
        """
        if material_id < 0 or material_id >= get_material_count():
            raise ValueError(f"Invalid material_id: {material_id}")
        if radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")

        center = _as_triple(center, "center")
        sphere_index = add_sphere(center, float(radius), material_id)
        self.spheres.append(SphereInfo(sphere_index, center, float(radius), material_id))
        return sphere_index

    def add_diffuse_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        albedo: tuple[float, float, float],
    ) -> tuple[int, int]:
        """Add a sphere with a new diffuse material.

        Returns:
            Tuple of (sphere_index, material_id).
        """
        material_id = self.add_diffuse_material(albedo)
        return self.add_sphere(center, radius, material_id), material_id

    def add_metal_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        albedo: tuple[float, float, float],
        fuzz: float = 0.0,
    ) -> tuple[int, int]:
        """Add a sphere with a new metal material.

        Returns:
            Tuple of (sphere_index, material_id).
        """
        material_id = self.add_metal_material(albedo, fuzz)
        return self.add_sphere(center, radius, material_id), material_id

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the world."""
        return get_sphere_count()

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the world to a JSON-compatible dictionary."""
        materials: list[dict[str, Any]] = []
        for mat in self.materials:
            entry: dict[str, Any] = {"type": mat.kind.name.lower(), "albedo": list(mat.albedo)}
            if mat.kind == MaterialKind.METAL:
                entry["fuzz"] = mat.fuzz
            materials.append(entry)

        spheres = [
            {"center": list(s.center), "radius": s.radius, "material_id": s.material_id}
            for s in self.spheres
        ]
        return {"materials": materials, "spheres": spheres}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Replace the world with the contents of a dictionary.

        Args:
            data: Dictionary with 'materials' and 'spheres' lists, as produced
                by to_dict().

        Raises:
            ValueError: If a material type is unknown or an entry is invalid.
        """
        self.clear()

        for mat in data.get("materials", []):
            kind = str(mat.get("type", "")).lower()
            if kind == "diffuse":
                self.add_diffuse_material(mat.get("albedo", [0.5, 0.5, 0.5]))
            elif kind == "metal":
                self.add_metal_material(mat.get("albedo", [0.8, 0.8, 0.8]), mat.get("fuzz", 0.0))
            else:
                raise ValueError(f"Unknown material type: {kind!r}")

        for sphere in data.get("spheres", []):
            self.add_sphere(
                sphere.get("center", [0.0, 0.0, 0.0]),
                sphere.get("radius", 1.0),
                sphere.get("material_id", 0),
            )

    @classmethod
    def build(cls, data: dict[str, Any]) -> "World":
        """Create a world from a dictionary."""
        world = cls()
        world.from_dict(data)
        return world

    def __repr__(self) -> str:
        """Return a string representation of the world."""
        return f"World(spheres={len(self.spheres)}, materials={len(self.materials)})"
