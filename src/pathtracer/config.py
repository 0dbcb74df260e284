"""Render configuration and JSON scene files.

A scene file is a JSON document with four optional sections:

    {
        "render": {"width": 200, "height": 100, "samples": 100, "max_depth": 50,
                   "seed": 0, "lookfrom": [0, 0, 0], "lookat": [0, 0, -1],
                   "vup": [0, 1, 0], "vfov": 90},
        "background": {"bottom": [1, 1, 1], "top": [0.5, 0.7, 1.0]},
        "materials": [{"type": "diffuse", "albedo": [0.8, 0.3, 0.3]},
                      {"type": "metal", "albedo": [0.8, 0.6, 0.2], "fuzz": 1.0}],
        "spheres": [{"center": [0, 0, -1], "radius": 0.5, "material_id": 0}]
    }

The "materials" and "spheres" sections are the format of World.to_dict().

This module declares no Taichi fields and is safe to import before
init_taichi(); the camera and renderer are imported on use.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import taichi as ti
from loguru import logger

from pathtracer.core.constants import DEFAULT_MAX_DEPTH, DEFAULT_SAMPLES, SKY_BOTTOM, SKY_TOP

if TYPE_CHECKING:
    from pathtracer.camera.pinhole import PinholeCamera
    from pathtracer.core.renderer import RenderSettings

Vec3 = tuple[float, float, float]


@dataclass
class RenderConfig:
    """Image, sampling and camera parameters for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Anti-aliasing samples per pixel.
        max_depth: Bounce budget per camera ray.
        seed: Random seed passed to ti.init().
        num_threads: CPU worker threads, or None for the Taichi default.
        lookfrom: Camera position.
        lookat: Point the camera looks at.
        vup: Camera up direction.
        vfov: Vertical field of view in degrees.
    """

    width: int = 200
    height: int = 100
    samples: int = DEFAULT_SAMPLES
    max_depth: int = DEFAULT_MAX_DEPTH
    seed: int = 0
    num_threads: int | None = None
    lookfrom: Vec3 = (0.0, 0.0, 0.0)
    lookat: Vec3 = (0.0, 0.0, -1.0)
    vup: Vec3 = (0.0, 1.0, 0.0)
    vfov: float = 90.0

    @property
    def aspect_ratio(self) -> float:
        """Image width divided by height."""
        return self.width / self.height

    def validate(self) -> None:
        """Check the configuration.

        Raises:
            ValueError: If a size is not positive, samples < 1 or max_depth < 0.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.num_threads is not None and self.num_threads <= 0:
            raise ValueError(f"num_threads must be positive, got {self.num_threads}")
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180), got {self.vfov}")
        if self.samples < 1:
            raise ValueError(f"samples must be at least 1, got {self.samples}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")

    def camera(self) -> PinholeCamera:
        """Build the PinholeCamera described by this configuration."""
        from pathtracer.camera.pinhole import PinholeCamera

        return PinholeCamera(
            lookfrom=self.lookfrom,
            lookat=self.lookat,
            vup=self.vup,
            vfov=self.vfov,
            aspect_ratio=self.aspect_ratio,
        )

    def settings(self, jitter: bool = True) -> RenderSettings:
        """Build the RenderSettings described by this configuration."""
        from pathtracer.core.renderer import RenderSettings

        return RenderSettings(samples=self.samples, max_depth=self.max_depth, jitter=jitter)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Create a configuration from a dictionary.

        Unknown keys are rejected.

        Raises:
            ValueError: If a key is unknown or the resulting config is invalid.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown render settings: {sorted(unknown)}")

        values = dict(data)
        for key in ("lookfrom", "lookat", "vup"):
            if key in values:
                values[key] = _as_vec3(values[key], key)
        config = cls(**values)
        config.validate()
        return config


def _as_vec3(value: Any, name: str) -> Vec3:
    if len(value) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(value)}")
    return (float(value[0]), float(value[1]), float(value[2]))


def load_scene_file(path: str | Path) -> tuple[RenderConfig, dict[str, Any], tuple[Vec3, Vec3]]:
    """Read a JSON scene file.

    Args:
        path: Path to the JSON document.

    Returns:
        Tuple of (RenderConfig, scene dict for World.from_dict, (bottom, top)
        background colors).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not valid JSON or has invalid settings.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid scene file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Scene file {path} must contain a JSON object")

    config = RenderConfig.from_dict(data.get("render", {}))

    background = data.get("background", {})
    bottom = _as_vec3(background.get("bottom", SKY_BOTTOM), "background bottom")
    top = _as_vec3(background.get("top", SKY_TOP), "background top")

    scene = {
        "materials": data.get("materials", []),
        "spheres": data.get("spheres", []),
    }
    logger.debug(
        "Loaded scene file {} ({} materials, {} spheres)",
        path,
        len(scene["materials"]),
        len(scene["spheres"]),
    )
    return config, scene, (bottom, top)


def init_taichi(seed: int = 0, num_threads: int | None = None) -> None:
    """Initialize Taichi on the CPU backend.

    Must be called once, before any field is touched.

    Args:
        seed: Seed for ti.random().
        num_threads: CPU worker threads, or None for the Taichi default.
    """
    kwargs: dict[str, Any] = {"arch": ti.cpu, "random_seed": seed}
    if num_threads is not None:
        kwargs["cpu_max_num_threads"] = num_threads
    ti.init(**kwargs)
    logger.info("Taichi initialized on CPU (seed={}, threads={})", seed, num_threads or "default")
