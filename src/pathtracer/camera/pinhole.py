"""Pinhole camera model for perspective ray generation.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite the view direction)
- u: points right in the image plane
- v: points up in the image plane

and spans a viewport one unit in front of the eye. Normalized image
coordinates (s, t) in [0, 1] map onto that viewport, with (0, 0) at the
lower-left corner:

    ray(s, t) = Ray(origin, lower_left_corner + s*horizontal + t*vertical - origin)

The frame is computed once on the Python side and stored in Taichi fields,
where every render worker reads it without synchronization.

Degenerate setups (lookat == lookfrom, or vup parallel to the view axis) are
not checked and produce NaN rays.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>>
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 0.0),
    ...     lookat=(0.0, 0.0, -1.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=90.0,
    ...     aspect_ratio=2.0,
    ... )
    >>> setup_camera(camera)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0.5, 0.5)  # Ray through image center
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti
from loguru import logger

from pathtracer.core.ray import Ray, make_ray

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float


@dataclass(frozen=True)
class CameraFrame:
    """Viewport geometry derived from a PinholeCamera.

    Attributes:
        origin: Eye position.
        lower_left_corner: Viewport point hit by ray(0, 0).
        horizontal: Full viewport width vector.
        vertical: Full viewport height vector.
    """

    origin: tuple[float, float, float]
    lower_left_corner: tuple[float, float, float]
    horizontal: tuple[float, float, float]
    vertical: tuple[float, float, float]


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())

# Orthonormal basis, kept for inspection
_camera_u = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_v = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_w = ti.Vector.field(3, dtype=ti.f32, shape=())


def _as_tuple(a: np.ndarray) -> tuple[float, float, float]:
    return (float(a[0]), float(a[1]), float(a[2]))


def compute_basis(camera: PinholeCamera) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Compute the camera's orthonormal basis (u, v, w).

    Returns:
        Tuple (u, v, w) of float32 arrays: right, up and backward directions.
    """
    lookfrom = np.array(camera.lookfrom, dtype=np.float32)
    lookat = np.array(camera.lookat, dtype=np.float32)
    vup = np.array(camera.vup, dtype=np.float32)

    w = lookfrom - lookat
    w = w / np.linalg.norm(w)

    u = np.cross(vup, w)
    u = u / np.linalg.norm(u)

    v = np.cross(w, u)
    return u, v, w


def compute_camera_frame(camera: PinholeCamera) -> CameraFrame:
    """Derive the viewport geometry for a camera.

    The viewport sits at unit distance along -w with half-height
    tan(vfov / 2) and half-width aspect_ratio * half-height.

    Args:
        camera: Camera configuration.

    Returns:
        The CameraFrame (origin, lower_left_corner, horizontal, vertical).
    """
    theta = math.radians(camera.vfov)
    half_height = math.tan(theta / 2.0)
    half_width = camera.aspect_ratio * half_height

    origin = np.array(camera.lookfrom, dtype=np.float32)
    u, v, w = compute_basis(camera)

    lower_left = origin - half_width * u - half_height * v - w
    horizontal = 2.0 * half_width * u
    vertical = 2.0 * half_height * v

    return CameraFrame(
        origin=_as_tuple(origin),
        lower_left_corner=_as_tuple(lower_left),
        horizontal=_as_tuple(horizontal),
        vertical=_as_tuple(vertical),
    )


def setup_camera(camera: PinholeCamera) -> CameraFrame:
    """Compute the camera frame and upload it for ray generation.

    Must be called before rendering.

    Args:
        camera: Camera configuration.

    Returns:
        The CameraFrame that was uploaded.
    """
    frame = compute_camera_frame(camera)
    u, v, w = compute_basis(camera)

    _camera_origin[None] = frame.origin
    _lower_left_corner[None] = frame.lower_left_corner
    _viewport_horizontal[None] = frame.horizontal
    _viewport_vertical[None] = frame.vertical
    _camera_u[None] = u.tolist()
    _camera_v[None] = v.tolist()
    _camera_w[None] = w.tolist()

    logger.debug(
        "Camera at {} looking at {} (vfov={}, aspect={:.3f})",
        camera.lookfrom,
        camera.lookat,
        camera.vfov,
        camera.aspect_ratio,
    )
    return frame


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def get_ray(s: ti.f32, t: ti.f32) -> Ray:
    """Generate the ray through normalized image coordinates (s, t).

    Args:
        s: Horizontal coordinate in [0, 1] (left to right).
        t: Vertical coordinate in [0, 1] (bottom to top).

    Returns:
        A Ray from the camera origin toward the viewport point. The direction
        is not normalized.
    """
    origin = _camera_origin[None]
    target = _lower_left_corner[None] + s * _viewport_horizontal[None] + t * _viewport_vertical[None]
    return make_ray(origin, target - origin)


# Scratch storage for sample_ray: [origin, direction]
_ray_probe = ti.Vector.field(3, dtype=ti.f32, shape=2)


@ti.kernel
def _sample_ray(s: ti.f32, t: ti.f32):
    ray = get_ray(s, t)
    _ray_probe[0] = ray.origin
    _ray_probe[1] = ray.direction


def sample_ray(s: float, t: float) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """Generate a camera ray from Python.

    Args:
        s: Horizontal image coordinate in [0, 1].
        t: Vertical image coordinate in [0, 1].

    Returns:
        Tuple of (origin, direction).
    """
    _sample_ray(s, t)
    return _as_tuple(_ray_probe[0]), _as_tuple(_ray_probe[1])


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get the current camera state for debugging.

    Returns:
        Dictionary with origin, u, v, w, horizontal, vertical, lower_left.
    """
    return {
        "origin": _as_tuple(_camera_origin[None]),
        "u": _as_tuple(_camera_u[None]),
        "v": _as_tuple(_camera_v[None]),
        "w": _as_tuple(_camera_w[None]),
        "horizontal": _as_tuple(_viewport_horizontal[None]),
        "vertical": _as_tuple(_viewport_vertical[None]),
        "lower_left": _as_tuple(_lower_left_corner[None]),
    }
