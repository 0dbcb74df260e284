"""Camera module for primary ray generation.

Components:
    pinhole: Look-at pinhole camera with vertical field of view

Ray generation uses normalized image coordinates:
    s in [0, 1]: left to right across the image
    t in [0, 1]: bottom to top across the image
"""

from .pinhole import (
    CameraFrame,
    PinholeCamera,
    compute_basis,
    compute_camera_frame,
    get_camera_info,
    get_ray,
    sample_ray,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "CameraFrame",
    "compute_basis",
    "compute_camera_frame",
    "setup_camera",
    "get_ray",
    "sample_ray",
    "get_camera_info",
]
