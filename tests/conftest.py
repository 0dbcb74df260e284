"""Pytest configuration for pathtracer tests.

Taichi is initialized once per session; every test starts and ends with an
empty world, an empty material table and the default sky.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Repeated ti.init() calls would discard fields declared by modules that
    earlier tests already imported.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_world_state():
    """Reset the world, materials and background around each test."""
    # Imported here so the fields are declared after ti.init()
    from pathtracer.core.integrator import reset_background
    from pathtracer.materials.registry import clear_materials
    from pathtracer.scene.intersection import clear_world

    def _clear_all():
        clear_world()
        clear_materials()
        reset_background()

    _clear_all()
    yield
    _clear_all()


@pytest.fixture
def default_camera():
    """Upload the origin-looking-down--z camera with aspect ratio 2."""
    from pathtracer.camera.pinhole import setup_camera
    from pathtracer.scene.presets import default_camera as make_camera

    camera = make_camera(aspect_ratio=2.0)
    setup_camera(camera)
    return camera
