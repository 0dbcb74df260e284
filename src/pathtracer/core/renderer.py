"""Parallel frame renderer.

Every pixel is computed independently:

1. ``samples`` camera rays are traced through the pixel, each with its own
   uniform sub-pixel offset in [0, 1) (or no offset when jitter is off).
2. The summed radiance is divided by the sample count.
3. Gamma 2 is applied (square root per channel).
4. Each channel is scaled by 255, truncated and packed as 0xAARRGGBB,
   keeping the top byte already stored in the pixel.

The outermost loop of the render kernel is a struct-for over the
framebuffer, which Taichi spreads across worker threads. Each thread draws
from its own random state and writes only its own pixel; the world, material
table and camera are read-only for the duration of the kernel.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.camera.pinhole import setup_camera
    >>> from pathtracer.core.framebuffer import Framebuffer
    >>> from pathtracer.core.renderer import render_frame
    >>> from pathtracer.scene.presets import create_material_scene
    >>>
    >>> world, camera = create_material_scene(aspect_ratio=2.0)
    >>> setup_camera(camera)
    >>> fb = Framebuffer(200, 100)
    >>> seconds = render_frame(fb, samples=100, max_depth=50)
"""

import time
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm
from loguru import logger

from pathtracer.camera.pinhole import get_ray
from pathtracer.core.constants import DEFAULT_MAX_DEPTH, DEFAULT_SAMPLES
from pathtracer.core.framebuffer import Framebuffer
from pathtracer.core.integrator import color, upload_background
from pathtracer.core.vector import vec3


@dataclass
class RenderSettings:
    """Per-frame sampling parameters.

    Attributes:
        samples: Anti-aliasing samples per pixel (>= 1).
        max_depth: Bounce budget per camera ray (>= 0).
        jitter: Randomize the sub-pixel offset of each sample. When False every
            sample goes through the pixel's lower-left corner.
    """

    samples: int = DEFAULT_SAMPLES
    max_depth: int = DEFAULT_MAX_DEPTH
    jitter: bool = True

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ValueError: If samples < 1 or max_depth < 0.
        """
        if self.samples < 1:
            raise ValueError(f"samples must be at least 1, got {self.samples}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")


@ti.func
def pack_color(c: vec3, previous: ti.u32) -> ti.u32:
    """Gamma-correct a linear color and pack it into a 0xAARRGGBB pixel.

    Args:
        c: Linear radiance, expected in [0, 1] per channel.
        previous: The pixel's current value; its top byte is kept.

    Returns:
        The packed pixel.
    """
    r = ti.cast(tm.clamp(ti.sqrt(c.x) * 255.0, 0.0, 255.0), ti.u32)
    g = ti.cast(tm.clamp(ti.sqrt(c.y) * 255.0, 0.0, 255.0), ti.u32)
    b = ti.cast(tm.clamp(ti.sqrt(c.z) * 255.0, 0.0, 255.0), ti.u32)
    alpha = (previous >> 24) << 24
    return alpha | (r << 16) | (g << 8) | b


@ti.func
def sample_pixel(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    samples: ti.i32,
    max_depth: ti.i32,
    jitter: ti.i32,
) -> vec3:
    """Average the radiance of ``samples`` camera rays through one pixel."""
    accumulated = vec3(0.0, 0.0, 0.0)
    for _ in range(samples):
        jx = 0.0
        jy = 0.0
        if jitter != 0:
            jx = ti.random(ti.f32)
            jy = ti.random(ti.f32)
        s = (ti.cast(x, ti.f32) + jx) / ti.cast(width, ti.f32)
        t = (ti.cast(y, ti.f32) + jy) / ti.cast(height, ti.f32)
        accumulated += color(get_ray(s, t), max_depth)
    return accumulated / ti.cast(samples, ti.f32)


@ti.kernel
def _render_kernel(pixels: ti.template(), samples: ti.i32, max_depth: ti.i32, jitter: ti.i32):
    width = pixels.shape[0]
    height = pixels.shape[1]
    for x, y in pixels:
        averaged = sample_pixel(x, y, width, height, samples, max_depth, jitter)
        pixels[x, y] = pack_color(averaged, pixels[x, y])


def render_frame(
    framebuffer: Framebuffer,
    samples: int = DEFAULT_SAMPLES,
    max_depth: int = DEFAULT_MAX_DEPTH,
    jitter: bool = True,
) -> float:
    """Render one complete frame into a framebuffer.

    The camera must have been set up with setup_camera() and the world and
    materials registered beforehand. Writes exactly width * height pixels.

    Args:
        framebuffer: Target buffer.
        samples: Anti-aliasing samples per pixel.
        max_depth: Bounce budget per camera ray.
        jitter: Randomize the sub-pixel offset of each sample.

    Returns:
        Wall-clock seconds spent rendering.

    Raises:
        ValueError: If samples < 1 or max_depth < 0.
    """
    RenderSettings(samples=samples, max_depth=max_depth, jitter=jitter).validate()

    upload_background()
    start = time.perf_counter()
    _render_kernel(framebuffer.pixels, samples, max_depth, int(jitter))
    ti.sync()
    elapsed = time.perf_counter() - start

    logger.info(
        "Rendered {}x{} at {} spp (depth {}) in {:.3f}s",
        framebuffer.width,
        framebuffer.height,
        samples,
        max_depth,
        elapsed,
    )
    return elapsed


class Renderer:
    """Renders frames with fixed sampling settings.

    Attributes:
        settings: The RenderSettings used for every frame.
    """

    def __init__(self, settings: RenderSettings | None = None) -> None:
        """Initialize the renderer.

        Args:
            settings: Sampling parameters. Defaults to RenderSettings().

        Raises:
            ValueError: If the settings are invalid.
        """
        self.settings = settings if settings is not None else RenderSettings()
        self.settings.validate()
        self._last_render_seconds: float | None = None

    @property
    def last_render_seconds(self) -> float | None:
        """Duration of the most recent render, or None before the first one."""
        return self._last_render_seconds

    def render(self, framebuffer: Framebuffer) -> float:
        """Render one frame into the framebuffer.

        Returns:
            Wall-clock seconds spent rendering.
        """
        self._last_render_seconds = render_frame(
            framebuffer,
            samples=self.settings.samples,
            max_depth=self.settings.max_depth,
            jitter=self.settings.jitter,
        )
        return self._last_render_seconds

    def __repr__(self) -> str:
        """Return a string representation of the renderer."""
        return (
            f"Renderer(samples={self.settings.samples}, "
            f"max_depth={self.settings.max_depth}, jitter={self.settings.jitter})"
        )
