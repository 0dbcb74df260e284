"""Unit tests for the frame renderer.

Tests cover:
- Empty-world frame matches the sky gradient
- Gamma 2 quantization
- Preservation of the top (alpha) byte
- Argument validation
- Material scene smoke render
"""

import math

import numpy as np
import pytest


def _expected_sky_channel(direction, channel):
    """Gamma-corrected 8-bit sky value for a camera direction."""
    unit = np.asarray(direction, dtype=np.float64)
    unit = unit / np.linalg.norm(unit)
    t = 0.5 * (unit[1] + 1.0)
    bottom = (1.0, 1.0, 1.0)
    top = (0.5, 0.7, 1.0)
    value = bottom[channel] * (1.0 - t) + top[channel] * t
    return min(255, int(math.sqrt(value) * 255.0))


class TestRenderFrame:
    """Tests for render_frame."""

    def test_empty_world_matches_sky(self, default_camera):
        """Every pixel of an empty world is the gamma-corrected sky."""
        from pathtracer.core.framebuffer import Framebuffer, unpack_rgb
        from pathtracer.core.renderer import render_frame

        fb = Framebuffer(2, 2)
        render_frame(fb, samples=1, max_depth=50, jitter=False)

        for x in range(2):
            for y in range(2):
                # Camera frame: lower-left (-2,-1,-1), horizontal 4, vertical 2
                direction = (-2.0 + 4.0 * x / 2, -1.0 + 2.0 * y / 2, -1.0)
                rgb = unpack_rgb(fb.get_pixel(x, y))
                for channel in range(3):
                    assert abs(rgb[channel] - _expected_sky_channel(direction, channel)) <= 1

    def test_gamma_quantization(self, default_camera):
        """Linear 0.25 becomes sqrt(0.25) * 255 = 127.5, truncated to 127."""
        from pathtracer.core.framebuffer import Framebuffer
        from pathtracer.core.integrator import set_background
        from pathtracer.core.renderer import render_frame

        set_background((0.25, 0.25, 0.25), (0.25, 0.25, 0.25))
        fb = Framebuffer(4, 2)
        render_frame(fb, samples=1, jitter=False)
        assert (fb.to_numpy() == 0x007F7F7F).all()

    def test_black_and_white(self, default_camera):
        """Channels saturate at 0 and 255."""
        from pathtracer.core.framebuffer import Framebuffer, unpack_rgb
        from pathtracer.core.integrator import set_background
        from pathtracer.core.renderer import render_frame

        set_background((1.0, 0.0, 1.0), (1.0, 0.0, 1.0))
        fb = Framebuffer(2, 2)
        render_frame(fb, samples=3)
        assert unpack_rgb(fb.get_pixel(1, 1)) == (255, 0, 255)

    def test_alpha_byte_preserved(self, default_camera):
        """Rendering replaces RGB and keeps the stored top byte."""
        from pathtracer.core.framebuffer import Framebuffer
        from pathtracer.core.integrator import set_background
        from pathtracer.core.renderer import render_frame

        set_background((0.25, 0.25, 0.25), (0.25, 0.25, 0.25))
        fb = Framebuffer(2, 2, fill=0xAB00FF00)
        render_frame(fb, samples=1, jitter=False)
        assert (fb.to_numpy() == 0xAB7F7F7F).all()

    def test_writes_every_pixel(self, default_camera):
        """No pixel is left at its initial value."""
        from pathtracer.core.framebuffer import Framebuffer
        from pathtracer.core.renderer import render_frame

        fb = Framebuffer(16, 8)
        render_frame(fb, samples=2)
        assert (fb.to_numpy() != 0).all()

    @pytest.mark.parametrize("samples,max_depth", [(0, 50), (-1, 50), (1, -1)])
    def test_invalid_arguments(self, samples, max_depth):
        """samples < 1 or max_depth < 0 are rejected."""
        from pathtracer.core.framebuffer import Framebuffer
        from pathtracer.core.renderer import render_frame

        with pytest.raises(ValueError):
            render_frame(Framebuffer(2, 2), samples=samples, max_depth=max_depth)

    def test_zero_depth_renders_black(self, default_camera):
        """With no bounce budget every pixel is black."""
        from pathtracer.core.framebuffer import Framebuffer
        from pathtracer.core.renderer import render_frame

        fb = Framebuffer(4, 2)
        render_frame(fb, samples=2, max_depth=0)
        assert not fb.to_numpy().any()


class TestRenderer:
    """Tests for the Renderer class."""

    def test_render_records_duration(self, default_camera):
        """render returns and records the elapsed time."""
        from pathtracer.core.framebuffer import Framebuffer
        from pathtracer.core.renderer import Renderer, RenderSettings

        renderer = Renderer(RenderSettings(samples=1, max_depth=5))
        assert renderer.last_render_seconds is None
        seconds = renderer.render(Framebuffer(4, 2))
        assert seconds >= 0.0
        assert renderer.last_render_seconds == seconds
        assert "samples=1" in repr(renderer)

    def test_invalid_settings(self):
        """Invalid settings are rejected at construction."""
        from pathtracer.core.renderer import Renderer, RenderSettings

        with pytest.raises(ValueError):
            Renderer(RenderSettings(samples=0))

    def test_material_scene(self):
        """The material scene renders yellow ground below and sky above."""
        from pathtracer.camera.pinhole import setup_camera
        from pathtracer.core.framebuffer import Framebuffer, unpack_rgb
        from pathtracer.core.renderer import Renderer, RenderSettings
        from pathtracer.scene.presets import create_material_scene

        _, camera = create_material_scene(aspect_ratio=2.0)
        setup_camera(camera)
        fb = Framebuffer(20, 10)
        Renderer(RenderSettings(samples=4, max_depth=10)).render(fb)

        # Bottom-center rays hit the ground first, whose albedo has no blue
        _, _, ground_blue = unpack_rgb(fb.get_pixel(10, 0))
        assert ground_blue == 0

        # Top-center rays see only the sky
        sky_r, _, sky_b = unpack_rgb(fb.get_pixel(10, 9))
        assert sky_b == 255
        assert sky_r < sky_b
