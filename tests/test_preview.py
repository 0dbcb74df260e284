"""Unit tests for the presentation helpers that do not need a display.

Tests cover:
- Cursor to pixel conversion
- Click marker writes and out-of-range clicks
- Packed-to-float display conversion
- Per-frame key and held-button handling
- Headless detection
"""

import numpy as np


class TestClicks:
    """Tests for cursor handling."""

    def test_cursor_to_pixel(self):
        """Normalized cursor positions scale to pixel indices."""
        from pathtracer.preview.window import cursor_to_pixel

        assert cursor_to_pixel((0.0, 0.0), 200, 100) == (0, 0)
        assert cursor_to_pixel((0.5, 0.5), 200, 100) == (100, 50)
        assert cursor_to_pixel((0.999, 0.999), 200, 100) == (199, 99)

    def test_click_writes_marker(self):
        """A click inside the image writes opaque white."""
        from pathtracer.core.framebuffer import Framebuffer
        from pathtracer.preview.window import MARKER_COLOR, handle_click

        fb = Framebuffer(10, 10)
        assert handle_click(fb, (0.25, 0.75)) is True
        assert fb.get_pixel(2, 7) == MARKER_COLOR == 0xFFFFFFFF

    def test_click_outside_is_ignored(self):
        """Clicks outside the image change nothing."""
        from pathtracer.core.framebuffer import Framebuffer
        from pathtracer.preview.window import handle_click

        fb = Framebuffer(10, 10)
        assert handle_click(fb, (1.0, 0.5)) is False
        assert handle_click(fb, (-0.05, 0.5)) is False
        assert not fb.to_numpy().any()


class TestDisplayConversion:
    """Tests for the display image without opening a window."""

    def test_refresh_unpacks_pixels(self):
        """refresh converts packed pixels to float RGB."""
        from pathtracer.core.framebuffer import Framebuffer, pack_rgb
        from pathtracer.preview.window import PreviewWindow

        fb = Framebuffer(2, 1)
        fb.set_pixel(0, 0, pack_rgb(255, 0, 0, alpha=0xFF))
        fb.set_pixel(1, 0, pack_rgb(0, 51, 255))

        preview = PreviewWindow(fb)
        preview.refresh()
        image = preview.display_image.to_numpy()
        np.testing.assert_allclose(image[0, 0], (1.0, 0.0, 0.0), atol=1e-6)
        np.testing.assert_allclose(image[1, 0], (0.0, 0.2, 1.0), atol=1e-6)

    def test_is_display_available_headless(self, monkeypatch):
        """Without DISPLAY or WAYLAND_DISPLAY on Linux there is no display."""
        import os

        from pathtracer.preview.window import PreviewWindow

        monkeypatch.delenv("DISPLAY", raising=False)
        monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
        if os.name == "posix" and os.uname().sysname == "Linux":
            assert PreviewWindow.is_display_available() is False


class _StubEvent:
    def __init__(self, key):
        self.key = key


class _StubWindow:
    """Stands in for a GGUI window: scripted key events, held buttons and cursor."""

    def __init__(self, events=(), held=(), cursor=(0.0, 0.0)):
        self.running = True
        self.events = list(events)
        self.held = set(held)
        self.cursor = cursor

    def get_events(self, event_type=None):
        events, self.events = self.events, []
        return events

    def is_pressed(self, *keys):
        return any(key in self.held for key in keys)

    def get_cursor_pos(self):
        return self.cursor


def _preview_with(framebuffer, stub):
    from pathtracer.preview.window import PreviewWindow

    preview = PreviewWindow(framebuffer)
    preview._window = stub
    return preview


class TestEventHandling:
    """Tests for per-frame input handling."""

    def test_held_button_paints_while_dragging(self):
        """Each frame with LMB held marks the pixel under the cursor."""
        import taichi as ti

        from pathtracer.core.framebuffer import Framebuffer
        from pathtracer.preview.window import MARKER_COLOR

        fb = Framebuffer(10, 10)
        stub = _StubWindow(held={ti.ui.LMB}, cursor=(0.15, 0.15))
        preview = _preview_with(fb, stub)

        preview.process_events()
        stub.cursor = (0.55, 0.35)
        preview.process_events()

        assert fb.get_pixel(1, 1) == MARKER_COLOR
        assert fb.get_pixel(5, 3) == MARKER_COLOR
        assert int((fb.to_numpy() != 0).sum()) == 2

    def test_released_button_does_not_paint(self):
        """Without a held button nothing is written."""
        from pathtracer.core.framebuffer import Framebuffer

        fb = Framebuffer(10, 10)
        preview = _preview_with(fb, _StubWindow(cursor=(0.5, 0.5)))
        preview.process_events()
        assert not fb.to_numpy().any()

    def test_escape_and_q_close(self):
        """Escape or 'q' stops the loop."""
        import taichi as ti

        from pathtracer.core.framebuffer import Framebuffer

        for key in (ti.ui.ESCAPE, "q"):
            stub = _StubWindow(events=[_StubEvent(key)])
            preview = _preview_with(Framebuffer(2, 2), stub)
            preview.process_events()
            assert stub.running is False

    def test_refresh_after_opaque_fill(self):
        """An opaque filled buffer unpacks without touching the top byte."""
        from pathtracer.core.framebuffer import Framebuffer
        from pathtracer.preview.window import PreviewWindow

        fb = Framebuffer(3, 2, fill=0xFF336699)
        preview = PreviewWindow(fb)
        preview.refresh()
        image = preview.display_image.to_numpy()
        np.testing.assert_allclose(image[2, 1], (0.2, 0.4, 0.6), atol=1e-6)
