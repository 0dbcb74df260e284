"""Interactive presentation window using Taichi GGUI.

The framebuffer is rendered once by the caller; the window then presents it
every frame until closed. While the left button is held, an opaque white
marker (0xFFFFFFFF) is written into the pixel under the cursor each frame, so
dragging paints. Escape or 'q' closes the window.

Example:
    >>> from pathtracer.core.framebuffer import Framebuffer
    >>> from pathtracer.preview.window import PreviewWindow
    >>>
    >>> fb = Framebuffer(200, 100)
    >>> # ... render into fb ...
    >>> if PreviewWindow.is_display_available():
    ...     PreviewWindow(fb).run()
"""

import os
from typing import Any

import taichi as ti

from pathtracer.core.framebuffer import Framebuffer

# Value written by a mouse click
MARKER_COLOR = 0xFFFFFFFF

# Lazy kernel holder - created on first use after Taichi is initialized
_unpack_kernel: Any = None


def _get_unpack_kernel() -> Any:
    """Get or create the packed-to-float conversion kernel."""
    global _unpack_kernel
    if _unpack_kernel is None:

        @ti.kernel
        def _kernel(src: ti.template(), dst: ti.template()):
            for i, j in src:
                value = src[i, j]
                r = (value >> 16) & 0xFF
                g = (value >> 8) & 0xFF
                b = value & 0xFF
                dst[i, j] = ti.Vector([ti.cast(r, ti.f32), ti.cast(g, ti.f32), ti.cast(b, ti.f32)]) / 255.0

        _unpack_kernel = _kernel
    return _unpack_kernel


def cursor_to_pixel(cursor: tuple[float, float], width: int, height: int) -> tuple[int, int]:
    """Convert a normalized GGUI cursor position to framebuffer coordinates.

    GGUI reports the cursor in [0, 1] with (0, 0) at the bottom-left, which
    matches the framebuffer's row order. Positions outside the window map
    outside the framebuffer.
    """
    return int(cursor[0] * width), int(cursor[1] * height)


def handle_click(framebuffer: Framebuffer, cursor: tuple[float, float]) -> bool:
    """Write the click marker at the cursor position.

    Returns:
        True if a pixel was written, False if the cursor is outside the image.
    """
    x, y = cursor_to_pixel(cursor, framebuffer.width, framebuffer.height)
    if cursor[0] < 0.0 or cursor[1] < 0.0:
        return False
    return framebuffer.set_pixel(x, y, MARKER_COLOR)


class PreviewWindow:
    """Presents a Framebuffer in a GGUI window.

    Attributes:
        framebuffer: The framebuffer being presented.
        display_image: Float RGB field the canvas draws from.
    """

    def __init__(self, framebuffer: Framebuffer, *, title: str = "pathtracer") -> None:
        """Create the preview.

        The window itself is opened lazily by run() so that headless checks
        can happen first.
        """
        self.framebuffer = framebuffer
        self._title = title
        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None
        self.display_image = ti.Vector.field(3, dtype=ti.f32, shape=(framebuffer.width, framebuffer.height))

    def _initialize_window(self) -> None:
        if self._window is not None:
            return
        self._window = ti.ui.Window(
            name=self._title,
            res=(self.framebuffer.width, self.framebuffer.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()

    @property
    def window(self) -> ti.ui.Window:
        """Get the GGUI window, opening it if needed."""
        self._initialize_window()
        assert self._window is not None
        return self._window

    def refresh(self) -> None:
        """Copy the framebuffer into the display image."""
        _get_unpack_kernel()(self.framebuffer.pixels, self.display_image)

    def process_events(self) -> None:
        """Handle pending key presses and paint the marker while LMB is held."""
        window = self.window
        for event in window.get_events(ti.ui.PRESS):
            if event.key in (ti.ui.ESCAPE, "q"):
                window.running = False
        if window.is_pressed(ti.ui.LMB):
            handle_click(self.framebuffer, window.get_cursor_pos())

    def show_frame(self) -> None:
        """Present the current framebuffer contents."""
        window = self.window
        assert self._canvas is not None
        self.refresh()
        self._canvas.set_image(self.display_image)
        window.show()

    def run(self) -> None:
        """Present the framebuffer until the window is closed."""
        self._initialize_window()
        while self.window.running:
            self.process_events()
            self.show_frame()

    def close(self) -> None:
        """Stop the event loop."""
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering."""
        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        if os.name == "nt":
            return True

        if os.uname().sysname == "Darwin":
            # SSH session without X forwarding
            return not (os.environ.get("SSH_CONNECTION") and not display)

        return bool(display or wayland)
