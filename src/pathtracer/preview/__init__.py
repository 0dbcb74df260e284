"""Presentation of rendered frames.

Components:
    window: GGUI window with click-to-mark and Escape/'q' to close
    display: Static Matplotlib view (requires the ``preview`` extra)
"""

from .display import show_framebuffer
from .window import MARKER_COLOR, PreviewWindow, cursor_to_pixel, handle_click

__all__ = [
    "MARKER_COLOR",
    "PreviewWindow",
    "cursor_to_pixel",
    "handle_click",
    "show_framebuffer",
]
