"""Static Matplotlib view of a rendered framebuffer.

Used where a GGUI window cannot be opened. Requires the ``preview`` extra.

Example:
    >>> from pathtracer.preview.display import show_framebuffer
    >>> show_framebuffer(fb, title="materials")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathtracer.core.framebuffer import Framebuffer


def show_framebuffer(
    framebuffer: Framebuffer,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 4),
    block: bool = True,
) -> None:
    """Display the framebuffer as a Matplotlib figure.

    The packed pixels are already gamma corrected, so they are shown as-is.

    Args:
        framebuffer: The framebuffer to display.
        title: Figure title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(framebuffer.to_rgb_numpy(), interpolation="nearest")
    ax.axis("off")
    ax.set_title(title if title is not None else f"{framebuffer.width}x{framebuffer.height}")

    plt.tight_layout()
    plt.show(block=block)
