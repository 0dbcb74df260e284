"""Packed 32-bit color target.

Each pixel is one ``u32`` laid out as 0xAARRGGBB. The renderer only replaces
the RGB bytes and keeps whatever the caller stored in the top byte.

Pixels are indexed ``(x, y)`` with ``y = 0`` the bottom row, matching the
order in which the camera samples the viewport. ``to_numpy()`` returns the
usual top-row-first image layout.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.core.framebuffer import Framebuffer
    >>> fb = Framebuffer(200, 100)
    >>> fb.set_pixel(10, 20, 0xFFFFFFFF)
    True
    >>> fb.set_pixel(200, 0, 0xFFFFFFFF)  # out of range, nothing written
    False
"""

import numpy as np
import numpy.typing as npt
import taichi as ti


class Framebuffer:
    """A width x height grid of packed 32-bit colors.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: The backing Taichi field of shape (width, height), dtype u32.
    """

    def __init__(self, width: int, height: int, fill: int = 0) -> None:
        """Allocate the framebuffer.

        Args:
            width: Image width in pixels (> 0).
            height: Image height in pixels (> 0).
            fill: Initial packed value for every pixel.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Framebuffer dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self.pixels = ti.field(dtype=ti.u32, shape=(width, height))
        if fill:
            self.fill(fill)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    def contains(self, x: int, y: int) -> bool:
        """Check whether (x, y) addresses a pixel of this buffer."""
        return 0 <= x < self._width and 0 <= y < self._height

    def get_pixel(self, x: int, y: int) -> int | None:
        """Read a packed pixel.

        Returns:
            The packed 0xAARRGGBB value, or None if (x, y) is out of range.
        """
        if not self.contains(x, y):
            return None
        return int(self.pixels[x, y])

    def set_pixel(self, x: int, y: int, value: int) -> bool:
        """Overwrite a packed pixel.

        Out-of-range coordinates are ignored.

        Returns:
            True if the pixel was written, False if (x, y) is out of range.
        """
        if not self.contains(x, y):
            return False
        self.pixels[x, y] = value & 0xFFFFFFFF
        return True

    def fill(self, value: int) -> None:
        """Set every pixel to the same packed value."""
        packed = np.full((self._width, self._height), value & 0xFFFFFFFF, dtype=np.uint32)
        self.pixels.from_numpy(packed)

    def to_numpy(self) -> npt.NDArray[np.uint32]:
        """Get the packed pixels as a (height, width) array, top row first."""
        data = self.pixels.to_numpy().astype(np.uint32)
        return np.ascontiguousarray(np.flipud(np.transpose(data, (1, 0))))

    def to_rgb_numpy(self) -> npt.NDArray[np.float32]:
        """Unpack the pixels into a (height, width, 3) float image in [0, 1]."""
        packed = self.to_numpy()
        rgb = np.stack(
            [(packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF],
            axis=-1,
        )
        return (rgb.astype(np.float32) / 255.0).astype(np.float32)

    def __repr__(self) -> str:
        """Return a string representation of the framebuffer."""
        return f"Framebuffer(width={self.width}, height={self.height})"


def pack_rgb(r: int, g: int, b: int, alpha: int = 0) -> int:
    """Pack 8-bit channels into a 0xAARRGGBB integer."""
    return ((alpha & 0xFF) << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def unpack_rgb(value: int) -> tuple[int, int, int]:
    """Split a packed 0xAARRGGBB integer into its (r, g, b) channels."""
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
