"""
Drawing surface for SketchScene.

A DrawingSurface is an immediate-mode raster target backed by a QImage.
The renderer and tool previews paint on it through QPainter.
"""

from contextlib import contextmanager
from typing import Iterator, Tuple

import numpy as np
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage, QPainter


class DrawingSurface:
    """
    Transparent ARGB raster that elements are painted onto.

    The surface has no knowledge of elements; it only offers clearing,
    painting, snapshotting and compositing.
    """

    IMAGE_FORMAT = QImage.Format.Format_ARGB32_Premultiplied

    def __init__(self, width: int, height: int):
        """
        Create a transparent surface.

        Args:
            width: Width in pixels (must be positive)
            height: Height in pixels (must be positive)
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self._image = QImage(int(width), int(height), self.IMAGE_FORMAT)
        self.clear()

    @property
    def width(self) -> int:
        return self._image.width()

    @property
    def height(self) -> int:
        return self._image.height()

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def image(self) -> QImage:
        """The backing image. Paint through painter() instead of directly."""
        return self._image

    def clear(self) -> None:
        """Reset every pixel to fully transparent."""
        self._image.fill(Qt.GlobalColor.transparent)

    @contextmanager
    def painter(self) -> Iterator[QPainter]:
        """
        Open an antialiased QPainter on the surface.

        The painter is always ended, even if painting raises.
        """
        painter = QPainter(self._image)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            yield painter
        finally:
            painter.end()

    def snapshot(self) -> 'DrawingSurface':
        """Independent copy of the current pixels."""
        copy = DrawingSurface.__new__(DrawingSurface)
        copy._image = self._image.copy()
        return copy

    def draw_surface(self, other: 'DrawingSurface') -> None:
        """Composite another surface on top of this one at the origin."""
        with self.painter() as painter:
            painter.drawImage(0, 0, other.image)

    def resize(self, width: int, height: int) -> None:
        """
        Replace the backing image with a new transparent one.

        Content is dropped; callers redraw the scene afterwards.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self._image = QImage(int(width), int(height), self.IMAGE_FORMAT)
        self.clear()

    def to_array(self) -> np.ndarray:
        """
        Copy the pixels into a numpy array.

        Returns:
            uint8 array of shape (height, width, 4) in the image's
            native byte order (BGRA on little-endian machines)
        """
        image = self._image
        ptr = image.constBits()
        ptr.setsize(image.sizeInBytes())
        rows = np.frombuffer(ptr, dtype=np.uint8).reshape(image.height(), image.bytesPerLine())
        return rows[:, :image.width() * 4].reshape(image.height(), image.width(), 4).copy()

    def pixel_alpha(self, x: int, y: int) -> int:
        """Alpha value (0-255) at a pixel."""
        return self._image.pixelColor(x, y).alpha()
