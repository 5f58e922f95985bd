"""
Tests for the QImage-backed drawing surface.
"""

import unittest

import numpy as np
from PyQt6.QtGui import QColor

from sketchscene.graphics.surface import DrawingSurface


def paint_square(surface, x=0, y=0, size=10):
    with surface.painter() as painter:
        painter.fillRect(x, y, size, size, QColor("#ff0000"))


class TestDrawingSurface(unittest.TestCase):
    """Test DrawingSurface."""

    def test_invalid_size(self):
        """Test invalid size."""
        with self.assertRaises(ValueError):
            DrawingSurface(0, 10)
        with self.assertRaises(ValueError):
            DrawingSurface(10, -1)

    def test_new_surface_is_transparent(self):
        """Test new surface is transparent."""
        surface = DrawingSurface(40, 30)
        self.assertEqual(surface.size, (40, 30))
        pixels = surface.to_array()
        self.assertEqual(pixels.shape, (30, 40, 4))
        self.assertEqual(pixels.dtype, np.uint8)
        self.assertFalse(pixels.any())

    def test_paint_and_clear(self):
        """Test paint and clear."""
        surface = DrawingSurface(20, 20)
        paint_square(surface)
        self.assertEqual(surface.pixel_alpha(5, 5), 255)
        self.assertEqual(surface.pixel_alpha(15, 15), 0)
        surface.clear()
        self.assertFalse(surface.to_array().any())

    def test_snapshot_is_independent(self):
        """Test snapshot is independent."""
        surface = DrawingSurface(20, 20)
        paint_square(surface)
        snapshot = surface.snapshot()
        surface.clear()
        self.assertEqual(snapshot.pixel_alpha(5, 5), 255)
        self.assertEqual(surface.pixel_alpha(5, 5), 0)

    def test_draw_surface(self):
        """Test draw surface."""
        source = DrawingSurface(20, 20)
        paint_square(source, 10, 10, 5)
        target = DrawingSurface(20, 20)
        target.draw_surface(source)
        self.assertTrue(np.array_equal(target.to_array(), source.to_array()))

    def test_resize_drops_content(self):
        """Test resize drops content."""
        surface = DrawingSurface(20, 20)
        paint_square(surface)
        surface.resize(30, 10)
        self.assertEqual(surface.size, (30, 10))
        self.assertFalse(surface.to_array().any())
        with self.assertRaises(ValueError):
            surface.resize(0, 0)


if __name__ == '__main__':
    unittest.main()
