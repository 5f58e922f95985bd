"""
Tests for the area eraser.
"""

import unittest

from PyQt6.QtGui import QColor

from sketchscene.core.elements import (
    ElementDraft, ElementKind, ElementStyle, PenGeometry, RectangleGeometry, create_draft
)
from sketchscene.core.scene import SceneStore
from sketchscene.graphics.eraser import erase_area, erase_at
from sketchscene.graphics.renderer import redraw_all
from sketchscene.graphics.surface import DrawingSurface


class TestEraseArea(unittest.TestCase):
    """Test erase_area against each element kind."""

    def setUp(self):
        self.store = SceneStore()

    def test_rectangle_touching_edge(self):
        """Test rectangle touching edge."""
        self.store.add_element(create_draft("rectangle", x=0, y=0, width=30, height=30))
        self.assertEqual(erase_area(self.store, 30, 10, 5, 5), 1)
        self.assertEqual(self.store.count(), 0)

    def test_rectangle_corner_at_offset(self):
        """Test rectangle corner at offset."""
        self.store.add_element(create_draft("rectangle", x=10, y=10, width=20, height=20))
        self.assertEqual(erase_area(self.store, 30, 10, 5, 5), 1)

    def test_rectangle_just_outside(self):
        """Test rectangle just outside."""
        self.store.add_element(create_draft("rectangle", x=0, y=0, width=30, height=30))
        self.assertEqual(erase_area(self.store, 31, 10, 5, 5), 0)
        self.assertEqual(self.store.count(), 1)

    def test_line(self):
        """Test line."""
        self.store.add_element(create_draft("line", start_x=0, start_y=0, end_x=10, end_y=10))
        self.assertEqual(erase_area(self.store, 100, 100, 5, 5), 0)
        self.assertEqual(erase_area(self.store, 4, 4, 2, 2), 1)

    def test_line_crossing_without_endpoints_inside(self):
        """Test line crossing without endpoints inside."""
        self.store.add_element(create_draft("line", start_x=0, start_y=5, end_x=20, end_y=5))
        self.assertEqual(erase_area(self.store, 8, 0, 4, 10), 1)

    def test_pen_matches_samples(self):
        """Test pen matches samples."""
        self.store.add_element(create_draft("pen", points=[(0, 0), (100, 0)]))
        self.assertEqual(erase_area(self.store, 45, -5, 10, 10), 0)
        self.assertEqual(erase_area(self.store, 95, -5, 10, 10), 1)

    def test_circle_bounding_box(self):
        """Test circle bounding box."""
        self.store.add_element(create_draft("circle", center_x=50, center_y=50, radius=10))
        self.assertEqual(erase_area(self.store, 40, 40, 1, 1), 1)

    def test_negative_query_size(self):
        """Test negative query size."""
        self.store.add_element(create_draft("rectangle", x=0, y=0, width=10, height=10))
        self.assertEqual(erase_area(self.store, 15, 15, -10, -10), 1)

    def test_survivors_keep_order(self):
        """Test survivors keep order."""
        ids = [
            self.store.add_element(create_draft("rectangle", x=x, y=0, width=10, height=10))
            for x in (0, 100, 200, 300)
        ]
        self.assertEqual(erase_area(self.store, 95, 0, 110, 5), 2)
        self.assertEqual([e.id for e in self.store.list_all()], [ids[0], ids[3]])

    def test_unknown_kind_is_kept(self):
        """Test unknown kind is kept."""
        self.store.add_element(ElementDraft(kind="triangle", style=ElementStyle(),
                                            geometry=RectangleGeometry(0, 0, 10, 10)))
        self.store.add_element(create_draft("rectangle", x=0, y=0, width=10, height=10))
        with self.assertLogs('sketchscene.graphics.eraser', level='WARNING'):
            removed = erase_area(self.store, 0, 0, 10, 10)
        self.assertEqual(removed, 1)
        self.assertEqual(self.store.list_all()[0].kind, "triangle")

    def test_mismatched_geometry_is_kept(self):
        """Test that an element whose geometry does not fit its kind survives erasing."""
        good = self.store.add_element(create_draft("rectangle", x=0, y=0, width=10, height=10))
        bad = self.store.add_element(ElementDraft(kind=ElementKind.PEN, style=ElementStyle(),
                                                  geometry=RectangleGeometry(0, 0, 10, 10)))
        with self.assertLogs('sketchscene.graphics.eraser', level='WARNING'):
            removed = erase_area(self.store, 0, 0, 20, 20)

        self.assertEqual(removed, 1)
        self.assertEqual([e.id for e in self.store.list_all()], [bad])
        self.assertIsNone(self.store.get_by_id(good))
        self.assertIsNotNone(self.store.get_by_id(bad))
        self.assertTrue(self.store.remove_by_id(bad))
        self.assertEqual(self.store.count(), 0)

    def test_non_numeric_geometry_is_kept(self):
        """Test that an element with non-numeric coordinates survives erasing."""
        bad = self.store.add_element(ElementDraft(kind=ElementKind.RECTANGLE, style=ElementStyle(),
                                                  geometry=RectangleGeometry("a", 0, 10, 10)))
        self.store.add_element(create_draft("circle", center_x=5, center_y=5, radius=2))
        with self.assertLogs('sketchscene.graphics.eraser', level='WARNING'):
            removed = erase_area(self.store, 0, 0, 20, 20)

        self.assertEqual(removed, 1)
        self.assertEqual([e.id for e in self.store.list_all()], [bad])

    def test_pen_with_raw_samples_is_kept(self):
        """Test that a pen holding bare tuples instead of pressure points survives erasing."""
        bad = self.store.add_element(ElementDraft(kind=ElementKind.PEN, style=ElementStyle(),
                                                  geometry=PenGeometry(points=((1, 1), (5, 5)))))
        with self.assertLogs('sketchscene.graphics.eraser', level='WARNING'):
            removed = erase_area(self.store, 0, 0, 20, 20)

        self.assertEqual(removed, 0)
        self.assertEqual([e.id for e in self.store.list_all()], [bad])

    def test_erase_at_centres_square(self):
        """Test erase at centres square."""
        self.store.add_element(create_draft("rectangle", x=0, y=0, width=10, height=10))
        self.assertEqual(erase_at(self.store, 13, 5, 4), 0)
        self.assertEqual(erase_at(self.store, 12, 5, 4), 1)


class TestEraseRedraw(unittest.TestCase):
    """Test that the surface follows the store after erasing."""

    def test_surface_redrawn_after_erase(self):
        """Test surface redrawn after erase."""
        store = SceneStore()
        surface = DrawingSurface(100, 100)
        store.add_element(create_draft("rectangle", x=10, y=10, width=20, height=20, fill_mode="filled"))
        store.add_element(create_draft("rectangle", x=60, y=60, width=20, height=20, fill_mode="filled"))
        redraw_all(surface, store.list_all())

        self.assertEqual(erase_area(store, 0, 0, 40, 40, surface), 1)
        self.assertEqual(surface.pixel_alpha(20, 20), 0)
        self.assertEqual(surface.pixel_alpha(70, 70), 255)

    def test_nothing_removed_leaves_surface_alone(self):
        """Test nothing removed leaves surface alone."""
        store = SceneStore()
        surface = DrawingSurface(50, 50)
        with surface.painter() as painter:
            painter.fillRect(0, 0, 5, 5, QColor("#00ff00"))

        self.assertEqual(erase_area(store, 0, 0, 50, 50, surface), 0)
        self.assertEqual(surface.pixel_alpha(2, 2), 255)


if __name__ == '__main__':
    unittest.main()
