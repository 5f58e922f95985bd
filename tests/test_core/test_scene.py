"""
Tests for the SceneStore.
"""

import unittest

from sketchscene.core.elements import (
    ElementDraft, ElementKind, ElementStyle, LineGeometry, RectangleGeometry, create_draft
)
from sketchscene.core.geometry import BoundingBox
from sketchscene.core.scene import SceneStore


def rect(x=0, y=0, size=10):
    return create_draft("rectangle", x=x, y=y, width=size, height=size)


class TestSceneStore(unittest.TestCase):
    """Test adding, removing and querying elements."""

    def setUp(self):
        self.store = SceneStore()

    def test_add_assigns_ids(self):
        """Test add assigns ids."""
        first = self.store.add_element(rect())
        second = self.store.add_element(rect())
        self.assertEqual(first, "element_1_0")
        self.assertEqual(second, "element_2_0")
        self.assertEqual(self.store.count(), 2)
        self.assertEqual(len(self.store), 2)

    def test_get_by_id(self):
        """Test get by id."""
        element_id = self.store.add_element(rect(5, 5))
        element = self.store.get_by_id(element_id)
        self.assertEqual(element.id, element_id)
        self.assertEqual(element.kind, ElementKind.RECTANGLE)
        self.assertEqual(element.geometry.x, 5.0)
        self.assertIn(element_id, self.store)
        self.assertIsNone(self.store.get_by_id("element_99_0"))

    def test_remove_unknown_id(self):
        """Test remove unknown id."""
        self.store.add_element(rect())
        self.assertFalse(self.store.remove_by_id("missing"))
        self.assertEqual(self.store.count(), 1)

    def test_ids_not_reused_after_remove(self):
        """Test ids not reused after remove."""
        a = self.store.add_element(rect())
        b = self.store.add_element(rect())
        self.assertTrue(self.store.remove_by_id(a))
        c = self.store.add_element(rect())
        self.assertNotIn(c, {a, b})
        self.assertEqual(c, "element_3_0")

    def test_order_preserved(self):
        """Test order preserved."""
        ids = [self.store.add_element(rect(x=i)) for i in range(4)]
        self.store.remove_by_id(ids[1])
        self.assertEqual([e.id for e in self.store.list_all()], [ids[0], ids[2], ids[3]])
        self.assertEqual([e.id for e in self.store], [ids[0], ids[2], ids[3]])

    def test_created_at_increases(self):
        """Test created at increases."""
        first = self.store.get_by_id(self.store.add_element(rect()))
        self.store.clear()
        second = self.store.get_by_id(self.store.add_element(rect()))
        self.assertGreater(second.created_at, first.created_at)

    def test_remove_where(self):
        """Test remove where."""
        ids = [self.store.add_element(rect(x=i * 10)) for i in range(5)]
        removed = self.store.remove_where(lambda e: e.geometry.x in (10.0, 30.0))
        self.assertEqual(removed, 2)
        self.assertEqual([e.id for e in self.store.list_all()], [ids[0], ids[2], ids[4]])
        self.assertIsNone(self.store.get_by_id(ids[1]))

    def test_failed_predicate_leaves_store_intact(self):
        """Test that a predicate raising partway through removes nothing."""
        ids = [self.store.add_element(rect(x=i)) for i in range(3)]

        def predicate(element):
            if element.id == ids[1]:
                raise RuntimeError("cannot test element")
            return True

        with self.assertRaises(RuntimeError):
            self.store.remove_where(predicate)

        self.assertEqual([e.id for e in self.store.list_all()], ids)
        self.assertEqual(self.store.count(), 3)
        self.assertIsNotNone(self.store.get_by_id(ids[0]))
        self.assertTrue(self.store.remove_by_id(ids[0]))

    def test_list_all_is_a_snapshot(self):
        """Test list all is a snapshot."""
        self.store.add_element(rect())
        snapshot = self.store.list_all()
        self.store.add_element(rect())
        self.assertEqual(len(snapshot), 1)

    def test_get_elements_by_kind(self):
        """Test get elements by kind."""
        self.store.add_element(rect())
        self.store.add_element(create_draft("circle", radius=3))
        self.store.add_element(rect())
        self.assertEqual(len(self.store.get_elements_by_kind(ElementKind.RECTANGLE)), 2)
        self.assertEqual(len(self.store.get_elements_by_kind("circle")), 1)


class TestSceneClear(unittest.TestCase):
    """Test clearing the store."""

    def test_clear_resets_count_and_sequence(self):
        """Test clear resets count and sequence."""
        store = SceneStore()
        old_ids = {store.add_element(rect()) for _ in range(3)}

        with self.assertLogs('sketchscene.core.scene', level='INFO'):
            store.clear()

        self.assertEqual(store.count(), 0)
        self.assertEqual(store.list_all(), ())
        new_id = store.add_element(rect())
        self.assertEqual(new_id, "element_1_1")
        self.assertNotIn(new_id, old_ids)

    def test_ids_unique_across_many_clears(self):
        """Test ids unique across many clears."""
        store = SceneStore()
        seen = set()
        for _ in range(5):
            for _ in range(3):
                element_id = store.add_element(rect())
                self.assertNotIn(element_id, seen)
                seen.add(element_id)
            store.clear()


class TestSceneBounds(unittest.TestCase):
    """Test the drawing's bounding box."""

    def test_empty_store(self):
        """Test empty store."""
        self.assertIsNone(SceneStore().get_bounds())

    def test_union_of_elements(self):
        """Test union of elements."""
        store = SceneStore()
        store.add_element(rect(0, 0, 10))
        store.add_element(create_draft("circle", center_x=50, center_y=50, radius=5))
        self.assertEqual(store.get_bounds(), BoundingBox(0, 0, 55, 55))

    def test_unknown_kind_skipped(self):
        """Test unknown kind skipped."""
        store = SceneStore()
        store.add_element(rect(0, 0, 10))
        store.add_element(ElementDraft(kind="triangle", style=ElementStyle(),
                                       geometry=RectangleGeometry(100, 100, 10, 10)))
        with self.assertLogs('sketchscene.core.scene', level='WARNING'):
            bounds = store.get_bounds()
        self.assertEqual(bounds, BoundingBox(0, 0, 10, 10))

    def test_mismatched_geometry_skipped(self):
        """Test that an element whose geometry does not fit its kind is skipped."""
        store = SceneStore()
        store.add_element(rect(0, 0, 10))
        store.add_element(ElementDraft(kind=ElementKind.CIRCLE, style=ElementStyle(),
                                       geometry=LineGeometry(100, 100, 200, 200)))
        with self.assertLogs('sketchscene.core.scene', level='WARNING'):
            bounds = store.get_bounds()
        self.assertEqual(bounds, BoundingBox(0, 0, 10, 10))


if __name__ == '__main__':
    unittest.main()
