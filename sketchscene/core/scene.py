"""
SketchScene Scene Store

The SceneStore owns every element drawn on one surface, in paint order.
"""

import logging
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .elements import Element, ElementDraft, ElementKind, InvalidElementError
from .geometry import BoundingBox, element_bounds

logger = logging.getLogger(__name__)


class SceneStore:
    """
    Ordered collection of committed elements.

    The store is the only writer of its element list. Insertion order is
    paint order: later elements paint over earlier ones.

    Ids have the form ``element_<seq>_<generation>``. The sequence restarts
    at 1 after clear(); the generation is bumped at the same time, so an id
    is never handed out twice by the same store.
    """

    def __init__(self):
        self._elements: List[Element] = []
        self._index: Dict[str, Element] = {}
        self._next_seq = 1
        self._generation = 0
        self._clock = 0

    def add_element(self, draft: ElementDraft) -> str:
        """
        Append a new element built from a draft.

        Args:
            draft: Element without id

        Returns:
            The id assigned to the new element
        """
        element_id = f"element_{self._next_seq}_{self._generation}"
        self._next_seq += 1
        self._clock += 1

        element = Element.from_draft(draft, element_id, self._clock)
        self._elements.append(element)
        self._index[element_id] = element

        logger.debug(f"Added element {element_id} of kind {getattr(element.kind, 'value', element.kind)}")
        return element_id

    def remove_by_id(self, element_id: str) -> bool:
        """Remove one element. Returns False if the id is unknown."""
        if element_id not in self._index:
            return False
        del self._index[element_id]
        self._elements = [e for e in self._elements if e.id != element_id]
        logger.debug(f"Removed element {element_id}")
        return True

    def remove_where(self, predicate: Callable[[Element], bool]) -> int:
        """
        Remove every element matching predicate in one pass.

        Survivors keep their relative order. The store is only changed
        once every element has been tested, so a predicate that raises
        leaves it untouched.

        Returns:
            Number of elements removed
        """
        survivors = []
        removed = []
        for element in self._elements:
            if predicate(element):
                removed.append(element)
            else:
                survivors.append(element)

        if removed:
            self._elements = survivors
            self._index = {e.id: e for e in survivors}
            logger.debug(f"Removed {len(removed)} elements by predicate")
        return len(removed)

    def get_by_id(self, element_id: str) -> Optional[Element]:
        """Find an element by its id."""
        return self._index.get(element_id)

    def list_all(self) -> Tuple[Element, ...]:
        """Snapshot of all elements in paint order."""
        return tuple(self._elements)

    def get_elements_by_kind(self, kind: ElementKind) -> Tuple[Element, ...]:
        """Elements of one kind, in paint order."""
        kind = ElementKind.from_value(kind)
        return tuple(e for e in self._elements if e.kind == kind)

    def get_bounds(self) -> Optional[BoundingBox]:
        """
        Union of the bounding boxes of all elements.

        Returns:
            BoundingBox of the drawing, or None if nothing has extent
        """
        bounds = None
        for element in self._elements:
            try:
                box = element_bounds(element)
            except InvalidElementError as e:
                logger.warning(f"Skipping {element.id} in bounds: {e}")
                continue
            if box is None:
                continue
            bounds = box if bounds is None else bounds.union(box)
        return bounds

    def clear(self) -> None:
        """Drop all elements and restart the id sequence."""
        element_count = len(self._elements)
        self._elements = []
        self._index = {}
        self._next_seq = 1
        self._generation += 1
        logger.info(f"Cleared {element_count} elements")

    def count(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.list_all())

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._index
