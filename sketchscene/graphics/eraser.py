"""
Area eraser for SketchScene.

Removes every element that touches a rectangular region and repaints the
survivors.
"""

import logging
from typing import Optional

from ..core.elements import Element, InvalidElementError
from ..core.geometry import BoundingBox, element_intersects_rect
from ..core.scene import SceneStore
from .renderer import redraw_all
from .surface import DrawingSurface

logger = logging.getLogger(__name__)


def erase_area(store: SceneStore, x: float, y: float, width: float, height: float,
               surface: Optional[DrawingSurface] = None) -> int:
    """
    Remove all elements intersecting the query rectangle.

    Pen strokes are matched by their sample points and circles/ellipses by
    their bounding boxes, so the result is approximate for those kinds.
    Elements of an unknown kind, or whose geometry does not fit their kind,
    are logged and kept.

    Args:
        store: Scene to erase from
        x, y: One corner of the query rectangle
        width, height: Size of the query rectangle (may be negative)
        surface: If given, redrawn when anything was removed

    Returns:
        Number of elements removed (0 is not an error)
    """
    query = BoundingBox.from_rect(x, y, width, height)

    def touches(element: Element) -> bool:
        try:
            return element_intersects_rect(element, query)
        except (InvalidElementError, AttributeError, TypeError) as e:
            logger.warning(f"Eraser skipped element {getattr(element, 'id', '?')}: {e}")
            return False

    removed = store.remove_where(touches)

    if removed > 0:
        logger.info(f"Erased {removed} elements in area "
                    f"({query.min_x}, {query.min_y}, {query.width}, {query.height})")
        if surface is not None:
            redraw_all(surface, store.list_all())

    return removed


def erase_at(store: SceneStore, x: float, y: float, size: float,
             surface: Optional[DrawingSurface] = None) -> int:
    """
    Erase with a square eraser of side size centred on (x, y).

    This is what an eraser tool calls on every pointer sample.
    """
    half = size / 2
    return erase_area(store, x - half, y - half, size, size, surface)
