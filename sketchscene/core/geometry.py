"""
SketchScene Geometry Kernel

Pure functions answering "does this element touch this rectangle?".
Used by the area eraser. All comparisons are exact and inclusive: inputs
come from screen coordinates, so no epsilon is applied.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional
import math

from .elements import Element, ElementKind, check_geometry


@dataclass(frozen=True)
class Point:
    """A 2D point."""
    x: float
    y: float

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> 'BoundingBox':
        """Build a box from a corner and a (possibly negative) size."""
        return cls(
            min_x=min(x, x + width),
            min_y=min(y, y + height),
            max_x=max(x, x + width),
            max_y=max(y, y + height)
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2
        )

    def contains(self, point: Point) -> bool:
        """Check if point is inside bounding box (edges included)."""
        return point_in_rect(point.x, point.y, self)

    def intersects(self, other: 'BoundingBox') -> bool:
        """Check if two bounding boxes overlap. Touching edges count."""
        return not (self.max_x < other.min_x or
                    self.min_x > other.max_x or
                    self.max_y < other.min_y or
                    self.min_y > other.max_y)

    def union(self, other: 'BoundingBox') -> 'BoundingBox':
        return BoundingBox(
            min_x=min(self.min_x, other.min_x),
            min_y=min(self.min_y, other.min_y),
            max_x=max(self.max_x, other.max_x),
            max_y=max(self.max_y, other.max_y)
        )


def point_in_rect(x: float, y: float, rect: BoundingBox) -> bool:
    """Inclusive point containment."""
    return rect.min_x <= x <= rect.max_x and rect.min_y <= y <= rect.max_y


def segments_intersect(x1: float, y1: float, x2: float, y2: float,
                       x3: float, y3: float, x4: float, y4: float) -> bool:
    """
    Parametric segment/segment intersection for P1P2 and P3P4.

    Parallel segments (zero denominator) report no intersection, including
    collinear overlaps.
    """
    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if denom == 0:
        return False

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

    return 0 <= t <= 1 and 0 <= u <= 1


def line_intersects_rect(x1: float, y1: float, x2: float, y2: float,
                         rect: BoundingBox) -> bool:
    """True if either endpoint is inside the rect or the segment crosses an edge."""
    if point_in_rect(x1, y1, rect) or point_in_rect(x2, y2, rect):
        return True

    left, top, right, bottom = rect.min_x, rect.min_y, rect.max_x, rect.max_y
    return (segments_intersect(x1, y1, x2, y2, left, top, right, top) or
            segments_intersect(x1, y1, x2, y2, right, top, right, bottom) or
            segments_intersect(x1, y1, x2, y2, right, bottom, left, bottom) or
            segments_intersect(x1, y1, x2, y2, left, bottom, left, top))


# Per-kind tests. Each takes the element's geometry and a normalised query box.

def pen_intersects_rect(geometry, rect: BoundingBox) -> bool:
    """
    Any sample point inside the rect.

    Segments between samples are not tested, so a small rect lying between
    two sparse samples misses the stroke.
    """
    return any(point_in_rect(p.x, p.y, rect) for p in geometry.points)


def rectangle_intersects_rect(geometry, rect: BoundingBox) -> bool:
    return rectangle_bounds(geometry).intersects(rect)


def circle_intersects_rect(geometry, rect: BoundingBox) -> bool:
    """Approximate: the circle is treated as its bounding box."""
    return circle_bounds(geometry).intersects(rect)


def ellipse_intersects_rect(geometry, rect: BoundingBox) -> bool:
    """Approximate: the ellipse is treated as its bounding box."""
    return ellipse_bounds(geometry).intersects(rect)


def line_geometry_intersects_rect(geometry, rect: BoundingBox) -> bool:
    return line_intersects_rect(geometry.start_x, geometry.start_y,
                                geometry.end_x, geometry.end_y, rect)


def pen_bounds(geometry) -> Optional[BoundingBox]:
    if not geometry.points:
        return None
    return BoundingBox(
        min_x=min(p.x for p in geometry.points),
        min_y=min(p.y for p in geometry.points),
        max_x=max(p.x for p in geometry.points),
        max_y=max(p.y for p in geometry.points)
    )


def rectangle_bounds(geometry) -> BoundingBox:
    return BoundingBox.from_rect(geometry.x, geometry.y, geometry.width, geometry.height)


def circle_bounds(geometry) -> BoundingBox:
    r = geometry.radius
    return BoundingBox(geometry.center_x - r, geometry.center_y - r,
                       geometry.center_x + r, geometry.center_y + r)


def ellipse_bounds(geometry) -> BoundingBox:
    return BoundingBox(geometry.center_x - geometry.radius_x,
                       geometry.center_y - geometry.radius_y,
                       geometry.center_x + geometry.radius_x,
                       geometry.center_y + geometry.radius_y)


def line_bounds(geometry) -> BoundingBox:
    return BoundingBox(min(geometry.start_x, geometry.end_x),
                       min(geometry.start_y, geometry.end_y),
                       max(geometry.start_x, geometry.end_x),
                       max(geometry.start_y, geometry.end_y))


INTERSECTION_TESTS: Dict[ElementKind, Callable[..., bool]] = {
    ElementKind.PEN: pen_intersects_rect,
    ElementKind.RECTANGLE: rectangle_intersects_rect,
    ElementKind.CIRCLE: circle_intersects_rect,
    ElementKind.ELLIPSE: ellipse_intersects_rect,
    ElementKind.LINE: line_geometry_intersects_rect,
}

BOUNDS_FUNCTIONS: Dict[ElementKind, Callable[..., Optional[BoundingBox]]] = {
    ElementKind.PEN: pen_bounds,
    ElementKind.RECTANGLE: rectangle_bounds,
    ElementKind.CIRCLE: circle_bounds,
    ElementKind.ELLIPSE: ellipse_bounds,
    ElementKind.LINE: line_bounds,
}


def element_intersects_rect(element: Element, rect: BoundingBox) -> bool:
    """
    Dispatch to the intersection test for the element's kind.

    Args:
        element: Element to test
        rect: Normalised query rectangle

    Returns:
        True if the element touches the rectangle

    Raises:
        InvalidElementError: if the kind is unknown or the geometry does
            not match it
    """
    return INTERSECTION_TESTS[check_geometry(element)](element.geometry, rect)


def element_bounds(element: Element) -> Optional[BoundingBox]:
    """Axis-aligned bounds of an element, or None for an empty pen stroke."""
    return BOUNDS_FUNCTIONS[check_geometry(element)](element.geometry)
