"""
SketchScene Core Module

Contains the core data structures:
- Elements: Pen, Rectangle, Circle, Ellipse and Line drawing elements
- Geometry: Bounding boxes and rectangle intersection tests
- SceneStore: Ordered owner of all elements on a surface
"""

# Import order matters - elements first, then geometry, then the store
from .pressure import DEFAULT_PRESSURE, clamp_pressure, normalize_pressure
from .elements import (
    ElementKind, FillMode, ElementStyle, PressurePoint,
    PenGeometry, RectangleGeometry, CircleGeometry, EllipseGeometry, LineGeometry,
    Element, ElementDraft, InvalidElementError, UnknownElementKindError,
    GeometryMismatchError, check_geometry, create_draft
)
from .geometry import (
    Point, BoundingBox, segments_intersect, line_intersects_rect,
    element_intersects_rect, element_bounds
)
from .scene import SceneStore

__all__ = [
    'DEFAULT_PRESSURE', 'clamp_pressure', 'normalize_pressure',
    'ElementKind', 'FillMode', 'ElementStyle', 'PressurePoint',
    'PenGeometry', 'RectangleGeometry', 'CircleGeometry', 'EllipseGeometry', 'LineGeometry',
    'Element', 'ElementDraft', 'InvalidElementError', 'UnknownElementKindError',
    'GeometryMismatchError', 'check_geometry', 'create_draft',
    'Point', 'BoundingBox', 'segments_intersect', 'line_intersects_rect',
    'element_intersects_rect', 'element_bounds',
    'SceneStore',
]
