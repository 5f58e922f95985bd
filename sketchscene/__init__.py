"""
SketchScene - Retained-mode sketch engine

A drawing is an ordered list of immutable elements (pen strokes,
rectangles, circles, ellipses and lines). The surface is always a
function of that list: tools add elements, the area eraser removes them,
and the renderer replays the survivors.
"""

__version__ = "0.1.0"

from .core import (
    ElementKind, FillMode, ElementStyle, Element, ElementDraft,
    UnknownElementKindError, create_draft, BoundingBox, SceneStore
)
from .graphics import (
    DrawingSurface, redraw_all, erase_area, erase_at, ToolSettings, ToolSession
)

__all__ = [
    'ElementKind', 'FillMode', 'ElementStyle', 'Element', 'ElementDraft',
    'UnknownElementKindError', 'create_draft', 'BoundingBox', 'SceneStore',
    'DrawingSurface', 'redraw_all', 'erase_area', 'erase_at',
    'ToolSettings', 'ToolSession',
]
