"""
SketchScene Graphics Module

Contains the rendering components:
- Surface: QImage-backed drawing surface
- Renderer: Deterministic redraw of element lists
- Eraser: Area-based element removal
- Tools: Drawing tools and the per-gesture tool session
"""

from .surface import DrawingSurface
from .renderer import (
    PREVIEW_OPACITY, draw_element, redraw_all, draw_incremental, draw_pen_segment
)
from .eraser import erase_area, erase_at
from .tools import (
    ToolSettings, DrawingTool, PenTool, RectangleTool, CircleTool,
    EllipseTool, LineTool, create_tool, SessionState, ToolSession
)

__all__ = [
    # Surface
    'DrawingSurface',
    # Renderer
    'PREVIEW_OPACITY',
    'draw_element',
    'redraw_all',
    'draw_incremental',
    'draw_pen_segment',
    # Eraser
    'erase_area',
    'erase_at',
    # Tools
    'ToolSettings',
    'DrawingTool',
    'PenTool',
    'RectangleTool',
    'CircleTool',
    'EllipseTool',
    'LineTool',
    'create_tool',
    'SessionState',
    'ToolSession',
]
