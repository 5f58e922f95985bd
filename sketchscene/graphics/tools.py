"""
Drawing Tools for SketchScene

Provides the per-gesture tool session and one drawing tool per element
kind. A tool turns press/move/release samples into an element draft; the
session owns the gesture lifecycle and hands finished drafts to the scene.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from ..core.elements import (
    DEFAULT_OPACITY, DEFAULT_STROKE_COLOR, DEFAULT_STROKE_WIDTH,
    ElementDraft, ElementKind, ElementStyle, FillMode, PenGeometry, PressurePoint,
    RectangleGeometry, CircleGeometry, EllipseGeometry, LineGeometry
)
from ..core.geometry import Point
from ..core.pressure import clamp_pressure
from ..core.scene import SceneStore
from .renderer import draw_incremental, draw_pen_segment, redraw_all
from .surface import DrawingSurface

logger = logging.getLogger(__name__)


@dataclass
class ToolSettings:
    """Style and behaviour applied to elements drawn by the tools."""
    stroke_color: str = DEFAULT_STROKE_COLOR
    stroke_width: float = DEFAULT_STROKE_WIDTH
    fill_color: Optional[str] = None
    fill_mode: FillMode = FillMode.OUTLINE
    opacity: float = DEFAULT_OPACITY     # 0.0 - 1.0
    corner_radius: float = 0.0           # Rectangles only

    # Pen pressure
    pressure_sensitive: bool = False
    min_pressure: float = 0.1
    max_pressure: float = 1.0

    # Ellipses: None sizes radii from the drag; a ratio locks radius_x / radius_y
    aspect_ratio: Optional[float] = None

    def style(self) -> ElementStyle:
        """Element style for the current settings."""
        return ElementStyle.create(
            stroke_color=self.stroke_color,
            stroke_width=self.stroke_width,
            fill_color=self.fill_color,
            fill_mode=self.fill_mode,
            opacity=self.opacity
        )


class DrawingTool(ABC):
    """
    Abstract base class for drawing tools.

    Each tool implements:
    - Sample handling for press/move/release
    - Draft creation from the samples seen so far
    - Live preview painting
    """

    def __init__(self, kind: ElementKind, settings: ToolSettings):
        self.kind = kind
        self.settings = settings
        self._start_point: Optional[Point] = None
        self._current_point: Optional[Point] = None

    def start_drawing(self, point: Point, pressure: float) -> None:
        """
        Start drawing at the given point.

        Args:
            point: Press position in surface coordinates
            pressure: Pressure in [0, 1]
        """
        self._start_point = point
        self._current_point = point

    def update_drawing(self, point: Point, pressure: float) -> None:
        """Track the pointer as it moves."""
        self._current_point = point

    def finish_drawing(self, point: Point) -> Optional[ElementDraft]:
        """
        Finish drawing at the release point.

        Returns:
            The finished draft, or None if the gesture produced nothing
        """
        self._current_point = point
        return self.build_draft()

    @abstractmethod
    def build_draft(self) -> Optional[ElementDraft]:
        """Draft for the samples seen so far, or None if there is nothing to draw."""
        pass

    def paint_preview(self, surface: DrawingSurface, snapshot: Optional[DrawingSurface]) -> None:
        """Repaint the in-progress shape over the gesture-start snapshot."""
        draft = self.build_draft()
        if draft is not None:
            draw_incremental(surface, snapshot, draft)

    def cancel_drawing(self) -> None:
        """Forget the current gesture."""
        self._start_point = None
        self._current_point = None


class RectangleTool(DrawingTool):
    """Drag from one corner to the opposite corner."""

    def __init__(self, settings: ToolSettings):
        super().__init__(ElementKind.RECTANGLE, settings)

    def build_draft(self) -> Optional[ElementDraft]:
        if not self._start_point:
            return None
        start, end = self._start_point, self._current_point
        return ElementDraft(
            kind=self.kind,
            style=self.settings.style(),
            geometry=RectangleGeometry(
                x=start.x,
                y=start.y,
                width=end.x - start.x,
                height=end.y - start.y,
                corner_radius=max(0.0, self.settings.corner_radius)
            )
        )


class CircleTool(DrawingTool):
    """Press at the centre, drag out the radius."""

    def __init__(self, settings: ToolSettings):
        super().__init__(ElementKind.CIRCLE, settings)

    def build_draft(self) -> Optional[ElementDraft]:
        if not self._start_point:
            return None
        center = self._start_point
        return ElementDraft(
            kind=self.kind,
            style=self.settings.style(),
            geometry=CircleGeometry(
                center_x=center.x,
                center_y=center.y,
                radius=center.distance_to(self._current_point)
            )
        )


class EllipseTool(DrawingTool):
    """
    Press at the centre, drag out the radii.

    Without an aspect ratio the horizontal and vertical drag distances are
    the radii. With one, the drag distance is radius_x and radius_y follows
    from the ratio.
    """

    def __init__(self, settings: ToolSettings):
        super().__init__(ElementKind.ELLIPSE, settings)

    def build_draft(self) -> Optional[ElementDraft]:
        if not self._start_point:
            return None
        center, current = self._start_point, self._current_point
        ratio = self.settings.aspect_ratio

        if ratio:
            radius_x = center.distance_to(current)
            radius_y = radius_x / ratio
        else:
            radius_x = abs(current.x - center.x)
            radius_y = abs(current.y - center.y)

        return ElementDraft(
            kind=self.kind,
            style=self.settings.style(),
            geometry=EllipseGeometry(
                center_x=center.x,
                center_y=center.y,
                radius_x=radius_x,
                radius_y=abs(radius_y)
            )
        )


class LineTool(DrawingTool):
    """Tool for drawing straight lines."""

    def __init__(self, settings: ToolSettings):
        super().__init__(ElementKind.LINE, settings)

    def build_draft(self) -> Optional[ElementDraft]:
        if not self._start_point:
            return None
        start, end = self._start_point, self._current_point
        return ElementDraft(
            kind=self.kind,
            style=self.settings.style(),
            geometry=LineGeometry(start.x, start.y, end.x, end.y)
        )


class PenTool(DrawingTool):
    """
    Tool for freehand drawing.

    Every sample is kept with its pressure. Live painting appends one
    segment per sample instead of repainting the whole stroke.
    """

    def __init__(self, settings: ToolSettings):
        super().__init__(ElementKind.PEN, settings)
        self._samples: List[PressurePoint] = []

    def start_drawing(self, point: Point, pressure: float) -> None:
        super().start_drawing(point, pressure)
        self._samples = [PressurePoint(point.x, point.y, pressure)]

    def update_drawing(self, point: Point, pressure: float) -> None:
        super().update_drawing(point, pressure)
        self._samples.append(PressurePoint(point.x, point.y, pressure))

    def finish_drawing(self, point: Point) -> Optional[ElementDraft]:
        """Add the release point unless it repeats the last sample."""
        if self._samples:
            last = self._samples[-1]
            if (last.x, last.y) != (point.x, point.y):
                self._samples.append(PressurePoint(point.x, point.y, last.pressure))
        return super().finish_drawing(point)

    @property
    def samples(self) -> List[PressurePoint]:
        return list(self._samples)

    def _geometry(self) -> PenGeometry:
        return PenGeometry(
            points=tuple(self._samples),
            pressure_sensitive=self.settings.pressure_sensitive,
            min_pressure=clamp_pressure(self.settings.min_pressure),
            max_pressure=clamp_pressure(self.settings.max_pressure)
        )

    def build_draft(self) -> Optional[ElementDraft]:
        # A single sample cannot be rendered, so it never becomes an element
        if len(self._samples) < 2:
            return None
        return ElementDraft(kind=self.kind, style=self.settings.style(), geometry=self._geometry())

    def paint_preview(self, surface: DrawingSurface, snapshot: Optional[DrawingSurface]) -> None:
        if len(self._samples) < 2:
            return
        draw_pen_segment(surface, self.settings.style(), self._geometry(),
                         self._samples[-2], self._samples[-1])

    def cancel_drawing(self) -> None:
        super().cancel_drawing()
        self._samples = []


def create_tool(kind: Union[str, ElementKind], settings: Optional[ToolSettings] = None) -> DrawingTool:
    """
    Factory function to create a tool instance.

    Args:
        kind: Element kind the tool draws
        settings: Style for new elements (defaults if omitted)

    Returns:
        DrawingTool instance

    Raises:
        ValueError: for an unknown kind
    """
    tool_map = {
        ElementKind.PEN: PenTool,
        ElementKind.RECTANGLE: RectangleTool,
        ElementKind.CIRCLE: CircleTool,
        ElementKind.ELLIPSE: EllipseTool,
        ElementKind.LINE: LineTool,
    }

    tool_class = tool_map.get(ElementKind.from_value(kind))
    if tool_class:
        return tool_class(settings or ToolSettings())

    raise ValueError(f"Unknown tool kind: {kind}")


class SessionState(Enum):
    """Gesture lifecycle states."""
    IDLE = "idle"
    ACTIVE = "active"


class ToolSession:
    """
    State machine for one gesture at a time: IDLE -> ACTIVE -> IDLE.

    start() snapshots the surface and creates the tool, update() feeds it
    samples and paints the preview, finish() commits the draft to the store
    and repaints the scene. update() and finish() while IDLE are no-ops so
    duplicate release events from input devices are harmless.
    """

    def __init__(self, store: SceneStore, surface: Optional[DrawingSurface] = None,
                 settings: Optional[ToolSettings] = None):
        self.store = store
        self.surface = surface
        self.settings = settings or ToolSettings()
        self._state = SessionState.IDLE
        self._tool: Optional[DrawingTool] = None
        self._snapshot: Optional[DrawingSurface] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state == SessionState.ACTIVE

    @property
    def tool(self) -> Optional[DrawingTool]:
        """Tool of the gesture in progress."""
        return self._tool

    def start(self, kind: Union[str, ElementKind], x: float, y: float,
              pressure: Optional[float] = None) -> None:
        """
        Begin a gesture.

        Starting while another gesture is active cancels that gesture first.

        Raises:
            ValueError: for an unknown kind
        """
        tool = create_tool(kind, self.settings)
        if self.is_active:
            logger.debug("Gesture started while another was active; cancelling the old one")
            self.cancel()

        self._tool = tool
        self._snapshot = self.surface.snapshot() if self.surface is not None else None
        self._tool.start_drawing(Point(x, y), clamp_pressure(pressure))
        self._state = SessionState.ACTIVE

    def update(self, x: float, y: float, pressure: Optional[float] = None) -> None:
        """Feed a move sample. Ignored while idle."""
        if not self.is_active:
            return
        self._tool.update_drawing(Point(x, y), clamp_pressure(pressure))
        if self.surface is not None:
            self._tool.paint_preview(self.surface, self._snapshot)

    def finish(self, x: float, y: float) -> Optional[str]:
        """
        End the gesture and commit its element.

        Returns:
            Id of the new element, or None if idle or the gesture produced
            nothing (e.g. a pen stroke with a single sample)
        """
        if not self.is_active:
            return None

        draft = self._tool.finish_drawing(Point(x, y))
        kind = self._tool.kind
        self._reset()

        element_id = None
        if draft is None:
            logger.debug(f"Discarded empty {kind.value} gesture")
        else:
            element_id = self.store.add_element(draft)

        if self.surface is not None:
            redraw_all(self.surface, self.store.list_all())
        return element_id

    def cancel(self) -> None:
        """Abandon the gesture. The store is untouched; the preview is removed."""
        if not self.is_active:
            return
        if self.surface is not None and self._snapshot is not None:
            self.surface.clear()
            self.surface.draw_surface(self._snapshot)
        self._tool.cancel_drawing()
        self._reset()

    def _reset(self) -> None:
        self._tool = None
        self._snapshot = None
        self._state = SessionState.IDLE
