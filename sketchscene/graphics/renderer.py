"""
Renderer for SketchScene elements.

Replays an ordered element list onto a DrawingSurface. Each kind has one
draw routine; the same routines paint committed elements and live previews.
"""

import logging
import math
from typing import Callable, Dict, Iterable, Optional, Union

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen

from ..core.elements import (
    Element, ElementDraft, ElementKind, ElementStyle, PenGeometry, PressurePoint,
    RectangleGeometry, CircleGeometry, EllipseGeometry, LineGeometry,
    InvalidElementError, check_geometry
)
from ..core.pressure import normalize_pressure, pressure_opacity, pressure_width
from .surface import DrawingSurface

logger = logging.getLogger(__name__)

PREVIEW_OPACITY = 0.7

Drawable = Union[Element, ElementDraft]


def _stroke_pen(style: ElementStyle, width: Optional[float] = None) -> QPen:
    """Round-capped pen in the style's stroke color."""
    pen = QPen(QColor(style.stroke_color))
    pen.setWidthF(style.stroke_width if width is None else width)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    return pen


def _fill_brush(style: ElementStyle) -> QBrush:
    return QBrush(QColor(style.effective_fill_color))


def _paint_closed_path(painter: QPainter, path: QPainterPath, style: ElementStyle) -> None:
    """Fill then stroke a closed path, as the style's fill mode asks."""
    if style.fill_mode.fills:
        painter.fillPath(path, _fill_brush(style))
    if style.fill_mode.strokes:
        painter.strokePath(path, _stroke_pen(style))


def draw_pen(painter: QPainter, style: ElementStyle, geometry: PenGeometry) -> None:
    """Freehand stroke. Fewer than two samples paint nothing."""
    if not geometry.is_renderable:
        return

    if geometry.pressure_sensitive:
        previous = geometry.points[0]
        for point in geometry.points[1:]:
            _draw_pressure_segment(painter, style, geometry, previous, point)
            previous = point
        return

    path = QPainterPath()
    path.moveTo(geometry.points[0].x, geometry.points[0].y)
    for point in geometry.points[1:]:
        path.lineTo(point.x, point.y)
    painter.strokePath(path, _stroke_pen(style))


def _draw_pressure_segment(painter: QPainter, style: ElementStyle, geometry: PenGeometry,
                           start: PressurePoint, end: PressurePoint) -> None:
    # Width and alpha follow the pressure at the segment's end sample
    pressure = normalize_pressure(end.pressure, geometry.min_pressure, geometry.max_pressure)
    painter.save()
    painter.setOpacity(painter.opacity() * pressure_opacity(1.0, pressure))
    painter.setPen(_stroke_pen(style, pressure_width(style.stroke_width, pressure)))
    painter.drawLine(QPointF(start.x, start.y), QPointF(end.x, end.y))
    painter.restore()


def rounded_rect_path(rect: QRectF, radius: float) -> QPainterPath:
    """
    Rounded rectangle built from quadratic corners.

    The radius is clamped to half the smaller side so the outline never
    crosses itself.
    """
    r = min(radius, rect.width() / 2, rect.height() / 2)
    x, y, w, h = rect.x(), rect.y(), rect.width(), rect.height()

    path = QPainterPath()
    path.moveTo(x + r, y)
    path.lineTo(x + w - r, y)
    path.quadTo(x + w, y, x + w, y + r)
    path.lineTo(x + w, y + h - r)
    path.quadTo(x + w, y + h, x + w - r, y + h)
    path.lineTo(x + r, y + h)
    path.quadTo(x, y + h, x, y + h - r)
    path.lineTo(x, y + r)
    path.quadTo(x, y, x + r, y)
    path.closeSubpath()
    return path


def draw_rectangle(painter: QPainter, style: ElementStyle, geometry: RectangleGeometry) -> None:
    rect = QRectF(geometry.x, geometry.y, geometry.width, geometry.height).normalized()
    if geometry.corner_radius > 0:
        path = rounded_rect_path(rect, geometry.corner_radius)
    else:
        path = QPainterPath()
        path.addRect(rect)
    _paint_closed_path(painter, path, style)


def draw_circle(painter: QPainter, style: ElementStyle, geometry: CircleGeometry) -> None:
    path = QPainterPath()
    path.addEllipse(QPointF(geometry.center_x, geometry.center_y),
                    geometry.radius, geometry.radius)
    _paint_closed_path(painter, path, style)


def draw_ellipse(painter: QPainter, style: ElementStyle, geometry: EllipseGeometry) -> None:
    path = QPainterPath()
    path.addEllipse(QPointF(geometry.center_x, geometry.center_y),
                    geometry.radius_x, geometry.radius_y)
    _paint_closed_path(painter, path, style)


def draw_line(painter: QPainter, style: ElementStyle, geometry: LineGeometry) -> None:
    """
    Straight line.

    A filled line is a rectangle stroke_width wide, rotated along the line.
    """
    dx = geometry.end_x - geometry.start_x
    dy = geometry.end_y - geometry.start_y

    if style.fill_mode.fills:
        angle = math.atan2(dy, dx)
        length = math.hypot(dx, dy)
        width = style.stroke_width

        painter.save()
        painter.translate(geometry.start_x, geometry.start_y)
        painter.rotate(math.degrees(angle))
        painter.fillRect(QRectF(0, -width / 2, length, width), _fill_brush(style))
        painter.restore()

    if style.fill_mode.strokes:
        painter.setPen(_stroke_pen(style))
        painter.drawLine(QPointF(geometry.start_x, geometry.start_y),
                         QPointF(geometry.end_x, geometry.end_y))


DRAW_ROUTINES: Dict[ElementKind, Callable] = {
    ElementKind.PEN: draw_pen,
    ElementKind.RECTANGLE: draw_rectangle,
    ElementKind.CIRCLE: draw_circle,
    ElementKind.ELLIPSE: draw_ellipse,
    ElementKind.LINE: draw_line,
}


def draw_element(painter: QPainter, element: Drawable, opacity_scale: float = 1.0) -> None:
    """
    Paint one element or draft.

    Paint state is saved before and restored after, so nothing set here
    reaches the next element.

    Raises:
        InvalidElementError: if the kind has no draw routine or the
            geometry does not match it
    """
    routine = DRAW_ROUTINES[check_geometry(element)]

    painter.save()
    try:
        painter.setOpacity(element.style.opacity * opacity_scale)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        routine(painter, element.style, element.geometry)
    finally:
        painter.restore()


def _require_surface(surface: DrawingSurface, operation: str) -> None:
    if surface is None:
        raise ValueError(f"{operation} requires a drawing surface")


def redraw_all(surface: DrawingSurface, elements: Iterable[Element]) -> int:
    """
    Clear the surface and paint every element in order.

    Elements that cannot be drawn (unknown kind, geometry that does not
    match the kind, non-numeric values) are logged and skipped; the rest
    of the batch still paints. Calling this twice with the same arguments gives
    identical pixels.

    Args:
        surface: Target surface (required)
        elements: Elements in paint order

    Returns:
        Number of elements painted

    Raises:
        ValueError: if surface is None
    """
    _require_surface(surface, "redraw_all")

    surface.clear()
    painted = 0
    with surface.painter() as painter:
        for element in elements:
            try:
                draw_element(painter, element)
            except (InvalidElementError, AttributeError, TypeError) as e:
                logger.warning(f"Skipping element {getattr(element, 'id', '?')}: {e}")
                continue
            painted += 1

    logger.debug(f"Redrew {painted} elements")
    return painted


def draw_incremental(surface: DrawingSurface, snapshot: DrawingSurface,
                     draft: ElementDraft, preview_opacity: float = PREVIEW_OPACITY) -> None:
    """
    Paint an in-progress shape over the snapshot taken at gesture start.

    Only used for live previews; committed elements always go through
    redraw_all.
    """
    _require_surface(surface, "draw_incremental")

    surface.clear()
    with surface.painter() as painter:
        if snapshot is not None:
            painter.drawImage(0, 0, snapshot.image)
        draw_element(painter, draft, opacity_scale=preview_opacity)


def draw_pen_segment(surface: DrawingSurface, style: ElementStyle, geometry: PenGeometry,
                     start: PressurePoint, end: PressurePoint) -> None:
    """
    Append one segment of a live pen stroke without repainting the rest.

    Keeps per-sample cost constant however long the stroke gets.
    """
    _require_surface(surface, "draw_pen_segment")

    with surface.painter() as painter:
        painter.setOpacity(style.opacity)
        if geometry.pressure_sensitive:
            _draw_pressure_segment(painter, style, geometry, start, end)
        else:
            painter.setPen(_stroke_pen(style))
            painter.drawLine(QPointF(start.x, start.y), QPointF(end.x, end.y))
