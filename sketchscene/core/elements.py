"""
SketchScene Element Model

Defines the drawing elements: a closed set of kinds, the style shared by
all kinds, and one immutable geometry record per kind.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .pressure import clamp_pressure


DEFAULT_STROKE_COLOR = "#000000"
DEFAULT_STROKE_WIDTH = 5.0
DEFAULT_OPACITY = 1.0


class InvalidElementError(ValueError):
    """Raised when an element cannot be drawn or hit-tested."""


class UnknownElementKindError(InvalidElementError):
    """Raised when an element carries a kind the engine cannot handle."""

    def __init__(self, kind: Any):
        super().__init__(f"Unknown element kind: {kind!r}")
        self.kind = kind


class GeometryMismatchError(InvalidElementError):
    """Raised when an element's geometry record does not belong to its kind."""

    def __init__(self, kind: Any, geometry: Any):
        super().__init__(
            f"{type(geometry).__name__} is not a valid geometry for kind {kind!r}")
        self.kind = kind
        self.geometry = geometry


class ElementKind(str, Enum):
    """Kinds of drawable elements."""
    PEN = "pen"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    LINE = "line"

    @classmethod
    def from_value(cls, value: Union[str, 'ElementKind']) -> 'ElementKind':
        """
        Resolve a kind from its string value.

        Accepts "freehand" as an alias for pen strokes.

        Raises:
            UnknownElementKindError: for any other unrecognised value
        """
        if isinstance(value, cls):
            return value
        if value == "freehand":
            return cls.PEN
        try:
            return cls(value)
        except ValueError:
            raise UnknownElementKindError(value) from None


class FillMode(str, Enum):
    """How a closed shape is painted."""
    OUTLINE = "outline"
    FILLED = "filled"
    BOTH = "both"

    @property
    def fills(self) -> bool:
        return self in (FillMode.FILLED, FillMode.BOTH)

    @property
    def strokes(self) -> bool:
        return self in (FillMode.OUTLINE, FillMode.BOTH)

    @classmethod
    def from_value(cls, value: Union[str, 'FillMode', None]) -> 'FillMode':
        """Resolve a fill mode, falling back to OUTLINE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.OUTLINE


@dataclass(frozen=True)
class ElementStyle:
    """Paint properties of an element."""
    stroke_color: str = DEFAULT_STROKE_COLOR
    stroke_width: float = DEFAULT_STROKE_WIDTH
    fill_color: Optional[str] = None
    fill_mode: FillMode = FillMode.OUTLINE
    opacity: float = DEFAULT_OPACITY

    @classmethod
    def create(cls, stroke_color: Optional[str] = None,
               stroke_width: Optional[float] = None,
               fill_color: Optional[str] = None,
               fill_mode: Union[str, FillMode, None] = None,
               opacity: Optional[float] = None) -> 'ElementStyle':
        """
        Build a style, replacing missing values with defaults.

        Out-of-range values are clamped (width to >= 0, opacity to [0, 1]).
        """
        width = DEFAULT_STROKE_WIDTH if stroke_width is None else float(stroke_width)
        alpha = DEFAULT_OPACITY if opacity is None else float(opacity)
        return cls(
            stroke_color=stroke_color or DEFAULT_STROKE_COLOR,
            stroke_width=max(0.0, width),
            fill_color=fill_color or None,
            fill_mode=FillMode.from_value(fill_mode),
            opacity=min(1.0, max(0.0, alpha))
        )

    @property
    def effective_fill_color(self) -> str:
        """Fill color, or the stroke color when no fill color is set."""
        return self.fill_color or self.stroke_color


@dataclass(frozen=True)
class PressurePoint:
    """A pen sample. Pressure is optional and only affects rendering."""
    x: float
    y: float
    pressure: Optional[float] = None


@dataclass(frozen=True)
class PenGeometry:
    """Freehand stroke as an ordered sequence of samples."""
    points: Tuple[PressurePoint, ...] = ()
    pressure_sensitive: bool = False
    min_pressure: float = 0.1
    max_pressure: float = 1.0

    @property
    def is_renderable(self) -> bool:
        return len(self.points) >= 2


@dataclass(frozen=True)
class RectangleGeometry:
    """Rectangle from corner (x, y); negative sizes extend the other way."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    corner_radius: float = 0.0


@dataclass(frozen=True)
class CircleGeometry:
    center_x: float = 0.0
    center_y: float = 0.0
    radius: float = 0.0


@dataclass(frozen=True)
class EllipseGeometry:
    center_x: float = 0.0
    center_y: float = 0.0
    radius_x: float = 0.0
    radius_y: float = 0.0


@dataclass(frozen=True)
class LineGeometry:
    start_x: float = 0.0
    start_y: float = 0.0
    end_x: float = 0.0
    end_y: float = 0.0


Geometry = Union[PenGeometry, RectangleGeometry, CircleGeometry,
                 EllipseGeometry, LineGeometry]

GEOMETRY_TYPES = {
    ElementKind.PEN: PenGeometry,
    ElementKind.RECTANGLE: RectangleGeometry,
    ElementKind.CIRCLE: CircleGeometry,
    ElementKind.ELLIPSE: EllipseGeometry,
    ElementKind.LINE: LineGeometry,
}


def check_geometry(element: Any) -> ElementKind:
    """
    Verify that an element or draft can be handled.

    Returns:
        The element's kind

    Raises:
        UnknownElementKindError: if the kind is not one of ElementKind
        GeometryMismatchError: if the geometry record is not the kind's type
    """
    kind = getattr(element, 'kind', None)
    geometry_type = GEOMETRY_TYPES.get(kind)
    if geometry_type is None:
        raise UnknownElementKindError(kind)
    geometry = getattr(element, 'geometry', None)
    if not isinstance(geometry, geometry_type):
        raise GeometryMismatchError(kind, geometry)
    return kind


@dataclass(frozen=True)
class ElementDraft:
    """An element that has not been added to a scene yet (no id)."""
    kind: ElementKind
    style: ElementStyle = field(default_factory=ElementStyle)
    geometry: Geometry = field(default_factory=PenGeometry)


@dataclass(frozen=True)
class Element:
    """
    A committed drawing element.

    Elements are never modified after they are added to a scene. Replacing
    one means removing it and adding a new draft, which gets a new id.
    """
    id: str
    kind: ElementKind
    created_at: int
    style: ElementStyle
    geometry: Geometry

    @classmethod
    def from_draft(cls, draft: ElementDraft, element_id: str, created_at: int) -> 'Element':
        return cls(
            id=element_id,
            kind=draft.kind,
            created_at=created_at,
            style=draft.style,
            geometry=draft.geometry
        )


def _number(properties: Dict[str, Any], key: str) -> float:
    value = properties.get(key)
    return float(value) if value is not None else 0.0


def _non_negative(properties: Dict[str, Any], key: str) -> float:
    return max(0.0, _number(properties, key))


def make_points(samples: Iterable[Any]) -> Tuple[PressurePoint, ...]:
    """
    Convert pen samples to PressurePoints.

    Samples may be PressurePoints, {x, y, pressure} mappings or
    (x, y[, pressure]) sequences.
    """
    points = []
    for sample in samples:
        if isinstance(sample, PressurePoint):
            points.append(sample)
            continue
        if isinstance(sample, dict):
            x, y, pressure = sample.get('x'), sample.get('y'), sample.get('pressure')
        else:
            x, y = sample[0], sample[1]
            pressure = sample[2] if len(sample) > 2 else None
        points.append(PressurePoint(
            float(x or 0.0),
            float(y or 0.0),
            clamp_pressure(pressure) if pressure is not None else None
        ))
    return tuple(points)


def create_geometry(kind: ElementKind, properties: Dict[str, Any]) -> Geometry:
    """Build the geometry record for a kind from a flat property mapping."""
    if kind == ElementKind.PEN:
        min_pressure = properties.get('min_pressure')
        max_pressure = properties.get('max_pressure')
        return PenGeometry(
            points=make_points(properties.get('points') or ()),
            pressure_sensitive=bool(properties.get('pressure_sensitive', False)),
            min_pressure=0.1 if min_pressure is None else clamp_pressure(min_pressure),
            max_pressure=1.0 if max_pressure is None else clamp_pressure(max_pressure)
        )
    elif kind == ElementKind.RECTANGLE:
        return RectangleGeometry(
            x=_number(properties, 'x'),
            y=_number(properties, 'y'),
            width=_number(properties, 'width'),
            height=_number(properties, 'height'),
            corner_radius=_non_negative(properties, 'corner_radius')
        )
    elif kind == ElementKind.CIRCLE:
        return CircleGeometry(
            center_x=_number(properties, 'center_x'),
            center_y=_number(properties, 'center_y'),
            radius=_non_negative(properties, 'radius')
        )
    elif kind == ElementKind.ELLIPSE:
        return EllipseGeometry(
            center_x=_number(properties, 'center_x'),
            center_y=_number(properties, 'center_y'),
            radius_x=_non_negative(properties, 'radius_x'),
            radius_y=_non_negative(properties, 'radius_y')
        )
    elif kind == ElementKind.LINE:
        return LineGeometry(
            start_x=_number(properties, 'start_x'),
            start_y=_number(properties, 'start_y'),
            end_x=_number(properties, 'end_x'),
            end_y=_number(properties, 'end_y')
        )
    raise UnknownElementKindError(kind)


def create_draft(kind: Union[str, ElementKind], **properties) -> ElementDraft:
    """
    Create an element draft from flat properties.

    Style keys (stroke_color, stroke_width, fill_color, fill_mode, opacity)
    and geometry keys for the kind may be mixed freely. Missing values get
    defaults; this never fails for a known kind.

    Example:
        create_draft("rectangle", x=10, y=10, width=40, height=40,
                     fill_mode="both", fill_color="#ff0000")
    """
    kind = ElementKind.from_value(kind)
    style = ElementStyle.create(
        stroke_color=properties.get('stroke_color'),
        stroke_width=properties.get('stroke_width'),
        fill_color=properties.get('fill_color'),
        fill_mode=properties.get('fill_mode'),
        opacity=properties.get('opacity')
    )
    return ElementDraft(kind=kind, style=style, geometry=create_geometry(kind, properties))
