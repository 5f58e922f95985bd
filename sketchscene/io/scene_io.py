"""
Scene File I/O for SketchScene

Converts elements to and from plain dictionaries and reads/writes scene
files as JSON. This is the load boundary: element dictionaries coming from
outside are validated here and rejected with SceneFormatError, because the
element model itself accepts anything.
"""

import json
import logging
import math
from dataclasses import fields
from datetime import datetime
from numbers import Real
from typing import Any, Dict, List, Optional

from ..core.elements import (
    GEOMETRY_TYPES, Element, ElementDraft, ElementKind, ElementStyle, FillMode,
    PenGeometry, UnknownElementKindError, make_points
)
from ..core.scene import SceneStore
from ..graphics.renderer import redraw_all
from ..graphics.surface import DrawingSurface

logger = logging.getLogger(__name__)

FORMAT_VERSION = '1.0'


class SceneFormatError(ValueError):
    """Raised when persisted scene data does not match the element model."""


def style_to_dict(style: ElementStyle) -> Dict[str, Any]:
    """Convert ElementStyle to dictionary."""
    return {
        'stroke_color': style.stroke_color,
        'stroke_width': style.stroke_width,
        'fill_color': style.fill_color,
        'fill_mode': style.fill_mode.value,
        'opacity': style.opacity
    }


def geometry_to_dict(geometry) -> Dict[str, Any]:
    """Convert a geometry record to dictionary."""
    if isinstance(geometry, PenGeometry):
        return {
            'points': [
                {'x': p.x, 'y': p.y, 'pressure': p.pressure}
                for p in geometry.points
            ],
            'pressure_sensitive': geometry.pressure_sensitive,
            'min_pressure': geometry.min_pressure,
            'max_pressure': geometry.max_pressure
        }
    return {f.name: getattr(geometry, f.name) for f in fields(geometry)}


def element_to_dict(element: Element) -> Dict[str, Any]:
    """Convert Element to dictionary, field for field."""
    return {
        'id': element.id,
        'kind': element.kind.value,
        'created_at': element.created_at,
        'style': style_to_dict(element.style),
        'geometry': geometry_to_dict(element.geometry)
    }


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _require_number(data: Dict[str, Any], key: str, where: str,
                    minimum: Optional[float] = None, maximum: Optional[float] = None) -> float:
    if key not in data:
        raise SceneFormatError(f"{where}: missing '{key}'")
    value = data[key]
    if not _is_number(value):
        raise SceneFormatError(f"{where}: '{key}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise SceneFormatError(f"{where}: '{key}' must be finite, got {value}")
    if minimum is not None and value < minimum:
        raise SceneFormatError(f"{where}: '{key}' must be >= {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise SceneFormatError(f"{where}: '{key}' must be <= {maximum}, got {value}")
    return float(value)


def _optional_color(data: Dict[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise SceneFormatError(f"{where}: '{key}' must be a color string, got {value!r}")
    return value


def dict_to_style(style_dict: Any) -> ElementStyle:
    """Validate and convert a style dictionary."""
    if not isinstance(style_dict, dict):
        raise SceneFormatError(f"style must be an object, got {type(style_dict).__name__}")

    stroke_color = _optional_color(style_dict, 'stroke_color', 'style')
    if not stroke_color:
        raise SceneFormatError("style: missing 'stroke_color'")

    fill_mode = style_dict.get('fill_mode', FillMode.OUTLINE.value)
    if not isinstance(fill_mode, str) or fill_mode not in {m.value for m in FillMode}:
        raise SceneFormatError(f"style: unknown fill_mode {fill_mode!r}")

    return ElementStyle(
        stroke_color=stroke_color,
        stroke_width=_require_number(style_dict, 'stroke_width', 'style', minimum=0),
        fill_color=_optional_color(style_dict, 'fill_color', 'style'),
        fill_mode=FillMode(fill_mode),
        opacity=_require_number(style_dict, 'opacity', 'style', minimum=0, maximum=1)
    )


def _dict_to_pen_geometry(geometry_dict: Dict[str, Any]) -> PenGeometry:
    points = geometry_dict.get('points')
    if not isinstance(points, list):
        raise SceneFormatError("pen geometry: 'points' must be a list")
    for i, point in enumerate(points):
        where = f"pen point {i}"
        if not isinstance(point, dict):
            raise SceneFormatError(f"{where}: must be an object")
        _require_number(point, 'x', where)
        _require_number(point, 'y', where)
        if point.get('pressure') is not None:
            _require_number(point, 'pressure', where, minimum=0, maximum=1)

    pressure_sensitive = geometry_dict.get('pressure_sensitive', False)
    if not isinstance(pressure_sensitive, bool):
        raise SceneFormatError("pen geometry: 'pressure_sensitive' must be a boolean")

    return PenGeometry(
        points=make_points(points),
        pressure_sensitive=pressure_sensitive,
        min_pressure=_require_number(
            {'min_pressure': geometry_dict.get('min_pressure', 0.1)},
            'min_pressure', 'pen geometry', minimum=0, maximum=1),
        max_pressure=_require_number(
            {'max_pressure': geometry_dict.get('max_pressure', 1.0)},
            'max_pressure', 'pen geometry', minimum=0, maximum=1)
    )


# Geometry fields that must not be negative
_NON_NEGATIVE = {'corner_radius', 'radius', 'radius_x', 'radius_y'}


def dict_to_geometry(kind: ElementKind, geometry_dict: Any):
    """Validate and convert a geometry dictionary for a kind."""
    if not isinstance(geometry_dict, dict):
        raise SceneFormatError(f"{kind.value} geometry must be an object")

    if kind == ElementKind.PEN:
        return _dict_to_pen_geometry(geometry_dict)

    geometry_type = GEOMETRY_TYPES[kind]
    where = f"{kind.value} geometry"
    values = {
        f.name: _require_number(geometry_dict, f.name, where,
                                minimum=0 if f.name in _NON_NEGATIVE else None)
        for f in fields(geometry_type)
    }
    return geometry_type(**values)


def dict_to_draft(element_dict: Any) -> ElementDraft:
    """
    Convert a persisted element dictionary to a draft.

    The id and created_at of the persisted element are not kept; the store
    assigns new ones when the draft is added.

    Raises:
        SceneFormatError: if the dictionary does not describe a valid element
    """
    if not isinstance(element_dict, dict):
        raise SceneFormatError(f"element must be an object, got {type(element_dict).__name__}")

    try:
        kind = ElementKind.from_value(element_dict.get('kind'))
    except UnknownElementKindError as e:
        raise SceneFormatError(str(e)) from None

    return ElementDraft(
        kind=kind,
        style=dict_to_style(element_dict.get('style')),
        geometry=dict_to_geometry(kind, element_dict.get('geometry'))
    )


def scene_to_dict(store: SceneStore) -> Dict[str, Any]:
    """Convert a scene to a dictionary."""
    return {
        'version': FORMAT_VERSION,
        'elements': [element_to_dict(element) for element in store.list_all()]
    }


def load_scene_dict(scene_dict: Any, store: SceneStore,
                    surface: Optional[DrawingSurface] = None) -> List[str]:
    """
    Replace the store's content with a persisted element list.

    Every element is validated before the store is touched, so a bad
    element leaves the current scene as it was.

    Args:
        scene_dict: Output of scene_to_dict (or a bare element list)
        store: Scene to fill
        surface: If given, redrawn after loading

    Returns:
        Ids of the loaded elements, in paint order

    Raises:
        SceneFormatError: if the data is malformed
    """
    if isinstance(scene_dict, dict):
        element_dicts = scene_dict.get('elements')
    else:
        element_dicts = scene_dict
    if not isinstance(element_dicts, list):
        raise SceneFormatError("scene must contain an 'elements' list")

    drafts = []
    for i, element_dict in enumerate(element_dicts):
        try:
            drafts.append(dict_to_draft(element_dict))
        except SceneFormatError as e:
            raise SceneFormatError(f"element {i}: {e}") from None

    store.clear()
    ids = [store.add_element(draft) for draft in drafts]

    if surface is not None:
        redraw_all(surface, store.list_all())

    logger.info(f"Loaded {len(ids)} elements")
    return ids


def save_scene(store: SceneStore, filepath: str) -> bool:
    """
    Save a scene to a JSON file.

    Args:
        store: The scene to save
        filepath: Path to save the file

    Returns:
        True if successful, False otherwise
    """
    try:
        scene_dict = scene_to_dict(store)
        scene_dict['saved_at'] = datetime.now().isoformat()

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(scene_dict, f, indent=2, ensure_ascii=False)

        return True
    except (OSError, TypeError, ValueError):
        logger.exception(f"Error saving scene to {filepath}")
        return False


def load_scene(filepath: str, store: SceneStore,
               surface: Optional[DrawingSurface] = None) -> bool:
    """
    Load a scene from a JSON file into store.

    Args:
        filepath: Path to the scene file
        store: Scene to replace
        surface: If given, redrawn after loading

    Returns:
        True if successful, False otherwise (the store is left unchanged)
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            scene_dict = json.load(f)

        load_scene_dict(scene_dict, store, surface)
        return True
    except (OSError, ValueError):
        # json.JSONDecodeError and SceneFormatError are both ValueErrors
        logger.exception(f"Error loading scene from {filepath}")
        return False
