"""
SketchScene I/O Module

Handles persisted element lists.
"""

from .scene_io import (
    SceneFormatError, element_to_dict, dict_to_draft, scene_to_dict,
    load_scene_dict, save_scene, load_scene
)

__all__ = [
    'SceneFormatError', 'element_to_dict', 'dict_to_draft', 'scene_to_dict',
    'load_scene_dict', 'save_scene', 'load_scene'
]
