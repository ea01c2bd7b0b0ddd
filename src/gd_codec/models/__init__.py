"""
Level data models: object records, colors, object lists and levels.
"""

from .color import Color, resolve_color
from .fields import (
    FieldKind,
    FieldMode,
    FieldRule,
    extract_fields,
    take_defaulted,
    take_optional,
    take_required,
)
from .level_object import LevelObject
from .object_list import ObjectList, split_segments
from .level import Level, Song, OfficialSong, CustomSong

__all__ = [
    # Colors
    "Color",
    "resolve_color",
    # Field extraction
    "FieldKind",
    "FieldMode",
    "FieldRule",
    "extract_fields",
    "take_defaulted",
    "take_optional",
    "take_required",
    # Records
    "LevelObject",
    "ObjectList",
    "split_segments",
    "Level",
    "Song",
    "OfficialSong",
    "CustomSong",
]
