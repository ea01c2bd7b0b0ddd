"""
gd_codec: level and save data codecs for a 2D platformer

Reads and writes GMD save containers and compressed level object strings.
"""

__version__ = "0.1.0"
__author__ = "gd_codec Contributors"

# Codecs
from .codec import (
    GmdValue, GmdBool, GmdStr, GmdInt, GmdReal, GmdDict,
    gmd_from_bytes, gmd_from_python, gmd_to_bytes, write_gmd,
    deserialize_kv, serialize_kv,
    compress, decompress,
)

# Models
from .models import (
    Color, resolve_color,
    LevelObject, ObjectList,
    Level, Song, OfficialSong, CustomSong,
)

from .errors import LevelError
from .utils.logging_config import setup_logging

__all__ = [
    # GMD
    'GmdValue',
    'GmdBool',
    'GmdStr',
    'GmdInt',
    'GmdReal',
    'GmdDict',
    'gmd_from_bytes',
    'gmd_from_python',
    'gmd_to_bytes',
    'write_gmd',

    # Key-value records and framing
    'deserialize_kv',
    'serialize_kv',
    'compress',
    'decompress',

    # Models
    'Color',
    'resolve_color',
    'LevelObject',
    'ObjectList',
    'Level',
    'Song',
    'OfficialSong',
    'CustomSong',

    # Errors and logging
    'LevelError',
    'setup_logging',
]
