"""
Low-level codecs: key-value records, gzip/base64 framing and GMD documents.
"""

from .kv import KeyValueMap, deserialize_kv, serialize_kv
from .framing import compress, decompress
from .gmd import (
    GmdValue,
    GmdBool,
    GmdStr,
    GmdInt,
    GmdReal,
    GmdDict,
    gmd_from_bytes,
    gmd_from_python,
    gmd_to_bytes,
    write_gmd,
)
from .format import gd_format

__all__ = [
    # Key-value records
    "KeyValueMap",
    "deserialize_kv",
    "serialize_kv",
    # Framing
    "compress",
    "decompress",
    # GMD
    "GmdValue",
    "GmdBool",
    "GmdStr",
    "GmdInt",
    "GmdReal",
    "GmdDict",
    "gmd_from_bytes",
    "gmd_from_python",
    "gmd_to_bytes",
    "write_gmd",
    # Formatting
    "gd_format",
]
