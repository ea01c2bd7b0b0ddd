"""
Flat key-value string codec.

Level headers and object records are stored as `key,value,key,value,...`
with a single separator string. There is no escaping: a separator inside a
key or value cannot be represented and splits the record at the wrong place.
"""

from typing import Dict, Mapping

KeyValueMap = Dict[str, str]


def deserialize_kv(text: str, separator: str) -> KeyValueMap:
    """Split `text` on `separator` and pair consecutive tokens.

    An incomplete trailing pair is dropped without error, so an input with an
    odd number of tokens loses its last token. Later duplicate keys overwrite
    earlier ones.

    Args:
        text: Serialized record
        separator: Token separator (e.g. "," for objects)

    Returns:
        Mapping of key -> value
    """
    tokens = text.split(separator)
    return dict(zip(tokens[0::2], tokens[1::2]))


def serialize_kv(data: Mapping[str, str], separator: str) -> str:
    """Join a mapping back into `key<sep>value<sep>...` with no trailing separator."""
    return separator.join(f"{key}{separator}{value}" for key, value in data.items())
