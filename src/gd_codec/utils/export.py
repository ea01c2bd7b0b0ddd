"""
JSON export of decoded level data.

Uses orjson; output is meant for inspection and diffing, not for reading
back into the codec.
"""

from typing import Any, Dict

import orjson

from ..codec.gmd import GmdValue
from ..models.level_object import LevelObject
from ..models.object_list import ObjectList


def level_object_to_dict(obj: LevelObject) -> Dict[str, Any]:
    """Plain-dict view of a level object, color by name."""
    return {
        "id": obj.id,
        "x_pos": obj.x_pos,
        "y_pos": obj.y_pos,
        "flip_x": obj.flip_x,
        "flip_y": obj.flip_y,
        "rotation": obj.rotation,
        "color": obj.color.name if obj.color is not None else None,
        "z_layer": obj.z_layer,
        "z_order": obj.z_order,
        "base_hsv": obj.base_hsv,
        "other_data": dict(obj.other_data),
    }


def object_list_to_dict(object_list: ObjectList) -> Dict[str, Any]:
    return {
        "header": dict(object_list.header),
        "objects": [level_object_to_dict(obj) for obj in object_list.objects],
    }


def _dumps(data: Any, pretty: bool) -> bytes:
    option = orjson.OPT_INDENT_2 if pretty else 0
    return orjson.dumps(data, option=option)


def gmd_to_json(value: GmdValue, pretty: bool = True) -> bytes:
    """Serialize a GMD tree as JSON (dicts become objects)."""
    return _dumps(value.to_python(), pretty)


def object_list_to_json(object_list: ObjectList, pretty: bool = True) -> bytes:
    """Serialize an object list as JSON."""
    return _dumps(object_list_to_dict(object_list), pretty)
