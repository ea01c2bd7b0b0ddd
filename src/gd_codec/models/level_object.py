"""
Level object records.

Each object in a level string is a `,`-separated key-value record with
numeric keys. The fields the editor needs quick access to are decoded into
attributes; every other key is carried through untouched in `other_data`.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, MutableMapping, Optional

from ..codec.format import format_bool, format_float, format_int
from ..codec.kv import deserialize_kv, serialize_kv
from ..errors import ZeroObjectIdError
from .color import Color, resolve_color
from .fields import (
    BOOL,
    F32,
    I8,
    I32,
    STR,
    U16,
    U32,
    defaulted,
    extract_fields,
    optional,
    required,
    take_defaulted,
    take_optional,
)

logger = logging.getLogger(__name__)

OBJECT_SEPARATOR = ","

# Record keys
KEY_ID = "1"
KEY_X_POS = "2"
KEY_Y_POS = "3"
KEY_FLIP_X = "4"
KEY_FLIP_Y = "5"
KEY_ROTATION = "6"
KEY_LEGACY_COLOR = "19"
KEY_COLOR = "22"
KEY_Z_LAYER = "24"
KEY_Z_ORDER = "25"
KEY_HSV_ENABLED = "41"
KEY_BASE_HSV = "43"

# Extraction order matters: the id is checked before anything else is read
ID_RULE = required("id", KEY_ID, U16)
FIELD_RULES = (
    required("x_pos", KEY_X_POS, F32),
    required("y_pos", KEY_Y_POS, F32),
    defaulted("flip_x", KEY_FLIP_X, BOOL, False),
    defaulted("flip_y", KEY_FLIP_Y, BOOL, False),
    defaulted("rotation", KEY_ROTATION, F32, 0.0),
    optional("z_layer", KEY_Z_LAYER, I8),
    optional("z_order", KEY_Z_ORDER, I32),
)


@dataclass
class LevelObject:
    """A single placed object.

    Attributes:
        id: Object type id (key 1). Never 0, which means "no object"
        x_pos: X position (key 2)
        y_pos: Y position (key 3)
        flip_x: Horizontal flip (key 4)
        flip_y: Vertical flip (key 5)
        rotation: Rotation in degrees (key 6)
        color: Color channel (key 19 legacy, key 22 new scheme)
        z_layer: Z layer (key 24)
        z_order: Z order (key 25)
        base_hsv: Base HSV string (key 43, only when key 41 is "1")
        other_data: All keys not listed above, kept verbatim
    """

    id: int
    x_pos: float
    y_pos: float
    flip_x: bool = False
    flip_y: bool = False
    rotation: float = 0.0
    color: Optional[Color] = None
    z_layer: Optional[int] = None
    z_order: Optional[int] = None
    base_hsv: Optional[str] = None
    other_data: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.id == 0:
            raise ZeroObjectIdError()

    @classmethod
    def from_map(cls, data: MutableMapping[str, str], strict_optional: bool = False) -> "LevelObject":
        """Decode an object from its key-value record.

        The mapping is consumed: recognised keys are removed and whatever
        remains becomes `other_data`.

        Args:
            data: Key-value record
            strict_optional: Raise on malformed optional fields instead of
                treating them as absent

        Returns:
            Decoded LevelObject

        Raises:
            MissingKeyError: If a required key is absent
            InvalidValueError: If a required key does not parse
            ZeroObjectIdError: If the id is 0
        """
        object_id = ID_RULE.extract(data)
        if object_id == 0:
            raise ZeroObjectIdError()

        values = extract_fields(data, FIELD_RULES, strict=strict_optional)

        # base HSV is only meaningful when enabled; otherwise key 43 stays in other_data
        base_hsv = None
        if take_defaulted(data, KEY_HSV_ENABLED, BOOL, False):
            base_hsv = take_optional(data, KEY_BASE_HSV, STR)

        # the new-scheme key is only consulted when no legacy color is set
        legacy_id = take_optional(data, KEY_LEGACY_COLOR, U32, strict=strict_optional)
        new_id = None
        if not legacy_id:
            new_id = take_optional(data, KEY_COLOR, U32, strict=strict_optional)
        color = resolve_color(legacy_id, new_id)

        return cls(
            id=object_id,
            color=color,
            base_hsv=base_hsv,
            other_data=dict(data),
            **values,
        )

    @classmethod
    def from_string(cls, text: str, strict_optional: bool = False) -> "LevelObject":
        """Decode an object from its `,`-separated record text."""
        return cls.from_map(deserialize_kv(text, OBJECT_SEPARATOR), strict_optional=strict_optional)

    def to_map(self) -> Dict[str, str]:
        """Encode back into a key-value record.

        Id, position, flips and rotation are always written; color, z layer,
        z order and base HSV only when set. Keys from `other_data` follow the
        fixed fields and never override them.
        """
        data: Dict[str, str] = {
            KEY_ID: format_int(self.id),
            KEY_X_POS: format_float(self.x_pos),
            KEY_Y_POS: format_float(self.y_pos),
            KEY_FLIP_X: format_bool(self.flip_x),
            KEY_FLIP_Y: format_bool(self.flip_y),
            KEY_ROTATION: format_float(self.rotation),
        }
        if self.color is not None:
            data[KEY_LEGACY_COLOR] = format_int(int(self.color))
        if self.z_layer is not None:
            data[KEY_Z_LAYER] = format_int(self.z_layer)
        if self.z_order is not None:
            data[KEY_Z_ORDER] = format_int(self.z_order)
        if self.base_hsv is not None:
            data[KEY_HSV_ENABLED] = format_bool(True)
            data[KEY_BASE_HSV] = self.base_hsv

        for key, value in self.other_data.items():
            data.setdefault(key, value)
        return data

    def to_string(self) -> str:
        """Encode as `,`-separated record text."""
        return serialize_kv(self.to_map(), OBJECT_SEPARATOR)
