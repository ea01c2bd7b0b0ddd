"""
Object colors and the two color-id schemes.

Older levels store a color channel in key "19" using the legacy ids 1-8
(the enum values below). Newer levels use key "22" with a separate id
space. Both resolve to the same eight colors; the legacy id wins whenever
it is set.
"""

from enum import IntEnum
from typing import Dict, Optional


class Color(IntEnum):
    """Canonical object colors, valued by their legacy id."""

    PLAYER1 = 1
    PLAYER2 = 2
    COL1 = 3
    COL2 = 4
    LIGHT_BG = 5
    COL3 = 6
    COL4 = 7
    DLINE = 8
    """3D line color."""

    @classmethod
    def from_legacy_id(cls, color_id: int) -> Optional["Color"]:
        """Map a legacy id (1-8); unknown ids give None."""
        try:
            return cls(color_id)
        except ValueError:
            return None

    @classmethod
    def from_new_id(cls, color_id: int) -> Optional["Color"]:
        """Map a new-scheme id; unknown ids give None."""
        return NEW_ID_TO_COLOR.get(color_id)


NEW_ID_TO_COLOR: Dict[int, Color] = {
    1: Color.COL1,
    2: Color.COL2,
    3: Color.COL3,
    4: Color.COL4,
    5: Color.DLINE,  # some editors used channel 5 for the 3D line
    1003: Color.DLINE,
    1005: Color.PLAYER1,
    1006: Color.PLAYER2,
    1007: Color.LIGHT_BG,
}


def resolve_color(legacy_id: Optional[int], new_id: Optional[int]) -> Optional[Color]:
    """Resolve a color from the legacy and new-scheme ids.

    A present, nonzero legacy id always decides the result, even when the
    new id disagrees or the legacy id is unknown.
    """
    if legacy_id:
        return Color.from_legacy_id(legacy_id)
    if new_id is not None:
        return Color.from_new_id(new_id)
    return None
