"""
Canonical text formatting of field values in key-value records.
"""

from enum import IntEnum
from typing import Union


def format_bool(value: bool) -> str:
    return "1" if value else "0"


def format_float(value: float) -> str:
    """Format with 4 decimals, then trim trailing zeros and a trailing point.

    44.3 -> "44.3", 20.0 -> "20", 0.125 -> "0.125"
    """
    text = f"{value:.4f}".rstrip("0")
    return text[:-1] if text.endswith(".") else text


def format_int(value: int) -> str:
    return str(value)


def gd_format(value: Union[bool, int, float, str, IntEnum]) -> str:
    """Format any field value the way it is stored on disk.

    Enum members (such as colors) are written as their numeric id.
    """
    # bool and IntEnum are both int subclasses, check them first
    if isinstance(value, bool):
        return format_bool(value)
    if isinstance(value, IntEnum):
        return format_int(int(value))
    if isinstance(value, int):
        return format_int(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Cannot format {type(value).__name__} as a field value")
