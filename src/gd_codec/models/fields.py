"""
Declarative field extraction from key-value records.

A record is decoded by applying a list of rules to its mapping. Each rule
names a key, a value kind and an extraction mode:

- Required: the key must be present and parse, else MissingKeyError /
  InvalidValueError.
- Defaulted: a missing key *or an unparseable value* yields the default.
  Malformed input is swallowed on purpose; this is how the game reads them.
- Optional: a missing key yields None. In the legacy (default) mode an
  unparseable value is also None; `strict=True` raises InvalidValueError.

Extraction is destructive: every rule removes its key from the mapping,
whether or not the value parsed, so what is left afterwards is the set of
keys no rule knows about.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, MutableMapping, Optional

from ..errors import InvalidValueError, MissingKeyError
from ..codec.gmd import parse_decimal_int, to_f32


# =============================================================================
# Value kinds
# =============================================================================

def parse_bool(text: str) -> bool:
    """Only "0" and "1" are booleans."""
    if text == "0":
        return False
    if text == "1":
        return True
    raise ValueError(f"not a boolean: {text!r}")


def parse_float(text: str) -> float:
    """Parse a 32-bit float; whitespace and digit separators are rejected."""
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"not a float: {text!r}")
    return to_f32(float(text))


def _int_parser(bits: int, signed: bool) -> Callable[[str], int]:
    if signed:
        low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
    else:
        low, high = 0, 2**bits - 1

    def parse(text: str) -> int:
        value = parse_decimal_int(text)
        if not low <= value <= high:
            raise ValueError(f"{value} out of range [{low}, {high}]")
        return value

    return parse


@dataclass(frozen=True)
class FieldKind:
    """A primitive value type with its text parser."""
    name: str
    parse: Callable[[str], Any]


BOOL = FieldKind("bool", parse_bool)
I8 = FieldKind("i8", _int_parser(8, signed=True))
I16 = FieldKind("i16", _int_parser(16, signed=True))
I32 = FieldKind("i32", _int_parser(32, signed=True))
U8 = FieldKind("u8", _int_parser(8, signed=False))
U16 = FieldKind("u16", _int_parser(16, signed=False))
U32 = FieldKind("u32", _int_parser(32, signed=False))
F32 = FieldKind("f32", parse_float)
STR = FieldKind("str", str)


# =============================================================================
# Extraction modes
# =============================================================================

class FieldMode(Enum):
    REQUIRED = "required"
    DEFAULTED = "defaulted"
    OPTIONAL = "optional"


def take_required(data: MutableMapping[str, str], key: str, kind: FieldKind) -> Any:
    """Remove `key` and parse it; the key must exist and parse."""
    raw = data.pop(key, None)
    if raw is None:
        raise MissingKeyError(key)
    try:
        return kind.parse(raw)
    except ValueError:
        raise InvalidValueError(key, raw) from None


def take_defaulted(data: MutableMapping[str, str], key: str, kind: FieldKind, default: Any) -> Any:
    """Remove `key` and parse it, falling back to `default` when absent or malformed."""
    raw = data.pop(key, None)
    if raw is None:
        return default
    try:
        return kind.parse(raw)
    except ValueError:
        return default


def take_optional(
    data: MutableMapping[str, str], key: str, kind: FieldKind, strict: bool = False
) -> Optional[Any]:
    """Remove `key` and parse it; None when absent.

    Malformed values are None too unless `strict` is set, in which case
    InvalidValueError is raised.
    """
    raw = data.pop(key, None)
    if raw is None:
        return None
    try:
        return kind.parse(raw)
    except ValueError:
        if strict:
            raise InvalidValueError(key, raw) from None
        return None


@dataclass(frozen=True)
class FieldRule:
    """Extraction rule for one attribute of a record.

    Attributes:
        attr: Attribute name the value is stored under
        key: Key in the key-value record
        kind: Value kind
        mode: Required / defaulted / optional
        default: Value used by DEFAULTED rules
    """
    attr: str
    key: str
    kind: FieldKind
    mode: FieldMode
    default: Any = None

    def extract(self, data: MutableMapping[str, str], strict: bool = False) -> Any:
        if self.mode is FieldMode.REQUIRED:
            return take_required(data, self.key, self.kind)
        if self.mode is FieldMode.DEFAULTED:
            return take_defaulted(data, self.key, self.kind, self.default)
        return take_optional(data, self.key, self.kind, strict=strict)


def required(attr: str, key: str, kind: FieldKind) -> FieldRule:
    return FieldRule(attr, key, kind, FieldMode.REQUIRED)


def defaulted(attr: str, key: str, kind: FieldKind, default: Any) -> FieldRule:
    return FieldRule(attr, key, kind, FieldMode.DEFAULTED, default)


def optional(attr: str, key: str, kind: FieldKind) -> FieldRule:
    return FieldRule(attr, key, kind, FieldMode.OPTIONAL)


def extract_fields(
    data: MutableMapping[str, str], rules: Iterable[FieldRule], strict: bool = False
) -> Dict[str, Any]:
    """Apply `rules` left to right, returning attr -> value.

    The first failing required rule aborts extraction; keys consumed by
    earlier rules stay removed.
    """
    return {rule.attr: rule.extract(data, strict=strict) for rule in rules}
