"""
GMD value tree and its XML codec.

GMD is the plist-like container used for save files and exported levels:

    <?xml version="1.0"?>
    <plist version="1.0" gjver="2.0">
        <dict>
            <k>kCEK</k><i>4</i>
            <k>k2</k><s>My Level</s>
            <k>k13</k><t />
        </dict>
    </plist>

Values are booleans (`t`/`f`), strings (`s`), 32-bit integers (`i`), 32-bit
reals (`r`) and dicts (`dict`/`d`) whose entries are `<k>` keys followed by
a value. Long tag names (`true`, `string`, `integer`, `real`, `dictionary`,
`key`) are accepted on read; the short forms are written.
"""

import io
import logging
import math
import re
import struct
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, Union

from ..errors import (
    GmdIoError,
    InvalidIntegerError,
    InvalidRealError,
    UnexpectedCDataError,
    UnexpectedEmptyError,
    UnexpectedEndError,
    UnexpectedEofError,
    UnexpectedPIError,
    UnexpectedStartError,
    UnexpectedTextError,
)
from .xml_events import XmlEvent, XmlEventKind, XmlEventReader

logger = logging.getLogger(__name__)

XML_DECLARATION = b'<?xml version="1.0"?>'
PLIST_ATTRIBUTES = {"version": "1.0", "gjver": "2.0"}

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
# digits in the widest (u32) magnitude
_MAX_INT_DIGITS = 10


# =============================================================================
# Value model
# =============================================================================

def to_f32(value: float) -> float:
    """Round a Python float to the nearest 32-bit float.

    Values too large for 32 bits become infinity with the same sign.
    """
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def parse_decimal_int(text: str) -> int:
    """Parse an optionally signed run of decimal digits.

    Leading zeros are dropped before conversion, so zero-padded values of
    any length are accepted.

    Raises:
        ValueError: If `text` is not a signed decimal, or its magnitude has
            more digits than any 32-bit value
    """
    if not _INTEGER_RE.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    sign = "-" if text.startswith("-") else ""
    digits = text.lstrip("+-").lstrip("0") or "0"
    if len(digits) > _MAX_INT_DIGITS:
        raise ValueError(f"integer too large: {text[:20]!r}...")
    return int(sign + digits)


def format_f32(value: float) -> str:
    """Shortest text that parses back to the same 32-bit float."""
    if math.isnan(value) or math.isinf(value):
        return repr(value)
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if to_f32(float(text)) == value:
            return text
    return repr(value)


class GmdValue:
    """Base class for the closed set of GMD value kinds."""

    def to_python(self) -> Any:
        """Convert to plain Python data (bool/str/int/float/dict)."""
        raise NotImplementedError


@dataclass(frozen=True)
class GmdBool(GmdValue):
    value: bool

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class GmdStr(GmdValue):
    value: str

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class GmdInt(GmdValue):
    value: int

    def __post_init__(self) -> None:
        if not INT32_MIN <= self.value <= INT32_MAX:
            raise ValueError(f"GMD integer out of 32-bit range: {self.value}")

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True)
class GmdReal(GmdValue):
    value: float

    def __post_init__(self) -> None:
        # frozen dataclass: bypass __setattr__ to store the rounded value
        object.__setattr__(self, "value", to_f32(float(self.value)))

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class GmdDict(GmdValue):
    """Mapping of string keys to values. Equality ignores key order.

    Unhashable, like the dict it wraps.
    """
    value: Dict[str, GmdValue] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, key: str) -> GmdValue:
        return self.value[key]

    def __contains__(self, key: object) -> bool:
        return key in self.value

    def __len__(self) -> int:
        return len(self.value)

    def get(self, key: str, default: Any = None) -> Any:
        return self.value.get(key, default)

    def to_python(self) -> Dict[str, Any]:
        return {key: child.to_python() for key, child in self.value.items()}


def gmd_from_python(data: Union[bool, str, int, float, Dict[str, Any], GmdValue]) -> GmdValue:
    """Build a GmdValue tree from plain Python data.

    Raises:
        TypeError: If a value has no GMD equivalent (None, lists, ...)
    """
    if isinstance(data, GmdValue):
        return data
    # bool first: bool is a subclass of int
    if isinstance(data, bool):
        return GmdBool(data)
    if isinstance(data, str):
        return GmdStr(data)
    if isinstance(data, int):
        return GmdInt(data)
    if isinstance(data, float):
        return GmdReal(data)
    if isinstance(data, dict):
        return GmdDict({str(key): gmd_from_python(child) for key, child in data.items()})
    raise TypeError(f"Cannot convert {type(data).__name__} to a GMD value")


# =============================================================================
# Reading
# =============================================================================

def _unexpected(event: XmlEvent) -> Exception:
    """Build the format error describing an out-of-place event."""
    kind = event.kind
    if kind is XmlEventKind.START:
        return UnexpectedStartError(event.name)
    if kind is XmlEventKind.END:
        return UnexpectedEndError(event.name)
    if kind is XmlEventKind.EMPTY:
        return UnexpectedEmptyError(event.name)
    if kind is XmlEventKind.TEXT:
        return UnexpectedTextError(event.text)
    if kind is XmlEventKind.CDATA:
        return UnexpectedCDataError()
    if kind is XmlEventKind.PI:
        return UnexpectedPIError()
    if kind is XmlEventKind.EOF:
        return UnexpectedEofError()
    # comments, declarations and doctypes are filtered before this point
    raise AssertionError(f"{kind} is never reported as unexpected")


def _parse_integer(text: str) -> GmdInt:
    try:
        number = parse_decimal_int(text)
    except ValueError:
        raise InvalidIntegerError(text) from None
    if not INT32_MIN <= number <= INT32_MAX:
        raise InvalidIntegerError(text)
    return GmdInt(number)


def _parse_real(text: str) -> GmdReal:
    if not text or text != text.strip() or "_" in text:
        raise InvalidRealError(text)
    try:
        return GmdReal(float(text))
    except ValueError:
        raise InvalidRealError(text) from None


class GmdReader:
    """Recursive-descent reader over an XmlEventReader.

    Args:
        data: Raw document bytes
        skip_whitespace: Ignore whitespace-only text between elements, so
            pretty-printed documents are accepted
    """

    def __init__(self, data: bytes, skip_whitespace: bool = True):
        self.events = XmlEventReader(data)
        self.skip_whitespace = skip_whitespace

    def next_significant(self) -> XmlEvent:
        """Next event that matters structurally.

        Comments, declarations and doctypes are skipped; CDATA and
        processing instructions are errors wherever they appear.
        """
        while True:
            event = self.events.next_event()
            kind = event.kind
            if kind in (XmlEventKind.COMMENT, XmlEventKind.DECL, XmlEventKind.DOCTYPE):
                continue
            if kind in (XmlEventKind.CDATA, XmlEventKind.PI):
                raise _unexpected(event)
            if kind is XmlEventKind.TEXT and self.skip_whitespace and not event.text.strip():
                continue
            return event

    def read_text(self, name: str) -> str:
        """Collect the text content of the element `name` up to its closing tag."""
        parts = []
        while True:
            event = self.events.next_event()
            kind = event.kind
            if kind is XmlEventKind.TEXT:
                parts.append(event.text)
            elif kind is XmlEventKind.COMMENT:
                continue
            elif kind is XmlEventKind.END and event.name == name:
                return "".join(parts)
            else:
                raise _unexpected(event)

    def read_root(self) -> GmdValue:
        """Read a document: either `<plist>` wrapping a value, or a bare value."""
        event = self.next_significant()
        if event.kind is XmlEventKind.START:
            if event.name == "plist":
                logger.debug("Reading GMD value inside <plist>")
                return self.read_root()
            return self.read_value(event.name, empty=False)
        if event.kind is XmlEventKind.EMPTY:
            return self.read_value(event.name, empty=True)
        raise _unexpected(event)

    def read_value(self, name: str, empty: bool) -> GmdValue:
        """Read the value whose opening tag `name` was just consumed."""
        if name in ("dict", "d", "dictionary"):
            return GmdDict() if empty else self.read_dict()
        if name in ("string", "s"):
            return GmdStr("" if empty else self.read_text(name))
        if name in ("integer", "i"):
            return _parse_integer("" if empty else self.read_text(name))
        if name in ("real", "r"):
            return _parse_real("" if empty else self.read_text(name))
        if name in ("true", "t", "false", "f"):
            if not empty:
                text = self.read_text(name)
                if text.strip():
                    raise UnexpectedTextError(text)
            return GmdBool(name in ("true", "t"))
        if empty:
            raise UnexpectedEmptyError(name)
        raise UnexpectedStartError(name)

    def read_dict(self) -> GmdDict:
        """Read `<k>key</k><value/>` pairs until the dict's closing tag."""
        entries: Dict[str, GmdValue] = {}
        while True:
            event = self.next_significant()
            if event.kind is XmlEventKind.END:
                return GmdDict(entries)
            if event.kind is XmlEventKind.START and event.name in ("k", "key"):
                key = self.read_text(event.name)
            elif event.kind is XmlEventKind.EMPTY and event.name in ("k", "key"):
                key = ""
            else:
                raise _unexpected(event)

            event = self.next_significant()
            if event.kind is XmlEventKind.START:
                value = self.read_value(event.name, empty=False)
            elif event.kind is XmlEventKind.EMPTY:
                value = self.read_value(event.name, empty=True)
            else:
                raise _unexpected(event)
            # last write wins for duplicate keys
            entries[key] = value


def gmd_from_bytes(data: bytes, skip_whitespace: bool = True) -> GmdValue:
    """Parse a GMD document.

    Args:
        data: Document bytes (UTF-8)
        skip_whitespace: Ignore whitespace-only text between elements

    Returns:
        The root value (the child of `<plist>`, or the bare root value)

    Raises:
        GmdError: On any XML, structural or scalar value error
    """
    return GmdReader(data, skip_whitespace=skip_whitespace).read_root()


# =============================================================================
# Writing
# =============================================================================

def _value_to_xml(value: GmdValue) -> ET.Element:
    if isinstance(value, GmdBool):
        return ET.Element("t" if value.value else "f")
    if isinstance(value, GmdStr):
        elem = ET.Element("s")
        elem.text = value.value
        return elem
    if isinstance(value, GmdInt):
        elem = ET.Element("i")
        elem.text = str(value.value)
        return elem
    if isinstance(value, GmdReal):
        elem = ET.Element("r")
        elem.text = format_f32(value.value)
        return elem
    if isinstance(value, GmdDict):
        elem = ET.Element("dict")
        for key, child in value.value.items():
            key_elem = ET.SubElement(elem, "k")
            key_elem.text = key
            elem.append(_value_to_xml(child))
        return elem
    raise TypeError(f"Not a GMD value: {value!r}")


def write_gmd(value: GmdValue, stream: BinaryIO) -> None:
    """Serialize `value` as a full GMD document into a binary stream.

    Raises:
        GmdIoError: If writing to the stream fails
    """
    root = ET.Element("plist", PLIST_ATTRIBUTES)
    root.append(_value_to_xml(value))
    try:
        stream.write(XML_DECLARATION)
        stream.write(ET.tostring(root, encoding="utf-8", xml_declaration=False))
    except OSError as e:
        raise GmdIoError(str(e)) from e


def gmd_to_bytes(value: GmdValue) -> bytes:
    """Serialize `value` as a full GMD document."""
    buffer = io.BytesIO()
    write_gmd(value, buffer)
    return buffer.getvalue()
