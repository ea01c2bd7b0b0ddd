"""
Pull-style XML event reader.

Wraps the expat parser so the GMD codec can read the document one event at a
time. Besides the usual start/end/text events it reports whether a tag was
written in empty form (`<t/>`), and surfaces comments, CDATA sections,
declarations, processing instructions and doctypes as their own events so
the caller decides which of them are allowed.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List
from xml.parsers import expat

from ..errors import GmdXmlError

logger = logging.getLogger(__name__)


class XmlEventKind(Enum):
    """Kinds of events produced by XmlEventReader."""
    START = "start"
    END = "end"
    EMPTY = "empty"
    TEXT = "text"
    COMMENT = "comment"
    CDATA = "cdata"
    DECL = "decl"
    PI = "pi"
    DOCTYPE = "doctype"
    EOF = "eof"


@dataclass(frozen=True)
class XmlEvent:
    """A single reader event.

    `name` is set for START/END/EMPTY/PI, `text` for TEXT/COMMENT/CDATA.
    """
    kind: XmlEventKind
    name: str = ""
    text: str = ""


EOF_EVENT = XmlEvent(XmlEventKind.EOF)


def _is_empty_tag(data: bytes, index: int) -> bool:
    """Check whether the start tag beginning at `index` ends with "/>"."""
    quote = 0
    position = index + 1
    size = len(data)
    while position < size:
        byte = data[position]
        if quote:
            if byte == quote:
                quote = 0
        elif byte in (0x22, 0x27):  # " or '
            quote = byte
        elif byte == 0x3E:  # >
            return data[position - 1] == 0x2F  # /
        position += 1
    return False


class XmlEventReader:
    """Reads an XML document and hands out its events in order.

    The whole input is tokenized up front by expat; `next_event` then pulls
    events off the queue. A document that ends before all elements are
    closed yields an EOF event instead of an XML error, so truncation is
    reported by whoever expected more content.
    """

    def __init__(self, data: bytes):
        self._data = data
        self._events: Deque[XmlEvent] = deque()
        self._empty_stack: List[bool] = []
        self._in_cdata = False
        self._cdata_parts: List[str] = []
        self._tokenize()

    def _tokenize(self) -> None:
        parser = expat.ParserCreate()
        parser.buffer_text = True
        parser.ordered_attributes = True
        parser.StartElementHandler = self._on_start
        parser.EndElementHandler = self._on_end
        parser.CharacterDataHandler = self._on_text
        parser.CommentHandler = self._on_comment
        parser.StartCdataSectionHandler = self._on_cdata_start
        parser.EndCdataSectionHandler = self._on_cdata_end
        parser.ProcessingInstructionHandler = self._on_pi
        parser.XmlDeclHandler = self._on_decl
        parser.StartDoctypeDeclHandler = self._on_doctype
        self._parser = parser

        try:
            parser.Parse(self._data, True)
        except expat.ExpatError as e:
            if e.code != expat.errors.codes[expat.errors.XML_ERROR_NO_ELEMENTS]:
                raise GmdXmlError(str(e)) from e
            logger.debug(f"XML input ended early: {e}")
        finally:
            self._parser = None

        self._events.append(EOF_EVENT)

    # === EXPAT CALLBACKS ===

    def _on_start(self, name: str, attributes: List[str]) -> None:
        empty = _is_empty_tag(self._data, self._parser.CurrentByteIndex)
        self._empty_stack.append(empty)
        kind = XmlEventKind.EMPTY if empty else XmlEventKind.START
        self._events.append(XmlEvent(kind, name=name))

    def _on_end(self, name: str) -> None:
        if not self._empty_stack.pop():
            self._events.append(XmlEvent(XmlEventKind.END, name=name))

    def _on_text(self, text: str) -> None:
        if self._in_cdata:
            self._cdata_parts.append(text)
            return
        last = self._events[-1] if self._events else None
        if last is not None and last.kind is XmlEventKind.TEXT:
            # expat may still split text around entity references
            self._events[-1] = XmlEvent(XmlEventKind.TEXT, text=last.text + text)
        else:
            self._events.append(XmlEvent(XmlEventKind.TEXT, text=text))

    def _on_comment(self, text: str) -> None:
        self._events.append(XmlEvent(XmlEventKind.COMMENT, text=text))

    def _on_cdata_start(self) -> None:
        self._in_cdata = True
        self._cdata_parts = []

    def _on_cdata_end(self) -> None:
        self._in_cdata = False
        self._events.append(XmlEvent(XmlEventKind.CDATA, text="".join(self._cdata_parts)))

    def _on_pi(self, target: str, data: str) -> None:
        self._events.append(XmlEvent(XmlEventKind.PI, name=target, text=data))

    def _on_decl(self, version: str, encoding: str, standalone: int) -> None:
        self._events.append(XmlEvent(XmlEventKind.DECL))

    def _on_doctype(self, name: str, system_id: str, public_id: str, has_internal_subset: int) -> None:
        self._events.append(XmlEvent(XmlEventKind.DOCTYPE, name=name))

    # === PULL API ===

    def next_event(self) -> XmlEvent:
        """Return the next event; EOF is returned forever once reached."""
        if len(self._events) == 1 and self._events[0] is EOF_EVENT:
            return EOF_EVENT
        return self._events.popleft()
