"""
Exception hierarchy for gd_codec.

Every error raised for malformed input derives from LevelError, so callers
that only care about "could not decode" can catch a single class. The
subclasses mirror the layers of the codec: framing (gzip + base64), the GMD
container format, field extraction and the object list.
"""

from typing import Optional


def escape_excerpt(text: str, limit: int = 20) -> str:
    """Escape text for a diagnostic message and truncate it.

    Texts shorter than `limit` characters are shown whole; longer ones keep
    the first `limit - 3` characters followed by "...".
    """
    if len(text) >= limit:
        text = text[: limit - 3]
        suffix = "..."
    else:
        suffix = ""
    escaped = text.encode("unicode_escape").decode("ascii").replace('"', '\\"')
    return f"{escaped}{suffix}"


class LevelError(Exception):
    """Base class for every decoding/encoding failure in gd_codec."""
    pass


# =============================================================================
# Framing
# =============================================================================

class FramingError(LevelError):
    """Raised when the gzip + base64 envelope cannot be processed."""
    pass


class Base64DecodeError(FramingError):
    """Input is not valid URL-safe base64."""

    def __init__(self, detail: str):
        super().__init__(f"base64 decode error: {detail}")
        self.detail = detail


class FramingIoError(FramingError):
    """Gzip stream is corrupt or truncated, or its content is not UTF-8."""

    def __init__(self, detail: str):
        super().__init__(f"I/O error: {detail}")
        self.detail = detail


# =============================================================================
# GMD container
# =============================================================================

class GmdError(LevelError):
    """Base class for GMD parse/serialize errors."""
    pass


class GmdXmlError(GmdError):
    """The underlying XML reader rejected the document."""

    def __init__(self, detail: str):
        super().__init__(f"xml decode error: {detail}")
        self.detail = detail


class GmdIoError(GmdError):
    """Writing the serialized document to its stream failed."""

    def __init__(self, detail: str):
        super().__init__(f"I/O error: {detail}")
        self.detail = detail


class GmdFormatError(GmdError):
    """Structural error: an XML event appeared where it is not allowed."""

    def __init__(self, message: str):
        super().__init__(f"format error: {message}")


class UnexpectedStartError(GmdFormatError):
    def __init__(self, name: str):
        super().__init__(f"unexpected or unrecognised element <{escape_excerpt(name, 64)}>")
        self.name = name


class UnexpectedEndError(GmdFormatError):
    def __init__(self, name: str):
        super().__init__(f"unexpected closing tag </{escape_excerpt(name, 64)}>")
        self.name = name


class UnexpectedEmptyError(GmdFormatError):
    def __init__(self, name: str):
        super().__init__(f"unexpected or unrecognised element <{escape_excerpt(name, 64)}/>")
        self.name = name


class UnexpectedTextError(GmdFormatError):
    def __init__(self, text: str):
        self.excerpt = escape_excerpt(text)
        super().__init__(f'text found where it shouldn\'t be: "{self.excerpt}"')
        self.text = text


class UnexpectedCDataError(GmdFormatError):
    def __init__(self):
        super().__init__("CDATA element found")


class UnexpectedPIError(GmdFormatError):
    def __init__(self):
        super().__init__("<?...?> element found")


class UnexpectedEofError(GmdFormatError):
    def __init__(self):
        super().__init__("end of file reached earlier than expected")


class GmdValueError(GmdError):
    """A scalar element's text could not be parsed."""

    def __init__(self, message: str, raw: str):
        super().__init__(message)
        self.raw = raw


class InvalidIntegerError(GmdValueError):
    def __init__(self, raw: str):
        super().__init__(f"invalid value for integer: {raw}", raw)


class InvalidRealError(GmdValueError):
    def __init__(self, raw: str):
        super().__init__(f"invalid value for real: {raw}", raw)


# =============================================================================
# Field extraction
# =============================================================================

class FieldError(LevelError):
    """Base class for key-value field extraction errors."""

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key


class MissingKeyError(FieldError):
    def __init__(self, key: str):
        super().__init__(f"missing key {key}", key)


class InvalidValueError(FieldError):
    def __init__(self, key: str, raw: str):
        super().__init__(f"invalid value {raw} for key {key}", key)
        self.raw = raw


# =============================================================================
# Level objects
# =============================================================================

class MissingObjectHeaderError(LevelError):
    def __init__(self):
        super().__init__("object string has no header")


class InvalidObjectError(LevelError):
    """A level object record could not be decoded.

    Attributes:
        cause: The underlying error (usually a FieldError), if any
        index: Position of the record in the object list, if known
    """

    def __init__(
        self,
        message: str = "invalid object",
        cause: Optional[Exception] = None,
        index: Optional[int] = None,
    ):
        if index is not None:
            message = f"object #{index}: {message}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause
        self.index = index


class ZeroObjectIdError(InvalidObjectError):
    """Object id 0 is reserved as the "no object" sentinel."""

    def __init__(self):
        super().__init__("object id 0 is not a valid object")
